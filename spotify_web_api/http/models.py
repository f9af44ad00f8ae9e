"""Data models for the request layer"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class RequestDescriptor:
    """A fully prepared HTTP request

    Attributes:
        method: Upper-cased HTTP verb
        url: Final URL, including the query string for non body verbs
        body: Serialized request body, or None
        headers: Request headers
    """
    method: str
    url: str
    body: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class Response:
    """Normalized response envelope

    Attributes:
        body: Parsed JSON body (dict or SimpleNamespace depending on return_assoc),
            raw text when the body is not JSON, None when empty
        headers: Response headers keyed by lower-cased name
        status: HTTP status code
        url: The URL that was requested
    """
    body: Any
    headers: Dict[str, str]
    status: int
    url: str

    def __getitem__(self, key: str) -> Any:
        # Mapping style access: response["status"]
        if key not in ("body", "headers", "status", "url"):
            raise KeyError(key)
        return getattr(self, key)
