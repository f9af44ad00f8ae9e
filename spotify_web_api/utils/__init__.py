from .ids import get_snapshot_id, id_to_uri, to_comma_string, uri_to_id
from .logging_utils import configure_logging, log_request, log_response, redact_headers, redact_token

__all__ = [
    "configure_logging",
    "get_snapshot_id",
    "id_to_uri",
    "log_request",
    "log_response",
    "redact_headers",
    "redact_token",
    "to_comma_string",
    "uri_to_id",
]
