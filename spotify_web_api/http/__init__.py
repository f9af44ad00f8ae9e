"""Request layer: transport, response classification and the request facade"""

from .classifier import AUTH_ERROR_KINDS, classify_response, parse_retry_after
from .models import RequestDescriptor, Response
from .request import Request, parse_body
from .transport import Transport, serialize_parameters

__all__ = [
    "AUTH_ERROR_KINDS",
    "Request",
    "RequestDescriptor",
    "Response",
    "Transport",
    "classify_response",
    "parse_body",
    "parse_retry_after",
    "serialize_parameters",
]
