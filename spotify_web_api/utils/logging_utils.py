"""
Logging utilities for request debugging and tracing.
"""
import logging
from typing import Dict, Mapping, Optional

from spotify_web_api import settings

logger = logging.getLogger(__name__)

SENSITIVE_HEADERS = {"authorization", "proxy-authorization", "cookie", "set-cookie"}


def redact_headers(headers: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """Return a copy of headers safe for logging"""
    if not headers:
        return {}
    return {
        name: "[REDACTED]" if name.lower() in SENSITIVE_HEADERS else str(value)
        for name, value in headers.items()
    }


def redact_token(token: Optional[str]) -> str:
    """Shorten a token to its first characters for log output"""
    if not token:
        return "<none>"
    return f"{token[:6]}..." if len(token) > 6 else "***"


def log_request(method: str, url: str, headers: Optional[Mapping[str, str]] = None, body: Optional[str] = None):
    """Log outgoing request details including headers"""
    if not logger.isEnabledFor(logging.DEBUG):
        return

    logger.debug(f"--> {method} {url}")
    for header_name, header_value in redact_headers(headers).items():
        logger.debug(f"    {header_name}: {header_value}")
    if body:
        # Token requests carry secrets in the form body
        if "client_secret=" in body or "refresh_token=" in body or "code_verifier=" in body:
            logger.debug(f"    body: [REDACTED, {len(body)} chars]")
        else:
            logger.debug(f"    body: {body}")


def log_response(method: str, url: str, status: int, headers: Optional[Mapping[str, str]] = None):
    """Log received response status and headers"""
    if not logger.isEnabledFor(logging.DEBUG):
        return

    logger.debug(f"<-- {status} {method} {url}")
    for header_name, header_value in redact_headers(headers).items():
        logger.debug(f"    {header_name}: {header_value}")


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a console handler to the package logger

    Args:
        level: Log level name, defaults to SPOTIFY_LOG_LEVEL
    """
    package_logger = logging.getLogger("spotify_web_api")
    package_logger.setLevel((level or settings.LOG_LEVEL).upper())

    if not any(isinstance(h, logging.StreamHandler) for h in package_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
        package_logger.addHandler(handler)
