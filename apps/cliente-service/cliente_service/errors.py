"""Error types for cliente lookups."""

import errno

import aiohttp


class LookupSourceError(Exception):
    """A lookup source could not produce records."""
    def __init__(self, message: str, code: str = "LOOKUP_FAILED"):
        self.message = message
        self.code = code
        super().__init__(message)


class UpstreamServerError(LookupSourceError):
    """Upstream answered with a 5xx status. Retryable."""
    def __init__(self, status: int, url: str = ""):
        self.status = status
        self.url = url
        super().__init__(f"Upstream returned {status}", "UPSTREAM_SERVER_ERROR")


class UpstreamClientError(LookupSourceError):
    """Upstream answered with a 4xx status. Never retried."""
    def __init__(self, status: int, url: str = ""):
        self.status = status
        self.url = url
        super().__init__(f"Upstream rejected request with {status}", "UPSTREAM_CLIENT_ERROR")


class MalformedUpstreamResponse(LookupSourceError):
    """Upstream body was not the expected JSON array."""
    def __init__(self, message: str):
        super().__init__(message, "MALFORMED_RESPONSE")


def is_connection_refused(exc: BaseException) -> bool:
    """Return True when exc is, or wraps, a refused TCP connection."""
    if isinstance(exc, ConnectionRefusedError):
        return True
    if isinstance(exc, aiohttp.ClientConnectorError):
        os_error = exc.os_error
        return isinstance(os_error, ConnectionRefusedError) or os_error.errno == errno.ECONNREFUSED
    return False
