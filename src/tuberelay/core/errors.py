"""Exception hierarchy shared by the relay server and its clients."""

from typing import Any, Dict, List, Optional


class TubeRelayError(Exception):
    """Base class for all TubeRelay errors."""

    status = 500

    def to_dict(self) -> Dict[str, Any]:
        return {"error": str(self)}


class ConfigurationError(TubeRelayError):
    """Raised when a required setting (such as the API key) is missing."""


class UpstreamError(TubeRelayError):
    """The media info API answered with a non-2xx status (or not at all)."""

    def __init__(self, message: str, status: int = 500, details: str = "",
                 tried_endpoints: Optional[List[str]] = None):
        super().__init__(message)
        self.status = status
        self.details = details
        self.tried_endpoints = tried_endpoints

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": str(self), "details": self.details}
        if self.tried_endpoints is not None:
            body["triedEndpoints"] = list(self.tried_endpoints)
        return body


class RateLimitError(UpstreamError):
    """The provider rejected the request with HTTP 429."""

    def __init__(self, message: str, details: str = "",
                 tried_endpoints: Optional[List[str]] = None):
        super().__init__(message, 429, details, tried_endpoints)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": str(self), "details": self.details, "status": self.status}


class AccessDeniedError(UpstreamError):
    """The provider rejected the request with HTTP 403."""

    def __init__(self, message: str, details: str = "",
                 tried_endpoints: Optional[List[str]] = None):
        super().__init__(message, 403, details, tried_endpoints)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": str(self), "details": self.details, "status": self.status}


class DownloadError(TubeRelayError):
    """The proxy answered a download request with a non-2xx status."""

    def __init__(self, status: int, reason: str = "", text: str = ""):
        super().__init__(f"Download failed: {status} {reason} - {text}")
        self.status = status
        self.reason = reason
        self.text = text


class RelayError(TubeRelayError):
    """The local relay server reported an error to a client."""

    def __init__(self, message: str, status: int = 500):
        super().__init__(message)
        self.status = status
