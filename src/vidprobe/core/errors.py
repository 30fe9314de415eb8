"""
Exception classes for vidprobe.

Exception Hierarchy:
    VidProbeError (base)
        ConfigError - Missing or invalid settings (e.g. no API key)
        VideoNotFound - Upstream reports a non-success status for the id
        VideoUnavailable - Resource resolves but declares no usable content
        NetworkRequestFailed - Transport-level failure on a request
        DownloadCancelled - A download was stopped before it finished
        ParseFailure - A required field could not be decoded
        SchemaMismatch - An extractor document lacks an expected key or type
"""


class VidProbeError(Exception):
    """
    Base exception for all vidprobe errors.

    Attributes:
        message: Human-readable error description.
        details: Additional context (e.g. 'url', 'field', 'original_error').
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ConfigError(VidProbeError):
    """Raised when a required setting is missing, such as the Data API key."""


class VideoNotFound(VidProbeError):
    """
    Raised when the info endpoint reports a non-success status.

    Invalid ids are not rejected while parsing the url; they surface here
    once the upstream service refuses them.
    """


class VideoUnavailable(VidProbeError):
    """
    Raised when a stream resolves but cannot be downloaded.

    Covers a response without a Content-Length header and a copy that ends
    before the declared length was received.
    """


class NetworkRequestFailed(VidProbeError):
    """Raised when a request fails at the transport level. Never retried."""


class ParseFailure(VidProbeError):
    """
    Raised when a required field is missing or cannot be decoded.

    Example:
        raise ParseFailure(
            "Field 'view_count' is not an unsigned integer: 'abc'",
            details={'field': 'view_count', 'value': 'abc'}
        )
    """


class SchemaMismatch(VidProbeError):
    """
    Raised when a yt-dlp document lacks an expected key, or is not
    of the expected `_type`.
    """


class DownloadCancelled(VidProbeError):
    """Raised when a download is stopped before it finished. The partial
    file has already been removed."""
