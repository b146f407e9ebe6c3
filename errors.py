"""
errors.py
Exception taxonomy for APOD acquisition and the APOD proxy.
"""


class ApodError(Exception):
    """Base class for every failure while obtaining an APOD record."""


class TransportFailure(ApodError):
    """The request never produced an HTTP response (connection, DNS, timeout)."""


class UpstreamRejected(ApodError):
    """An endpoint answered with a non-2xx status.

    ``details`` is a short summary for log messages; ``body`` is the raw
    response text.
    """

    def __init__(self, status, details=None, body=None):
        self.status = status
        self.details = details
        self.body = body
        message = f"APOD fetch failed: {status}"
        if details:
            message = f"{message} ({details})"
        super().__init__(message)


class MalformedResponse(ApodError):
    """A 2xx response whose body is not an APOD JSON object."""


class CredentialMissing(ApodError):
    """No API key is available where one is required."""
