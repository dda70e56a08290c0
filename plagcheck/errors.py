from typing import Any, Optional


class PlagcheckError(Exception):
    """Base class for failures a detection strategy reports in its result slot."""


class NormalizationError(PlagcheckError):
    """Reserved. Text normalization is total and never raises this."""


class StoreUnavailable(PlagcheckError):
    """The document store could not be reached, authenticated or read."""


class ConfigurationError(PlagcheckError):
    """A credential or setting needed by a strategy is missing."""


class RemoteError(PlagcheckError):
    """Network failure or non-2xx answer from the remote plagiarism API."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_data = response_data
