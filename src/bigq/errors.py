"""Error taxonomy for the bigq query client.

Every error raised by the package derives from ``BigQError``. Nothing is
retried internally: errors surface to the immediate caller of the failing
operation.
"""

from typing import Optional


class BigQError(Exception):
    """Base class for all bigq errors."""


class ConfigError(BigQError, ValueError):
    """Raised when the service configuration is missing required values."""


class ClientInitError(BigQError):
    """Raised when the backend client factory fails."""


class ArgumentError(BigQError, ValueError):
    """Raised when Service.query receives invalid positional arguments."""


class BackendError(BigQError):
    """Communication failure while talking to the query backend."""

    def __init__(self, operation: str, cause: BaseException) -> None:
        """Keep the failing operation and the original exception for callers."""
        self.operation = operation
        self.cause = cause
        super().__init__(f"backend {operation} failed: {cause}")


class JobExecutionError(BigQError):
    """The backend finished a job but reported an execution error."""

    def __init__(self, job_id: Optional[str], message: str) -> None:
        """Attach the job id and the backend-supplied error message."""
        self.job_id = job_id
        self.message = message
        super().__init__(message)
