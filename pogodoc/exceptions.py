"""
Pogodoc SDK exceptions.

Every error surfaced by the SDK derives from PogodocError. Workflow
methods tag errors with the step that produced them, so the rendered
message reads "<step>: <reason>".
"""

from typing import Any


class PogodocError(Exception):
    """Base exception for all SDK errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        self.steps: list[str] = []
        super().__init__(message)

    def tag_step(self, step: str) -> None:
        """Record the workflow step the error surfaced through (outermost first)."""
        self.steps.insert(0, step)

    def __str__(self) -> str:
        return ": ".join([*self.steps, self.message])


class ConfigurationError(PogodocError):
    """Raised when the client cannot be configured (missing token, bad base URL)."""

    pass


class InvalidArgumentError(PogodocError):
    """Raised when a precondition on call arguments is violated."""

    pass


class FileLoadError(PogodocError):
    """Base exception for local file loading failures."""

    def __init__(self, message: str, path: str):
        super().__init__(message, details={"path": path})
        self.path = path


class PathResolutionError(FileLoadError):
    """Path could not be resolved to an absolute path."""

    pass


class FileOpenError(FileLoadError):
    """File could not be opened."""

    pass


class FileReadError(FileLoadError):
    """File was opened but its contents could not be read."""

    pass


class EmptyFileError(FileLoadError):
    """File exists but contains no bytes."""

    def __init__(self, path: str):
        super().__init__(f"File is empty: {path}", path)


class UploadError(PogodocError):
    """
    Raised when a PUT to a pre-signed URL fails.

    status_code is set when the object store answered; it is None for
    transport failures.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message, details={"status_code": status_code})
        self.status_code = status_code


class ServiceError(PogodocError):
    """
    Raised when a Pogodoc API call fails.

    Wraps the underlying HTTP error with the status code and response
    body when the service answered.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(
            message,
            details={"status_code": status_code, "response_body": response_body},
        )
        self.status_code = status_code
        self.response_body = response_body


class JobNotCompletedError(PogodocError):
    """Raised when a render job is not done after the polling budget is spent."""

    def __init__(self, job_id: str, attempts: int):
        super().__init__(
            f"Job {job_id} did not complete after {attempts} status checks",
            details={"job_id": job_id, "attempts": attempts},
        )
        self.job_id = job_id
        self.attempts = attempts


class OperationCancelledError(PogodocError):
    """Raised when the caller's cancel event fires before or during a step."""

    def __init__(self, step: str):
        super().__init__(
            f"Operation cancelled before completing '{step}'",
            details={"step": step},
        )
        self.step = step
