# backend/app/core/errors.py

from typing import Optional


class MatchIQError(Exception):
    """Base class for errors raised by the optimization service."""


class InputValidationError(MatchIQError):
    """Blank, oversized or unsupported input from a text source."""


class OptimizationNotFoundError(MatchIQError):
    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"Optimization job not found with id: {job_id}")


class JobFetchError(MatchIQError):
    """The job posting page could not be retrieved."""


class GenerationFailure(MatchIQError):
    """
    Remote generation failed or returned something unusable.
    Never leaves the content generator: it always degrades to fallback content.
    """


class PipelineFailure(MatchIQError):
    """A processing stage raised; carries the stage name and the original error."""

    def __init__(self, stage: str, cause: Optional[BaseException] = None, message: Optional[str] = None):
        self.stage = stage
        self.cause = cause
        if message is None:
            message = describe_exception(cause) if cause is not None else f"Stage '{stage}' failed"
        super().__init__(message)


def describe_exception(exc: BaseException) -> str:
    """Message of an exception, or its class name when the message is empty."""
    text = str(exc).strip()
    return text or exc.__class__.__name__
