from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from briefly.variants import Variant


class ErrorCode(str, Enum):
    EXTRACT_FAILED = "EXTRACT_FAILED"
    FETCH_FORBIDDEN = "FETCH_FORBIDDEN"
    NOT_A_RECIPE = "NOT_A_RECIPE"
    CONTENT_REJECTED = "CONTENT_REJECTED"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    UNKNOWN = "UNKNOWN"


class BrieflyError(Exception):
    """
    Base for failures raised inside the pipeline stages.
    `category` is what the classifier dispatches on.
    """

    category = "unknown"


class FetchError(BrieflyError):
    category = "fetch"

    def __init__(self, url: str, status: Optional[int] = None, detail: str = "") -> None:
        self.url = url
        self.status = status
        self.detail = detail
        if status is not None:
            msg = f"Failed to fetch URL: {status} {detail}".rstrip()
        else:
            msg = f"Failed to fetch URL: {detail or 'transport error'}"
        super().__init__(msg)


class ExtractFailed(BrieflyError):
    category = "extract"


class StructuringError(BrieflyError):
    category = "structuring"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Structuring failed: {reason}")


class ContentRejected(BrieflyError):
    category = "rejected"


class ValidationFailed(BrieflyError):
    category = "validation"


class PipelineError(Exception):
    """
    Caller-facing failure: a code, a safe message and whether the caller can
    retry through the pasted-text path.
    """

    def __init__(self, code: ErrorCode, message: str, recoverable: bool = False) -> None:
        self.code = code
        self.message = message
        self.recoverable = recoverable
        super().__init__(f"{code.value}: {message}")

    def to_dict(self) -> dict:
        return {
            "errorCode": self.code.value,
            "error": self.message,
            "recoverable": self.recoverable,
        }


_UNKNOWN_MESSAGE = "Something went wrong while processing this request."


def classify(exc: BaseException, variant: "Variant") -> PipelineError:
    """
    Translate a stage failure into the closed set of caller-facing codes.
    Anything without a known category becomes UNKNOWN with a generic message.
    """
    if isinstance(exc, PipelineError):
        return exc

    category = getattr(exc, "category", None)

    if category == "fetch" and getattr(exc, "status", None) == 403:
        return PipelineError(
            ErrorCode.FETCH_FORBIDDEN,
            "This site is blocking automated access. You can open it in your browser, "
            "but I can't read it directly. Paste the text instead.",
            recoverable=True,
        )

    if category == "extract":
        return PipelineError(
            ErrorCode.EXTRACT_FAILED,
            "I couldn't reliably extract the content from this page. Some sites are heavily "
            "scripted or use unusual layouts. Paste the text instead.",
            recoverable=True,
        )

    if category == "rejected":
        return PipelineError(variant.rejection_code, variant.rejection_message)

    if category == "validation":
        return PipelineError(ErrorCode.VALIDATION_FAILED, str(exc))

    return PipelineError(ErrorCode.UNKNOWN, _UNKNOWN_MESSAGE)
