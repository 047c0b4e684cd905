from __future__ import annotations


class DescriptorError(ValueError):
    """
    Base for every descriptor decode failure.

    `offset` is the byte position of the failing descriptor's tag (or of the
    missing byte for header errors). `resume_at` is filled in while the error
    unwinds: the byte position where the cursor was left after the enclosing
    descriptors skipped their bodies, i.e. where the next sibling starts.
    It stays None when the cursor position is not trustworthy.
    """

    kind = "descriptor_error"

    def __init__(
        self,
        message: str,
        *,
        tag: int | None = None,
        offset: int | None = None,
        resume_at: int | None = None,
    ):
        super().__init__(message)
        self.tag = tag
        self.offset = offset
        self.resume_at = resume_at


class TruncatedHeader(DescriptorError):
    kind = "truncated_header"


class MalformedSize(DescriptorError):
    kind = "malformed_size"


class InsufficientBytes(DescriptorError):
    kind = "insufficient_bytes"


class CallerContractViolation(DescriptorError):
    kind = "caller_contract_violation"


class NestingTooDeep(DescriptorError):
    kind = "nesting_too_deep"
