from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, Field

from .descriptor import AnyDescriptor, Descriptor


class DecodeIssue(BaseModel):
    """A top-level descriptor that failed to decode and was skipped."""
    kind: str
    message: str
    tag: Optional[int] = None
    offset: Optional[int] = None
    resume_at: Optional[int] = None


class DescriptorStream(BaseModel):
    descriptors: List[AnyDescriptor] = Field(default_factory=list)
    issues: List[DecodeIssue] = Field(default_factory=list)

    def walk(self):
        for d in self.descriptors:
            yield from d.walk()

    def find(self, cls) -> List[Descriptor]:
        return [d for d in self.walk() if isinstance(d, cls)]

    # Convenience constructor (delegates to the binary layer)
    @classmethod
    def from_binary(cls, data, *, offset: int = 0, options=None) -> "DescriptorStream":
        from ..binary.reader import parse_stream
        return parse_stream(data, offset=offset, options=options)
