from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Tuple, Type

from .bitcursor import Cursor
from .envelope import Envelope
from mpeg4desc.config import DecodeOptions
from mpeg4desc.models.descriptor import Descriptor

# decode(cursor, envelope, ctx) -> field values for the variant model
DecodeFn = Callable[[Cursor, Envelope, "DecodeContext"], dict]

# tag -> (variant model, decode function); filled at import time by @decodes
DECODERS: Dict[int, Tuple[Type[Descriptor], DecodeFn]] = {}


def decodes(*tags: int, model: Type[Descriptor]):
    """Register a decode function for one or more tags."""
    def func(fn: DecodeFn) -> DecodeFn:
        for tag in tags:
            if tag in DECODERS:
                raise ValueError(f"tag 0x{tag:02X} already registered to {DECODERS[tag][0].__name__}")
            DECODERS[tag] = (model, fn)
        return fn
    return func


@dataclass(frozen=True)
class DecodeContext:
    options: DecodeOptions = field(default_factory=DecodeOptions)
    depth: int = 0

    def load_children(self, cur: Cursor, env: Envelope) -> List[Descriptor]:
        """Decode the descriptors that fill the rest of `env`'s body, in order."""
        from .factory import load_descriptor
        children = []
        while env.has_more(cur):
            children.append(
                load_descriptor(cur, limit=env.stop, options=self.options, depth=self.depth + 1)
            )
        return children


def read_text(cur: Cursor, env: Envelope, n: int, what: str) -> str:
    env.need(cur, n, what)
    return cur.take(n).decode("utf-8", errors="replace")


def read_prefixed(cur: Cursor, env: Envelope, what: str) -> bytes:
    """1-byte length followed by that many bytes."""
    env.need(cur, 1, f"{what} length")
    n = cur.u8()
    env.need(cur, n, what)
    return cur.take(n)
