from __future__ import annotations
import argparse, json, logging, sys
from .binary.errors import DescriptorError
from .config import DecodeOptions
from .models.descriptor import Descriptor
from .models.tags import DescriptorTag, TAG_RANGES


def _non_negative(text: str) -> int:
    n = int(text)
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {n}")
    return n

def _options(args) -> DecodeOptions:
    return DecodeOptions(
        max_depth=args.max_depth,
        zero_size_unbounded=not args.zero_size_empty,
        on_error="skip" if args.skip_errors else "raise",
    )

def _input(args):
    if args.hex:
        return bytes.fromhex(args.input)
    return args.input

def cmd_info(args):
    if args.summary:
        from .binary.reader import summarize_stream
        counts = summarize_stream(_input(args), offset=args.offset, options=_options(args))
        for kind, n in sorted(counts.items()):
            print(f"{kind}={n}")
        return 0

    from .models.stream import DescriptorStream
    stream = DescriptorStream.from_binary(_input(args), offset=args.offset, options=_options(args))
    print(json.dumps(stream.model_dump(mode="json"), indent=2))
    return 0

def _dump(d: Descriptor, indent: str = ""):
    print(f"{indent}{type(d).__name__} [{d.tag_name} 0x{d.tag:02X}]: {d.start} -> {d.end} "
          f"[header {d.header_size} bytes] [{d.body_size} bytes]")
    for child in d.children:
        _dump(child, indent + "  ")

def cmd_dump(args):
    from .binary.reader import parse_stream
    stream = parse_stream(_input(args), offset=args.offset, options=_options(args))
    for d in stream.descriptors:
        _dump(d)
    for issue in stream.issues:
        print(f"! {issue.kind} at {issue.offset}: {issue.message}", file=sys.stderr)
    return 0

def cmd_tags(args):
    for tag in DescriptorTag:
        print(f"0x{tag.value:02X}  {tag.name}")
    for first, last, label in TAG_RANGES:
        print(f"0x{first:02X}-0x{last:02X}  {label}")
    return 0

def build_parser():
    p = argparse.ArgumentParser(prog="mpeg4desc", description="MPEG-4 Systems descriptor reader")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_input(sp):
        sp.add_argument("input", help="path to a file holding descriptors (or hex with --hex)")
        sp.add_argument("--hex", action="store_true", help="treat INPUT as a hex string")
        sp.add_argument("--offset", type=_non_negative, default=0, help="byte offset of the first descriptor")
        sp.add_argument("--skip-errors", action="store_true", help="skip failing top-level descriptors")
        sp.add_argument("--max-depth", type=_non_negative, default=32, help="nesting limit")
        sp.add_argument("--zero-size-empty", action="store_true",
                        help="treat a declared size of 0 as an empty body instead of unbounded")

    sp = sub.add_parser("info", help="print decoded descriptors as JSON")
    add_input(sp)
    sp.add_argument("--summary", action="store_true", help="only count descriptors by kind")
    sp.set_defaults(func=cmd_info)

    sp = sub.add_parser("dump", help="print the descriptor tree")
    add_input(sp)
    sp.set_defaults(func=cmd_dump)

    sp = sub.add_parser("tags", help="list the descriptor tag registry")
    sp.set_defaults(func=cmd_tags)

    return p

def main(argv=None):
    p = build_parser()
    ns = p.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if ns.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        return ns.func(ns)
    except DescriptorError as e:
        print(f"error: {e.kind}: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
