#!/usr/bin/env python3
"""b64x — Base64 with standard, URL-safe and IMAP alphabets."""

import argparse
import logging
import sys

from b64x import base64
from b64x.alphabet import Variant, alphabet

log = logging.getLogger("b64x")


def _read_input(path: str | None) -> bytes:
    if path is None or path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def cmd_encode(args):
    data = _read_input(args.path)
    text = base64.encode(data, args.padding, args.variant)
    log.debug("encoded %d bytes -> %d chars (%s, padding=%s)", len(data), len(text), args.variant.name, args.padding)
    print(text)


def cmd_decode(args):
    text = _read_input(args.path).strip()
    data = base64.decode(text, args.padding, args.variant)
    log.debug("decoded %d chars -> %d bytes (%s, padding=%s)", len(text), len(data), args.variant.name, args.padding)
    sys.stdout.buffer.write(data)
    sys.stdout.flush()


def cmd_alphabet(args):
    print(alphabet(args.variant))


def _variant(name: str) -> Variant:
    try:
        return Variant.parse(name)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _add_variant(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--variant",
        type=_variant,
        default=Variant.STANDARD,
        help="Alphabet: standard (+/), urlsafe (-_) or imap (+,)",
    )


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(prog="b64x", description="Base64 with selectable alphabets")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr")
    sub = parser.add_subparsers(dest="command")

    # encode
    p = sub.add_parser("encode", help="Encode a file (or stdin) to base64")
    p.add_argument("path", nargs="?", help="Input file (default: stdin)")
    _add_variant(p)
    p.add_argument("--no-padding", dest="padding", action="store_false", help="Omit '=' padding")
    p.set_defaults(func=cmd_encode)

    # decode
    p = sub.add_parser("decode", help="Decode base64 from a file (or stdin)")
    p.add_argument("path", nargs="?", help="Input file (default: stdin)")
    _add_variant(p)
    p.add_argument("--no-padding", dest="padding", action="store_false", help="Input has no '=' padding")
    p.set_defaults(func=cmd_decode)

    # alphabet
    p = sub.add_parser("alphabet", help="Print the 64 symbols of a variant")
    _add_variant(p)
    p.set_defaults(func=cmd_alphabet)

    args = parser.parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(name)s: %(levelname)s: %(message)s", stream=sys.stderr)
    # basicConfig is a no-op once the root logger has handlers
    log.setLevel(level)
    if not args.command:
        parser.print_help()
        sys.exit(1)
    try:
        args.func(args)
    except base64.InvalidBase64Error as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
