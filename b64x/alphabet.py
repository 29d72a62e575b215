"""Base64 alphabets and their reverse lookup tables.

All three variants share the first 62 symbols (A-Z, a-z, 0-9) and differ
only in the two symbols used for values 62 and 63:

    STANDARD  "+" "/"   RFC 4648 section 4
    URLSAFE   "-" "_"   RFC 4648 section 5
    IMAP      "+" ","   RFC 3501 modified UTF-7 mailbox names

The reverse table maps every byte value 0..255 to its 6-bit value, or to
INVALID for bytes outside the alphabet. '=' is never in any alphabet; the
decoder handles padding separately.
"""

from enum import Enum

INVALID = -1

_ALNUM = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
    "0123456789"
)


class Variant(Enum):
    STANDARD = "+/"
    URLSAFE = "-_"
    IMAP = "+,"

    @classmethod
    def parse(cls, name: str) -> "Variant":
        """Look up a variant by name, e.g. "standard", "url", "imap"."""
        try:
            return _NAMES[name.lower()]
        except KeyError:
            raise ValueError(f"unknown base64 variant: {name!r}") from None


_NAMES = {
    "standard": Variant.STANDARD,
    "std": Variant.STANDARD,
    "urlsafe": Variant.URLSAFE,
    "url": Variant.URLSAFE,
    "imap": Variant.IMAP,
}


def _build_reverse(chars: str) -> tuple[int, ...]:
    """Fill 256 sentinels, then overwrite the ranges that are in the alphabet.

    A-Z -> 0..25, a-z -> 26..51, 0-9 -> 52..61, then the two variant symbols.
    """
    table = [INVALID] * 256
    for start, first_value, count in ((ord("A"), 0, 26), (ord("a"), 26, 26), (ord("0"), 52, 10)):
        table[start:start + count] = range(first_value, first_value + count)
    table[ord(chars[62])] = 62
    table[ord(chars[63])] = 63
    return tuple(table)


_FORWARD = {v: _ALNUM + v.value for v in Variant}
_REVERSE = {v: _build_reverse(chars) for v, chars in _FORWARD.items()}


def alphabet(variant: Variant) -> str:
    """The 64 symbols of `variant`, indexed by 6-bit value."""
    return _FORWARD[variant]


def reverse_table(variant: Variant) -> tuple[int, ...]:
    """256-entry map from byte value to 6-bit value, or INVALID."""
    return _REVERSE[variant]
