"""Base64 encoding/decoding with selectable alphabet and optional padding.

Encoding follows RFC 4648: every 3 input bytes form a 24-bit word, split
into four 6-bit indices into the variant's alphabet. A short final group
produces 2 or 3 symbols, followed by "==" or "=" when padding is on:

    b"foo" -> "Zm9v"
    b"fo"  -> "Zm8="   (padding=False: "Zm8")
    b"f"   -> "Zg=="   (padding=False: "Zg")

Decoding is strict. Only canonical encodings are accepted, so for a given
variant and padding flag every byte string has exactly one accepted text:

- every symbol must belong to the variant's alphabet
- with padding, the length must be a multiple of 4 and '=' may only be
  the last one or two characters
- without padding, '=' is rejected and a lone trailing symbol (6 bits,
  not enough for a byte) is rejected
- the unused low bits of the last symbol ("filler bits") must be zero,
  e.g. "Zg" is accepted but "Zh" is not, although both start with 0x66

The *_into functions write into a caller-supplied buffer and return the
number of bytes written. Use encoded_length() / max_decoded_length() to
size the buffer.
"""

from b64x.alphabet import INVALID, Variant, alphabet, reverse_table

PAD = ord("=")


class InvalidBase64Error(ValueError):
    pass


def encoded_length(n: int, padding: bool = True) -> int:
    """Length of the encoding of n bytes.

    Padded: 4 * ceil(n/3). Unpadded: ceil(n*8/6).
    """
    if padding:
        return (n + 2) // 3 * 4
    return (n * 8 + 5) // 6


def max_decoded_length(n: int) -> int:
    """Upper bound on the decoded size of n characters: 3 * ceil(n/4)."""
    return (n + 3) // 4 * 3


def _writable(out, need: int) -> memoryview:
    dst = memoryview(out).cast("B")
    if dst.readonly:
        raise ValueError("output buffer is read-only")
    if len(dst) < need:
        raise ValueError(f"output buffer too small: need {need} bytes, got {len(dst)}")
    return dst


def _text_bytes(text: str | bytes) -> bytes:
    """Base64 text as raw bytes. Non-ASCII str input can never be valid."""
    if isinstance(text, str):
        try:
            return text.encode("ascii")
        except UnicodeEncodeError as e:
            raise InvalidBase64Error(
                f"invalid base64 character {text[e.start]!r} at position {e.start}"
            ) from None
    return bytes(text)


def _encode(src: bytes, dst: memoryview, padding: bool, variant: Variant) -> int:
    table = alphabet(variant).encode("ascii")
    n = len(src)

    pos = 0
    full = n - n % 3
    for i in range(0, full, 3):
        ac = src[i] << 16 | src[i + 1] << 8 | src[i + 2]
        dst[pos] = table[ac >> 18]
        dst[pos + 1] = table[(ac >> 12) & 0x3F]
        dst[pos + 2] = table[(ac >> 6) & 0x3F]
        dst[pos + 3] = table[ac & 0x3F]
        pos += 4

    rest = n - full
    if rest:
        # Missing bytes are zero, which makes the filler bits zero.
        ac = src[full] << 16
        if rest == 2:
            ac |= src[full + 1] << 8
        dst[pos] = table[ac >> 18]
        dst[pos + 1] = table[(ac >> 12) & 0x3F]
        pos += 2
        if rest == 2:
            dst[pos] = table[(ac >> 6) & 0x3F]
            pos += 1
        if padding:
            for _ in range(3 - rest):
                dst[pos] = PAD
                pos += 1
    return pos


def encode_into(data: bytes, out, padding: bool = True, variant: Variant = Variant.STANDARD) -> int:
    """Encode `data` into the writable buffer `out`, return bytes written.

    `out` must hold at least encoded_length(len(data), padding) bytes. The
    output is ASCII and not terminated.
    """
    src = bytes(data)
    dst = _writable(out, encoded_length(len(src), padding))
    return _encode(src, dst, padding, variant)


def encode(data: bytes, padding: bool = True, variant: Variant = Variant.STANDARD) -> str:
    """Encode bytes to base64 text."""
    src = bytes(data)
    buf = bytearray(encoded_length(len(src), padding))
    n = _encode(src, memoryview(buf), padding, variant)
    return buf[:n].decode("ascii")


def _decode(src: bytes, dst: memoryview, padding: bool, variant: Variant) -> int:
    """Symbols are fed 6 bits at a time into an accumulator, and a byte is
    emitted whenever 8 or more bits are pending. After the last symbol the
    pending bits must be fewer than 6 (otherwise a whole symbol went unused)
    and all zero.
    """
    n = len(src)
    rev = reverse_table(variant)

    end = n
    if padding:
        if n % 4:
            raise InvalidBase64Error(f"padded base64 length {n} is not a multiple of 4")
        while end > 0 and end > n - 2 and src[end - 1] == PAD:
            end -= 1

    acc = 0
    bits = 0
    pos = 0
    for i in range(end):
        value = rev[src[i]]
        if value == INVALID:
            if src[i] == PAD:
                raise InvalidBase64Error(f"misplaced padding at position {i}")
            raise InvalidBase64Error(f"invalid base64 character {chr(src[i])!r} at position {i}")
        acc = acc << 6 | value
        bits += 6
        if bits >= 8:
            bits -= 8
            dst[pos] = acc >> bits
            pos += 1
            acc &= (1 << bits) - 1

    if bits >= 6:
        raise InvalidBase64Error("truncated base64: final symbol does not complete a byte")
    if acc:
        raise InvalidBase64Error("non-zero filler bits in final base64 group")
    return pos


def decode_into(text: str | bytes, out, padding: bool = True, variant: Variant = Variant.STANDARD) -> int:
    """Decode base64 `text` into the writable buffer `out`, return bytes written.

    `out` must hold at least max_decoded_length(len(text)) bytes. Raises
    InvalidBase64Error on malformed input; whatever was already written to
    `out` at that point is garbage.
    """
    src = _text_bytes(text)
    dst = _writable(out, max_decoded_length(len(src)))
    return _decode(src, dst, padding, variant)


def decode(text: str | bytes, padding: bool = True, variant: Variant = Variant.STANDARD) -> bytes:
    """Decode base64 text to bytes. Raises InvalidBase64Error if malformed."""
    src = _text_bytes(text)
    buf = bytearray(max_decoded_length(len(src)))
    n = _decode(src, memoryview(buf), padding, variant)
    return bytes(buf[:n])
