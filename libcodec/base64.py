"""
libcodec.base64 - standard base64 (RFC 4648) encoding into caller-owned buffers
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Callable

from libcodec._utils.bytes import StrOrBuffer, as_bytes, as_str
from libcodec._utils.validation import (
    validate_non_negative,
    validate_output_size,
    validate_window,
)

if TYPE_CHECKING:
    from typing_extensions import Buffer

__all__ = [
    "BASE64_CHARS",
    "BASE64_BYTES",
    "PAD_BYTE",
    "enc_length",
    "encode_into",
    "encode",
    "encode_str",
    "Base64Encoder",
    "b64_encoder",
]

#: standard base64 charmap
BASE64_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"

#: charmap as bytes, indexed by 6-bit value
BASE64_BYTES = BASE64_CHARS.encode("ascii")

#: padding char ("=")
PAD_BYTE = 0x3D


def _as_view(value: Buffer, name: str, writable: bool = False) -> memoryview:
    """return flat unsigned-byte view of buffer, without copying it"""
    try:
        view = memoryview(value)
    except TypeError:
        msg = f"{name} should be a bytes-like object, not {type(value).__name__!r}"
        raise TypeError(msg) from None
    if writable and view.readonly:
        msg = f"{name} must be a writable buffer, not {type(value).__name__!r}"
        raise TypeError(msg)
    if not view.c_contiguous:
        msg = f"{name}: underlying buffer is not C-contiguous"
        raise BufferError(msg)
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view


def enc_length(n: int) -> int:
    """Calculates the encoded length of an input of *n* bytes (padding included)."""
    validate_non_negative(n, "n")
    return ((n + 2) // 3) * 4


def encode_into(source: Buffer, offset: int, length: int, output: Buffer) -> Buffer:
    """Base64 encode a window of *source* into a caller-owned buffer.

    Reads *length* bytes of *source* starting at *offset*, and writes
    :func:`enc_length` ``(length)`` bytes into *output* starting at index 0.
    Positions of *output* past that are left untouched, so a single
    oversized buffer can be reused across calls.

    :arg source: bytes-like object to read from; never modified.
    :arg offset: index of first byte to encode.
    :arg length: number of bytes to encode.
    :arg output: writable bytes-like object (e.g. :class:`bytearray`).

    :raises ValueError: if *offset* or *length* is negative.
    :raises IndexError: if the window exceeds *source*,
        or *output* is smaller than ``enc_length(length)``.
    :raises TypeError: if *output* is read-only.

    :returns: *output*, for chaining.
    """
    src = _as_view(source, "source")
    dst = _as_view(output, "output", writable=True)
    validate_window(len(src), offset, length)
    end = enc_length(length)
    validate_output_size(len(dst), end)

    charmap = BASE64_BYTES
    tail = length % 3
    loop_lim = offset + length - tail

    #
    # output bit layout:
    #
    # first byte:   x 765432
    #
    # second byte:  x 10....
    #              +y ..7654
    #
    # third byte:   y 3210..
    #              +z ....76
    #
    # fourth byte:  z 543210
    #
    j = 0
    for i in range(offset, loop_lim, 3):
        x = src[i]
        y = src[i + 1]
        z = src[i + 2]
        dst[j] = charmap[x >> 2]
        dst[j + 1] = charmap[((x & 0x03) << 4) | (y >> 4)]
        dst[j + 2] = charmap[((y & 0x0F) << 2) | (z >> 6)]
        dst[j + 3] = charmap[z & 0x3F]
        j += 4

    if tail == 1:
        # note: 4 lsb of second symbol are padding
        x = src[loop_lim]
        dst[end - 4] = charmap[x >> 2]
        dst[end - 3] = charmap[(x & 0x03) << 4]
        dst[end - 2] = PAD_BYTE
        dst[end - 1] = PAD_BYTE
    elif tail == 2:
        # note: 2 lsb of third symbol are padding
        x = src[loop_lim]
        y = src[loop_lim + 1]
        dst[end - 4] = charmap[x >> 2]
        dst[end - 3] = charmap[((x & 0x03) << 4) | (y >> 4)]
        dst[end - 2] = charmap[(y & 0x0F) << 2]
        dst[end - 1] = PAD_BYTE
    else:
        assert tail == 0
        assert j == end
    return output


def encode(source: StrOrBuffer, offset: int = 0, length: int | None = None) -> bytes:
    """Returns base64 encoded bytes for *source* (or the window of it
    given by *offset* & *length*; *length* defaults to the rest of *source*).

    ``str`` input is encoded as utf-8 first.
    """
    source = as_bytes(source)
    if length is None:
        validate_non_negative(offset, "offset")
        length = max(_as_view(source, "source").nbytes - offset, 0)
    output = bytearray(enc_length(length))
    encode_into(source, offset, length, output)
    return bytes(output)


def encode_str(
    source: StrOrBuffer, offset: int = 0, length: int | None = None
) -> str:
    """like :func:`encode`, but returns an ascii ``str``"""
    return as_str(encode(source, offset, length))


@dataclasses.dataclass(frozen=True)
class Base64Encoder:
    encode: Callable[..., bytes]
    encode_into: Callable[[Buffer, int, int, Buffer], Buffer]
    enc_length: Callable[[int], int]

    def encode_str(self, value: StrOrBuffer) -> str:
        return as_str(self.encode(value))


b64_encoder = Base64Encoder(
    encode=encode,
    encode_into=encode_into,
    enc_length=enc_length,
)
