"""libcodec - binary-to-text codecs"""

from libcodec.base64 import (
    BASE64_CHARS,
    Base64Encoder,
    b64_encoder,
    enc_length,
    encode,
    encode_into,
    encode_str,
)

__version__ = "1.0.0"

__all__ = [
    "BASE64_CHARS",
    "Base64Encoder",
    "b64_encoder",
    "enc_length",
    "encode",
    "encode_into",
    "encode_str",
]
