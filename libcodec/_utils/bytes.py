from __future__ import annotations

from typing import Union

from typing_extensions import Buffer

StrOrBuffer = Union[str, Buffer]


def as_bytes(value: StrOrBuffer) -> Buffer:
    return value.encode("utf8") if isinstance(value, str) else value


def as_str(value: StrOrBuffer) -> str:
    return value if isinstance(value, str) else bytes(value).decode("ascii")
