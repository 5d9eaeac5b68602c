from __future__ import annotations

from enum import Enum
from typing import Dict, Union

import numpy as np

from scalar_grid.errors import DecodeError


class SourceFormat(Enum):
    """On-disk layout of a grid source file."""

    RAW = "raw"
    ASCII = "ascii"

    @classmethod
    def parse(cls, tag: Union[str, "SourceFormat"]) -> "SourceFormat":
        if isinstance(tag, cls):
            return tag
        try:
            return cls(str(tag).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown source format: {tag!r} (expected 'raw' or 'ascii')") from None


class ByteOrder(Enum):
    """Byte order used to assemble multi-byte samples."""

    BIG = "big"
    LITTLE = "little"

    @property
    def numpy_prefix(self) -> str:
        return ">" if self is ByteOrder.BIG else "<"

    @classmethod
    def parse(cls, tag: Union[str, "ByteOrder"]) -> "ByteOrder":
        if isinstance(tag, cls):
            return tag
        key = str(tag).strip().lower().replace("-", "_")
        found = _BYTE_ORDER_ALIASES.get(key)
        if found is None:
            raise DecodeError(f"Unknown byte order: {tag!r}")
        return found


class SampleEncoding(Enum):
    """Closed set of fixed-width sample encodings.

    Each member carries its byte width and the numpy kind code used to
    reinterpret the assembled bit pattern. UINT8 and UINT16 are unsigned,
    INT16 and INT32 are two's-complement signed, FLOAT32 / FLOAT64 are IEEE-754.
    """

    UINT8 = "uint8"
    UINT16 = "uint16"
    INT16 = "int16"
    INT32 = "int32"
    FLOAT32 = "float32"
    FLOAT64 = "float64"

    @property
    def width(self) -> int:
        return _WIDTHS[self]

    def dtype(self, order: ByteOrder) -> np.dtype:
        """numpy dtype for this encoding under ``order``."""
        return np.dtype(order.numpy_prefix + _KINDS[self] + str(self.width))

    @classmethod
    def parse(cls, tag: Union[str, "SampleEncoding"]) -> "SampleEncoding":
        """Resolve a member from its value, its name or a legacy data type name."""
        if isinstance(tag, cls):
            return tag
        key = str(tag).strip().lower().replace("-", "_")
        found = _ENCODING_ALIASES.get(key)
        if found is None:
            raise DecodeError(f"Unknown sample encoding: {tag!r}")
        return found


_WIDTHS: Dict[SampleEncoding, int] = {
    SampleEncoding.UINT8: 1,
    SampleEncoding.UINT16: 2,
    SampleEncoding.INT16: 2,
    SampleEncoding.INT32: 4,
    SampleEncoding.FLOAT32: 4,
    SampleEncoding.FLOAT64: 8,
}

_KINDS: Dict[SampleEncoding, str] = {
    SampleEncoding.UINT8: "u",
    SampleEncoding.UINT16: "u",
    SampleEncoding.INT16: "i",
    SampleEncoding.INT32: "i",
    SampleEncoding.FLOAT32: "f",
    SampleEncoding.FLOAT64: "f",
}

_ENCODING_ALIASES: Dict[str, SampleEncoding] = {}
for _member in SampleEncoding:
    _ENCODING_ALIASES[_member.value] = _member
    _ENCODING_ALIASES[_member.name.lower()] = _member
# Data type names used by older conversion scripts.
_ENCODING_ALIASES.update(
    {
        "u8": SampleEncoding.UINT8,
        "unsigned_byte": SampleEncoding.UINT8,
        "u16": SampleEncoding.UINT16,
        "unsigned_short": SampleEncoding.UINT16,
        "i16": SampleEncoding.INT16,
        "short": SampleEncoding.INT16,
        "i32": SampleEncoding.INT32,
        "integer": SampleEncoding.INT32,
        "f32": SampleEncoding.FLOAT32,
        "float": SampleEncoding.FLOAT32,
        "f64": SampleEncoding.FLOAT64,
        "double": SampleEncoding.FLOAT64,
    }
)

_BYTE_ORDER_ALIASES: Dict[str, ByteOrder] = {
    "big": ByteOrder.BIG,
    "big_endian": ByteOrder.BIG,
    "be": ByteOrder.BIG,
    ">": ByteOrder.BIG,
    "little": ByteOrder.LITTLE,
    "little_endian": ByteOrder.LITTLE,
    "le": ByteOrder.LITTLE,
    "<": ByteOrder.LITTLE,
}
