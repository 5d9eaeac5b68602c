from __future__ import annotations

from typing import Iterable, Union

import numpy as np

from scalar_grid.errors import DecodeError, ParseError
from scalar_grid.models.encoding import ByteOrder, SampleEncoding


BytesLike = Union[bytes, bytearray, memoryview]


def decode_raw(
    buf: BytesLike,
    count: int,
    encoding: Union[SampleEncoding, str],
    order: Union[ByteOrder, str],
) -> np.ndarray:
    """
    Decode ``count`` fixed-width samples from a raw byte buffer.

    Each ``encoding.width`` chunk is assembled under ``order`` (big-endian: most
    significant byte first; little-endian: least significant byte first) and the
    bit pattern is reinterpreted per encoding:

      - FLOAT64 / FLOAT32: IEEE-754 double / single (single widened to double)
      - UINT8 / UINT16: unsigned value
      - INT16 / INT32: two's-complement signed value

    Bytes beyond ``count * width`` are ignored.

    Returns a fresh, writable float64 array of length ``count``.

    Raises
    ------
    DecodeError
        Unknown encoding / byte order, negative count or a buffer shorter than
        ``count * width``.
    """
    enc = SampleEncoding.parse(encoding)
    bo = ByteOrder.parse(order)
    n = int(count)
    if n < 0:
        raise DecodeError(f"count must be >= 0, got {count}")

    need = n * enc.width
    view = memoryview(buf)
    if view.nbytes < need:
        raise DecodeError(
            f"raw buffer too short: {view.nbytes} bytes for {n} {enc.value} samples (need {need})"
        )

    if n == 0:
        return np.empty(0, dtype=np.float64)
    arr = np.frombuffer(view, dtype=enc.dtype(bo), count=n)
    # astype always copies here, which detaches the result from the read-only buffer.
    return arr.astype(np.float64)


def encode_raw(
    values: Iterable[float],
    encoding: Union[SampleEncoding, str],
    order: Union[ByteOrder, str],
) -> bytes:
    """
    Inverse of :func:`decode_raw`: pack ``values`` as fixed-width samples.

    Integer encodings require values that fit the target range exactly.
    """
    enc = SampleEncoding.parse(encoding)
    bo = ByteOrder.parse(order)
    dtype = enc.dtype(bo)
    if not isinstance(values, np.ndarray):
        values = list(values)
    arr = np.asarray(values, dtype=np.float64).reshape(-1)
    if dtype.kind in "ui":
        info = np.iinfo(dtype)
        if arr.size and (not np.all(np.isfinite(arr)) or arr.min() < info.min or arr.max() > info.max):
            raise DecodeError(f"values out of range for {enc.value}: [{info.min}, {info.max}]")
        if arr.size and not np.all(arr == np.round(arr)):
            raise DecodeError(f"{enc.value} requires integral values")
    return arr.astype(dtype).tobytes()


def decode_ascii(
    lines: Iterable[str],
    encoding: Union[SampleEncoding, str] = SampleEncoding.FLOAT64,
) -> np.ndarray:
    """
    Decode one sample per text line.

    Policy:
      - split each line on whitespace and keep only the LAST token
        (leading columns such as coordinates are ignored)
      - parse it as a real number, whatever ``encoding`` says

    ``encoding`` is validated so that an unknown tag fails the same way as for RAW input.

    Raises
    ------
    ParseError
        A line with no tokens or an unparsable trailing token (1-based line number in message).
    """
    SampleEncoding.parse(encoding)
    out = []
    for lineno, line in enumerate(lines, start=1):
        tokens = line.split()
        if not tokens:
            raise ParseError(f"line {lineno}: empty line, expected a sample value")
        try:
            out.append(float(tokens[-1]))
        except ValueError as exc:
            raise ParseError(f"line {lineno}: cannot parse sample {tokens[-1]!r}") from exc
    return np.asarray(out, dtype=np.float64)
