"""Binary container for normalized scalar fields.

Layout (all big-endian)
-----------------------
Header, shared by both schemes (30 bytes)::

    uint16 nx, ny, nz
    float64 sx, sy, sz

CURRENT payload (read/write)::

    uint32 count          # must equal nx*ny*nz
    float64 values[count]

LEGACY payload (read only)::

    float64 values[nx*ny*nz]   # no count; byte order fixed to big-endian

The two payloads cannot be told apart from the bytes alone, so the caller always
names the scheme. New files are only ever written with the CURRENT scheme.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Dict, Tuple

import numpy as np

from scalar_grid.errors import ContainerError
from scalar_grid.ingest.decoding import decode_raw
from scalar_grid.models.encoding import ByteOrder, SampleEncoding
from scalar_grid.models.volume import ScalarField, VolumeDescriptor


HEADER_DTYPE = np.dtype([("dims", ">u2", (3,)), ("scale", ">f8", (3,))])
COUNT_DTYPE = np.dtype(">u4")
VALUE_DTYPE = np.dtype(">f8")

MAX_DIM = int(np.iinfo(np.uint16).max)

# Historical assumption for the legacy payload; never used for writing.
LEGACY_BYTE_ORDER = ByteOrder.BIG


class ContainerScheme(Enum):
    CURRENT = "current"
    LEGACY = "legacy"


def _read_bytes(path: Path) -> bytes:
    with path.open("rb") as f:
        return f.read()


def _parse_header(data: bytes, path: Path) -> Tuple[VolumeDescriptor, int]:
    """Return (descriptor, payload_offset)."""
    if len(data) < HEADER_DTYPE.itemsize:
        raise ContainerError(
            f"{path.name}: truncated header ({len(data)} bytes, need {HEADER_DTYPE.itemsize})"
        )
    hdr = np.frombuffer(data, dtype=HEADER_DTYPE, count=1)[0]
    dims = tuple(int(d) for d in hdr["dims"])
    scale = tuple(float(s) for s in hdr["scale"])
    try:
        desc = VolumeDescriptor(dims=dims, scale=scale)
    except ValueError as exc:
        raise ContainerError(f"{path.name}: invalid header: {exc}") from exc
    return desc, HEADER_DTYPE.itemsize


def _encode_header(desc: VolumeDescriptor) -> bytes:
    if any(d > MAX_DIM for d in desc.dims):
        raise ContainerError(f"dims {desc.dims} do not fit the uint16 header (max {MAX_DIM})")
    hdr = np.zeros(1, dtype=HEADER_DTYPE)
    hdr["dims"][0] = desc.dims
    hdr["scale"][0] = desc.scale
    return hdr.tobytes()


class CurrentContainerCodec:
    """Header + length-prefixed float64 array. Self-describing: the count is stored."""

    scheme = ContainerScheme.CURRENT

    def read(self, path: str | Path) -> ScalarField:
        p = Path(path).expanduser()
        try:
            data = _read_bytes(p)
            desc, off = _parse_header(data, p)

            if len(data) < off + COUNT_DTYPE.itemsize:
                raise ContainerError(f"{p.name}: truncated before sample count")
            count = int(np.frombuffer(data, dtype=COUNT_DTYPE, count=1, offset=off)[0])
            off += COUNT_DTYPE.itemsize

            if count != desc.n_voxels:
                raise ContainerError(
                    f"{p.name}: sample count {count} does not match dims {desc.dims} ({desc.n_voxels})"
                )
            end = off + count * VALUE_DTYPE.itemsize
            if len(data) < end:
                raise ContainerError(
                    f"{p.name}: truncated payload ({len(data) - off} bytes, need {count * VALUE_DTYPE.itemsize})"
                )
            if len(data) > end:
                raise ContainerError(f"{p.name}: {len(data) - end} unexpected trailing bytes")

            values = np.frombuffer(data, dtype=VALUE_DTYPE, count=count, offset=off).astype(np.float64)
        except (OSError, ValueError) as exc:
            raise ContainerError(f"Cannot read container {p}: {exc}") from exc

        return ScalarField(descriptor=desc, values=values, source_path=p)

    def write(self, path: str | Path, descriptor: VolumeDescriptor, values: np.ndarray) -> Path:
        p = Path(path).expanduser()
        arr = np.asarray(values, dtype=np.float64).reshape(-1)
        if arr.size != descriptor.n_voxels:
            raise ContainerError(
                f"values has {arr.size} samples but dims {descriptor.dims} need {descriptor.n_voxels}"
            )
        header = _encode_header(descriptor)
        count = np.array([arr.size], dtype=COUNT_DTYPE).tobytes()
        payload = arr.astype(VALUE_DTYPE).tobytes()
        # Not transactional: an I/O error mid-write leaves a partial file behind.
        try:
            with p.open("wb") as f:
                f.write(header)
                f.write(count)
                f.write(payload)
        except OSError as exc:
            raise ContainerError(f"Cannot write container {p}: {exc}") from exc
        return p


class LegacyContainerCodec:
    """Header + nx*ny*nz raw big-endian doubles, no count. Read only."""

    scheme = ContainerScheme.LEGACY

    def read(self, path: str | Path) -> ScalarField:
        p = Path(path).expanduser()
        try:
            data = _read_bytes(p)
            desc, off = _parse_header(data, p)
            n = desc.n_voxels
            need = n * SampleEncoding.FLOAT64.width
            if len(data) - off < need:
                raise ContainerError(
                    f"{p.name}: truncated legacy payload ({len(data) - off} bytes, need {need})"
                )
            values = decode_raw(memoryview(data)[off:], n, SampleEncoding.FLOAT64, LEGACY_BYTE_ORDER)
        except (OSError, ValueError) as exc:
            raise ContainerError(f"Cannot read legacy container {p}: {exc}") from exc

        return ScalarField(descriptor=desc, values=values, source_path=p)


_CODECS: Dict[ContainerScheme, "CurrentContainerCodec | LegacyContainerCodec"] = {
    ContainerScheme.CURRENT: CurrentContainerCodec(),
    ContainerScheme.LEGACY: LegacyContainerCodec(),
}


def read_container(path: str | Path, scheme: ContainerScheme | str = ContainerScheme.CURRENT) -> ScalarField:
    """Read a container written under ``scheme`` (never guessed from the file)."""
    try:
        codec = _CODECS[ContainerScheme(scheme)]
    except ValueError as exc:
        raise ContainerError(f"Unknown container scheme: {scheme!r}") from exc
    return codec.read(path)


def write_container(path: str | Path, descriptor: VolumeDescriptor, values: np.ndarray) -> Path:
    """Write ``values`` under the CURRENT scheme. Returns the written path."""
    return CurrentContainerCodec().write(path, descriptor, values)


def read_container_header(path: str | Path) -> VolumeDescriptor:
    """Read only the dims / scale header (identical for both schemes)."""
    p = Path(path).expanduser()
    try:
        with p.open("rb") as f:
            data = f.read(HEADER_DTYPE.itemsize)
    except OSError as exc:
        raise ContainerError(f"Cannot read container header {p}: {exc}") from exc
    desc, _ = _parse_header(data, p)
    return desc
