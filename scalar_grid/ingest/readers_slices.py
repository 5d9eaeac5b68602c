from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np

from scalar_grid.analysis.normalize import DEFAULT_CEILING, normalize_field
from scalar_grid.errors import GridIOError
from scalar_grid.ingest.decoding import decode_raw
from scalar_grid.models.encoding import ByteOrder, SampleEncoding
from scalar_grid.models.volume import DEFAULT_SCALE, ScalarField, VolumeDescriptor


@dataclass(frozen=True)
class SliceStackReaderConfig:
    """
    Reader configuration for volumes stored as one RAW file per slice.

    Slice files are named '<base>.1' .. '<base>.N' and hold signed 16-bit big-endian
    samples (the CT / MR slice-stack convention). There are no sidecars: the caller
    supplies the slice geometry.
    """
    encoding: SampleEncoding = SampleEncoding.INT16
    byte_order: ByteOrder = ByteOrder.BIG
    ceiling: float = DEFAULT_CEILING


class SliceStackReader:
    """
    Reads '<base>.1' .. '<base>.N', concatenates them in index order and normalizes.

    All-or-nothing: if any slice is missing or short, GridIOError is raised and the
    slices already read are dropped.
    """

    def __init__(self, config: Optional[SliceStackReaderConfig] = None):
        self.config = config or SliceStackReaderConfig()

    @staticmethod
    def slice_path(base_path: str | Path, index: int) -> Path:
        base = Path(base_path).expanduser()
        return base.with_name(f"{base.name}.{int(index)}")

    def read(
        self,
        base_path: str | Path,
        voxels_per_slice: int,
        slice_count: int,
        *,
        slice_shape: Optional[Tuple[int, int]] = None,
        scale: Optional[Tuple[float, float, float]] = None,
    ) -> ScalarField:
        cfg = self.config
        nv = int(voxels_per_slice)
        ns = int(slice_count)
        if nv <= 0:
            raise ValueError("voxels_per_slice must be > 0")
        if ns <= 0:
            raise ValueError("slice_count must be > 0")

        if slice_shape is not None:
            nx, ny = (int(slice_shape[0]), int(slice_shape[1]))
            if nx * ny != nv:
                raise ValueError(f"slice_shape {slice_shape} does not match voxels_per_slice={nv}")
        else:
            nx, ny = nv, 1
        desc = VolumeDescriptor(dims=(nx, ny, ns), scale=scale if scale is not None else DEFAULT_SCALE)

        need = nv * cfg.encoding.width
        blocks: List[np.ndarray] = []
        for index in range(1, ns + 1):
            p = self.slice_path(base_path, index)
            try:
                with p.open("rb") as f:
                    buf = f.read(need)
            except OSError as exc:
                raise GridIOError(f"Cannot read slice {index}/{ns} ({p}): {exc}") from exc
            if len(buf) < need:
                raise GridIOError(f"Slice {p.name} too short: {len(buf)} bytes, need {need}")
            blocks.append(decode_raw(buf, nv, cfg.encoding, cfg.byte_order))

        field = ScalarField(
            descriptor=desc,
            values=np.concatenate(blocks),
            source_path=Path(base_path).expanduser(),
            warnings=(f"slice stack: concatenated {ns} slices of {nv} voxels",),
        )
        return normalize_field(field, ceiling=cfg.ceiling)


def load_slices(
    base_path: str | Path,
    voxels_per_slice: int,
    slice_count: int,
    *,
    slice_shape: Optional[Tuple[int, int]] = None,
    scale: Optional[Tuple[float, float, float]] = None,
) -> ScalarField:
    """Read a signed-16 big-endian slice stack into one normalized field (slice-major order)."""
    return SliceStackReader().read(
        base_path,
        voxels_per_slice,
        slice_count,
        slice_shape=slice_shape,
        scale=scale,
    )
