from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from scalar_grid.models.results import NormalizationResult


DEFAULT_SCALE: Tuple[float, float, float] = (1.0, 1.0, 1.0)

# Marks ScalarField.warnings entries that report degraded input (vs. plain provenance notes).
WARNING_PREFIX = "WARNING: "


@dataclass(frozen=True)
class VolumeDescriptor:
    """
    Grid geometry of one volume.

    dims:
      (nx, ny, nz) sample counts, all strictly positive.
    scale:
      Voxel spacing per axis, all strictly positive. Defaults to (1, 1, 1)
      when no scale sidecar is available.
    """
    dims: Tuple[int, int, int]
    scale: Tuple[float, float, float] = DEFAULT_SCALE

    def __post_init__(self) -> None:
        dims = tuple(int(d) for d in self.dims)
        scale = tuple(float(s) for s in self.scale)
        if len(dims) != 3:
            raise ValueError(f"dims must have 3 components, got {self.dims!r}")
        if len(scale) != 3:
            raise ValueError(f"scale must have 3 components, got {self.scale!r}")
        if any(d <= 0 for d in dims):
            raise ValueError(f"dims must be strictly positive, got {dims}")
        if not all(np.isfinite(s) and s > 0 for s in scale):
            raise ValueError(f"scale must be finite and strictly positive, got {scale}")
        # Normalize list inputs to plain tuples.
        object.__setattr__(self, "dims", dims)
        object.__setattr__(self, "scale", scale)

    @property
    def n_voxels(self) -> int:
        nx, ny, nz = self.dims
        return nx * ny * nz


@dataclass(frozen=True)
class ScalarField:
    """
    One scalar volume: geometry plus a flat float64 sample vector.

    Notes
    - ``values`` keeps the traversal order of the source file (x fastest, then y, then z).
    - The array itself is mutable; normalization rescales it in place and the original
      physical units are lost afterwards.
    - ``normalization`` is set by readers that normalize, ``None`` otherwise.
    """
    descriptor: VolumeDescriptor
    values: np.ndarray
    source_path: Optional[Path] = None
    warnings: Tuple[str, ...] = ()
    normalization: Optional[NormalizationResult] = None

    def __post_init__(self) -> None:
        values = self.values
        if not isinstance(values, np.ndarray) or values.dtype != np.float64 or values.ndim != 1:
            values = np.asarray(values, dtype=np.float64).reshape(-1)
            object.__setattr__(self, "values", values)
        if values.size != self.descriptor.n_voxels:
            raise ValueError(
                f"values has {values.size} samples but dims {self.descriptor.dims} need {self.descriptor.n_voxels}"
            )

    @property
    def dims(self) -> Tuple[int, int, int]:
        return self.descriptor.dims

    @property
    def scale(self) -> Tuple[float, float, float]:
        return self.descriptor.scale

    @property
    def n_voxels(self) -> int:
        return int(self.values.size)

    @property
    def grid(self) -> np.ndarray:
        """View of ``values`` shaped ``(nz, ny, nx)``."""
        nx, ny, nz = self.descriptor.dims
        return self.values.reshape((nz, ny, nx))

    def to_frame(self) -> pd.DataFrame:
        """
        Long-format table with one row per voxel.

        Columns: i, j, k (grid indices along x, y, z), x, y, z (index times voxel scale)
        and value. Row order matches ``values``.
        """
        nx, ny, nz = self.descriptor.dims
        sx, sy, sz = self.descriptor.scale
        k, j, i = np.meshgrid(np.arange(nz), np.arange(ny), np.arange(nx), indexing="ij")
        i = i.reshape(-1)
        j = j.reshape(-1)
        k = k.reshape(-1)
        return pd.DataFrame(
            {
                "i": i,
                "j": j,
                "k": k,
                "x": i * sx,
                "y": j * sy,
                "z": k * sz,
                "value": self.values,
            }
        )
