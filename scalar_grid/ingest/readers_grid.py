from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import numpy as np

from scalar_grid.analysis.normalize import DEFAULT_CEILING, normalize_field
from scalar_grid.container.codec import write_container
from scalar_grid.errors import GridIOError, ParseError
from scalar_grid.ingest.decoding import decode_ascii, decode_raw
from scalar_grid.ingest.sidecars import resolve_dimensions, resolve_scale
from scalar_grid.models.encoding import ByteOrder, SampleEncoding, SourceFormat
from scalar_grid.models.volume import ScalarField, VolumeDescriptor


@dataclass(frozen=True)
class GridReaderConfig:
    """
    Reader configuration for single-file grid sources.

    source_format:
      RAW: flat binary, exactly nx*ny*nz samples, no header.
      ASCII: one sample per line; only the last whitespace token of each line is used.
    encoding / byte_order:
      Sample layout of RAW sources (ignored for ASCII, which is always parsed as reals).
    dim_suffix / scale_suffix:
      Sidecar suffixes substituted for the source extension ('vol.raw' -> 'vol.dim').
    """
    source_format: SourceFormat = SourceFormat.RAW
    encoding: SampleEncoding = SampleEncoding.UINT8
    byte_order: ByteOrder = ByteOrder.BIG
    dim_suffix: str = ".dim"
    scale_suffix: str = ".scale"

    def __post_init__(self) -> None:
        object.__setattr__(self, "source_format", SourceFormat.parse(self.source_format))
        object.__setattr__(self, "encoding", SampleEncoding.parse(self.encoding))
        object.__setattr__(self, "byte_order", ByteOrder.parse(self.byte_order))


class GridReader:
    """
    Reader for one grid source file plus its '.dim' / '.scale' sidecars.

    Contract:
      - dims come from the dimension sidecar; a missing/malformed one is fatal (MetadataError)
      - scale comes from the scale sidecar; a missing/malformed one falls back to (1, 1, 1)
        and is reported in ScalarField.warnings
      - exactly nx*ny*nz samples are read; a short source is fatal
      - values are returned in source units (no normalization here)
    """

    def __init__(self, config: Optional[GridReaderConfig] = None):
        self.config = config or GridReaderConfig()

    def read(self, source_path: str | Path) -> ScalarField:
        cfg = self.config
        path = Path(source_path).expanduser()
        warnings: List[str] = []

        dims = resolve_dimensions(path, cfg.dim_suffix)
        scale = resolve_scale(path, cfg.scale_suffix, warnings=warnings)
        desc = VolumeDescriptor(dims=dims, scale=scale)
        nv = desc.n_voxels

        if cfg.source_format is SourceFormat.RAW:
            values = self._load_raw(path, nv)
            warnings.append(f"raw source: {nv} {cfg.encoding.value} samples, {cfg.byte_order.value}-endian")
        else:
            values = self._load_ascii(path, nv)
            warnings.append(f"ascii source: {nv} samples")

        return ScalarField(
            descriptor=desc,
            values=values,
            source_path=path,
            warnings=tuple(warnings),
        )

    def _load_raw(self, path: Path, nv: int) -> np.ndarray:
        cfg = self.config
        need = nv * cfg.encoding.width
        try:
            with path.open("rb") as f:
                buf = f.read(need)
        except OSError as exc:
            raise GridIOError(f"Cannot read raw source {path}: {exc}") from exc
        if len(buf) < need:
            raise GridIOError(f"Raw source {path.name} too short: {len(buf)} bytes, need {need} for dims")
        return decode_raw(buf, nv, cfg.encoding, cfg.byte_order)

    def _load_ascii(self, path: Path, nv: int) -> np.ndarray:
        lines: List[str] = []
        try:
            with path.open("r", encoding="utf-8", errors="replace") as f:
                for line in f:
                    lines.append(line)
                    if len(lines) == nv:
                        break
        except OSError as exc:
            raise GridIOError(f"Cannot read ascii source {path}: {exc}") from exc
        if len(lines) < nv:
            raise ParseError(f"ASCII source {path.name} has {len(lines)} lines, need {nv} for dims")
        return decode_ascii(lines, self.config.encoding)


def convert_grid_to_container(
    source_path: str | Path,
    container_path: str | Path,
    config: Optional[GridReaderConfig] = None,
    *,
    normalize_values: bool = True,
    ceiling: float = DEFAULT_CEILING,
) -> ScalarField:
    """
    Full ingest pipeline: read source -> normalize in place -> write CURRENT container.

    Returns the field exactly as written (normalized unless ``normalize_values`` is False).
    Nothing is written when reading fails.
    """
    field = GridReader(config).read(source_path)
    if normalize_values:
        field = normalize_field(field, ceiling=ceiling)
    write_container(container_path, field.descriptor, field.values)
    return field
