"""Ingest profile -- bundles every parameter of the conversion pipeline.

An IngestProfile groups the settings that decide how a grid source is decoded,
normalized and persisted into one frozen dataclass. It can be:

- Built with defaults and overridden via ``dataclasses.replace()``
- Serialized to/from a dict for JSON provenance (enums become their string values)
- Turned into the :class:`~scalar_grid.ingest.readers_grid.GridReaderConfig` used by the reader
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

from scalar_grid.models.encoding import ByteOrder, SampleEncoding, SourceFormat


@dataclass(frozen=True)
class IngestProfile:
    """Frozen configuration for the source -> container pipeline.

    Fields
    ------
    source_format : SourceFormat
        RAW (flat binary) or ASCII (one sample per line, last token).
    encoding : SampleEncoding
        Sample encoding of RAW sources. ASCII samples are always parsed as reals.
    byte_order : ByteOrder
        Byte order of RAW sources.
    dim_suffix, scale_suffix : str
        Sidecar suffixes substituted for the source extension.
    normalize : bool
        If False the container stores the decoded values unchanged.
    ceiling : float
        Upper clamp of the normalized range.
    """

    source_format: SourceFormat = SourceFormat.RAW
    encoding: SampleEncoding = SampleEncoding.UINT8
    byte_order: ByteOrder = ByteOrder.BIG
    dim_suffix: str = ".dim"
    scale_suffix: str = ".scale"
    normalize: bool = True
    ceiling: float = 0.9999

    def __post_init__(self) -> None:
        # Callers may pass plain strings (e.g. from JSON or argparse).
        object.__setattr__(self, "source_format", SourceFormat.parse(self.source_format))
        object.__setattr__(self, "encoding", SampleEncoding.parse(self.encoding))
        object.__setattr__(self, "byte_order", ByteOrder.parse(self.byte_order))
        try:
            ceiling = float(self.ceiling)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"ceiling must be a number, got {self.ceiling!r}") from exc
        if not (0.0 < ceiling <= 1.0):
            raise ValueError(f"ceiling must be in (0, 1], got {self.ceiling}")
        object.__setattr__(self, "ceiling", ceiling)

    def reader_config(self) -> "GridReaderConfig":
        # Avoid circular import at module level
        from scalar_grid.ingest.readers_grid import GridReaderConfig

        return GridReaderConfig(
            source_format=self.source_format,
            encoding=self.encoding,
            byte_order=self.byte_order,
            dim_suffix=self.dim_suffix,
            scale_suffix=self.scale_suffix,
        )

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dict (enums become their values)."""
        d = asdict(self)
        d["source_format"] = self.source_format.value
        d["encoding"] = self.encoding.value
        d["byte_order"] = self.byte_order.value
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> IngestProfile:
        """Reconstruct from a dict (e.g. loaded from JSON). Unknown keys are rejected."""
        d = dict(d)  # shallow copy
        unknown = sorted(set(d) - set(cls.__dataclass_fields__))
        if unknown:
            raise ValueError(f"Unknown IngestProfile keys: {unknown}")
        return cls(**d)
