"""scalar_grid -- ingestion and container I/O for volumetric scalar fields.

This package provides tools for:
- Resolving '.dim' (required) and '.scale' (optional) sidecar files next to a grid source
- Decoding RAW samples (uint8, uint16, int16, int32, float32, float64; big or little endian)
  and ASCII sample lines (last token per line)
- Min-max normalization into [0, 0.9999] with a one-sided upper clamp
- Writing and reading the binary container (current scheme) and reading the legacy scheme
- Assembling volumes from numbered per-slice RAW files

Key principles:
- Dimensions are never guessed; a missing dimension sidecar is fatal
- Every reader returns a complete field or raises; nothing partial is handed back
- The container scheme is chosen by the caller, never sniffed from file content

Main subpackages:
- ingest: sidecars, sample decoding, grid and slice-stack readers
- analysis: normalization
- container: container codec
- models: data models (VolumeDescriptor, ScalarField, encodings, IngestProfile)
- scripts: command line entry points
"""

__all__ = []
