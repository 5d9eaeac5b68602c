"""Ingest package - grid source readers and sample decoding.

This package handles:
- Resolving '.dim' / '.scale' sidecar files next to a grid source
- Decoding fixed-width binary samples (either byte order) and ASCII sample lines
- Reading single-file RAW / ASCII grids into ScalarField objects
- Assembling volumes from numbered per-slice RAW files

Key entry points:
- GridReader (readers_grid): one source file + sidecars -> ScalarField
- convert_grid_to_container (readers_grid): read, normalize and persist in one call
- load_slices (readers_slices): '<base>.1' .. '<base>.N' -> normalized ScalarField

Design principle:
- Dimensions are mandatory; scale silently defaults to 1 1 1 (reported in warnings)
- Every reader returns a complete field or raises; partial volumes are never returned
"""
