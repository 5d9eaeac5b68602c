"""Convert a RAW / ASCII grid into a container, or inspect an existing container.

Examples::

    python -m scalar_grid.scripts.convert_grid head.raw head.vrf --encoding uint16 --byte-order little
    python -m scalar_grid.scripts.convert_grid points.txt points.vrf --format ascii
    python -m scalar_grid.scripts.convert_grid --inspect old.vrf --legacy
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence
import json

import numpy as np

from scalar_grid.container.codec import ContainerScheme, read_container
from scalar_grid.errors import GridError
from scalar_grid.ingest.readers_grid import convert_grid_to_container
from scalar_grid.models.encoding import SampleEncoding
from scalar_grid.models.profile import IngestProfile
from scalar_grid.models.volume import WARNING_PREFIX, ScalarField


def _load_profile(path: Optional[str]) -> IngestProfile:
    if not path:
        return IngestProfile()
    d = json.loads(Path(path).expanduser().read_text(encoding="utf-8"))
    return IngestProfile.from_dict(d)


def _print_field(field: ScalarField) -> None:
    nx, ny, nz = field.dims
    sx, sy, sz = field.scale
    print(f"[info] dims: {nx} {ny} {nz} ({field.n_voxels} voxels)")
    print(f"[info] scale: {sx:g} {sy:g} {sz:g}")
    finite = field.values[np.isfinite(field.values)]
    if finite.size:
        print(f"[info] value range: [{float(finite.min()):.6g}, {float(finite.max()):.6g}]")
    else:
        print("[info] value range: <no finite samples>")


def main(argv: Optional[Sequence[str]] = None) -> int:
    import argparse
    import textwrap

    p = argparse.ArgumentParser(
        prog="python -m scalar_grid.scripts.convert_grid",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            Convert a grid source into a normalized container file.

            The source must have a '<base>.dim' sidecar ('nx ny nz'); a '<base>.scale'
            sidecar ('sx sy sz') is optional and defaults to '1 1 1'.
            With --inspect, print the header and value range of a container instead.
            """
        ),
    )
    p.add_argument("source", nargs="?", help="Grid source file (RAW or ASCII)")
    p.add_argument("container", nargs="?", help="Output container path")
    p.add_argument("--profile", default=None, help="JSON file with IngestProfile fields (flags below override it)")
    p.add_argument("--format", dest="source_format", choices=["raw", "ascii"], default=None)
    p.add_argument(
        "--encoding",
        default=None,
        help="Sample encoding: " + ", ".join(e.value for e in SampleEncoding),
    )
    p.add_argument("--byte-order", choices=["big", "little"], default=None)
    p.add_argument("--no-normalize", action="store_true", help="Store decoded values unchanged")
    p.add_argument("--inspect", metavar="CONTAINER", default=None, help="Inspect a container and exit")
    p.add_argument("--legacy", action="store_true", help="With --inspect: read the legacy (count-less) scheme")

    ns = p.parse_args(list(argv) if argv is not None else None)

    try:
        if ns.inspect:
            scheme = ContainerScheme.LEGACY if ns.legacy else ContainerScheme.CURRENT
            field = read_container(ns.inspect, scheme)
            print(f"[info] container: {field.source_path} ({scheme.value} scheme)")
            _print_field(field)
            return 0

        if not ns.source or not ns.container:
            p.error("source and container are required unless --inspect is given")

        profile = _load_profile(ns.profile)
        overrides = {}
        if ns.source_format:
            overrides["source_format"] = ns.source_format
        if ns.encoding:
            overrides["encoding"] = ns.encoding
        if ns.byte_order:
            overrides["byte_order"] = ns.byte_order
        if ns.no_normalize:
            overrides["normalize"] = False
        profile = replace(profile, **overrides)

        field = convert_grid_to_container(
            ns.source,
            ns.container,
            profile.reader_config(),
            normalize_values=profile.normalize,
            ceiling=profile.ceiling,
        )
    except (GridError, ValueError, TypeError, OSError) as exc:
        print(f"[error] {type(exc).__name__}: {exc}")
        return 1

    print(f"[info] wrote: {Path(ns.container)}")
    _print_field(field)
    for w in field.warnings:
        if w.startswith(WARNING_PREFIX):
            print(f"[warn] {w[len(WARNING_PREFIX):]}")
        else:
            print(f"[info] {w}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
