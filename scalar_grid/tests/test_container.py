"""Unit tests for the container codec (current write/read, legacy read)."""

from __future__ import annotations

import struct
import tempfile
from pathlib import Path

import numpy as np
import pytest

from scalar_grid.container import (
    ContainerScheme,
    read_container,
    read_container_header,
    write_container,
)
from scalar_grid.errors import ContainerError
from scalar_grid.models.volume import VolumeDescriptor


def _sample_values() -> np.ndarray:
    return np.array([0.0, 0.125, 0.25, 0.5, 0.75, 0.9999, -1e-300, 1e300])


class TestCurrentScheme:
    """Header + length-prefixed float64 payload."""

    def test_round_trip(self) -> None:
        desc = VolumeDescriptor(dims=(2, 2, 2), scale=(1.0, 2.0, 3.0))
        values = _sample_values()
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "vol.vrf"
            write_container(path, desc, values)
            field = read_container(path)

        assert field.dims == (2, 2, 2)
        assert field.scale == (1.0, 2.0, 3.0)
        np.testing.assert_array_equal(field.values, values)
        assert field.values.dtype == np.float64

    def test_byte_layout(self) -> None:
        desc = VolumeDescriptor(dims=(2, 1, 1), scale=(0.5, 1.0, 4.0))
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "vol.vrf"
            write_container(path, desc, [0.25, 0.75])
            data = path.read_bytes()

        expected = (
            struct.pack(">3H3d", 2, 1, 1, 0.5, 1.0, 4.0)
            + struct.pack(">I", 2)
            + struct.pack(">2d", 0.25, 0.75)
        )
        assert data == expected

    def test_count_mismatch_rejected(self) -> None:
        data = struct.pack(">3H3d", 2, 1, 1, 1.0, 1.0, 1.0) + struct.pack(">I", 3) + struct.pack(">3d", 0, 0, 0)
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "bad.vrf"
            path.write_bytes(data)
            with pytest.raises(ContainerError):
                read_container(path)

    @pytest.mark.parametrize("cut", [0, 10, 30, 33, 40])
    def test_truncated_rejected(self, cut: int) -> None:
        desc = VolumeDescriptor(dims=(2, 1, 1))
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "vol.vrf"
            write_container(path, desc, [1.0, 2.0])
            path.write_bytes(path.read_bytes()[:cut])
            with pytest.raises(ContainerError):
                read_container(path)

    def test_trailing_bytes_rejected(self) -> None:
        desc = VolumeDescriptor(dims=(1, 1, 1))
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "vol.vrf"
            write_container(path, desc, [1.0])
            path.write_bytes(path.read_bytes() + b"\x00")
            with pytest.raises(ContainerError):
                read_container(path)

    def test_zero_dim_header_rejected(self) -> None:
        data = struct.pack(">3H3d", 0, 1, 1, 1.0, 1.0, 1.0) + struct.pack(">I", 0)
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "bad.vrf"
            path.write_bytes(data)
            with pytest.raises(ContainerError):
                read_container(path)

    def test_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ContainerError) as info:
                read_container(Path(tmpdir) / "nope.vrf")
        assert isinstance(info.value.__cause__, FileNotFoundError)

    def test_write_rejects_length_mismatch(self) -> None:
        desc = VolumeDescriptor(dims=(2, 2, 2))
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "vol.vrf"
            with pytest.raises(ContainerError):
                write_container(path, desc, np.zeros(7))
            assert not path.exists()

    def test_write_rejects_dims_beyond_uint16(self) -> None:
        desc = VolumeDescriptor(dims=(70000, 1, 1))
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ContainerError):
                write_container(Path(tmpdir) / "vol.vrf", desc, np.zeros(70000))

    def test_write_into_missing_directory(self) -> None:
        desc = VolumeDescriptor(dims=(1, 1, 1))
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ContainerError):
                write_container(Path(tmpdir) / "missing" / "vol.vrf", desc, [0.0])


class TestLegacyScheme:
    """Header + bare big-endian float64 payload, read only."""

    def test_read(self) -> None:
        data = struct.pack(">3H3d", 3, 1, 1, 1.0, 2.0, 3.0) + struct.pack(">3d", 0.25, 0.5, 0.75)
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "old.vrf"
            path.write_bytes(data)
            field = read_container(path, ContainerScheme.LEGACY)

        assert field.dims == (3, 1, 1)
        assert field.scale == (1.0, 2.0, 3.0)
        np.testing.assert_array_equal(field.values, [0.25, 0.5, 0.75])

    def test_scheme_by_name(self) -> None:
        data = struct.pack(">3H3d", 1, 1, 1, 1.0, 1.0, 1.0) + struct.pack(">d", 0.5)
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "old.vrf"
            path.write_bytes(data)
            field = read_container(path, "legacy")
        assert field.values[0] == 0.5

    def test_truncated_rejected(self) -> None:
        data = struct.pack(">3H3d", 2, 1, 1, 1.0, 1.0, 1.0) + struct.pack(">d", 0.5)
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "old.vrf"
            path.write_bytes(data)
            with pytest.raises(ContainerError):
                read_container(path, ContainerScheme.LEGACY)

    def test_current_file_is_not_a_legacy_file(self) -> None:
        # The schemes are not interoperable: the count prefix shifts the legacy payload.
        desc = VolumeDescriptor(dims=(1, 1, 1))
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "vol.vrf"
            write_container(path, desc, [0.5])
            field = read_container(path, ContainerScheme.LEGACY)
        assert field.values[0] != 0.5


def test_header_only_read() -> None:
    desc = VolumeDescriptor(dims=(4, 3, 2), scale=(0.1, 0.2, 0.3))
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "vol.vrf"
        write_container(path, desc, np.zeros(24))
        got = read_container_header(path)
    assert got == desc


def test_unknown_scheme_rejected() -> None:
    desc = VolumeDescriptor(dims=(1, 1, 1))
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "vol.vrf"
        write_container(path, desc, [0.5])
        with pytest.raises(ContainerError, match="bogus"):
            read_container(path, "bogus")
