import unittest

import numpy as np

from scalar_grid.errors import DecodeError
from scalar_grid.models import ByteOrder, SampleEncoding, ScalarField, VolumeDescriptor


class TestVolumeDescriptor(unittest.TestCase):
    def test_defaults_and_voxel_count(self):
        desc = VolumeDescriptor(dims=[4, 3, 2])
        self.assertEqual(desc.dims, (4, 3, 2))
        self.assertEqual(desc.scale, (1.0, 1.0, 1.0))
        self.assertEqual(desc.n_voxels, 24)

    def test_invalid(self):
        for dims, scale in [((0, 1, 1), (1, 1, 1)), ((1, 1), (1, 1, 1)), ((1, 1, 1), (1, 0, 1)), ((1, 1, 1), (1, 1))]:
            with self.subTest(dims=dims, scale=scale):
                with self.assertRaises(ValueError):
                    VolumeDescriptor(dims=dims, scale=scale)


class TestScalarField(unittest.TestCase):
    def test_length_invariant(self):
        desc = VolumeDescriptor(dims=(2, 2, 2))
        with self.assertRaises(ValueError):
            ScalarField(descriptor=desc, values=np.zeros(7))

    def test_values_coerced_to_float64(self):
        field = ScalarField(descriptor=VolumeDescriptor(dims=(3, 1, 1)), values=[1, 2, 3])
        self.assertEqual(field.values.dtype, np.float64)

    def test_grid_is_x_fastest(self):
        desc = VolumeDescriptor(dims=(3, 2, 1))
        field = ScalarField(descriptor=desc, values=np.arange(6, dtype=float))
        self.assertEqual(field.grid.shape, (1, 2, 3))
        self.assertEqual(field.grid[0, 1, 0], 3.0)

    def test_to_frame_physical_coordinates(self):
        desc = VolumeDescriptor(dims=(2, 1, 2), scale=(0.5, 1.0, 3.0))
        field = ScalarField(descriptor=desc, values=np.array([1.0, 2.0, 3.0, 4.0]))
        df = field.to_frame()
        self.assertEqual(list(df.columns), ["i", "j", "k", "x", "y", "z", "value"])
        self.assertEqual(df["i"].tolist(), [0, 1, 0, 1])
        self.assertEqual(df["k"].tolist(), [0, 0, 1, 1])
        self.assertEqual(df["x"].tolist(), [0.0, 0.5, 0.0, 0.5])
        self.assertEqual(df["z"].tolist(), [0.0, 0.0, 3.0, 3.0])
        self.assertEqual(df["value"].tolist(), [1.0, 2.0, 3.0, 4.0])


class TestEncodingTags(unittest.TestCase):
    def test_widths(self):
        widths = {e: e.width for e in SampleEncoding}
        self.assertEqual(
            widths,
            {
                SampleEncoding.UINT8: 1,
                SampleEncoding.UINT16: 2,
                SampleEncoding.INT16: 2,
                SampleEncoding.INT32: 4,
                SampleEncoding.FLOAT32: 4,
                SampleEncoding.FLOAT64: 8,
            },
        )

    def test_legacy_names(self):
        self.assertIs(SampleEncoding.parse("UNSIGNED_SHORT"), SampleEncoding.UINT16)
        self.assertIs(SampleEncoding.parse("double"), SampleEncoding.FLOAT64)
        self.assertIs(ByteOrder.parse("BIG_ENDIAN"), ByteOrder.BIG)
        self.assertIs(ByteOrder.parse("little-endian"), ByteOrder.LITTLE)

    def test_unknown_tags(self):
        with self.assertRaises(DecodeError):
            SampleEncoding.parse("XYZF")
        with self.assertRaises(DecodeError):
            ByteOrder.parse("native")


if __name__ == "__main__":
    unittest.main()
