import unittest
import numpy as np

from .volume import ImageVolume


class TestImageVolume(unittest.TestCase):

    def setUp(self):
        self.data = np.arange(4 * 5 * 6).reshape(4, 5, 6)
        self.volume = ImageVolume(self.data.copy())

    def test_slice_geometry(self):
        self.assertEqual(self.volume.get_max_slice_number(0), 4)
        self.assertEqual(self.volume.get_max_slice_number(2), 6)
        self.assertEqual(self.volume.get_slice_size(0), (5, 6))
        self.assertEqual(self.volume.get_slice_size(1), (4, 6))
        self.assertEqual(self.volume.get_slice_size(2), (4, 5))

    def test_get_2d_slice_is_one_based(self):
        np.testing.assert_array_equal(self.volume.get_2d_slice(1, 2), self.data[:, :, 0])
        np.testing.assert_array_equal(self.volume.get_2d_slice(4, 0), self.data[3])
        np.testing.assert_array_equal(self.volume.get_2d_slice(2, 1), self.data[:, 1, :])

    def test_get_2d_slice_returns_copy(self):
        s = self.volume.get_2d_slice(1, 2)
        s[:] = -1
        self.assertEqual(self.volume.data[0, 0, 0], 0)

    def test_replace_slice(self):
        self.volume.replace_slice(np.full((4, 5), 7), 3, 2)
        self.assertTrue(np.all(self.volume.data[:, :, 2] == 7))
        self.assertEqual(self.volume.data[0, 0, 1], self.data[0, 0, 1])
        with self.assertRaises(ValueError):
            self.volume.replace_slice(np.zeros((5, 4)), 3, 2)

    def test_set_pixel_value(self):
        volume = ImageVolume.zeros((4, 5, 6))
        volume.set_pixel_value(2, 3, 4, 0, 127)
        self.assertEqual(volume.data[3, 1, 2], 127)
        self.assertEqual(np.count_nonzero(volume.data), 1)
        with self.assertRaises(IndexError):
            volume.set_pixel_value(1, 1, 5, 0, 255)

    def test_out_of_range(self):
        with self.assertRaises(IndexError):
            self.volume.get_2d_slice(0, 2)
        with self.assertRaises(IndexError):
            self.volume.get_2d_slice(7, 2)
        with self.assertRaises(ValueError):
            self.volume.get_max_slice_number(3)
        with self.assertRaises(ValueError):
            ImageVolume(np.zeros((3, 3)))


if __name__ == '__main__':
    unittest.main()
