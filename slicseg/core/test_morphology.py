import unittest
import numpy as np

from .morphology import (
    disk, erode, dilate, open_mask, close_mask, skeletonize,
    distance_to_labels, erosion_depth
)


class TestMorphology(unittest.TestCase):

    def test_erode_square(self):
        """Eroding a square by radius 1 removes its outer ring."""
        mask = np.zeros((20, 20), dtype=bool)
        mask[5:15, 5:15] = True
        eroded = erode(mask, 1)
        expected = np.zeros_like(mask)
        expected[6:14, 6:14] = True
        np.testing.assert_array_equal(eroded, expected)

    def test_erode_keeps_image_border(self):
        """Pixels outside the image count as foreground during erosion."""
        mask = np.ones((10, 10), dtype=bool)
        self.assertTrue(erode(mask, 3).all())

    def test_dilate_single_pixel(self):
        mask = np.zeros((9, 9), dtype=bool)
        mask[4, 4] = True
        dilated = dilate(mask, 1)
        self.assertEqual(dilated.sum(), disk(1).sum())
        self.assertTrue(dilated[3, 4] and dilated[5, 4] and dilated[4, 3] and dilated[4, 5])

    def test_radius_zero_is_identity(self):
        mask = np.random.default_rng(0).random((12, 12)) > 0.5
        np.testing.assert_array_equal(erode(mask, 0), mask)
        np.testing.assert_array_equal(dilate(mask, 0), mask)

    def test_open_removes_specks_and_close_fills_holes(self):
        mask = np.zeros((30, 30), dtype=bool)
        mask[5:25, 5:25] = True
        mask[15, 15] = False
        mask[1, 1] = True
        self.assertTrue(close_mask(mask, 2)[15, 15])
        self.assertFalse(open_mask(mask, 2)[1, 1])

    def test_skeleton_of_empty_mask(self):
        mask = np.zeros((10, 10), dtype=bool)
        self.assertFalse(skeletonize(mask).any())

    def test_skeleton_is_subset(self):
        mask = np.zeros((30, 30), dtype=bool)
        mask[10:20, 5:25] = True
        skeleton = skeletonize(mask)
        self.assertTrue(skeleton.any())
        self.assertFalse((skeleton & ~mask).any())

    def test_distance_to_labels(self):
        labels = np.zeros((5, 5), dtype=np.uint8)
        labels[2, 2] = 127
        distance = distance_to_labels(labels)
        self.assertEqual(distance[2, 2], 0)
        self.assertAlmostEqual(distance[2, 4], 2.0)
        self.assertTrue(np.isinf(distance_to_labels(np.zeros((3, 3)))).all())

    def test_erosion_depth_square(self):
        """A 5x5 square has three layers: border 1, middle ring 2, centre 3."""
        mask = np.zeros((9, 9), dtype=bool)
        mask[2:7, 2:7] = True
        depth = erosion_depth(mask)
        self.assertEqual(depth[0, 0], 0)
        self.assertEqual(depth[2, 2], 1)
        self.assertEqual(depth[3, 3], 2)
        self.assertEqual(depth[4, 4], 3)
        self.assertEqual(depth.max(), 3)
        np.testing.assert_array_equal(depth > 0, mask)

    def test_erosion_depth_full_image_terminates(self):
        depth = erosion_depth(np.ones((3, 3), dtype=bool))
        self.assertEqual(depth[1, 1], 2)
        self.assertEqual(depth[0, 0], 1)


if __name__ == '__main__':
    unittest.main()
