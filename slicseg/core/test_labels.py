import unittest
import numpy as np

from .labels import (
    ROI, get_segmentation_roi, get_seed_labels, add_border_background,
    validate_labels, segmentation_to_labels,
    FOREGROUND_LABEL, BACKGROUND_LABEL, VALID_LABELS
)
from . import morphology


def _disk_mask(shape=(100, 100), center=(50, 50), radius=15):
    rows, cols = np.ogrid[:shape[0], :shape[1]]
    return (rows - center[0]) ** 2 + (cols - center[1]) ** 2 <= radius ** 2


class TestSegmentationROI(unittest.TestCase):

    def test_roi_clamped_at_corner(self):
        seg = np.zeros((100, 100), dtype=np.uint8)
        seg[0, 0] = 1
        self.assertEqual(get_segmentation_roi(seg), ROI(1, 26, 1, 26))

    def test_roi_in_middle(self):
        seg = np.zeros((100, 100), dtype=np.uint8)
        seg[49:52, 59] = 1
        roi = get_segmentation_roi(seg, margin=10)
        self.assertEqual(roi, ROI(40, 62, 50, 70))
        self.assertEqual(roi.shape, (23, 21))
        self.assertEqual(roi.crop(seg).sum(), 3)

    def test_roi_within_bounds(self):
        rng = np.random.default_rng(1)
        for _ in range(20):
            seg = rng.random((40, 60)) > 0.97
            if not seg.any():
                continue
            h0, h1, w0, w1 = get_segmentation_roi(seg)
            self.assertTrue(1 <= h0 <= h1 <= 40)
            self.assertTrue(1 <= w0 <= w1 <= 60)

    def test_roi_paste(self):
        roi = ROI(3, 5, 2, 4)
        full = roi.paste(np.ones((3, 3), dtype=np.uint8), (10, 10))
        self.assertEqual(full.sum(), 9)
        self.assertTrue(full[2:5, 1:4].all())

    def test_empty_segmentation_raises(self):
        with self.assertRaises(ValueError):
            get_segmentation_roi(np.zeros((10, 10)))


class TestSeedLabels(unittest.TestCase):

    def test_seed_and_train_labels(self):
        mask = _disk_mask()
        seed_label, train_label = get_seed_labels(mask, fgr=5, bgr=6)

        for label in (seed_label, train_label):
            self.assertTrue(set(np.unique(label)).issubset(VALID_LABELS))

        fg = seed_label == FOREGROUND_LABEL
        self.assertTrue(fg.any())
        self.assertFalse((fg & ~morphology.erode(mask, 5)).any())

        outside = morphology.dilate(mask, 6)
        np.testing.assert_array_equal(seed_label == BACKGROUND_LABEL, ~outside)

        ring = train_label == BACKGROUND_LABEL
        self.assertTrue(ring.any())
        self.assertFalse((ring & outside).any())
        self.assertTrue(morphology.dilate(mask, 7)[ring].all())
        np.testing.assert_array_equal(train_label == FOREGROUND_LABEL, fg)

    def test_thin_mask_falls_back_to_skeleton(self):
        mask = np.zeros((60, 60), dtype=bool)
        mask[29:32, 10:50] = True
        seed_label, _ = get_seed_labels(mask, fgr=5, bgr=6)
        fg = seed_label == FOREGROUND_LABEL
        self.assertTrue(fg.any())
        self.assertFalse((fg & ~mask).any())

    def test_empty_mask(self):
        seed_label, train_label = get_seed_labels(np.zeros((20, 20)), fgr=5, bgr=6)
        self.assertFalse((seed_label == FOREGROUND_LABEL).any())
        self.assertFalse(train_label.any())


class TestLabelHelpers(unittest.TestCase):

    def test_border_background(self):
        label = np.zeros((100, 100), dtype=np.uint8)
        label[50, 50] = FOREGROUND_LABEL
        result = add_border_background(label)

        self.assertEqual(result[4, 4], BACKGROUND_LABEL)
        self.assertEqual(result[94, 4], BACKGROUND_LABEL)
        self.assertEqual(result[4, 94], BACKGROUND_LABEL)
        self.assertEqual(result[9, 94], BACKGROUND_LABEL)
        self.assertEqual(result[5, 4], 0)
        self.assertEqual(result[50, 50], FOREGROUND_LABEL)
        # Input is left untouched
        self.assertEqual(label[4, 4], 0)

    def test_border_background_small_slice(self):
        label = np.zeros((8, 8), dtype=np.uint8)
        self.assertFalse(add_border_background(label).any())

    def test_validate_labels(self):
        validate_labels(np.array([[0, 127], [255, 0]], dtype=np.uint8))
        with self.assertRaises(ValueError):
            validate_labels(np.array([[0, 1]], dtype=np.uint8))

    def test_segmentation_to_labels(self):
        seg = np.array([[0, 1], [1, 0]])
        np.testing.assert_array_equal(
            segmentation_to_labels(seg), [[255, 127], [127, 255]]
        )


if __name__ == '__main__':
    unittest.main()
