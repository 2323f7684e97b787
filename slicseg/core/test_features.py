import unittest
import numpy as np

from .features import image_to_feature_matrix, validate_slice, FEATURE_NAMES


class TestFeatures(unittest.TestCase):

    def setUp(self):
        self.image = np.random.default_rng(0).integers(0, 255, (30, 20)).astype(np.uint8)

    def test_feature_matrix_shape(self):
        features = image_to_feature_matrix(self.image)
        self.assertEqual(features.shape, (30 * 20, len(FEATURE_NAMES)))
        self.assertTrue(np.isfinite(features).all())

    def test_first_column_is_intensity_in_row_major_order(self):
        features = image_to_feature_matrix(self.image)
        np.testing.assert_array_equal(features[:, 0], self.image.ravel().astype(np.float64))
        self.assertEqual(features[20, 0], self.image[1, 0])

    def test_constant_slice_has_no_texture(self):
        features = image_to_feature_matrix(np.full((10, 10), 7.0))
        np.testing.assert_allclose(features[:, 3], 0.0, atol=1e-9)
        np.testing.assert_allclose(features[:, 6], 0.0, atol=1e-6)

    def test_invalid_slices(self):
        with self.assertRaises(ValueError):
            validate_slice(None)
        with self.assertRaises(ValueError):
            image_to_feature_matrix(np.zeros((3, 3, 3)))
        with self.assertRaises(ValueError):
            image_to_feature_matrix(np.zeros((0, 4)))


if __name__ == '__main__':
    unittest.main()
