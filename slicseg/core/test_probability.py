import unittest
import numpy as np

from .probability import process_using_shape_prior, process_using_connectivity
from .labels import FOREGROUND_LABEL


class TestShapePrior(unittest.TestCase):

    def setUp(self):
        self.prior = np.zeros((40, 40), dtype=np.uint8)
        self.prior[10:30, 10:30] = 1

    def test_confident_outside_is_damped(self):
        p0 = np.full((40, 40), 0.9)
        p = process_using_shape_prior(p0, self.prior)
        self.assertAlmostEqual(p[0, 0], 0.36)
        self.assertAlmostEqual(p[20, 20], 0.9)

    def test_weak_inside_is_boosted_by_depth(self):
        p0 = np.full((40, 40), 0.5)
        p = process_using_shape_prior(p0, self.prior)
        # Outside, below the damping threshold: unchanged
        self.assertAlmostEqual(p[0, 0], 0.5)
        # Deepest point gets the full boost, the boundary the smallest
        self.assertAlmostEqual(p.max(), 0.7)
        self.assertGreater(p[10, 10], 0.5)
        self.assertLess(p[10, 10], p[19, 19])

    def test_empty_prior_only_damps(self):
        p0 = np.linspace(0, 1, 100).reshape(10, 10)
        p = process_using_shape_prior(p0, np.zeros((10, 10)))
        expected = np.where(p0 > 0.5, 0.4 * p0, p0)
        np.testing.assert_allclose(p, expected)

    def test_output_in_unit_interval(self):
        rng = np.random.default_rng(3)
        for _ in range(5):
            p0 = rng.random((30, 30))
            prior = rng.random((30, 30)) > 0.4
            p = process_using_shape_prior(p0, prior)
            self.assertGreaterEqual(p.min(), 0.0)
            self.assertLessEqual(p.max(), 1.0)


class TestConnectivity(unittest.TestCase):

    def setUp(self):
        rng = np.random.default_rng(0)
        self.image = np.full((60, 100), 50.0)
        self.blob_a = np.zeros((60, 100), dtype=bool)
        self.blob_a[15:45, 10:35] = True
        self.blob_b = np.zeros((60, 100), dtype=bool)
        self.blob_b[15:45, 65:90] = True
        self.image[self.blob_a | self.blob_b] = 200.0
        self.image += rng.normal(0, 2.0, self.image.shape)

        self.p0 = np.where(self.blob_a | self.blob_b, 0.9, 0.1)
        self.seeds = np.zeros((60, 100), dtype=np.uint8)
        self.seeds[25:35, 18:28] = FOREGROUND_LABEL

    def test_unconnected_region_is_damped(self):
        p = process_using_connectivity(self.seeds, self.p0, self.image)
        np.testing.assert_allclose(p[self.blob_b], 0.36)
        np.testing.assert_allclose(p[~(self.blob_a | self.blob_b)], 0.04)

    def test_connected_region_is_kept(self):
        p = process_using_connectivity(self.seeds, self.p0, self.image)
        kept = np.isclose(p[self.blob_a], 0.9) | np.isclose(p[self.blob_a], 1.0)
        self.assertGreater(kept.mean(), 0.9)

    def test_seeds_are_certain(self):
        p = process_using_connectivity(self.seeds, self.p0, self.image)
        self.assertTrue(np.all(p[self.seeds == FOREGROUND_LABEL] == 1.0))

    def test_no_seeds_damps_everything(self):
        p = process_using_connectivity(np.zeros((60, 100), dtype=np.uint8), self.p0, self.image)
        np.testing.assert_allclose(p, 0.4 * self.p0)

    def test_output_in_unit_interval(self):
        p = process_using_connectivity(self.seeds, self.p0, self.image)
        self.assertGreaterEqual(p.min(), 0.0)
        self.assertLessEqual(p.max(), 1.0)


class TestConnectivityIntensityBand(unittest.TestCase):
    """Reachability through a probable region limited by seed intensity."""

    def setUp(self):
        # One probable block, rows 10-29 and cols 2-37, with intensity 200.
        # Seeds alternate 190/210: mean 200, sample std ~10.05, band (169.8, 220.1).
        self.image = np.full((40, 40), 50.0)
        self.image[10:30, 2:38] = 200.0
        self.image[10:30, 2:7] = 175.0     # mean - 2.5 std
        self.image[10:30, 28:33] = 225.0   # mean + 2.5 std, a wall across the block
        rows, cols = np.mgrid[15:25, 12:22]
        self.image[15:25, 12:22] = np.where((rows + cols) % 2 == 0, 190.0, 210.0)

        self.p0 = np.full((40, 40), 0.1)
        self.p0[10:30, 2:38] = 0.9
        self.seeds = np.zeros((40, 40), dtype=np.uint8)
        self.seeds[15:25, 12:22] = FOREGROUND_LABEL

    def test_bright_region_outside_band_is_damped(self):
        p = process_using_connectivity(self.seeds, self.p0, self.image)
        np.testing.assert_allclose(p[10:30, 28:33], 0.36)
        np.testing.assert_allclose(p[10:30, 22:28], 0.9)

    def test_band_is_asymmetric(self):
        p = process_using_connectivity(self.seeds, self.p0, self.image)
        # 2.5 std below the mean is inside the band, 2.5 std above is not
        np.testing.assert_allclose(p[10:30, 2:7], 0.9)
        np.testing.assert_allclose(p[10:30, 28:33], 0.36)

    def test_region_behind_band_wall_is_unreachable(self):
        p = process_using_connectivity(self.seeds, self.p0, self.image)
        np.testing.assert_allclose(p[10:30, 33:38], 0.36)

    def test_band_uses_sample_std(self):
        # Two seeds, 190 and 210: sample std ~14.14 puts 225 inside the band,
        # population std (10) would not.
        image = np.full((20, 20), 50.0)
        image[5:15, 5:15] = 225.0
        image[10, 8] = 190.0
        image[10, 9] = 210.0
        p0 = np.full((20, 20), 0.1)
        p0[5:15, 5:15] = 0.9
        seeds = np.zeros((20, 20), dtype=np.uint8)
        seeds[10, 8:10] = FOREGROUND_LABEL
        p = process_using_connectivity(seeds, p0, image)
        self.assertAlmostEqual(p[5, 5], 0.9)
        self.assertAlmostEqual(p[14, 14], 0.9)

    def test_single_seed_pixel(self):
        seeds = np.zeros((40, 40), dtype=np.uint8)
        seeds[20, 20] = FOREGROUND_LABEL
        p = process_using_connectivity(seeds, self.p0, self.image)
        self.assertEqual(p[20, 20], 1.0)
        self.assertAlmostEqual(p[20, 21], 0.36)


if __name__ == '__main__':
    unittest.main()
