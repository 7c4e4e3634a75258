"""
Unit tests for the design assembler.
"""

import unittest
import blemu.num as gnp
from blemu.config import get_config
from blemu.core import Design, assemble_design
from blemu.errors import ConfigurationError, DimensionMismatchError


def make_design_data(n=4, d=2, seed=0):
    gnp.set_seed(seed)
    xi = gnp.rand(n, d)
    zi = gnp.randn(n)
    dz0 = gnp.randn(n)
    dz1 = gnp.randn(n)
    return xi, zi, dz0, dz1


class TestAssembleDesign(unittest.TestCase):
    def test_values_only(self):
        xi, zi, _, _ = make_design_data()
        design = assemble_design(xi, zi, mean=3.0)
        self.assertEqual(design.size, 4)
        self.assertEqual(design.n, 4)
        self.assertEqual(design.blocks, ())
        self.assertEqual(design.directions, ())
        self.assertTrue(gnp.allclose(design.E_D, 3.0))
        self.assertTrue(gnp.allclose(design.D, zi))

    def test_block_order_and_prior_mean(self):
        xi, zi, dz0, dz1 = make_design_data()
        design = assemble_design(xi, zi, [(1, xi, dz1), (0, xi[:2], dz0[:2])], mean=500.0)
        self.assertEqual(design.blocks, ((1, 4), (0, 2)))
        self.assertEqual(design.directions, (1, 0))
        self.assertEqual(design.size, 10)
        self.assertTrue(gnp.allclose(design.D[:4], zi))
        self.assertTrue(gnp.allclose(design.D[4:8], dz1))
        self.assertTrue(gnp.allclose(design.D[8:], dz0[:2]))
        # derivative entries have zero prior mean
        self.assertTrue(gnp.allclose(design.E_D[:4], 500.0))
        self.assertTrue(gnp.all(design.E_D[4:] == 0.0))
        # repeated points are kept once per block
        self.assertTrue(gnp.allclose(design.xD[4:8], xi))

    def test_dict_derivatives(self):
        xi, zi, dz0, dz1 = make_design_data()
        design = assemble_design(xi, zi, {0: (xi, dz0), 1: (xi, dz1)})
        self.assertEqual(design.directions, (0, 1))
        slices = design.block_slices()
        self.assertEqual(slices["value"], slice(0, 4))
        self.assertEqual(slices[0], slice(4, 8))
        self.assertEqual(slices[1], slice(8, 12))
        self.assertTrue(gnp.allclose(design.block_observations(1), dz1))
        self.assertTrue(gnp.allclose(design.block_points(0), xi))

    def test_column_observations_are_flattened(self):
        xi, zi, _, _ = make_design_data()
        design = assemble_design(xi, zi.reshape(-1, 1))
        self.assertEqual(design.D.shape, (4,))

    def test_arrays_are_read_only(self):
        xi, zi, _, _ = make_design_data()
        design = assemble_design(xi, zi)
        with self.assertRaises(ValueError):
            design.D[0] = 1.0
        xi[0, 0] = 42.0
        self.assertNotEqual(design.xD[0, 0], 42.0)

    def test_derivative_points_in_wrong_dimension(self):
        xi, zi, dz0, _ = make_design_data()
        with self.assertRaises(DimensionMismatchError):
            assemble_design(xi, zi, {0: (gnp.rand(4, 3), dz0)})

    def test_derivative_lengths_mismatch(self):
        xi, zi, dz0, _ = make_design_data()
        with self.assertRaises(ConfigurationError):
            assemble_design(xi, zi, {0: (xi, dz0[:3])})

    def test_direction_out_of_range(self):
        xi, zi, dz0, _ = make_design_data()
        with self.assertRaises(DimensionMismatchError):
            assemble_design(xi, zi, {2: (xi, dz0)})

    def test_duplicate_direction(self):
        xi, zi, dz0, dz1 = make_design_data()
        with self.assertRaises(ConfigurationError):
            assemble_design(xi, zi, [(0, xi, dz0), (0, xi, dz1)])


class TestFromConcatenated(unittest.TestCase):
    def test_consistent_metadata(self):
        xi, zi, dz0, dz1 = make_design_data()
        xD = gnp.vstack((xi, xi, xi))
        D = gnp.concatenate((zi, dz0, dz1))
        design = Design.from_concatenated(xD, D, 4, {0: 4, 1: 4}, mean=1.0)
        self.assertEqual(design.size, 12)
        self.assertEqual(len(design), 12)
        self.assertEqual(design.dim, 2)

    def test_block_sizes_disagree_with_arrays(self):
        xi, zi, dz0, dz1 = make_design_data()
        xD = gnp.vstack((xi, xi, xi))
        D = gnp.concatenate((zi, dz0, dz1))
        with self.assertRaises(ConfigurationError):
            Design.from_concatenated(xD, D, 4, {0: 4, 1: 3})
        with self.assertRaises(ConfigurationError):
            Design.from_concatenated(xD, D, 5, {0: 4, 1: 4})
        with self.assertRaises(ConfigurationError):
            Design.from_concatenated(xD, D[:-1], 4, {0: 4, 1: 3})
        with self.assertRaises(ConfigurationError):
            Design.from_concatenated(xD, D, -4, {0: 8, 1: 8})

    def test_invalid_mean(self):
        xi, zi, _, _ = make_design_data()
        with self.assertRaises(ConfigurationError):
            Design.from_concatenated(xi, zi, 4, mean=gnp.nan)
        with self.assertRaises(ConfigurationError):
            Design.from_concatenated(xi, zi, 4, mean="five")

    def test_configured_fallback_mean(self):
        xi, zi, dz0, _ = make_design_data()
        self.assertEqual(assemble_design(xi, zi, mean=None).mean, 0.0)
        config = get_config()
        self.addCleanup(config.update, mean=config.mean)
        config.update(mean=7.0)
        design = assemble_design(xi, zi, {0: (xi, dz0)})
        self.assertEqual(design.mean, 7.0)
        self.assertTrue(gnp.all(design.E_D[:4] == 7.0))
        self.assertTrue(gnp.all(design.E_D[4:] == 0.0))
        # an explicit mean wins over the fallback
        self.assertEqual(Design.from_concatenated(xi, zi, 4, mean=-1.0).mean, -1.0)


class TestRestrict(unittest.TestCase):
    def setUp(self):
        xi, zi, dz0, dz1 = make_design_data()
        self.zi, self.dz0, self.dz1 = zi, dz0, dz1
        self.design = assemble_design(xi, zi, {0: (xi, dz0), 1: (xi, dz1)}, mean=2.0)

    def test_keep_one_direction(self):
        d1 = self.design.restrict([1])
        self.assertEqual(d1.blocks, ((1, 4),))
        self.assertEqual(d1.size, 8)
        self.assertTrue(gnp.allclose(d1.D[4:], self.dz1))
        self.assertEqual(d1.mean, 2.0)

    def test_keep_none(self):
        d0 = self.design.restrict(())
        self.assertEqual(d0.size, 4)
        self.assertTrue(gnp.allclose(d0.D, self.zi))

    def test_reorder(self):
        d10 = self.design.restrict((1, 0))
        self.assertEqual(d10.directions, (1, 0))
        self.assertTrue(gnp.allclose(d10.D[4:8], self.dz1))

    def test_same_directions_return_self(self):
        self.assertIs(self.design.restrict((0, 1)), self.design)

    def test_missing_direction(self):
        d0 = self.design.restrict([0])
        with self.assertRaises(ConfigurationError):
            d0.restrict([1])


if __name__ == "__main__":
    unittest.main()
