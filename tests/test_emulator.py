"""
Unit tests for the Bayes Linear emulator facade.
"""

import unittest
import blemu.num as gnp
import blemu
from blemu.config import get_config
from blemu.core import Emulator, VARIANTS, assemble_design
from blemu.errors import ConfigurationError, DimensionMismatchError, SingularMatrixError

THETA = 0.2
SIGMA = 170.0
PRIOR_MEAN = 500.0


def make_sir_design():
    levels = gnp.linspace(0.08, 0.92, 4)
    xi = blemu.misc.designs.cartesian_product(levels, levels)
    f = blemu.misc.simulators.simulate
    zi = f(xi)
    derivatives = blemu.misc.simulators.gradient_design(f, xi, directions=(0, 1))
    return assemble_design(xi, zi, derivatives, mean=PRIOR_MEAN)


def make_random_design(seed, d=2):
    """Jittered 3 x 3 grid with random values and derivatives."""
    gnp.set_seed(seed)
    levels = gnp.linspace(0.15, 0.85, 3)
    xi = blemu.misc.designs.cartesian_product(levels, levels)
    xi = xi + gnp.uniform(-0.05, 0.05, xi.shape)
    zi = gnp.randn(9)
    return assemble_design(xi, zi, {0: (xi, gnp.randn(9)), 1: (xi, gnp.randn(9))})


class TestSIREmulators(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.design = make_sir_design()
        cls.emulators = {
            variant: Emulator.from_variant(cls.design, variant, theta=THETA, sigma=SIGMA)
            for variant in VARIANTS
        }
        gnp.set_seed(7)
        cls.xt = gnp.rand(200, 2)

    def test_matrix_sizes(self):
        expected = {"none": 16, "x1": 32, "x2": 32, "both": 48}
        for variant, size in expected.items():
            em = self.emulators[variant]
            self.assertEqual(em.size, size)
            self.assertEqual(em.Var_D.shape, (size, size))
            self.assertEqual(em.variant, variant)

    def test_interpolation_at_design_points(self):
        xi = self.design.block_points("value")
        zi = self.design.block_observations("value")
        em = self.emulators["none"]
        for x, z in zip(xi, zi):
            E, V = em.evaluate(x)
            self.assertAlmostEqual(E, z, delta=1e-6)
            self.assertLess(abs(V), 1e-6 * SIGMA**2)

    def test_derivatives_do_not_move_observed_values(self):
        xi = self.design.block_points("value")
        zi = self.design.block_observations("value")
        for variant, em in self.emulators.items():
            E, V = em.predict(xi)
            self.assertTrue(gnp.allclose(E, zi, atol=1e-6), variant)
            self.assertTrue(gnp.all(V < 1e-6 * SIGMA**2), variant)

    def test_more_information_cannot_increase_variance(self):
        V = {variant: em.predict(self.xt)[1] for variant, em in self.emulators.items()}
        tol = 1e-8 * SIGMA**2
        self.assertTrue(gnp.all(V["x1"] <= V["none"] + tol))
        self.assertTrue(gnp.all(V["x2"] <= V["none"] + tol))
        self.assertTrue(gnp.all(V["both"] <= V["x1"] + tol))
        self.assertTrue(gnp.all(V["both"] <= V["x2"] + tol))
        self.assertTrue(gnp.any(V["both"] < V["none"] - 1.0))

    def test_variances_bounded_by_prior(self):
        for em in self.emulators.values():
            _, V = em.predict(self.xt, zero_neg_variances=False)
            self.assertTrue(gnp.all(V >= -1e-8 * SIGMA**2))
            self.assertTrue(gnp.all(V <= SIGMA**2 * (1 + 1e-12)))

    def test_evaluate_matches_predict(self):
        em = self.emulators["both"]
        E, V = em.predict(self.xt[:5])
        for i in range(5):
            E_i, V_i = em.evaluate(self.xt[i])
            self.assertAlmostEqual(E_i, E[i], places=8)
            self.assertAlmostEqual(V_i, V[i], places=6)

    def test_predictions_are_independent(self):
        em = self.emulators["x1"]
        E, V = em.predict(self.xt)
        Eb, Vb = em.predict(self.xt, batch_size=7)
        self.assertTrue(gnp.allclose(E, Eb))
        self.assertTrue(gnp.allclose(V, Vb))
        perm = gnp.arange(200)[::-1]
        Ep, Vp = em.predict(self.xt[perm])
        self.assertTrue(gnp.allclose(Ep, E[perm]))
        self.assertTrue(gnp.allclose(Vp, V[perm]))

    def test_evaluation_has_no_side_effects(self):
        em = self.emulators["x2"]
        Var_D = gnp.copy(em.Var_D)
        first = em.evaluate([0.5, 0.5])
        em.predict(self.xt)
        second = em([0.5, 0.5])
        self.assertEqual(first, second)
        self.assertTrue(gnp.allclose(em.Var_D, Var_D, rtol=0.0, atol=0.0))
        with self.assertRaises(ValueError):
            em.Var_D[0, 0] = 0.0

    def test_query_dimension(self):
        em = self.emulators["none"]
        with self.assertRaises(DimensionMismatchError):
            em.evaluate([0.5])
        with self.assertRaises(DimensionMismatchError):
            em.evaluate([[0.5, 0.5]])
        with self.assertRaises(DimensionMismatchError):
            em.predict(gnp.rand(4, 3))


class TestEmulatorConfiguration(unittest.TestCase):
    def setUp(self):
        self.design = make_random_design(0)

    def test_unknown_variant(self):
        with self.assertRaises(ConfigurationError):
            Emulator.from_variant(self.design, "x3")

    def test_missing_derivative_block(self):
        values_only = self.design.restrict(())
        with self.assertRaises(ConfigurationError):
            Emulator.from_variant(values_only, "x1", theta=0.3)

    def test_invalid_hyperparameters(self):
        with self.assertRaises(ConfigurationError):
            Emulator(self.design, theta=0.0)
        with self.assertRaises(ConfigurationError):
            Emulator(self.design, theta=0.3, sigma=-1.0)
        with self.assertRaises(ConfigurationError):
            Emulator(self.design, theta=0.3, nugget=-1.0)
        with self.assertRaises(ConfigurationError):
            Emulator(self.design.D, theta=0.3)

    def test_default_hyperparameters(self):
        em = Emulator(self.design.restrict(()))
        self.assertEqual((em.theta, em.sigma, em.mean), (1.0, 1.0, 0.0))

    def test_configured_fallback_mean(self):
        config = get_config()
        self.addCleanup(config.update, mean=config.mean)
        config.update(mean=7.0)
        em = Emulator(assemble_design([[0.5, 0.5]], [1.0]), theta=0.5)
        self.assertEqual(em.mean, 7.0)
        E, V = em.evaluate([30.0, 30.0])
        self.assertAlmostEqual(E, 7.0)
        self.assertAlmostEqual(V, 1.0)

    def test_mean_override(self):
        em = Emulator(self.design, theta=0.3, mean=10.0)
        self.assertEqual(em.mean, 10.0)
        self.assertTrue(gnp.allclose(em.design.E_D[:9], 10.0))
        self.assertTrue(gnp.all(em.design.E_D[9:] == 0.0))
        # far from the data the prior mean is recovered
        E, V = em.evaluate([40.0, 40.0])
        self.assertAlmostEqual(E, 10.0)
        self.assertAlmostEqual(V, 1.0)

    def test_custom_direction_order(self):
        em = Emulator(self.design, theta=0.3, directions=(1, 0))
        ref = Emulator(self.design, theta=0.3)
        self.assertEqual(em.variant, "custom")
        gnp.set_seed(0)
        xt = gnp.rand(10, 2)
        E, V = em.predict(xt)
        E_ref, V_ref = ref.predict(xt)
        self.assertTrue(gnp.allclose(E, E_ref))
        self.assertTrue(gnp.allclose(V, V_ref))

    def test_duplicated_design_point_is_singular(self):
        xi = gnp.array([[0.2, 0.2], [0.2, 0.2], [0.7, 0.4]])
        design = assemble_design(xi, [1.0, 1.0, 2.0])
        with self.assertRaises(SingularMatrixError):
            Emulator(design, theta=0.3)

    def test_nonnegative_variance_on_random_designs(self):
        for seed in range(5):
            design = make_random_design(seed)
            gnp.set_seed(100 + seed)
            xt = gnp.rand(100, 2)
            for variant in VARIANTS:
                em = Emulator.from_variant(design, variant, theta=0.2, sigma=2.0)
                _, V = em.predict(xt, zero_neg_variances=False)
                self.assertTrue(gnp.all(V >= -1e-10 * 4.0), (seed, variant))

    def test_higher_dimensional_input(self):
        gnp.set_seed(3)
        levels = gnp.linspace(0.2, 0.8, 2)
        xi = blemu.misc.designs.cartesian_product(levels, levels, levels)
        design = assemble_design(xi, gnp.randn(8), {2: (xi, gnp.randn(8))})
        em = Emulator(design, theta=0.5)
        self.assertEqual(em.size, 16)
        E, V = em.evaluate(xi[3])
        self.assertAlmostEqual(E, design.D[3], places=8)
        self.assertAlmostEqual(V, 0.0, places=8)

    def test_str(self):
        em = Emulator.from_variant(self.design, "both", theta=0.3)
        self.assertIn("both", str(em))
        self.assertIn("Emulator", repr(em))


if __name__ == "__main__":
    unittest.main()
