"""
Bayes Linear emulators of an SIR epidemic model, with and without derivatives

The SIR simulator maps (beta, gamma) in [0, 1]^2 to the number of
recovered individuals at time t = 50. It is run on a 4 x 4 design,
and its partial derivatives are estimated at the same points by
central finite differences. Four emulators are built from the same
runs:

- 'none': function values only,
- 'x1': values and derivatives along beta,
- 'x2': values and derivatives along gamma,
- 'both': values and both derivatives,

and evaluated on a 50 x 50 prediction grid. The adjusted expectation
and standard deviation of each emulator are shown as contour plots.

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""

import numpy as np
import blemu
import matplotlib.pyplot as plt

THETA = 0.2
SIGMA = 170.0
PRIOR_MEAN = 500.0


def generate_data():
    """
    Run the simulator on the design and the prediction grid.

    Returns
    -------
    tuple
        design: assembled values and derivative observations
        (xt, zt, nt): prediction grid, simulator output, grid shape
    """
    levels = np.linspace(0.08, 0.92, 4)
    xi = blemu.misc.designs.cartesian_product(levels, levels)
    f = blemu.misc.simulators.simulate
    zi = f(xi)
    derivatives = blemu.misc.simulators.gradient_design(f, xi, directions=(0, 1))
    design = blemu.core.assemble_design(xi, zi, derivatives, mean=PRIOR_MEAN)

    nt = [50, 50]
    xt = blemu.misc.designs.regulargrid(2, nt, [[0.0, 0.0], [1.0, 1.0]])
    zt = f(xt)
    return design, xt, zt, nt


def build_emulators(design):
    return {
        variant: blemu.core.Emulator.from_variant(
            design, variant, theta=THETA, sigma=SIGMA
        )
        for variant in blemu.core.VARIANTS
    }


def visualize_results(design, xt, zt, nt, predictions):
    cmap = plt.get_cmap("PiYG")
    contour_lines = 30
    xi = design.block_points("value")

    fig, axes = plt.subplots(nrows=2, ncols=len(predictions) + 1, figsize=(18, 7))
    axes[0, 0].contourf(
        xt[:, 0].reshape(nt), xt[:, 1].reshape(nt), zt.reshape(nt),
        levels=contour_lines, cmap=cmap,
    )
    axes[0, 0].set_title("simulator")
    axes[1, 0].axis("off")
    for j, (variant, (zpm, zpv)) in enumerate(predictions.items(), start=1):
        data = [zpm, np.sqrt(zpv)]
        titles = [f"expectation ({variant})", f"std ({variant})"]
        for i, (z, title) in enumerate(zip(data, titles)):
            ax = axes[i, j]
            cs = ax.contourf(
                xt[:, 0].reshape(nt), xt[:, 1].reshape(nt), z.reshape(nt),
                levels=contour_lines, cmap=cmap,
            )
            ax.plot(xi[:, 0], xi[:, 1], "ro", markersize=3)
            ax.set_title(title)
            ax.set_xlabel(r"$\beta$")
            ax.set_ylabel(r"$\gamma$")
            fig.colorbar(cs, ax=ax, shrink=0.9)
    plt.tight_layout()
    plt.show()


def main(plot=True):
    design, xt, zt, nt = generate_data()
    print(design)

    emulators = build_emulators(design)
    predictions = {}
    for variant, emulator in emulators.items():
        zpm, zpv = emulator.predict(xt)
        predictions[variant] = (zpm, zpv)
        rmse = np.sqrt(np.mean((zpm - zt) ** 2))
        print(
            f"{variant:>5}: {emulator.size:3d} observations, "
            f"RMSE = {rmse:8.3f}, mean std = {np.mean(np.sqrt(zpv)):8.3f}"
        )

    if plot:
        visualize_results(design, xt, zt, nt, predictions)
    return predictions


if __name__ == "__main__":
    main()
