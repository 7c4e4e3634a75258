"""
Effect of derivative observations on a 1D Bayes Linear emulator

The function f(x) = -(0.7 x + sin(5 x + 1) + 0.1 sin(10 x)) is observed
at 5 points of [-1, 1], first alone, then together with its exact
derivative at the same points. The adjusted variance of the second
emulator is never larger than the one of the first.

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""

import numpy as np
import blemu
import matplotlib.pyplot as plt


def twobumps(x):
    return -(0.7 * x + np.sin(5 * x + 1) + 0.1 * np.sin(10 * x)).reshape(-1)


def twobumps_derivative(x):
    return -(0.7 + 5 * np.cos(5 * x + 1) + np.cos(10 * x)).reshape(-1)


def generate_data():
    box = [[-1], [1]]
    xt = blemu.misc.designs.regulargrid(1, 200, box)
    xi = blemu.misc.designs.regulargrid(1, 5, box)
    return xt, twobumps(xt), xi, twobumps(xi), twobumps_derivative(xi)


def main(plot=True):
    xt, zt, xi, zi, dzi = generate_data()

    values_only = blemu.core.assemble_design(xi, zi)
    with_derivatives = blemu.core.assemble_design(xi, zi, {0: (xi, dzi)})

    results = {}
    for name, design in [("values", values_only), ("values + derivatives", with_derivatives)]:
        emulator = blemu.core.Emulator(design, theta=0.4, sigma=1.0)
        results[name] = emulator.predict(xt)

    if plot:
        plt.figure()
        plt.plot(xt, zt, "k--", linewidth=1, label="truth")
        for name, (zpm, zpv) in results.items():
            (line,) = plt.plot(xt, zpm, label=name)
            plt.fill_between(
                xt.ravel(),
                zpm - 2 * np.sqrt(zpv),
                zpm + 2 * np.sqrt(zpv),
                color=line.get_color(),
                alpha=0.2,
            )
        plt.plot(xi, zi, "ro", label="data")
        plt.xlabel("$x$")
        plt.ylabel("$z$")
        plt.legend()
        plt.grid(True)
        plt.show()
    return results


if __name__ == "__main__":
    main()
