"""
Save a 2D-input, 2D-output model, load it back and compare

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""

import os
import tempfile
import numpy as np
import gpr


def generate_data(n=30, seed=0):
    rng = np.random.default_rng(seed)
    xi = rng.uniform(-1.0, 1.0, size=(n, 2))
    zi = np.column_stack(
        (np.cos(2.0 * xi[:, 0]) * xi[:, 1], xi[:, 0] ** 2 - xi[:, 1])
    )
    return xi, zi


def main(directory=None):
    xi, zi = generate_data()

    kernel = gpr.kernel.PeriodicKernel(1.0, 4.0, 1.0)
    gp = gpr.GaussianProcess(kernel, sigma=1e-4, inversion_method="symmetric-eigen")
    for x, z in zip(xi, zi):
        gp.add_sample(x, z)
    gp.initialize()

    with tempfile.TemporaryDirectory() as tmp:
        prefix = os.path.join(directory or tmp, "gp")
        gp.save(prefix)

        gp_loaded = gpr.GaussianProcess(gpr.kernel.GaussianKernel(1.0))
        gp_loaded.load(prefix)

    print(gp_loaded)
    print(f"\nequal after save/load: {gp == gp_loaded}")

    x = np.array([0.2, -0.3])
    print(f"prediction: {gp_loaded.predict(x)}")
    print(f"credible interval: {gp_loaded.get_credible_interval(x):.4g}")
    return gp, gp_loaded


if __name__ == "__main__":
    main()
