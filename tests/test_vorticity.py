import math

import numpy as np
import pytest

from simulation.config import SimulationConfig
from simulation.vorticity import apply_vorticity, curl_field
from utils import border_mask


def _field(width=5, height=5):
    mass = np.ones((height, width))
    wall = border_mask(width, height)
    mass[wall] = 0.0
    return np.zeros((height, width)), np.zeros((height, width)), mass, wall


def test_single_shear_produces_known_push():
    vx, vy, mass, wall = _field()
    vy[2, 3] = 1.0
    out_vx, out_vy = apply_vorticity(vx, vy, mass, wall, SimulationConfig())
    assert out_vx[2, 2] == pytest.approx(0.5 * 0.15 * math.sin(0.2))
    assert out_vy[2, 2] == pytest.approx(0.5 * 0.15 * math.cos(0.2))


def test_uniform_field_has_no_curl():
    vx, vy, mass, wall = _field(8, 6)
    vx[:] = 0.7
    vy[:] = -0.3
    assert not curl_field(vx, vy).any()


def test_walls_and_dry_cells_are_untouched():
    vx, vy, mass, wall = _field()
    vy[2, 3] = 1.0
    wall[2, 2] = True
    mass[2, 2] = 0.0
    mass[1, 2] = 0.0
    out_vx, out_vy = apply_vorticity(vx, vy, mass, wall, SimulationConfig())
    assert out_vx[2, 2] == 0.0 and out_vy[2, 2] == 0.0
    assert out_vx[1, 2] == 0.0 and out_vy[1, 2] == 0.0
    np.testing.assert_array_equal(out_vx[0, :], vx[0, :])
    np.testing.assert_array_equal(out_vy[:, -1], vy[:, -1])


def test_reads_only_the_input_field():
    rng = np.random.default_rng(11)
    vx, vy, mass, wall = _field(9, 7)
    vx[:] = rng.uniform(-1, 1, vx.shape)
    vy[:] = rng.uniform(-1, 1, vy.shape)
    config = SimulationConfig()
    vx_in, vy_in, mass_in = vx.copy(), vy.copy(), mass.copy()

    out_vx, out_vy = apply_vorticity(vx, vy, mass, wall, config)

    expected_vx, expected_vy = vx.copy(), vy.copy()
    for y in range(1, 6):
        for x in range(1, 8):
            curl = 0.5 * (vy[y, x + 1] - vy[y, x - 1]) - 0.5 * (vx[y + 1, x] - vx[y - 1, x])
            expected_vx[y, x] += curl * 0.15 * math.sin(y * 0.1)
            expected_vy[y, x] += curl * 0.15 * math.cos(x * 0.1)
    np.testing.assert_allclose(out_vx, expected_vx, atol=1e-12)
    np.testing.assert_allclose(out_vy, expected_vy, atol=1e-12)
    np.testing.assert_array_equal(vx, vx_in)
    np.testing.assert_array_equal(vy, vy_in)
    np.testing.assert_array_equal(mass, mass_in)


def test_zero_strength_is_identity():
    vx, vy, mass, wall = _field()
    vy[2, 3] = 1.0
    out_vx, out_vy = apply_vorticity(vx, vy, mass, wall, SimulationConfig(vorticity_strength=0.0))
    np.testing.assert_array_equal(out_vx, vx)
    np.testing.assert_array_equal(out_vy, vy)
