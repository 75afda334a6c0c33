import numpy as np
import pytest

from simulation.stability import band_seam, stable_down_flow, stable_down_flow_grid


@pytest.mark.parametrize("gravity", [0.0, 0.8, 2.5])
@pytest.mark.parametrize("total", [0.0, 0.3, 1.0])
def test_light_pair_fills_lower_cell(total, gravity):
    assert stable_down_flow(total, gravity) == 1.0


def test_compression_band():
    assert stable_down_flow(2.0, 0.8) == pytest.approx(1.2)
    assert stable_down_flow(1.5, 0.8) == pytest.approx(1.15)


def test_split_band_starts_at_two_plus_gravity():
    assert stable_down_flow(2.9, 0.8) == pytest.approx(1.85)
    assert stable_down_flow(3.0, 0.8) == pytest.approx(1.9)
    assert stable_down_flow(4.0, 0.0) == pytest.approx(2.0)


def test_seam_size_matches_band_edges():
    assert band_seam(0.8) == pytest.approx(0.52)
    assert band_seam(2.0 / 9.0) == pytest.approx(0.0, abs=1e-12)


def test_grid_version_matches_scalar():
    totals = np.linspace(0.0, 6.0, 241)
    for gravity in (0.0, 0.5, 0.8, 1.5):
        expected = np.array([stable_down_flow(t, gravity) for t in totals])
        np.testing.assert_allclose(stable_down_flow_grid(totals, gravity), expected)


def test_target_never_below_one():
    totals = np.linspace(0.0, 10.0, 101)
    assert np.all(stable_down_flow_grid(totals, 0.8) >= 1.0)
