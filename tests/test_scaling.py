import pytest

from fanselect import curves as C
from fanselect.models import NumericDegenerate
from fanselect.scaling import scale

from conftest import make_row


@pytest.mark.parametrize("q0", [0.0, 100000.0, 250000.0])
def test_double_speed_gives_four_times_pressure_at_double_flow(boundary_row, q0):
    base = scale(boundary_row, boundary_row.reference_speed)
    fast = scale(boundary_row, 2.0 * boundary_row.reference_speed)
    p0 = C.polyval(base.pressure, q0)
    n0 = C.polyval(base.power, q0)
    e0 = C.polyval(base.efficiency, q0)
    assert C.polyval(fast.pressure, 2.0 * q0) == pytest.approx(4.0 * p0, rel=1e-12)
    assert C.polyval(fast.power, 2.0 * q0) == pytest.approx(8.0 * n0, rel=1e-12)
    assert C.polyval(fast.efficiency, 2.0 * q0) == pytest.approx(e0, rel=1e-12)


def test_reference_speed_is_identity(boundary_row):
    s = scale(boundary_row, boundary_row.reference_speed)
    assert s.pressure == pytest.approx(boundary_row.pressure)
    assert s.power == pytest.approx(boundary_row.power)
    assert s.efficiency == pytest.approx(boundary_row.efficiency)
    assert (s.flow_min, s.flow_max) == (boundary_row.flow_min, boundary_row.flow_max)
    assert s.speed_ratio == 1.0 and s.density_ratio == 1.0


def test_flow_range_scales_linearly(boundary_row):
    s = scale(boundary_row, 350.0)
    assert s.speed_ratio == pytest.approx(0.5)
    assert s.flow_min == pytest.approx(25000.0)
    assert s.flow_max == pytest.approx(200000.0)


def test_density_scales_pressure_and_power_only(boundary_row):
    light = scale(boundary_row, 700.0, density=0.6)
    assert light.density_ratio == pytest.approx(0.5)
    assert C.polyval(light.pressure, 1e5) == pytest.approx(0.5 * C.polyval(boundary_row.pressure, 1e5))
    assert C.polyval(light.power, 1e5) == pytest.approx(0.5 * C.polyval(boundary_row.power, 1e5))
    assert light.efficiency == pytest.approx(boundary_row.efficiency)


def test_zero_reference_speed_is_degenerate():
    row = make_row(reference_speed=0.0)
    with pytest.raises(NumericDegenerate):
        scale(row, 740.0)


def test_non_positive_target_speed_is_degenerate(boundary_row):
    with pytest.raises(NumericDegenerate):
        scale(boundary_row, 0.0)
