import math

import pytest

from fanselect.calibration import EngineSettings
from fanselect.models import DutyPointRequest, SuctionType
from fanselect.selector import find_overlaps, select, select_for_request, selection_speed

from conftest import make_row


@pytest.mark.parametrize("speed", [600.0, 650.0, 740.0, 799.999])
def test_select_returns_row_containing_speed(catalog, speed):
    row = select(catalog, 3, speed)
    assert row is not None
    assert row.fan_type == 3
    assert row.min_speed <= speed < row.max_speed


def test_select_upper_bound_is_exclusive(catalog):
    row = select(catalog, 3, 800.0)
    assert row is not None
    assert row.impeller_mark == "VDN-3H"


@pytest.mark.parametrize("speed", [0.0, 299.0, 1500.0, 5000.0])
def test_select_no_match_outside_intervals(catalog, speed):
    assert select(catalog, 3, speed) is None


def test_select_filters_by_fan_type(catalog):
    assert select(catalog, 5, 740.0).impeller_mark == "VDN-5"
    assert select(catalog, 7, 740.0) is None


def test_select_empty_catalog():
    assert select((), 3, 740.0) is None


def test_overlap_first_match_wins_and_is_reported():
    a = make_row(min_speed=600.0, max_speed=800.0, impeller_mark="A")
    b = make_row(min_speed=700.0, max_speed=900.0, impeller_mark="B")
    c = make_row(fan_type=4, min_speed=700.0, max_speed=900.0, impeller_mark="C")
    assert select((a, b, c), 3, 750.0).impeller_mark == "A"
    assert find_overlaps((a, b, c)) == [(0, 1)]


def test_adjacent_intervals_do_not_overlap(catalog):
    assert find_overlaps(catalog) == []


def test_selection_speed_rotational(request_740):
    assert selection_speed(request_740) == 740.0


def test_selection_speed_specific_uses_flow_per_inlet(request_740):
    settings = EngineSettings(speed_basis="specific")
    single = selection_speed(request_740, settings)
    expected = 740.0 * math.sqrt(340000.0 / 3600.0) / 3000.0 ** 0.75
    assert single == pytest.approx(expected, rel=1e-12)

    double = DutyPointRequest(flow_rate=340000.0, fan_type=3, target_speed=740.0,
                              suction_type=SuctionType.DOUBLE, system_resistance=3000.0)
    assert selection_speed(double, settings) == pytest.approx(single / math.sqrt(2.0), rel=1e-12)


def test_selection_speed_specific_without_resistance_selects_nothing(catalog):
    settings = EngineSettings(speed_basis="specific")
    req = DutyPointRequest(flow_rate=340000.0, fan_type=3, target_speed=740.0)
    assert selection_speed(req, settings) is None
    assert select_for_request(catalog, req, settings) is None


def test_select_for_request_matches_select(catalog, request_740):
    assert select_for_request(catalog, request_740) is select(catalog, 3, 740.0)
