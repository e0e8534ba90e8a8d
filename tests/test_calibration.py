import logging

import pytest

from fanselect.calibration import DEFAULT_SETTINGS, RHO_REF_KGM3, EngineSettings
from fanselect.logging_config import setup_logging
from fanselect.models import DutyPointRequest

from conftest import make_row


def test_default_settings():
    assert DEFAULT_SETTINGS.curve_degree == 3
    assert DEFAULT_SETTINGS.curve_points == 50
    assert DEFAULT_SETTINGS.torque_points == 20
    assert DEFAULT_SETTINGS.speed_basis == "rotational"


def test_with_overrides_ignores_none():
    s = DEFAULT_SETTINGS.with_overrides(curve_points=10, curve_degree=None, speed_basis=None)
    assert s.curve_points == 10
    assert s.curve_degree == DEFAULT_SETTINGS.curve_degree
    assert DEFAULT_SETTINGS.curve_points == 50


@pytest.mark.parametrize("kwargs", [
    {"curve_degree": 0},
    {"curve_points": 1},
    {"torque_points": 1},
    {"speed_basis": "tip"},
])
def test_invalid_settings(kwargs):
    with pytest.raises(ValueError):
        EngineSettings(**kwargs)


def test_setup_logging_replaces_handlers(tmp_path):
    log_file = tmp_path / "fanselect.log"
    setup_logging(logging.DEBUG, str(log_file))
    setup_logging(logging.WARNING)
    logger = logging.getLogger("fanselect")
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
    assert "Logging initialized." in log_file.read_text(encoding="utf-8")


def test_setup_logging_closes_previous_file_handler(tmp_path):
    setup_logging(logging.INFO, str(tmp_path / "first.log"))
    old = [h for h in logging.getLogger("fanselect").handlers if isinstance(h, logging.FileHandler)]
    assert len(old) == 1
    setup_logging(logging.INFO)
    assert old[0].stream is None
    assert old[0] not in logging.getLogger("fanselect").handlers


def test_model_densities_default_to_catalog_reference():
    assert make_row().reference_density == RHO_REF_KGM3
    assert DutyPointRequest(flow_rate=1.0, fan_type=3, target_speed=700.0).density == RHO_REF_KGM3
