from __future__ import annotations

import json
import logging

import pytest

from fanselect.models import CatalogRow, DutyPointRequest, ReportFields, SuctionType


def make_row(**kw) -> CatalogRow:
    base = dict(
        fan_type=3,
        min_speed=600.0,
        max_speed=800.0,
        reference_speed=700.0,
        pressure=(5000.0, -0.01),
        power=(150.0, 1.5e-3, 0.0),
        efficiency=(0.2, 3.0e-6, -5.0e-12),
        flow_min=50000.0,
        flow_max=400000.0,
        number_of_blades=12,
        impeller_mark="VDN-3",
        impeller_mark_double="VDN-3D",
        blade_type="backward curved",
        flow_coefficient=0.25,
        diameter_ref=1.6,
        inertia_ref=120.0,
    )
    base.update(kw)
    return CatalogRow(**base)


@pytest.fixture
def boundary_row() -> CatalogRow:
    return make_row()


@pytest.fixture
def catalog(boundary_row):
    return (
        make_row(min_speed=300.0, max_speed=600.0, reference_speed=500.0, impeller_mark="VDN-3L",
                 impeller_mark_double="VDN-3LD"),
        boundary_row,
        make_row(min_speed=800.0, max_speed=1500.0, reference_speed=1000.0, impeller_mark="VDN-3H",
                 impeller_mark_double="VDN-3HD"),
        make_row(fan_type=5, min_speed=500.0, max_speed=1000.0, reference_speed=740.0, number_of_blades=16,
                 impeller_mark="VDN-5", impeller_mark_double="VDN-5D", flow_coefficient=0.3),
    )


@pytest.fixture
def request_740() -> DutyPointRequest:
    return DutyPointRequest(flow_rate=340000.0, fan_type=3, target_speed=740.0, density=1.2,
                            suction_type=SuctionType.SINGLE, system_resistance=3000.0,
                            report=ReportFields(task_number=66660, project_name="Afterburner\nFlue gas exhauster"))


def row_dict(**kw) -> dict:
    base = {
        "fan_type": 3,
        "min_speed": 600,
        "max_speed": 800,
        "reference_speed": 700,
        "pressure": {"coefficients": [5000, -0.01]},
        "power": {"coefficients": [150, 0.0015]},
        "efficiency": {"coefficients": [0.2, 3.0e-6, -5.0e-12]},
        "flow_min": 50000,
        "flow_max": 400000,
        "number_of_blades": 12,
        "impeller_mark": "VDN-3",
        "impeller_mark_double": "VDN-3D",
        "blade_type": "backward curved",
        "flow_coefficient": 0.25,
        "diameter_ref": 1.6,
        "inertia_ref": 120,
    }
    base.update(kw)
    return base


@pytest.fixture
def catalog_json(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"rows": [row_dict(), row_dict(fan_type=5, impeller_mark="VDN-5")]}), encoding="utf-8")
    return path


@pytest.fixture
def request_payload() -> dict:
    return {
        "flow_rate": 340000,
        "fan_type": 3,
        "target_speed": 740,
        "density": 1.2,
        "suction_type": "single",
        "system_resistance": 3000,
        "task_number": 66660,
        "material_design": 1,
        "motor_voltage": 6000,
        "hazard_marking": "1ExdIICT4",
        "extra_equipment": "Anchor bolts\nControl cabinet",
    }


@pytest.fixture
def request_json(tmp_path, request_payload):
    path = tmp_path / "request.json"
    path.write_text(json.dumps(request_payload), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("fanselect")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
