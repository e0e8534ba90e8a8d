"""
Duty-point computation pipeline (backend-only). Returns values; no plotting.

    select row -> affinity scale -> evaluate/sample curves -> derived quantities -> assemble

Uses formulas, curves and centralized calibration constants. A computation is a
pure function of (catalog snapshot, request, settings).
"""
from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

from . import curves as C
from . import derived as D
from . import formulas as F
from .calibration import DEFAULT_SETTINGS, EngineSettings
from .models import (
    CatalogRow,
    DutyPoint,
    DutyPointRequest,
    Failure,
    NumericDegenerate,
    PerformanceResult,
)
from .scaling import scale
from .selector import select_for_request, selection_speed


def assemble(
        row: CatalogRow,
        request: DutyPointRequest,
        speed: float,
        duty: DutyPoint,
        curves: Tuple[List[Tuple[float, float]], List[Tuple[float, float]]],
        efficiency_curve: List[Tuple[float, float]],
        diameter: float,
        inertia: float,
        torque: float,
        torque_curve: List[Tuple[float, float]],
) -> PerformanceResult:
    """Pack computed figures into a PerformanceResult (no side effects)."""
    pressure_curve, power_curve = curves
    return PerformanceResult(
        found=True,
        selected_row=row,
        selection_speed=speed,
        diameter=diameter,
        pressure_at_duty=duty.pressure,
        power_at_duty=duty.power,
        efficiency_at_duty=duty.efficiency,
        moment_of_inertia=inertia,
        effective_blade_count=D.effective_blade_count(row, request.suction_type),
        impeller_mark=D.impeller_mark(row, request.suction_type),
        shaft_torque=torque,
        pressure_curve=tuple(pressure_curve),
        power_curve=tuple(power_curve),
        efficiency_curve=tuple(efficiency_curve),
        torque_curve=tuple(torque_curve),
    )


def compute_performance(catalog: Sequence[CatalogRow], request: DutyPointRequest,
                        settings: Optional[EngineSettings] = None) -> PerformanceResult:
    """Select an impeller for `request` and compute its duty-point performance.

    Never raises for catalog misses or degenerate catalog data: the result
    carries found=False and Failure.SELECTION / Failure.NUMERIC instead.
    """
    settings = settings or DEFAULT_SETTINGS
    catalog = tuple(catalog)
    speed = selection_speed(request, settings)
    row = select_for_request(catalog, request, settings)
    if row is None:
        return PerformanceResult.missing(Failure.SELECTION, speed)
    try:
        return _compute_for_row(row, request, speed, settings)
    except (NumericDegenerate, ValueError, ZeroDivisionError, OverflowError) as e:
        logging.getLogger(__name__).warning("numeric failure for row %r: %s", row.impeller_mark, e)
        return PerformanceResult.missing(Failure.NUMERIC, speed)


def _compute_for_row(row: CatalogRow, request: DutyPointRequest, speed: float,
                     settings: EngineSettings) -> PerformanceResult:
    scaled = scale(row, request.target_speed, request.density)
    duty = C.evaluate(scaled, request.flow_rate)
    flow_range = C.plot_range(scaled, request.flow_rate)
    pq = C.sample(scaled, flow_range, settings.curve_points)
    eff = C.sample_efficiency(scaled, flow_range, settings.curve_points)

    diameter = D.diameter_for_row(row, request)
    inertia = D.moment_of_inertia_for_row(row, request)
    torque = F.shaft_torque(duty.power, request.target_speed)
    torque_curve = F.load_torque_curve(torque, request.target_speed, settings.torque_points)

    figures = (diameter, inertia, torque)
    samples = [v for series in (pq[0], pq[1], eff) for _, v in series]
    if not all(math.isfinite(v) for v in (*figures, *samples)):
        raise NumericDegenerate("non-finite derived figures")
    logging.getLogger(__name__).debug(
        "selected %s: D=%.3f m, p=%.1f Pa, N=%.1f kW, eta=%.3f",
        row.impeller_mark, diameter, duty.pressure, duty.power, duty.efficiency)
    return assemble(row, request, speed, duty, pq, eff, diameter, inertia, torque, torque_curve)


# =============================
# Series helpers for the external chart renderer
# =============================

def series_xy(points: Sequence[Tuple[float, float]]) -> Dict[str, List[float]]:
    """Split (x, y) samples into {"x": [...], "y": [...]}."""
    return {"x": [p[0] for p in points], "y": [p[1] for p in points]}


def result_to_dict(result: PerformanceResult) -> Dict[str, Any]:
    """JSON-friendly view of a result (row reduced to its identifying fields)."""
    row = result.selected_row
    return {
        "found": result.found,
        "failure": result.failure.value if result.failure else None,
        "selection_speed": result.selection_speed,
        "row": None if row is None else {
            "fan_type": row.fan_type,
            "min_speed": row.min_speed,
            "max_speed": row.max_speed,
            "impeller_mark": row.impeller_mark,
            "impeller_mark_double": row.impeller_mark_double,
            "blade_type": row.blade_type,
            "number_of_blades": row.number_of_blades,
        },
        "diameter_m": result.diameter,
        "pressure_Pa": result.pressure_at_duty,
        "power_kW": result.power_at_duty,
        "efficiency": result.efficiency_at_duty,
        "moment_of_inertia_kgm2": result.moment_of_inertia,
        "blades": result.effective_blade_count,
        "impeller_mark": result.impeller_mark,
        "shaft_torque_Nm": result.shaft_torque,
        "series": {
            "pressure": series_xy(result.pressure_curve),
            "power": series_xy(result.power_curve),
            "efficiency": series_xy(result.efficiency_curve),
            "torque": series_xy(result.torque_curve),
        },
    }
