"""
Text content of the technical proposal, as ordered sections.

No layout and no files: the external renderer draws each section on its
own page. Page numbers are assigned while building, from a counter local
to one build_report() call. Optional request fields (motor voltage, hazard
marking, sensors, extra equipment) are left out when absent.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from . import lookups as L
from .models import DutyPointRequest, PerformanceResult, ReportFields


@dataclass(frozen=True)
class ReportSection:
    page: int
    title: str
    lines: Tuple[str, ...]


def _num(x: float) -> str:
    return f"{x:g}"


def _split(text: Optional[str]) -> List[str]:
    return [ln.strip() for ln in (text or "").split("\n") if ln.strip()]


def fan_designation(result: PerformanceResult, request: DutyPointRequest) -> str:
    """'<mark>-<D in dm><material suffix>', e.g. 'VDN-18.4К1'."""
    if not result.found or result.diameter is None:
        raise ValueError("designation needs a selected impeller")
    suffix = L.material_suffix(request.report.material_design)
    return f"{result.impeller_mark}-{result.diameter * 10:.1f}{suffix}"


def title_lines(request: DutyPointRequest, issued: dt.date) -> List[str]:
    lines = ["Technical proposal", "for a draught fan"]
    project = _split(request.report.project_name)
    if project:
        lines.append("Project:")
        lines.extend(project)
    lines.append(f"Date: {issued:%d.%m.%Y}")
    return lines


def duty_point_lines(result: PerformanceResult, request: DutyPointRequest) -> List[str]:
    rf = request.report
    row = result.selected_row
    lines = [
        f"{fan_designation(result, request)} {_num(request.density)} kg/m3 {_num(request.target_speed)} rpm",
        "Duty point:",
    ]
    if request.system_resistance is not None:
        lines.append(f"Static pressure: {request.system_resistance:.1f} Pa")
    lines += [
        f"Total pressure: {result.pressure_at_duty:.1f} Pa",
        f"Flow rate: {request.flow_rate:.1f} m3/h",
        f"Density: {_num(request.density)} kg/m3",
        f"Total efficiency: {result.efficiency_at_duty:.2f}",
        f"Power: {result.power_at_duty:.1f} kW",
    ]
    if rf.exhaust_direction is not None:
        lines.append(f"Outlet angle: {rf.exhaust_direction}")
    if rf.rotation_direction:
        lines.append(f"Rotation: {rf.rotation_direction}")
    lines += [
        f"Execution: {L.material_label(rf.material_design)}",
        f"Vibration isolators: {L.provided(rf.vibration_isolation)}",
        f"Impeller blade type: {row.blade_type}" if row is not None else "",
        f"Number of impeller blades: {result.effective_blade_count}",
    ]
    return [ln for ln in lines if ln]


def motor_lines(result: PerformanceResult, request: DutyPointRequest) -> List[str]:
    rf = request.report
    lines: List[Optional[str]] = [
        f"Speed: {_num(request.target_speed)} rpm",
        f"Moment of inertia: {result.moment_of_inertia:.2f} kg*m2",
        f"Motor voltage: {_num(rf.motor_voltage)} V" if rf.motor_voltage is not None else None,
        f"Shaft power: {result.power_at_duty:.2f} kW",
        f"Shaft torque: {result.shaft_torque:.1f} N*m",
        f"Climatic version: {rf.climatic_version}" if rf.climatic_version else None,
        f"Explosion protection marking: {rf.hazard_marking}" if rf.hazard_marking is not None else None,
        f"Frequency converter: {L.provided(rf.vfd)}",
        f"Additional requirements: {rf.motor_requirements}" if rf.motor_requirements else None,
    ]
    return [ln for ln in lines if ln is not None]


def delivery_lines(rf: ReportFields) -> List[str]:
    lines: List[Optional[str]] = [
        f"Coupling: {L.label(L.COUPLING, rf.coupling_type)}",
        f"Bearing unit: {L.label(L.BEARING_UNIT, rf.bearing_unit_type)}",
        f"Shaft seal: {L.label(L.SHAFT_SEAL, rf.shaft_seal)}",
        f"Inlet guide vane: {L.provided(rf.guide_vane)}",
        f"Inlet compensator type: {rf.compensator_inlet}" if rf.compensator_inlet else None,
        f"Inlet flange: {L.provided(rf.flange_inlet)}",
        f"Outlet compensator type: {rf.compensator_outlet}" if rf.compensator_outlet else None,
        f"Outlet flange: {L.provided(rf.flange_outlet)}",
        f"Thermal and acoustic enclosure: {L.provided(rf.thermal_insulation)}",
        f"Bearing vibration sensors: {rf.vibration_sensor_bearings}" if rf.vibration_sensor_bearings else None,
        f"Motor vibration sensors: {rf.vibration_sensor_motor}" if rf.vibration_sensor_motor else None,
        f"Bearing temperature sensors: {rf.temperature_sensor_bearings}" if rf.temperature_sensor_bearings else None,
    ]
    return [ln for ln in lines if ln is not None]


DOCUMENTATION = (
    "Installation drawing with overall and connection dimensions",
    "Installation, start-up and run-in instructions",
    "Repair and dismantling instructions",
    "Operating manual",
    "Technical passport",
    "Packing list",
    "Declaration or certificate of conformity",
    "Documentation of purchased equipment",
)


def services_lines(rf: ReportFields) -> List[str]:
    return [
        *DOCUMENTATION,
        f"Installation supervision: {L.provided(rf.supervision)}",
        f"Commissioning: {L.provided(rf.commissioning)}",
        f"Personnel training: {L.provided(rf.training)}",
    ]


def _sections(result: PerformanceResult, request: DutyPointRequest,
              issued: dt.date) -> Iterator[Tuple[str, List[str]]]:
    rf = request.report
    yield "Technical proposal", title_lines(request, issued)
    yield "Aerodynamic characteristics", duty_point_lines(result, request)
    yield "Motor parameters and load characteristic", motor_lines(result, request)
    yield "Scope of delivery", delivery_lines(rf)
    if rf.extra_equipment is not None:
        yield "Additional equipment", _split(rf.extra_equipment)
    yield "Additional requirements", _split(rf.extra_requirements)
    yield "Spare parts and tools", ["Supplied according to the specification.", *_split(rf.spare_parts)]
    yield "Documentation and services", services_lines(rf)


def build_report(result: PerformanceResult, request: DutyPointRequest,
                 issued: Optional[dt.date] = None) -> List[ReportSection]:
    """Ordered report sections for a successful selection.

    Raises ValueError for a result without a selected impeller; callers
    check `result.found` first.
    """
    if not result.found:
        raise ValueError("cannot build a report without a selected impeller")
    issued = issued or dt.date.today()
    page = 0
    out: List[ReportSection] = []
    for title, lines in _sections(result, request, issued):
        page += 1
        out.append(ReportSection(page=page, title=title, lines=tuple(lines)))
    return out
