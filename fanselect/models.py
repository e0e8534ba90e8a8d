"""
Core value types of the selection engine.

All types are frozen: a catalog snapshot, a request and a result are
values created per computation and never mutated by the engine.
Curves are ascending polynomial coefficients in flow rate [m^3/h].
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .calibration import RHO_REF_KGM3

Coefficients = Tuple[float, ...]
CurvePoints = Tuple[Tuple[float, float], ...]


class SuctionType(str, Enum):
    SINGLE = "single"
    DOUBLE = "double"

    @property
    def inlets(self) -> int:
        return 2 if self is SuctionType.DOUBLE else 1


class Failure(str, Enum):
    """Why a computation produced no figures."""

    SELECTION = "selection"  # no catalog row for fan type / speed
    NUMERIC = "numeric"      # degenerate catalog data, non-finite output


class NumericDegenerate(ArithmeticError):
    """Curve scaling or evaluation would produce non-finite values."""
    pass


@dataclass(frozen=True)
class CatalogRow:
    """One aerodynamic reference row: a fan family in a speed band.

    Curves hold total pressure [Pa], shaft power [kW] and efficiency [-]
    as polynomials of flow [m^3/h], measured at reference_speed [rpm] and
    reference_density [kg/m^3]. An empty efficiency tuple means the
    efficiency is derived from pressure and power.
    """

    fan_type: int
    min_speed: float
    max_speed: float
    reference_speed: float
    pressure: Coefficients
    power: Coefficients
    number_of_blades: int
    impeller_mark: str
    impeller_mark_double: str
    flow_min: float
    flow_max: float
    flow_coefficient: float
    efficiency: Coefficients = ()
    reference_density: float = RHO_REF_KGM3
    diameter_ref: float = 1.0
    inertia_ref: float = 0.0
    blade_type: str = ""

    def __post_init__(self) -> None:
        if self.min_speed >= self.max_speed:
            raise ValueError("min_speed < max_speed")
        if self.number_of_blades < 1:
            raise ValueError("number_of_blades >= 1")
        if self.flow_min >= self.flow_max:
            raise ValueError("flow_min < flow_max")
        if not self.pressure or not self.power:
            raise ValueError("pressure and power curves are required")

    def contains(self, speed: float) -> bool:
        """Half-open interval check [min_speed, max_speed)."""
        return self.min_speed <= speed < self.max_speed


@dataclass(frozen=True)
class ReportFields:
    """Text-only options of the technical proposal."""

    task_number: Optional[int] = None
    project_name: str = ""
    material_design: int = 5
    rotation_direction: str = ""
    exhaust_direction: Optional[int] = None
    vibration_isolation: bool = False
    motor_voltage: Optional[float] = None
    climatic_version: str = ""
    hazard_marking: Optional[str] = None
    vfd: bool = False
    motor_requirements: str = ""
    coupling_type: int = 1
    bearing_unit_type: int = 1
    shaft_seal: int = 1
    guide_vane: bool = False
    thermal_insulation: bool = False
    compensator_inlet: str = ""
    compensator_outlet: str = ""
    flange_inlet: bool = False
    flange_outlet: bool = False
    vibration_sensor_bearings: Optional[str] = None
    vibration_sensor_motor: Optional[str] = None
    temperature_sensor_bearings: Optional[str] = None
    extra_equipment: Optional[str] = None
    extra_requirements: str = ""
    spare_parts: str = ""
    supervision: bool = False
    commissioning: bool = False
    training: bool = False


@dataclass(frozen=True)
class DutyPointRequest:
    """Duty point of one selection. Validated at the boundary (api.py).

    `report` carries pass-through text fields the engine never reads.
    """

    flow_rate: float                 # m^3/h
    fan_type: int
    target_speed: float              # rpm
    density: float = RHO_REF_KGM3    # kg/m^3
    suction_type: SuctionType = SuctionType.SINGLE
    system_resistance: Optional[float] = None  # Pa, static pressure
    report: ReportFields = field(default_factory=ReportFields)


@dataclass(frozen=True)
class ScaledCurves:
    """Curves of one row valid at the target speed and density."""

    pressure: Coefficients
    power: Coefficients
    efficiency: Coefficients
    flow_min: float
    flow_max: float
    speed_ratio: float
    density_ratio: float


@dataclass(frozen=True)
class DutyPoint:
    pressure: float    # Pa
    power: float       # kW
    efficiency: float  # -


@dataclass(frozen=True)
class PerformanceResult:
    """Outcome of one computation; callers branch on `found`."""

    found: bool
    failure: Optional[Failure] = None
    selected_row: Optional[CatalogRow] = None
    selection_speed: Optional[float] = None
    diameter: Optional[float] = None
    pressure_at_duty: Optional[float] = None
    power_at_duty: Optional[float] = None
    efficiency_at_duty: Optional[float] = None
    moment_of_inertia: Optional[float] = None
    effective_blade_count: Optional[int] = None
    impeller_mark: Optional[str] = None
    shaft_torque: Optional[float] = None
    pressure_curve: CurvePoints = ()
    power_curve: CurvePoints = ()
    efficiency_curve: CurvePoints = ()
    torque_curve: CurvePoints = ()

    @classmethod
    def missing(cls, failure: Failure, selection_speed: Optional[float] = None) -> "PerformanceResult":
        return cls(found=False, failure=failure, selection_speed=selection_speed)
