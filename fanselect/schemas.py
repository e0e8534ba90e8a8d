from __future__ import annotations
from typing import Optional, List, Annotated, Literal, Tuple
from pydantic import BaseModel, Field, ConfigDict, model_validator

from .calibration import RHO_REF_KGM3

# Common helpers
Positive = Annotated[float, Field(gt=0)]
NonNegative = Annotated[float, Field(ge=0)]
PositiveInt = Annotated[int, Field(ge=1)]


class CurveIn(BaseModel):
    """A catalog curve: ascending polynomial coefficients or tabulated (Q, value) points."""
    model_config = ConfigDict(extra="forbid")
    coefficients: Optional[List[float]] = None
    points: Optional[List[Tuple[float, float]]] = None

    @model_validator(mode="after")
    def _one_form(self) -> "CurveIn":
        if (self.coefficients is None) == (self.points is None):
            raise ValueError("give exactly one of 'coefficients' or 'points'")
        if self.coefficients is not None and not self.coefficients:
            raise ValueError("coefficients must not be empty")
        if self.points is not None and len(self.points) < 2:
            raise ValueError("points needs at least 2 samples")
        return self


# Catalog rows
class CatalogRowIn(BaseModel):
    model_config = ConfigDict(extra="allow")
    fan_type: int
    min_speed: NonNegative
    max_speed: Positive
    reference_speed: Positive
    reference_density: Positive = RHO_REF_KGM3
    pressure: CurveIn
    power: CurveIn
    efficiency: Optional[CurveIn] = None
    flow_min: Optional[NonNegative] = None
    flow_max: Optional[Positive] = None
    number_of_blades: PositiveInt
    impeller_mark: str
    impeller_mark_double: Optional[str] = None
    blade_type: str = ""
    flow_coefficient: Positive
    diameter_ref: Positive = 1.0
    inertia_ref: NonNegative = 0.0

    @model_validator(mode="after")
    def _ranges(self) -> "CatalogRowIn":
        if self.min_speed >= self.max_speed:
            raise ValueError("min_speed must be < max_speed")
        if self.flow_min is not None and self.flow_max is not None and self.flow_min >= self.flow_max:
            raise ValueError("flow_min must be < flow_max")
        if self.flow_min is None or self.flow_max is None:
            if self.pressure.points is None and self.power.points is None:
                raise ValueError("flow_min/flow_max are required when curves are given as coefficients")
        return self


# Duty point request
class DutyPointRequestIn(BaseModel):
    model_config = ConfigDict(extra="allow")
    flow_rate: Positive                      # m^3/h
    fan_type: int
    target_speed: Positive                   # rpm
    density: Positive = RHO_REF_KGM3         # kg/m^3
    suction_type: Literal["single", "double"] = "single"
    system_resistance: Optional[Positive] = None  # Pa
    # Report pass-through
    task_number: Optional[int] = None
    project_name: str = ""
    material_design: Annotated[int, Field(ge=1, le=5)] = 5
    rotation_direction: str = ""
    exhaust_direction: Optional[int] = None
    vibration_isolation: bool = False
    motor_voltage: Optional[Positive] = None
    climatic_version: str = ""
    hazard_marking: Optional[str] = None
    vfd: bool = False
    motor_requirements: str = ""
    coupling_type: PositiveInt = 1
    bearing_unit_type: PositiveInt = 1
    shaft_seal: PositiveInt = 1
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


class CatalogFileIn(BaseModel):
    model_config = ConfigDict(extra="forbid")
    rows: List[CatalogRowIn]
