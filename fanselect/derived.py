"""
Derived quantities of a selected impeller: diameter, moment of inertia,
blade count and designation.

The catalog-level functions select the row themselves (same rule as the
selector) and return None when nothing matches; callers short-circuit on None.
"""
from __future__ import annotations

from typing import Optional, Sequence

from . import formulas as F
from .calibration import DEFAULT_SETTINGS, K_DOUBLE_INERTIA, EngineSettings
from .models import CatalogRow, DutyPointRequest, SuctionType
from .selector import select_for_request


def effective_blade_count(row: CatalogRow, suction: SuctionType) -> int:
    """Blades of the whole wheel: doubled for double suction."""
    return row.number_of_blades * suction.inlets


def impeller_mark(row: CatalogRow, suction: SuctionType) -> str:
    return row.impeller_mark_double if suction is SuctionType.DOUBLE else row.impeller_mark


def diameter_for_row(row: CatalogRow, request: DutyPointRequest) -> float:
    """Impeller diameter [m] sized so the duty flow per inlet sits at the row's design phi."""
    q_inlet = F.flow_per_inlet(request.flow_rate, request.suction_type.inlets)
    return F.impeller_diameter(q_inlet, request.target_speed, row.flow_coefficient)


def moment_of_inertia_for_row(row: CatalogRow, request: DutyPointRequest) -> float:
    """Rotor inertia [kg*m^2] scaled from the calibration wheel."""
    d = diameter_for_row(row, request)
    j = F.scaled_inertia(row.inertia_ref, d, row.diameter_ref)
    if request.suction_type is SuctionType.DOUBLE:
        j *= K_DOUBLE_INERTIA
    return j


def diameter(catalog: Sequence[CatalogRow], request: DutyPointRequest,
             settings: EngineSettings = DEFAULT_SETTINGS) -> Optional[float]:
    row = select_for_request(catalog, request, settings)
    return None if row is None else diameter_for_row(row, request)


def moment_of_inertia(catalog: Sequence[CatalogRow], request: DutyPointRequest,
                      settings: EngineSettings = DEFAULT_SETTINGS) -> Optional[float]:
    row = select_for_request(catalog, request, settings)
    return None if row is None else moment_of_inertia_for_row(row, request)
