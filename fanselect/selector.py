"""
Catalog row selection by fan family and speed band.

Rows are matched on the half-open interval [min_speed, max_speed). The
speed used for matching comes from selection_speed(); derived quantities
call the same function so they always see the same row.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from . import formulas as F
from .calibration import DEFAULT_SETTINGS, EngineSettings
from .models import CatalogRow, DutyPointRequest


def select(catalog: Iterable[CatalogRow], fan_type: int, speed: float) -> Optional[CatalogRow]:
    """First row of `fan_type` whose interval contains `speed`, else None."""
    for row in catalog:
        if row.fan_type == fan_type and row.contains(speed):
            return row
    return None


def selection_speed(request: DutyPointRequest, settings: EngineSettings = DEFAULT_SETTINGS) -> Optional[float]:
    """Speed compared against catalog intervals.

    rotational: the requested rpm.
    specific: specific speed of the duty point per inlet; None when the
    request has no system resistance to compute it from.
    """
    if settings.speed_basis == "rotational":
        return request.target_speed
    if request.system_resistance is None or request.system_resistance <= 0:
        return None
    q_inlet = F.flow_per_inlet(request.flow_rate, request.suction_type.inlets)
    return F.specific_speed(request.target_speed, q_inlet, request.system_resistance, request.density)


def select_for_request(catalog: Sequence[CatalogRow], request: DutyPointRequest,
                       settings: EngineSettings = DEFAULT_SETTINGS) -> Optional[CatalogRow]:
    speed = selection_speed(request, settings)
    if speed is None:
        logging.getLogger(__name__).info("no selection speed for request (basis=%s)", settings.speed_basis)
        return None
    row = select(catalog, request.fan_type, speed)
    if row is None:
        logging.getLogger(__name__).info(
            "no catalog row for fan type %s at speed %.3f (%d rows)", request.fan_type, speed, len(catalog))
    return row


def find_overlaps(catalog: Sequence[CatalogRow]) -> List[Tuple[int, int]]:
    """Index pairs (i, j), i < j, of same-family rows with overlapping intervals."""
    out: List[Tuple[int, int]] = []
    for i, a in enumerate(catalog):
        for j in range(i + 1, len(catalog)):
            b = catalog[j]
            if a.fan_type == b.fan_type and a.min_speed < b.max_speed and b.min_speed < a.max_speed:
                out.append((i, j))
    return out
