"""
Catalog loaders: JSON files and semicolon-separated CSV exports.

CSV exports from the catalog database use decimal commas; numbers are
normalized before parsing. Curve cells hold either ascending coefficients
("5000|-0,01") or tabulated points ("0:5200|100000:4900|..."). Tabulated
curves are fitted at load time, so the engine only ever sees coefficients.
"""
from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

from pydantic import ValidationError

from . import curves as C
from .calibration import CURVE_DEGREE
from .models import CatalogRow
from .schemas import CatalogFileIn, CatalogRowIn, CurveIn
from .selector import find_overlaps

CSV_CURVE_COLUMNS = ("pressure", "power", "efficiency")


class CatalogError(ValueError):
    """Raised when a catalog file cannot be parsed or validated."""
    pass


class CatalogSource(Protocol):
    def get_all(self) -> Tuple[CatalogRow, ...]: ...


def _norm_number(s: str) -> float:
    s_clean = s.strip().replace("\u00A0", "").replace(" ", "").replace(",", ".")
    try:
        return float(s_clean)
    except ValueError as e:
        raise ValueError(f"Invalid numeric value: '{s}'") from e


def _parse_curve_cell(cell: str) -> Dict[str, Any]:
    parts = [p for p in cell.split("|") if p.strip()]
    if not parts:
        raise ValueError(f"Empty curve cell: '{cell}'")
    if ":" in parts[0]:
        points = []
        for p in parts:
            q, v = p.split(":", 1)
            points.append((_norm_number(q), _norm_number(v)))
        return {"points": points}
    return {"coefficients": [_norm_number(p) for p in parts]}


def _curve(c: Optional[CurveIn], degree: int) -> Tuple[float, ...]:
    if c is None:
        return ()
    if c.coefficients is not None:
        return tuple(float(x) for x in c.coefficients)
    return C.fit_polynomial(c.points, degree)


def _flow_range(r: CatalogRowIn) -> Tuple[float, float]:
    qs = [q for c in (r.pressure, r.power, r.efficiency) if c is not None and c.points for q, _ in c.points]
    lo = r.flow_min if r.flow_min is not None else min(qs)
    hi = r.flow_max if r.flow_max is not None else max(qs)
    return float(lo), float(hi)


def row_from_schema(r: CatalogRowIn, degree: int = CURVE_DEGREE) -> CatalogRow:
    """Validated schema row → immutable engine row (fits tabulated curves)."""
    flow_min, flow_max = _flow_range(r)
    return CatalogRow(
        fan_type=r.fan_type,
        min_speed=r.min_speed,
        max_speed=r.max_speed,
        reference_speed=r.reference_speed,
        reference_density=r.reference_density,
        pressure=_curve(r.pressure, degree),
        power=_curve(r.power, degree),
        efficiency=_curve(r.efficiency, degree),
        flow_min=flow_min,
        flow_max=flow_max,
        number_of_blades=r.number_of_blades,
        impeller_mark=r.impeller_mark,
        impeller_mark_double=r.impeller_mark_double or r.impeller_mark,
        blade_type=r.blade_type,
        flow_coefficient=r.flow_coefficient,
        diameter_ref=r.diameter_ref,
        inertia_ref=r.inertia_ref,
    )


def rows_from_dicts(items: Iterable[Dict[str, Any]], degree: int = CURVE_DEGREE) -> Tuple[CatalogRow, ...]:
    try:
        validated = CatalogFileIn(rows=list(items))
        rows = tuple(row_from_schema(r, degree) for r in validated.rows)
    except (ValidationError, ValueError) as e:
        raise CatalogError(f"Invalid catalog: {e}") from e
    for i, j in find_overlaps(rows):
        logging.getLogger(__name__).warning(
            "catalog rows %d and %d (fan type %s) have overlapping speed intervals; first match wins",
            i, j, rows[i].fan_type)
    return rows


def parse_catalog_json(text: str, degree: int = CURVE_DEGREE) -> Tuple[CatalogRow, ...]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Invalid catalog JSON: {e}") from e
    items = data.get("rows") if isinstance(data, dict) else data
    if not isinstance(items, list):
        raise CatalogError("Catalog JSON must be a list of rows or {'rows': [...]}")
    return rows_from_dicts(items, degree)


def parse_catalog_csv(text: str, degree: int = CURVE_DEGREE) -> Tuple[CatalogRow, ...]:
    """Semicolon CSV with a header row; empty cells are treated as missing."""
    lines = [ln for ln in text.splitlines() if ln.strip() and not ln.lstrip().startswith("#")]
    reader = csv.DictReader(lines, delimiter=";")
    items: List[Dict[str, Any]] = []
    for n, rec in enumerate(reader, start=2):
        item: Dict[str, Any] = {}
        try:
            for k, v in rec.items():
                if k is None or v is None or not v.strip():
                    continue
                key = k.strip()
                if key in CSV_CURVE_COLUMNS:
                    item[key] = _parse_curve_cell(v)
                elif key in ("impeller_mark", "impeller_mark_double", "blade_type"):
                    item[key] = v.strip()
                else:
                    item[key] = _norm_number(v)
        except ValueError as e:
            raise CatalogError(f"Malformed catalog CSV line {n}: {e}") from e
        items.append(item)
    return rows_from_dicts(items, degree)


def load_catalog(path: str | Path, degree: int = CURVE_DEGREE) -> Tuple[CatalogRow, ...]:
    p = Path(path)
    text = p.read_text(encoding="utf-8")
    ext = p.suffix.lower()
    if ext == ".json":
        return parse_catalog_json(text, degree)
    if ext == ".csv":
        return parse_catalog_csv(text, degree)
    raise CatalogError(f"Unsupported catalog extension: {ext} (use .json or .csv)")


class InMemoryCatalogSource:
    """Catalog source over rows already in memory; hands out one immutable snapshot."""

    def __init__(self, rows: Iterable[CatalogRow]):
        self._rows = tuple(rows)

    def get_all(self) -> Tuple[CatalogRow, ...]:
        return self._rows


class FileCatalogSource:
    """Catalog source backed by a JSON/CSV file, loaded lazily and cached.

    reload() swaps in a new snapshot; computations already holding the old
    tuple keep reading it unchanged.
    """

    def __init__(self, path: str | Path, degree: int = CURVE_DEGREE):
        self.path = Path(path)
        self.degree = degree
        self._rows: Optional[Tuple[CatalogRow, ...]] = None

    def get_all(self) -> Tuple[CatalogRow, ...]:
        if self._rows is None:
            self.reload()
        return self._rows  # type: ignore[return-value]

    def reload(self) -> None:
        rows = load_catalog(self.path, self.degree)
        logging.getLogger(__name__).info("loaded %d catalog rows from %s", len(rows), self.path)
        self._rows = rows
