"""
Thin, stable API for the request layer (web endpoint, CLI).

Contracts:
  - parse_request(payload) -> DutyPointRequest
  - select_fan(source, payload, settings=None) -> dict
  - proposal(source, payload, settings=None, issued=None) -> dict

Validation is performed here via Pydantic schemas; the engine never
re-validates. Invalid input raises InvalidRequest before any computation.
A catalog miss is not an error: it comes back as status "not_found".
"""
from __future__ import annotations

import datetime as dt
from dataclasses import fields
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from . import analysis as A
from . import report as R
from .calibration import DEFAULT_SETTINGS, EngineSettings
from .io import CatalogSource
from .models import DutyPointRequest, Failure, PerformanceResult, ReportFields, SuctionType
from .schemas import DutyPointRequestIn

STATUS = {
    None: "ok",
    Failure.SELECTION: "not_found",
    Failure.NUMERIC: "numeric_error",
}


class BackendError(Exception):
    """Raised when backend API computation fails in a controlled way."""
    pass


class InvalidRequest(BackendError):
    """Malformed or out-of-range duty point; the engine was not invoked."""
    pass


def parse_request(payload: Dict[str, Any], settings: EngineSettings = DEFAULT_SETTINGS) -> DutyPointRequest:
    """Validate a raw request body and build the engine request."""
    if not payload:
        raise InvalidRequest("request parameters must not be empty")
    try:
        v = DutyPointRequestIn.model_validate(payload)
    except ValidationError as e:
        raise InvalidRequest(f"invalid duty point: {e}") from e
    if settings.speed_basis == "specific" and v.system_resistance is None:
        raise InvalidRequest("system_resistance is required for specific-speed selection")
    report_keys = {f.name for f in fields(ReportFields)}
    data = v.model_dump()
    return DutyPointRequest(
        flow_rate=v.flow_rate,
        fan_type=v.fan_type,
        target_speed=v.target_speed,
        density=v.density,
        suction_type=SuctionType(v.suction_type),
        system_resistance=v.system_resistance,
        report=ReportFields(**{k: data[k] for k in report_keys if k in data}),
    )


def compute(source: CatalogSource, request: DutyPointRequest,
            settings: Optional[EngineSettings] = None) -> PerformanceResult:
    return A.compute_performance(source.get_all(), request, settings)


def select_fan(source: CatalogSource, payload: Dict[str, Any],
               settings: Optional[EngineSettings] = None) -> Dict[str, Any]:
    """Validate, compute and serialize. Returns {"status": ..., "result": {...}}."""
    request = parse_request(payload, settings or DEFAULT_SETTINGS)
    try:
        result = compute(source, request, settings)
    except Exception:
        logging.getLogger(__name__).exception("select_fan failed")
        raise
    return {"status": STATUS[result.failure], "result": A.result_to_dict(result)}


def proposal(source: CatalogSource, payload: Dict[str, Any], settings: Optional[EngineSettings] = None,
             issued: Optional[dt.date] = None) -> Dict[str, Any]:
    """Report sections for the external renderer; empty when selection failed."""
    request = parse_request(payload, settings or DEFAULT_SETTINGS)
    result = compute(source, request, settings)
    if not result.found:
        return {"status": STATUS[result.failure], "sections": []}
    sections = R.build_report(result, request, issued)
    return {
        "status": "ok",
        "title": f"Selection report for task {request.report.task_number}"
        if request.report.task_number is not None else "Selection report",
        "sections": [{"page": s.page, "title": s.title, "lines": list(s.lines)} for s in sections],
    }
