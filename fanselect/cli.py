"""
Minimal CLI for fan selection (no web layer).

Usage examples:
  python -m fanselect.cli select --catalog catalog.json --request duty.json
  python -m fanselect.cli curves --catalog catalog.csv --request duty.json --output curves.csv
  python -m fanselect.cli report --catalog catalog.json --request duty.json --output report.json
  python -m fanselect.cli check-catalog --catalog catalog.json

Commands:
  - select: selected row and duty-point figures as JSON
  - curves: pressure/power/efficiency samples (CSV or JSON)
  - report: text sections of the technical proposal
  - check-catalog: load a catalog and list overlapping speed intervals

Exit codes: 0 ok, 1 no fan selected, 2 invalid request, catalog or option.
"""
from __future__ import annotations

import argparse
import csv
import json
import logging
import os
import sys
from typing import Any, Dict, List

from . import api
from . import calibration as CAL
from .anchors import ANCHORS
from .io import CatalogError, FileCatalogSource, load_catalog
from .logging_config import setup_logging
from .selector import find_overlaps


def _read_json(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _fail_on_drift() -> None:
    guarded = ["RHO_REF_KGM3", "K_TORQUE", "K_DOUBLE_INERTIA", "INERTIA_EXPONENT", "CURVE_DEGREE"]
    mismatches: List[str] = []
    for k in guarded:
        if float(ANCHORS[k]) != float(getattr(CAL, k)):
            mismatches.append(f"{k}: anchors={ANCHORS[k]!r} vs calibration={getattr(CAL, k)!r}")
    if mismatches:
        raise SystemExit("Calibration drift detected (anchors vs runtime):\n" + "\n".join(" - " + m for m in mismatches))


def _write_output(obj: Any, path: str | None) -> None:
    if not path:
        json.dump(obj, sys.stdout, ensure_ascii=False)
        sys.stdout.write("\n")
        return
    ext = os.path.splitext(path)[1].lower()
    if ext == ".json":
        with open(path, "w", encoding="utf-8") as f:
            json.dump(obj, f, ensure_ascii=False)
    elif ext == ".csv":
        # Flatten dict-of-lists into columns
        if not isinstance(obj, dict) or not all(isinstance(v, list) for v in obj.values()):
            raise SystemExit("CSV output needs column data; use .json for this command")
        keys = list(obj.keys())
        n = max((len(v) for v in obj.values()), default=0)
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(keys)
            for i in range(n):
                w.writerow([obj[k][i] if i < len(obj[k]) else "" for k in keys])
    else:
        raise SystemExit(f"Unsupported output extension: {ext} (use .json or .csv)")


def _settings(args: argparse.Namespace) -> CAL.EngineSettings:
    return CAL.DEFAULT_SETTINGS.with_overrides(
        curve_degree=args.degree, curve_points=args.points, speed_basis=args.speed_basis)


def _prepare(args: argparse.Namespace):
    if args.fail_on_drift:
        _fail_on_drift()
    settings = _settings(args)
    source = FileCatalogSource(args.catalog, degree=settings.curve_degree)
    return settings, source, _read_json(args.request)


def cmd_select(args: argparse.Namespace) -> int:
    settings, source, payload = _prepare(args)
    out = api.select_fan(source, payload, settings)
    _write_output(out, args.output)
    return 0 if out["status"] == "ok" else 1


def cmd_curves(args: argparse.Namespace) -> int:
    settings, source, payload = _prepare(args)
    out = api.select_fan(source, payload, settings)
    if out["status"] != "ok":
        _write_output(out, None)
        return 1
    series = out["result"]["series"]
    columns = {
        "flow_m3h": series["pressure"]["x"],
        "pressure_Pa": series["pressure"]["y"],
        "power_kW": series["power"]["y"],
    }
    # efficiency may skip flows where it is undefined; keep it aligned by flow
    eff = dict(zip(series["efficiency"]["x"], series["efficiency"]["y"]))
    columns["efficiency"] = [eff.get(q, "") for q in columns["flow_m3h"]]
    _write_output(columns, args.output)
    return 0


def cmd_report(args: argparse.Namespace) -> int:
    settings, source, payload = _prepare(args)
    out = api.proposal(source, payload, settings)
    _write_output(out, args.output)
    return 0 if out["status"] == "ok" else 1


def cmd_check_catalog(args: argparse.Namespace) -> int:
    if args.fail_on_drift:
        _fail_on_drift()
    degree = CAL.CURVE_DEGREE if args.degree is None else args.degree
    rows = load_catalog(args.catalog, degree=degree)
    overlaps = [
        {"first": i, "second": j, "fan_type": rows[i].fan_type,
         "first_interval": [rows[i].min_speed, rows[i].max_speed],
         "second_interval": [rows[j].min_speed, rows[j].max_speed]}
        for i, j in find_overlaps(rows)
    ]
    _write_output({"rows": len(rows), "overlaps": overlaps}, args.output)
    return 0 if not overlaps else 1


def _int_at_least(lo: int):
    def parse(text: str) -> int:
        try:
            value = int(text)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid integer: {text!r}")
        if value < lo:
            raise argparse.ArgumentTypeError(f"must be >= {lo}, got {value}")
        return value
    return parse


def _common(p: argparse.ArgumentParser, request: bool = True) -> None:
    p.add_argument("--catalog", required=True, help="Catalog file (.json or .csv)")
    if request:
        p.add_argument("--request", required=True, help="Path to JSON duty-point request")
        p.add_argument("--points", type=_int_at_least(2), help="Samples per curve (>= 2)")
        p.add_argument("--speed-basis", choices=["rotational", "specific"], help="Speed used to match catalog rows")
    p.add_argument("--degree", type=_int_at_least(1), help="Polynomial degree for tabulated catalog curves (>= 1)")
    p.add_argument("--output", required=False, help="Output file (.json or .csv)")
    p.add_argument("--fail-on-drift", action="store_true", help="Fail if calibration differs from anchors")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="fanselect", description="Centrifugal fan selection from catalog data")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    p.add_argument("--log-file", help="Also write logs to this file")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_sel = sub.add_parser("select", help="Select an impeller and compute its duty point")
    _common(p_sel)
    p_sel.set_defaults(func=cmd_select)

    p_cur = sub.add_parser("curves", help="Export pressure/power/efficiency curve samples")
    _common(p_cur)
    p_cur.set_defaults(func=cmd_curves)

    p_rep = sub.add_parser("report", help="Build the text sections of the technical proposal")
    _common(p_rep)
    p_rep.set_defaults(func=cmd_report)

    p_chk = sub.add_parser("check-catalog", help="Validate a catalog and list overlapping speed intervals")
    _common(p_chk, request=False)
    p_chk.set_defaults(func=cmd_check_catalog)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)
    try:
        return args.func(args)
    except (api.InvalidRequest, json.JSONDecodeError) as e:
        sys.stderr.write(f"invalid request: {e}\n")
        return 2
    except CatalogError as e:
        sys.stderr.write(f"catalog error: {e}\n")
        return 2
    except OSError as e:
        sys.stderr.write(f"error: {e}\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
