import json
import logging

import pytest

from fanselect.io import (
    CatalogError,
    FileCatalogSource,
    InMemoryCatalogSource,
    load_catalog,
    parse_catalog_csv,
    parse_catalog_json,
    rows_from_dicts,
)

from conftest import row_dict

CSV_HEADER = ("fan_type;min_speed;max_speed;reference_speed;pressure;power;efficiency;"
              "number_of_blades;impeller_mark;impeller_mark_double;blade_type;flow_coefficient;"
              "diameter_ref;inertia_ref;flow_min;flow_max")


def test_load_json_catalog(catalog_json):
    rows = load_catalog(catalog_json)
    assert len(rows) == 2
    row = rows[0]
    assert row.pressure == (5000.0, -0.01)
    assert row.efficiency == pytest.approx((0.2, 3.0e-6, -5.0e-12))
    assert (row.flow_min, row.flow_max) == (50000.0, 400000.0)
    assert row.reference_density == 1.2
    assert rows[1].fan_type == 5


def test_json_accepts_bare_list():
    rows = parse_catalog_json(json.dumps([row_dict()]))
    assert rows[0].impeller_mark == "VDN-3"


def test_missing_double_mark_falls_back_to_single():
    d = row_dict()
    del d["impeller_mark_double"]
    assert rows_from_dicts([d])[0].impeller_mark_double == "VDN-3"


def test_missing_efficiency_is_empty_curve():
    d = row_dict()
    del d["efficiency"]
    assert rows_from_dicts([d])[0].efficiency == ()


def test_tabulated_curves_are_fitted_and_set_flow_range():
    d = row_dict(pressure={"points": [[100000, 5000], [200000, 4500], [300000, 3800], [400000, 2900]]},
                 power={"points": [[100000, 300], [400000, 700]]})
    del d["flow_min"], d["flow_max"]
    row = rows_from_dicts([d])[0]
    assert len(row.pressure) == 4
    assert len(row.power) == 2
    assert (row.flow_min, row.flow_max) == (100000.0, 400000.0)


@pytest.mark.parametrize("bad", [
    {"min_speed": 900},
    {"number_of_blades": 0},
    {"flow_coefficient": 0},
    {"pressure": {"coefficients": []}},
    {"power": {"coefficients": [1.0], "points": [[0, 1], [1, 2]]}},
])
def test_invalid_rows_raise_catalog_error(bad):
    with pytest.raises(CatalogError):
        rows_from_dicts([row_dict(**bad)])


def test_coefficient_curves_need_flow_range():
    d = row_dict()
    del d["flow_max"]
    with pytest.raises(CatalogError):
        rows_from_dicts([d])


def test_invalid_json_raises_catalog_error():
    with pytest.raises(CatalogError):
        parse_catalog_json("{not json")
    with pytest.raises(CatalogError):
        parse_catalog_json(json.dumps({"rows": "nope"}))


def test_overlapping_rows_are_logged(caplog):
    rows = [row_dict(), row_dict(min_speed=700, max_speed=900, impeller_mark="VDN-3B")]
    with caplog.at_level(logging.WARNING, logger="fanselect"):
        loaded = rows_from_dicts(rows)
    assert len(loaded) == 2
    assert "overlapping speed intervals" in caplog.text


def test_csv_with_decimal_commas_and_tabulated_points():
    text = "\n".join([
        "# exported from the catalog database",
        CSV_HEADER,
        "3;600;800;700;5000|-0,01;150|0,0015;;12;VDN-3;VDN-3D;backward curved;0,25;1,6;120;50000;400000",
        "",
        "5;500;1000;740;0:5200|100000:4900|200000:4300;0:120|200000:400;;16;VDN-5;;radial;0,3;1,8;160;;",
    ])
    rows = parse_catalog_csv(text)
    assert len(rows) == 2
    first, second = rows
    assert first.pressure == pytest.approx((5000.0, -0.01))
    assert first.power == pytest.approx((150.0, 0.0015))
    assert first.efficiency == ()
    assert first.flow_coefficient == pytest.approx(0.25)
    assert second.fan_type == 5
    assert len(second.pressure) == 3
    assert (second.flow_min, second.flow_max) == (0.0, 200000.0)
    assert second.impeller_mark_double == "VDN-5"


def test_csv_malformed_number_reports_line():
    text = "\n".join([
        CSV_HEADER,
        "3;600;eight hundred;700;5000|-0,01;150;;12;VDN-3;;;0,25;1,6;120;50000;400000",
    ])
    with pytest.raises(CatalogError, match="line 2"):
        parse_catalog_csv(text)


def test_unsupported_extension(tmp_path):
    path = tmp_path / "catalog.xlsx"
    path.write_text("", encoding="utf-8")
    with pytest.raises(CatalogError):
        load_catalog(path)


def test_in_memory_source_returns_snapshot(catalog):
    source = InMemoryCatalogSource(list(catalog))
    assert source.get_all() == catalog
    assert source.get_all() is source.get_all()


def test_file_source_caches_until_reload(catalog_json):
    source = FileCatalogSource(catalog_json)
    first = source.get_all()
    assert source.get_all() is first

    catalog_json.write_text(json.dumps([row_dict()]), encoding="utf-8")
    assert len(source.get_all()) == 2
    source.reload()
    assert len(source.get_all()) == 1
    # snapshot taken before reload is unchanged
    assert len(first) == 2


@pytest.mark.parametrize("fan_type,blades", [("3,7", "12"), ("3", "12,5")])
def test_csv_fractional_integer_fields_are_rejected(fan_type, blades):
    text = "\n".join([
        CSV_HEADER,
        f"{fan_type};600;800;700;5000|-0,01;150|0,0015;;{blades};VDN-3;;;0,25;1,6;120;50000;400000",
    ])
    with pytest.raises(CatalogError):
        parse_catalog_csv(text)


def test_json_fractional_fan_type_is_rejected():
    with pytest.raises(CatalogError):
        rows_from_dicts([row_dict(fan_type=3.7)])
