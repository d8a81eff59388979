"""Tests for export formatting in serialize.py."""

import json

import openpyxl
import pytest

from quota_transformer.errors import SerializationValidationError
from quota_transformer.labels import translate_headers, translate_label
from quota_transformer.records import FINAL_HEADERS, CanonicalRecord, RequestTypeCode
from quota_transformer.serialize import (
    build_table,
    export_filename,
    sorted_groups,
    to_csv,
    to_html_table,
    to_json,
    to_pandas,
    to_polars,
    to_tsv,
    to_xlsx,
    visible_headers,
    with_rdquota,
)

QUOTA = CanonicalRecord(
    subscription_id="Sub1",
    request_type="Quota Increase",
    vm_type="Standard_D4",
    region="East US",
    zone="N/A",
    cores="100",
    status="Approved",
    original_id="Q1",
    request_type_code=RequestTypeCode.QUOTA_INCREASE,
)
ZONAL = CanonicalRecord(
    subscription_id="Sub2",
    request_type="Zonal Enablement",
    vm_type="",
    region="West US",
    zone="1,2",
    cores="N/A",
    status="Backlogged",
    original_id="Q2",
    request_type_code=RequestTypeCode.ZONAL_ENABLEMENT,
)


# ─── Header selection ────────────────────────────────────────────────────────


def test_visible_headers_hide_zone():
    headers = visible_headers([QUOTA])
    assert "Zone" not in headers
    assert "Cores" in headers


def test_visible_headers_zonal_hide_cores():
    headers = visible_headers([ZONAL])
    assert "Cores" not in headers
    assert "Zone" in headers


def test_visible_headers_empty_records():
    assert visible_headers([]) == list(FINAL_HEADERS)


def test_visible_headers_keep_rdquota():
    assert visible_headers([QUOTA], with_rdquota())[0] == "RDQuota"


def test_sorted_groups_case_insensitive():
    groups = {"b": [], "A": [], "c": []}
    assert [label for label, _ in sorted_groups(groups)] == ["A", "b", "c"]


def test_export_filename_unified():
    assert export_filename() == "Unified_Table_en-US.xlsx"
    assert export_filename(translate=True) == "Tabela_Unificada_pt-BR.xlsx"


def test_export_filename_unified_with_rdquota():
    assert export_filename(rdquota=True) == "Unified_Table_by_RDQuota_en-US.xlsx"
    assert export_filename(translate=True, rdquota=True) == "Tabela_Unificada_por_RDQuota_pt-BR.xlsx"


def test_export_filename_category_ignores_rdquota():
    assert export_filename("Quota Increase", rdquota=True) == "Quota_Increase_Quota_Data_en-US.xlsx"


def test_export_filename_category():
    assert export_filename("Region Limit Increase") == "Region_Limit_Increase_Quota_Data_en-US.xlsx"
    assert export_filename("Quota Increase", translate=True) == "Quota_Increase_Dados_Cota_pt-BR.xlsx"


# ─── Labels ──────────────────────────────────────────────────────────────────


def test_translate_known_label():
    assert translate_label("Quota Increase") == "Aumento de Cota"


def test_translate_unknown_label_unchanged():
    assert translate_label("Sub1") == "Sub1"


def test_translate_headers():
    assert translate_headers(["Region", "RDQuota"]) == ["Região", "RDQuota"]


# ─── build_table ─────────────────────────────────────────────────────────────


def test_build_table_order():
    headers, rows = build_table([QUOTA], ["Region", "Subscription ID"])
    assert headers == ["Region", "Subscription ID"]
    assert rows == [["East US", "Sub1"]]


def test_build_table_rdquota_is_original_id():
    _, rows = build_table([QUOTA], with_rdquota(["Status"]))
    assert rows == [["Q1", "Approved"]]


def test_build_table_translate():
    headers, rows = build_table([ZONAL], ["Request Type", "Status"], translate=True)
    assert headers == ["Tipo de Requisição", "Status"]
    assert rows == [["Habilitação Zonal", "Pendente (Backlogged)"]]


def test_build_table_rejects_non_string():
    bad = CanonicalRecord(subscription_id="Sub1", cores=8)
    with pytest.raises(SerializationValidationError) as exc_info:
        build_table([QUOTA, bad])
    assert exc_info.value.record_index == 1
    assert exc_info.value.column_name == "Cores"


# ─── Text formats ────────────────────────────────────────────────────────────


def test_to_tsv():
    text = to_tsv([QUOTA], ["Subscription ID", "Region", "Cores"])
    assert text == "Subscription ID\tRegion\tCores\nSub1\tEast US\t100\n"


def test_to_csv_quotes_commas():
    text = to_csv([ZONAL], ["Subscription ID", "Zone"])
    assert text == 'Subscription ID,Zone\nSub2,"1,2"\n'


def test_to_tsv_writes_file(tmp_path):
    out = tmp_path / "quota.tsv"
    assert to_tsv([QUOTA], path=out) is None
    assert out.read_text(encoding="utf-8").splitlines()[0] == "\t".join(FINAL_HEADERS)


def test_to_html_table_escapes():
    record = CanonicalRecord(request_type="Region Enablement & Quota Increase")
    html = to_html_table([record], ["Request Type"])
    assert html == (
        "<table><thead><tr><th>Request Type</th></tr></thead>"
        "<tbody><tr><td>Region Enablement &amp; Quota Increase</td></tr></tbody></table>"
    )


def test_to_json_flat():
    data = json.loads(to_json([QUOTA]))
    assert data[0]["original_id"] == "Q1"
    assert data[0]["request_type_code"] == "QUOTA_INCREASE"


def test_to_json_grouped():
    data = json.loads(to_json([], groups={"Zonal Enablement": [ZONAL], "Quota Increase": [QUOTA]}))
    assert list(data) == ["Quota Increase", "Zonal Enablement"]
    assert data["Zonal Enablement"][0]["zone"] == "1,2"


# ─── XLSX ────────────────────────────────────────────────────────────────────


def test_to_xlsx_roundtrip(tmp_path):
    out = to_xlsx([QUOTA, ZONAL], tmp_path / "quota.xlsx")
    wb = openpyxl.load_workbook(out)
    ws = wb.active
    assert ws.title == "Quota Data"
    rows = [list(r) for r in ws.iter_rows(values_only=True)]
    assert rows[0] == list(FINAL_HEADERS)
    assert rows[1][0] == "Sub1"
    assert rows[2][4] == "1,2"


def test_to_xlsx_column_widths(tmp_path):
    long_status = "x" * 80
    record = CanonicalRecord(status=long_status)
    out = to_xlsx([record], tmp_path / "w.xlsx", ["Region", "Status"])
    ws = openpyxl.load_workbook(out).active
    assert ws.column_dimensions["A"].width == len("Region") + 2
    assert ws.column_dimensions["B"].width == 50


def test_to_xlsx_translated(tmp_path):
    out = to_xlsx([ZONAL], tmp_path / "pt.xlsx", ["Region", "Status"], translate=True)
    rows = list(openpyxl.load_workbook(out).active.iter_rows(values_only=True))
    assert rows[0] == ("Região", "Status")
    assert rows[1] == ("West US", "Pendente (Backlogged)")


# ─── DataFrames ──────────────────────────────────────────────────────────────


def test_to_pandas():
    df = to_pandas([QUOTA, ZONAL], ["Subscription ID", "Cores"])
    assert list(df.columns) == ["Subscription ID", "Cores"]
    assert df["Cores"].tolist() == ["100", "N/A"]
    assert str(df["Cores"].dtype) == "string"


def test_to_polars():
    import polars as pl

    df = to_polars([QUOTA], ["Region", "Status"])
    assert df.columns == ["Region", "Status"]
    assert df.schema["Region"] == pl.Utf8
    assert df.row(0) == ("East US", "Approved")
