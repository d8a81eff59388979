"""Click CLI for quota-transformer: transform, sheets."""

from __future__ import annotations

import html
import logging
import sys
from pathlib import Path

import click

from quota_transformer.config import TransformConfig
from quota_transformer.errors import AdapterError, TransformError
from quota_transformer.headers import HeaderStrategy
from quota_transformer.loaders import EXCEL_SUFFIXES, load_input_text
from quota_transformer.pipeline import TransformResult, transform_data
from quota_transformer.records import FINAL_HEADERS
from quota_transformer.serialize import (
    export_filename,
    sorted_groups,
    to_csv,
    to_html_table,
    to_json,
    to_tsv,
    to_xlsx,
    visible_headers,
    with_rdquota,
)

_TEXT_WRITERS = {"tsv": to_tsv, "csv": to_csv, "html": to_html_table}


def _read_input(source: str, sheet: str | None) -> str:
    if source == "-":
        return click.get_text_stream("stdin").read()
    return load_input_text(source, sheet=sheet)


def _render_text(result: TransformResult, fmt: str, grouped: bool, rdquota: bool, translate: bool) -> str:
    if fmt == "json":
        return to_json(result.records, groups=result.groups if grouped else None)

    writer = _TEXT_WRITERS[fmt]
    base_headers = with_rdquota() if rdquota else list(FINAL_HEADERS)
    if not grouped:
        return writer(result.records, base_headers, translate=translate)

    parts: list[str] = []
    for label, records in sorted_groups(result.groups):
        headers = visible_headers(records, base_headers)
        if fmt == "html":
            parts.append(f"<h2>{html.escape(label)}</h2>")
        else:
            parts.append(f"# {label} ({len(records)})")
        parts.append(writer(records, headers, translate=translate).rstrip("\n"))
        parts.append("")
    return "\n".join(parts)


def _write_xlsx(result: TransformResult, output: str | None, grouped: bool, rdquota: bool, translate: bool) -> list[Path]:
    base_headers = with_rdquota() if rdquota else list(FINAL_HEADERS)
    if not grouped:
        target = Path(output) if output else Path(export_filename(translate=translate, rdquota=rdquota))
        return [to_xlsx(result.records, target, base_headers, translate=translate)]

    out_dir = Path(output) if output else Path.cwd()
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for label, records in sorted_groups(result.groups):
        target = out_dir / export_filename(label, translate=translate)
        headers = visible_headers(records, base_headers)
        written.append(to_xlsx(records, target, headers, translate=translate))
    return written


@click.group()
@click.option("--verbose", "-v", count=True, help="Increase log verbosity (-v info, -vv debug).")
def main(verbose: int) -> None:
    """Quota Data Transformer: clean, categorize and export quota requests."""
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("source")
@click.option("--sheet", default=None, help="Worksheet to import from a multi-sheet workbook.")
@click.option(
    "--format", "-f", "fmt",
    type=click.Choice(["tsv", "csv", "html", "json", "xlsx"]),
    default="tsv", show_default=True,
    help="Output format.",
)
@click.option("--output", "-o", default=None, help="Output file (directory for grouped xlsx).")
@click.option("--grouped", is_flag=True, help="Emit one table per request-type category.")
@click.option("--rdquota", is_flag=True, help="Prepend the RDQuota identifier column.")
@click.option("--translate", is_flag=True, help="Translate headers and values to Portuguese.")
@click.option("--legacy-headers", is_flag=True, help="Only treat the first row as the header row.")
@click.option("--keep-banner", is_flag=True, help="Do not strip a leading query-export banner line.")
def transform(
    source: str,
    sheet: str | None,
    fmt: str,
    output: str | None,
    grouped: bool,
    rdquota: bool,
    translate: bool,
    legacy_headers: bool,
    keep_banner: bool,
) -> None:
    """Transform SOURCE (a file path, or - for stdin) into canonical records."""
    config = TransformConfig(
        header_strategy=HeaderStrategy.LEGACY if legacy_headers else HeaderStrategy.ROBUST,
        strip_banner=not keep_banner,
    )

    try:
        text = _read_input(source, sheet)
    except (AdapterError, FileNotFoundError) as e:
        click.echo(f"Processing Error: {e}", err=True)
        sys.exit(1)

    try:
        result = transform_data(text, config)
    except TransformError as e:
        click.echo(f"Transformation Failed: {e}", err=True)
        sys.exit(1)

    if fmt == "xlsx":
        for path in _write_xlsx(result, output, grouped, rdquota, translate):
            click.echo(f"Saved to {path}")
        return

    rendered = _render_text(result, fmt, grouped, rdquota, translate)
    if output:
        Path(output).write_text(rendered, encoding="utf-8")
        click.echo(f"Saved to {output}")
    else:
        click.echo(rendered.rstrip("\n"))


@main.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
def sheets(source: str) -> None:
    """List the worksheets of an Excel workbook."""
    from quota_transformer.xlsx_extractor import list_sheet_names

    if Path(source).suffix.lower() not in EXCEL_SUFFIXES:
        click.echo(f"Not an Excel workbook: {source}", err=True)
        sys.exit(1)
    try:
        names = list_sheet_names(source)
    except AdapterError as e:
        click.echo(f"Processing Error: {e}", err=True)
        sys.exit(1)
    for name in names:
        click.echo(name)


if __name__ == "__main__":
    main()
