"""Main Typer application for DRFO Analyzer."""

from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.panel import Panel
from rich.table import Table

from drfo_analyzer import __version__
from drfo_analyzer.cli.console import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from drfo_analyzer.core.models import CATEGORY_LABELS, AggregationResult, PeriodKind, Severity
from drfo_analyzer.core.rules.variants import VARIANTS, FormVariant, get_variant, variants_for_schema
from drfo_analyzer.core.services import StatementAnalysis, analyze_statement, parse_category_filter
from drfo_analyzer.infrastructure.parsers import (
    check_content_type,
    content_type_for,
    decode_statement,
    detect_document_variant,
    find_schema_locator,
    read_statement,
    xml_to_mapping,
)
from drfo_analyzer.shared.config import get_settings
from drfo_analyzer.shared.exceptions import (
    DRFOAnalyzerError,
    ReconstructionError,
    UnsupportedVersionError,
)
from drfo_analyzer.shared.formatters import format_currency, format_tax_code
from drfo_analyzer.shared.logging_config import configure_logging

app = typer.Typer(
    name="drfo-analyzer",
    help="Аналізатор відомості ДРФО для заповнення податкової декларації",
    add_completion=True,
    no_args_is_help=True,
)

AUTO_VARIANT = "auto"

FileArgument = Annotated[
    Path,
    typer.Argument(
        help="Шлях до XML-відомості (F14018)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
]
VariantOption = Annotated[
    Optional[str],
    typer.Option(
        "--variant",
        "-f",
        help="Рік декларації (2021, 2022, 2023) або 'auto'",
    ),
]
CategoryOption = Annotated[
    Optional[list[str]],
    typer.Option(
        "--category",
        "-c",
        help="Показати лише цю категорію (можна вказати кілька разів)",
    ),
]
ReferenceDateOption = Annotated[
    Optional[datetime],
    typer.Option(
        "--reference-date",
        formats=["%Y-%m-%d"],
        help="Дата, від якої рахується попередній рік (за замовчуванням сьогодні)",
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"DRFO Analyzer v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Показати версію та вийти",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """DRFO Analyzer - відомість про доходи у рядки декларації."""
    configure_logging(get_settings())


def _resolve_variant(data: bytes, code: Optional[str]) -> FormVariant:
    """Variant chosen on the command line, from settings, or detected."""
    settings = get_settings()
    code = code or settings.default_variant
    if code.strip().lower() == AUTO_VARIANT:
        mapping = xml_to_mapping(decode_statement(data, settings.source_encoding))
        return detect_document_variant(mapping)
    return get_variant(code)


def _load(
    statement: Path,
    variant_code: Optional[str],
    categories: Optional[list[str]],
    reference_date: Optional[datetime],
) -> tuple[FormVariant, StatementAnalysis]:
    content_type = content_type_for(statement)
    check_content_type(content_type)
    data = read_statement(statement)
    variant = _resolve_variant(data, variant_code)
    category_filter = parse_category_filter(categories or [], variant)
    analysis = analyze_statement(
        data,
        variant,
        content_type=content_type,
        category_filter=category_filter,
        reference_date=reference_date.date() if reference_date else None,
        encoding=get_settings().source_encoding,
    )
    return variant, analysis


def _handle_error(error: DRFOAnalyzerError) -> None:
    if isinstance(error, ReconstructionError):
        print_error(f"Неочікувані дані у відомості. {error}")
    else:
        print_error(str(error))
    raise typer.Exit(1)


def _print_advisories(result: AggregationResult) -> None:
    for advisory in result.advisories:
        if advisory.severity == Severity.INFO:
            print_info(advisory.message)
        else:
            print_warning(advisory.message)


def _categories_help(variant: FormVariant) -> str:
    return ", ".join(f"{c.value} ({CATEGORY_LABELS[c]})" for c in variant.categories)


@app.command()
def variants() -> None:
    """Показує підтримувані версії форми відомості."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Код", style="cyan")
    table.add_column("Назва")
    table.add_column("Схема")
    table.add_column("Період")
    table.add_column("Рядки декларації")

    for variant in VARIANTS.values():
        table.add_row(
            variant.code,
            variant.title,
            variant.schema_locator,
            "квартал" if variant.period_kind == PeriodKind.QUARTER else "місяць",
            ", ".join(decl_line.line for decl_line in variant.lines),
        )

    console.print(table)


@app.command()
def info(statement: FileArgument) -> None:
    """Показує основну інформацію про відомість без розрахунку."""
    settings = get_settings()
    try:
        check_content_type(content_type_for(statement))
        data = read_statement(statement)
        mapping = xml_to_mapping(decode_statement(data, settings.source_encoding))
        locator = find_schema_locator(mapping)
        try:
            variant: Optional[FormVariant] = detect_document_variant(mapping)
        except UnsupportedVersionError:
            variant = None
    except DRFOAnalyzerError as e:
        _handle_error(e)
        return

    console.print()
    console.print(
        Panel.fit(
            f"[header]Файл:[/header] {statement.name}\n"
            f"[header]Розмір:[/header] {statement.stat().st_size:,} байт\n"
            f"[header]Схема:[/header] {locator or '-'}\n"
            f"[header]Підходить для:[/header] "
            f"{', '.join(v.code for v in variants_for_schema(locator)) or '-'}\n"
            f"[header]Форма:[/header] "
            f"{f'{variant.code} - {variant.title}' if variant else 'невідома'}",
            title="Інформація про файл",
            border_style="blue",
        )
    )

    if variant is None:
        print_warning("Форма не підтримується, розрахунок неможливий.")
        return

    console.print("[muted]Категорії:[/muted] " + _categories_help(variant))


@app.command()
def records(
    statement: FileArgument,
    variant: VariantOption = None,
    category: CategoryOption = None,
    reference_date: ReferenceDateOption = None,
) -> None:
    """Показує рядки доходів з відомості (з фільтром за категоріями)."""
    try:
        active, analysis = _load(statement, variant, category, reference_date)
    except DRFOAnalyzerError as e:
        _handle_error(e)
        return

    result = analysis.result
    totals = result.visible_totals

    table = Table(show_header=True, header_style="bold", show_footer=True)
    table.add_column("Дата")
    table.add_column("Компанія", max_width=40)
    table.add_column("Доходу нараховано", justify="right")
    table.add_column(
        "Доходу виплачено", justify="right", footer=format_currency(totals.income_paid)
    )
    table.add_column("ПДФО нараховано", justify="right")
    table.add_column(
        "ПДФО перераховано",
        justify="right",
        footer=format_currency(totals.tax_withheld_paid),
    )
    table.add_column(
        "Воєнний збір", justify="right", footer=format_currency(totals.military_tax)
    )
    table.add_column("Ознака доходу")

    for item in result.records:
        rec = item.record
        table.add_row(
            rec.date,
            rec.company,
            format_currency(rec.income_accrued),
            format_currency(rec.income_paid),
            format_currency(rec.tax_withheld_accrued),
            format_currency(rec.tax_withheld_paid),
            format_currency(rec.military_tax),
            format_tax_code(rec.tax_code, CATEGORY_LABELS[item.category]),
        )

    console.print()
    if result.category_filter:
        labels = ", ".join(CATEGORY_LABELS[c] for c in result.category_filter)
        console.print(f"[muted]Фільтр:[/muted] {labels}")
    console.print(table)
    console.print(
        f"[muted]Показано {totals.count} з {result.document_totals.count} рядків "
        f"({active.code})[/muted]"
    )
    _print_advisories(result)


@app.command()
def summary(
    statement: FileArgument,
    variant: VariantOption = None,
    category: CategoryOption = None,
    reference_date: ReferenceDateOption = None,
) -> None:
    """Розраховує суми для рядків декларації."""
    try:
        active, analysis = _load(statement, variant, category, reference_date)
    except DRFOAnalyzerError as e:
        _handle_error(e)
        return

    result = analysis.result

    lines_table = Table(show_header=True, header_style="bold", title="Рядки декларації")
    lines_table.add_column("Рядок", style="cyan")
    lines_table.add_column("Назва")
    lines_table.add_column("Дохід нарахований", justify="right", style="currency")
    lines_table.add_column("Дохід виплачений", justify="right", style="currency")
    lines_table.add_column("ПДФО", justify="right")
    lines_table.add_column("Воєнний збір", justify="right")

    for line_total in result.declaration.lines.values():
        t = line_total.totals
        lines_table.add_row(
            line_total.line,
            line_total.label,
            format_currency(t.income_accrued),
            format_currency(t.income_paid),
            format_currency(t.tax_withheld_paid),
            format_currency(t.military_tax),
        )

    cat_table = Table(show_header=True, header_style="bold", title="За категоріями")
    cat_table.add_column("Категорія")
    cat_table.add_column("Рядків", justify="right")
    cat_table.add_column("Дохід виплачений", justify="right", style="currency")
    cat_table.add_column("ПДФО", justify="right")
    cat_table.add_column("Воєнний збір", justify="right")

    for cat, t in result.category_totals.items():
        cat_table.add_row(
            CATEGORY_LABELS[cat],
            str(t.count),
            format_currency(t.income_paid),
            format_currency(t.tax_withheld_paid),
            format_currency(t.military_tax),
        )

    doc = result.document_totals
    console.print()
    console.print(lines_table)
    console.print()
    console.print(cat_table)
    console.print()
    console.print(
        Panel.fit(
            f"[header]Форма:[/header] {active.code}\n"
            f"[header]Період:[/header] "
            f"{analysis.document.period.display if analysis.document.period else '-'}\n"
            f"[header]Рядків:[/header] {doc.count}\n"
            f"[header]Дохід нарахований:[/header] {format_currency(doc.income_accrued)}\n"
            f"[header]Дохід виплачений:[/header] {format_currency(doc.income_paid)}\n"
            f"[header]ПДФО перераховано:[/header] {format_currency(doc.tax_withheld_paid)}\n"
            f"[header]Воєнний збір:[/header] {format_currency(doc.military_tax)}",
            title="Відомість загалом",
            border_style="cyan",
        )
    )
    if result.category_filter:
        vis = result.visible_totals
        console.print(
            f"[muted]За фільтром ({vis.count} рядків): "
            f"{format_currency(vis.income_paid)}[/muted]"
        )
    _print_advisories(result)


@app.command()
def export(
    statement: FileArgument,
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Файл для збереження результату (JSON)"),
    ],
    variant: VariantOption = None,
    category: CategoryOption = None,
    reference_date: ReferenceDateOption = None,
) -> None:
    """Зберігає результат розрахунку у JSON."""
    try:
        _, analysis = _load(statement, variant, category, reference_date)
    except DRFOAnalyzerError as e:
        _handle_error(e)
        return

    try:
        output.write_text(analysis.result.model_dump_json(indent=2), encoding="utf-8")
    except OSError as e:
        print_error(f"Не вдалося записати файл: {e}")
        raise typer.Exit(1)

    print_success(f"Результат збережено: {output}")


if __name__ == "__main__":
    app()
