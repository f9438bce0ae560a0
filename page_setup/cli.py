"""
Command-line interface for Page Setup.
"""

import logging
import os
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from page_setup.backends.profile_backend import ProfileCapabilityProvider
from page_setup.catalog import PaperCatalog
from page_setup.config import load_settings
from page_setup.exceptions import PageSetupError
from page_setup.geometry import Orientation, PageGeometry
from page_setup.pdf import read_page_geometry, write_page_template
from page_setup.types import Accepted, Adjusted, Rejected
from page_setup.units import Unit, convert, format_value
from page_setup.validation import PrinterValidator

console = Console()

ORIENTATIONS = [orientation.value for orientation in Orientation]


def _unit_option(ctx, param, value):
    if value is None:
        return None
    try:
        return Unit.parse(value)
    except PageSetupError as e:
        raise click.BadParameter(str(e)) from e


def _parse_margins(value):
    """Parse "L,T,R,B" or a single value applied to all four sides."""
    parts = [part.strip() for part in value.split(",")]
    if len(parts) == 1:
        parts = parts * 4
    if len(parts) != 4:
        raise click.BadParameter("Expected one value or four comma separated values (left,top,right,bottom)")
    try:
        return tuple(float(part) for part in parts)
    except ValueError as e:
        raise click.BadParameter(f"Invalid margin value: {value}") from e


def _resolve_unit(unit):
    return unit or load_settings().unit


def _load_validator(profiles):
    path = profiles or load_settings().profiles_path
    if path is None:
        console.print("[bold red]✗ Error:[/bold red] No printer profiles given. Use --profiles or set PAGE_SETUP_PROFILES.")
        sys.exit(1)
    provider = ProfileCapabilityProvider.load(path)
    return PrinterValidator(provider, tolerance=load_settings().tolerance)


def _build_geometry(catalog, paper, width, height, unit, orientation, margins):
    """Create a geometry the way the page setup fields would."""
    if paper:
        entry = catalog.find(paper)
        if entry is None:
            raise click.BadParameter(f"Unknown paper size: {paper}", param_hint="--paper")
        sized = PageGeometry(entry.size).with_paper(entry)
        if orientation:
            sized = sized.with_orientation(orientation)
        # Unrounded, so the sheet stays the catalog size in points.
        width, height = sized.width / unit.scale, sized.height / unit.scale
        orientation = sized.orientation
    elif width is None or height is None:
        raise click.UsageError("Give either --paper or both --width and --height.")

    return PageGeometry.from_fields(width, height, orientation or Orientation.PORTRAIT, margins, unit)


def _geometry_table(geometry, unit, title="Page Geometry"):
    fields = geometry.to_fields(unit)
    sheet = geometry.physical()

    def fmt(points):
        return format_value(unit.from_canonical(points), unit)

    table = Table(title=title, show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Orientation", geometry.orientation.label)
    table.add_row(
        "Size",
        f"{format_value(fields.width, unit)} x {format_value(fields.height, unit)} {unit.abbr}",
    )
    table.add_row(
        "Margins (L/T/R/B)",
        " / ".join(format_value(value, unit) for value in fields.margins) + f" {unit.abbr}",
    )
    table.add_row(
        "Imageable Area",
        f"{fmt(geometry.imageable_width)} x {fmt(geometry.imageable_height)} {unit.abbr}",
    )
    table.add_row("Sheet", f"{fmt(sheet.width)} x {fmt(sheet.height)} {unit.abbr}")
    return table


def geometry_options(func):
    """Options shared by every command that builds a page geometry."""
    options = [
        click.option('--paper', '-p', help='Named paper size from the catalog (e.g. "A4")', type=str),
        click.option('--width', '-w', help='Page width in --unit', type=float),
        click.option('--height', '-h', help='Page height in --unit', type=float),
        click.option(
            '--orientation', '-o',
            type=click.Choice(ORIENTATIONS, case_sensitive=False),
            help='Page orientation',
        ),
        click.option(
            '--margins', '-m',
            default='0',
            help="Margins as 'left,top,right,bottom' or one value for all sides",
            type=str,
        ),
        click.option('--unit', '-u', callback=_unit_option, help='Measurement unit (in, mm, pt)', type=str),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.version_option(version="1.0.0")
@click.option('--verbose', '-v', is_flag=True, help='Show debug logging')
def cli(verbose):
    """
    Page Setup CLI - Describe, check and export printable page geometries.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


@cli.command(name="sizes")
@click.option('--category', '-c', help='Only list one category', type=str)
@click.option('--unit', '-u', callback=_unit_option, help='Also show sizes in this unit', type=str)
def list_sizes(category, unit):
    """
    List the named paper sizes.

    Examples:

        page-setup sizes

        page-setup sizes -c "ISO A" -u in
    """
    catalog = PaperCatalog()
    entries = catalog.by_category(category) if category else list(catalog.all())
    if not entries:
        console.print(f"[bold yellow]⚠ No paper sizes in category {category!r}[/bold yellow]")
        console.print(f"[dim]Categories: {', '.join(catalog.categories())}[/dim]")
        sys.exit(1)

    table = Table(title="Paper Sizes")
    table.add_column("Category", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Size")
    if unit:
        table.add_column(f"Size ({unit.abbr})")

    for entry in entries:
        row = [entry.category, entry.name, entry.dimension_label]
        if unit:
            width = format_value(unit.from_canonical(entry.size.width), unit)
            height = format_value(unit.from_canonical(entry.size.height), unit)
            row.append(f"{width} x {height}")
        table.add_row(*row)

    console.print(table)


@cli.command(name="convert")
@click.argument('value', type=float)
@click.option('--from', 'from_unit', required=True, callback=_unit_option, help='Unit of VALUE', type=str)
@click.option('--to', 'to_unit', required=True, callback=_unit_option, help='Target unit', type=str)
def convert_value(value, from_unit, to_unit):
    """
    Convert a length between units.

    Example:

        page-setup convert 8.5 --from in --to mm
    """
    result = convert(value, from_unit, to_unit)
    console.print(
        f"{format_value(value, from_unit)} {from_unit.abbr} = "
        f"[bold green]{format_value(result, to_unit)} {to_unit.abbr}[/bold green]"
    )


@cli.command(name="check")
@geometry_options
@click.option('--printer', help='Printer to validate against (default: any printer)', type=str)
@click.option('--profiles', help='Printer profile file', type=click.Path(exists=True))
@click.option('--adjust', is_flag=True, help="Show the printer's nearest supported geometry")
def check(paper, width, height, orientation, margins, unit, printer, profiles, adjust):
    """
    Build a page geometry and validate it.

    Examples:

        page-setup check -p Letter -m 0.5 -u in

        page-setup check -w 210 -h 297 -m 10 --printer "Office Laser" --profiles printers.json
    """
    try:
        unit = _resolve_unit(unit)
        catalog = PaperCatalog()
        geometry = _build_geometry(catalog, paper, width, height, unit, orientation, _parse_margins(margins))
        if isinstance(geometry, Rejected):
            console.print(f"\n[bold red]✗ Rejected:[/bold red] {geometry.message}")
            sys.exit(1)

        console.print(_geometry_table(geometry, unit))

        validator = _load_validator(profiles) if printer else None
        if validator is None:
            console.print("\n[bold green]✓ Accepted[/bold green] [dim](any printer)[/dim]")
            return

        if adjust:
            outcome = validator.adjust(geometry, printer)
            if isinstance(outcome, Adjusted):
                console.print(f"\n[bold yellow]⚠ Adjusted by {printer}:[/bold yellow] {', '.join(outcome.changed_fields)}")
                console.print(_geometry_table(outcome.geometry, unit, title="Adjusted Geometry"))
                return
            if isinstance(outcome, Rejected):
                console.print(f"\n[bold red]✗ Rejected:[/bold red] {outcome.message}")
                sys.exit(1)
            console.print(f"\n[bold green]✓ Accepted by {printer}[/bold green]")
            return

        outcome = validator.validate(geometry, printer)
        if isinstance(outcome, Accepted):
            console.print(f"\n[bold green]✓ Accepted by {printer}[/bold green]")
        else:
            console.print(f"\n[bold red]✗ Rejected:[/bold red] {outcome.message}")
            sys.exit(1)

    except PageSetupError as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


@cli.command(name="printers")
@click.option('--profiles', help='Printer profile file', type=click.Path(exists=True))
def list_printers(profiles):
    """
    List the printers of a profile file.

    Example:

        page-setup printers --profiles printers.json
    """
    try:
        validator = _load_validator(profiles)
        default = getattr(validator.provider, "default_printer", None)

        table = Table(title="Printers")
        table.add_column("#", style="cyan", width=4)
        table.add_column("Printer", style="green")
        for idx, name in enumerate(validator.printers(), 1):
            label = f"{name} [dim](default)[/dim]" if name == default else name
            table.add_row(str(idx), label)
        console.print(table)

    except PageSetupError as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


@cli.command(name="defaults")
@click.option('--printer', help='Printer to query (default: the default printer)', type=str)
@click.option('--profiles', help='Printer profile file', type=click.Path(exists=True))
@click.option('--unit', '-u', callback=_unit_option, help='Measurement unit (in, mm, pt)', type=str)
def defaults(printer, profiles, unit):
    """
    Show a printer's default page with its minimum margins.

    Example:

        page-setup defaults --printer "Office Laser" --profiles printers.json -u mm
    """
    try:
        unit = _resolve_unit(unit)
        validator = _load_validator(profiles)
        geometry = validator.defaults_for(printer)
        console.print(_geometry_table(geometry, unit, title=f"Defaults: {printer or 'default printer'}"))

    except PageSetupError as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


@cli.command(name="template")
@click.argument('output', type=click.Path())
@geometry_options
@click.option('--printer', help='Printer to validate against first', type=str)
@click.option('--profiles', help='Printer profile file', type=click.Path(exists=True))
@click.option('--title', '-t', help='Document title', type=str)
def template(output, paper, width, height, orientation, margins, unit, printer, profiles, title):
    """
    Write a blank PDF page carrying the geometry in its page boxes.

    Example:

        page-setup template letter.pdf -p Letter -m 0.5 -u in
    """
    try:
        unit = _resolve_unit(unit)
        geometry = _build_geometry(PaperCatalog(), paper, width, height, unit, orientation, _parse_margins(margins))
        if isinstance(geometry, Rejected):
            console.print(f"\n[bold red]✗ Rejected:[/bold red] {geometry.message}")
            sys.exit(1)

        if printer:
            outcome = _load_validator(profiles).validate(geometry, printer)
            if isinstance(outcome, Rejected):
                console.print(f"\n[bold red]✗ Rejected:[/bold red] {outcome.message}")
                sys.exit(1)

        path = write_page_template(geometry, output, title=title)
        console.print(f"\n[bold green]✓ Successfully created:[/bold green] {path}")
        console.print(f"[dim]Output directory: {os.path.abspath(os.path.dirname(str(path)) or '.')}[/dim]")

    except PageSetupError as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


@cli.command(name="inspect")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.option('--page', 'page_number', default=1, help='Page number (1-indexed)', type=int)
@click.option('--unit', '-u', callback=_unit_option, help='Measurement unit (in, mm, pt)', type=str)
def inspect(input_pdf, page_number, unit):
    """
    Show the page geometry of a PDF page.

    Example:

        page-setup inspect document.pdf --page 2 -u in
    """
    try:
        unit = _resolve_unit(unit)
        geometry = read_page_geometry(input_pdf, page_number)
        console.print(_geometry_table(geometry, unit, title=f"{os.path.basename(input_pdf)} - Page {page_number}"))

        entry = PaperCatalog().match(geometry.size)
        if entry is not None:
            console.print(f"[bold]Paper:[/bold] {entry.name} [dim]({entry.category}, {entry.dimension_label})[/dim]")
        else:
            console.print("[bold]Paper:[/bold] [dim]custom size[/dim]")

    except PageSetupError as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


if __name__ == '__main__':
    cli()
