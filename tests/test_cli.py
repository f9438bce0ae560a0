from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner
from rich.console import Console

from page_setup import cli as cli_module
from page_setup.cli import cli
from page_setup.geometry import Orientation
from page_setup.pdf import read_page_geometry
from page_setup.units import Unit


@pytest.fixture()
def runner(monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    monkeypatch.setattr(cli_module, "console", Console(width=200))
    return CliRunner()


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "1.0.0" in result.output


def test_sizes(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["sizes"])
    assert result.exit_code == 0
    assert "Letter (ANSI A)" in result.output
    assert "Arch E1" in result.output


def test_sizes_by_category_with_unit(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["sizes", "--category", "ISO A", "--unit", "in"])
    assert result.exit_code == 0
    assert "210 x 297 mm" in result.output
    assert "8.27 x 11.69" in result.output
    assert "Legal" not in result.output


def test_sizes_unknown_category(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["sizes", "--category", "Napkins"])
    assert result.exit_code == 1
    assert "No paper sizes" in result.output


def test_convert(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["convert", "8.5", "--from", "in", "--to", "mm"])
    assert result.exit_code == 0
    assert "8.5 in = 215.9 mm" in result.output


def test_convert_unknown_unit(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["convert", "1", "--from", "cubit", "--to", "mm"])
    assert result.exit_code == 2
    assert "Unknown measurement unit" in result.output


def test_check_any_printer(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["check", "-p", "Letter", "-m", "0.5", "-u", "in"])
    assert result.exit_code == 0
    assert "8.5 x 11 in" in result.output
    assert "7.5 x 10 in" in result.output
    assert "Accepted" in result.output


def test_check_landscape_paper(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["check", "-p", "A4", "-o", "landscape", "-u", "mm"])
    assert result.exit_code == 0
    assert "Landscape" in result.output
    assert "297 x 210 mm" in result.output


def test_check_margins_too_large(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["check", "-w", "8.5", "-h", "11", "-m", "5,0,5,0", "-u", "in"])
    assert result.exit_code == 1
    assert "Margins are too large" in result.output


def test_check_requires_size(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["check", "-w", "100"])
    assert result.exit_code == 2


def test_check_rejects_bad_margins(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["check", "-p", "A4", "-m", "1,2"])
    assert result.exit_code == 2


def test_check_unknown_paper(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["check", "-p", "Napkin"])
    assert result.exit_code == 2
    assert "Unknown paper size" in result.output


def test_check_against_printer(runner: CliRunner, profile_file: Path) -> None:
    base = ["check", "-u", "mm", "--printer", "Office Laser", "--profiles", str(profile_file)]

    accepted = runner.invoke(cli, base + ["-p", "A4", "-m", "10"])
    assert accepted.exit_code == 0
    assert "Accepted by Office Laser" in accepted.output

    too_big = runner.invoke(cli, base + ["-p", "A3", "-m", "10"])
    assert too_big.exit_code == 1
    assert 'outside of the range suitable for the printer "Office Laser"' in too_big.output

    margins = runner.invoke(cli, base + ["-p", "A4", "-m", "2"])
    assert margins.exit_code == 1
    assert "outside of the printable area" in margins.output


@pytest.mark.parametrize("unit, margin", [("in", "0.5"), ("mm", "12.7"), ("pt", "36")])
def test_check_paper_keeps_catalog_size(runner: CliRunner, profile_file: Path, unit: str, margin: str) -> None:
    result = runner.invoke(
        cli,
        ["check", "-p", "A4", "-u", unit, "-m", margin, "--printer", "Office Laser", "--profiles", str(profile_file)],
    )
    assert result.exit_code == 0
    assert "Accepted by Office Laser" in result.output


def test_template_paper_in_inches_keeps_sheet(runner: CliRunner, tmp_path: Path) -> None:
    output = tmp_path / "a4.pdf"
    result = runner.invoke(cli, ["template", str(output), "-p", "A4", "-m", "0.5", "-u", "in"])
    assert result.exit_code == 0

    geometry = read_page_geometry(output)
    assert geometry.width == pytest.approx(595.2756, abs=0.01)
    assert geometry.height == pytest.approx(841.8898, abs=0.01)


def test_check_adjust(runner: CliRunner, profile_file: Path) -> None:
    result = runner.invoke(
        cli,
        ["check", "-p", "A4", "-m", "2", "-u", "mm", "--printer", "Office Laser", "--profiles", str(profile_file), "--adjust"],
    )
    assert result.exit_code == 0
    assert "Adjusted by Office Laser" in result.output
    assert "left, top, right, bottom" in result.output
    assert "5 / 5 / 5 / 5 mm" in result.output


def test_check_unknown_printer(runner: CliRunner, profile_file: Path) -> None:
    result = runner.invoke(cli, ["check", "-p", "A4", "--printer", "Nope", "--profiles", str(profile_file)])
    assert result.exit_code == 1
    assert 'Unknown printer: "Nope"' in result.output


def test_check_printer_without_profiles(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["check", "-p", "A4", "--printer", "Office Laser"])
    assert result.exit_code == 1
    assert "No printer profiles" in result.output


def test_profiles_from_environment(runner: CliRunner, profile_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PAGE_SETUP_PROFILES", str(profile_file))
    result = runner.invoke(cli, ["printers"])
    assert result.exit_code == 0
    assert "Office Laser" in result.output
    assert "(default)" in result.output
    assert "Label Printer" in result.output


def test_defaults(runner: CliRunner, profile_file: Path) -> None:
    result = runner.invoke(cli, ["defaults", "--printer", "Office Laser", "--profiles", str(profile_file), "-u", "mm"])
    assert result.exit_code == 0
    assert "210 x 297 mm" in result.output
    assert "5 / 5 / 5 / 5 mm" in result.output


def test_defaults_unit_from_environment(runner: CliRunner, profile_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PAGE_SETUP_UNIT", "in")
    result = runner.invoke(cli, ["defaults", "--printer", "Label Printer", "--profiles", str(profile_file)])
    assert result.exit_code == 0
    assert "4 x 6 in" in result.output


def test_template_and_inspect(runner: CliRunner, tmp_path: Path) -> None:
    output = tmp_path / "out" / "a4.pdf"
    result = runner.invoke(cli, ["template", str(output), "-p", "A4", "-o", "landscape", "-m", "10", "-u", "mm", "-t", "Test"])
    assert result.exit_code == 0
    assert "Successfully created" in result.output

    geometry = read_page_geometry(output)
    assert geometry.orientation is Orientation.LANDSCAPE
    assert geometry.to_fields(Unit.MILLIMETER).width == 297.0

    inspected = runner.invoke(cli, ["inspect", str(output), "-u", "mm"])
    assert inspected.exit_code == 0
    assert "Landscape" in inspected.output
    assert "A4" in inspected.output
    assert "ISO A" in inspected.output


def test_template_rejected_by_printer(runner: CliRunner, tmp_path: Path, profile_file: Path) -> None:
    output = tmp_path / "a3.pdf"
    result = runner.invoke(
        cli,
        ["template", str(output), "-p", "A3", "--printer", "Office Laser", "--profiles", str(profile_file)],
    )
    assert result.exit_code == 1
    assert not output.exists()


def test_inspect_custom_size_and_bad_page(runner: CliRunner, plain_pdf: Path) -> None:
    result = runner.invoke(cli, ["inspect", str(plain_pdf), "--page", "2", "-u", "pt"])
    assert result.exit_code == 0
    assert "842 x 595 pt" in result.output

    result = runner.invoke(cli, ["inspect", str(plain_pdf), "--page", "9"])
    assert result.exit_code == 1
    assert "out of range" in result.output


def test_verbose_flag(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--verbose", "convert", "1", "--from", "in", "--to", "pt"])
    assert result.exit_code == 0
    assert "72 pt" in result.output
