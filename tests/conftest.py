from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, List, Optional
import sys

import pytest
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from page_setup.catalog import PaperCatalog  # noqa: E402
from page_setup.geometry import Margins, Orientation, PageGeometry, PageSize  # noqa: E402


class FakeProvider:
    """Capability provider that records calls and answers from a callback."""

    def __init__(
        self,
        respond: Optional[Callable[[PageGeometry], PageGeometry]] = None,
        *,
        error: Optional[Exception] = None,
        printers: tuple = ("Fake Printer",),
        default: Optional[PageGeometry] = None,
    ) -> None:
        self.respond = respond
        self.error = error
        self.printers = printers
        self.default = default or PageGeometry(PageSize(612, 792), margins=Margins.uniform(36))
        self.calls: List[tuple] = []

    def list_printers(self) -> List[str]:
        return list(self.printers)

    def default_page(self, printer=None) -> PageGeometry:
        self.calls.append(("default_page", printer))
        if self.error is not None:
            raise self.error
        return self.default

    def validate_page(self, printer, geometry: PageGeometry) -> PageGeometry:
        self.calls.append(("validate_page", printer, geometry))
        if self.error is not None:
            raise self.error
        if self.respond is None:
            return geometry
        return self.respond(geometry)


@pytest.fixture()
def fake_provider_factory() -> Callable[..., FakeProvider]:
    return FakeProvider


@pytest.fixture()
def letter() -> PageGeometry:
    return PageGeometry(PageSize(612, 792), Orientation.PORTRAIT, Margins.uniform(72))


@pytest.fixture()
def catalog() -> PaperCatalog:
    return PaperCatalog()


@pytest.fixture()
def profile_data() -> dict:
    return {
        "version": 1,
        "default": "Office Laser",
        "printers": [
            {
                "name": "Office Laser",
                "unit": "mm",
                "paper": "A4",
                "width_range": [76, 216],
                "height_range": [127, 356],
                "min_margins": {"left": 5, "top": 5, "right": 5, "bottom": 5},
            },
            {
                "name": "Label Printer",
                "unit": "in",
                "paper": [4, 6],
                "width_range": [1, 4.1],
                "height_range": [1, 12],
                "orientations": ["portrait"],
            },
        ],
    }


@pytest.fixture()
def profile_file(tmp_path: Path, profile_data: dict) -> Path:
    path = tmp_path / "printers.json"
    path.write_text(json.dumps(profile_data), encoding="utf-8")
    return path


@pytest.fixture()
def plain_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "plain.pdf"
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    writer.add_blank_page(width=842, height=595)
    writer.add_metadata({"/Producer": "page-setup-tests", "/Title": "Plain"})
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PAGE_SETUP_UNIT", "PAGE_SETUP_PROFILES", "PAGE_SETUP_TOLERANCE"):
        monkeypatch.delenv(name, raising=False)
