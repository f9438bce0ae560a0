from __future__ import annotations

import pytest

from page_setup.catalog import PaperCatalog
from page_setup.exceptions import InvalidGeometryError, UnknownOrientationError
from page_setup.geometry import (
    Margins,
    Orientation,
    PageGeometry,
    PageSize,
    PhysicalPage,
    Rect,
    set_orientation,
    to_fields,
)
from page_setup.types import (
    MARGINS_EXCEED_PAGE_AREA,
    NEGATIVE_DIMENSIONS,
    Rejected,
    RejectionKind,
)
from page_setup.units import Unit

MARGINS = Margins(left=10, top=20, right=30, bottom=40)


def _geometry(orientation: Orientation) -> PageGeometry:
    return PageGeometry(PageSize(200, 300), orientation, MARGINS)


def test_portrait_physical_page() -> None:
    page = _geometry(Orientation.PORTRAIT).physical()
    assert page == PhysicalPage(Orientation.PORTRAIT, 200, 300, Rect(10, 20, 160, 240))


def test_landscape_physical_page() -> None:
    page = _geometry(Orientation.LANDSCAPE).physical()
    assert page == PhysicalPage(Orientation.LANDSCAPE, 300, 200, Rect(20, 30, 240, 160))


def test_reverse_landscape_physical_page() -> None:
    page = _geometry(Orientation.REVERSE_LANDSCAPE).physical()
    assert page == PhysicalPage(Orientation.REVERSE_LANDSCAPE, 300, 200, Rect(40, 10, 240, 160))


@pytest.mark.parametrize("orientation", list(Orientation))
def test_from_physical_inverts_physical(orientation: Orientation) -> None:
    geometry = _geometry(orientation)
    assert PageGeometry.from_physical(geometry.physical()) == geometry


def test_from_physical_rejects_area_outside_sheet() -> None:
    page = PhysicalPage(Orientation.PORTRAIT, 100, 100, Rect(10, 10, 100, 50))
    with pytest.raises(InvalidGeometryError):
        PageGeometry.from_physical(page)


def test_orientation_swap_round_trip() -> None:
    portrait = PageGeometry.from_fields(8.5, 11, Orientation.PORTRAIT, (0, 0, 0, 0), Unit.INCH)

    landscape = set_orientation(portrait, Orientation.LANDSCAPE)
    assert (landscape.width, landscape.height) == (792, 612)

    back = set_orientation(landscape, Orientation.PORTRAIT)
    assert (back.width, back.height) == (612, 792)
    assert back == portrait


def test_landscape_to_reverse_landscape_keeps_size() -> None:
    landscape = PageGeometry(PageSize(792, 612), Orientation.LANDSCAPE)

    reverse = landscape.with_orientation("reverse-landscape")
    assert reverse.orientation is Orientation.REVERSE_LANDSCAPE
    assert (reverse.width, reverse.height) == (792, 612)

    again = reverse.with_orientation(Orientation.LANDSCAPE)
    assert (again.width, again.height) == (792, 612)


def test_set_orientation_keeps_margins() -> None:
    geometry = _geometry(Orientation.PORTRAIT)
    assert geometry.with_orientation(Orientation.LANDSCAPE).margins == MARGINS
    assert geometry.with_orientation(Orientation.PORTRAIT) is geometry


def test_from_fields_builds_points() -> None:
    geometry = PageGeometry.from_fields(8.5, 11, "portrait", (1, 1, 1, 1), "in")
    assert isinstance(geometry, PageGeometry)
    assert geometry.size == PageSize(612, 792)
    assert geometry.margins == Margins.uniform(72)
    assert geometry.imageable_width == 468.0
    assert geometry.imageable_height == 648.0


def test_from_fields_rejects_margins_wider_than_page() -> None:
    outcome = PageGeometry.from_fields(8.5, 11, Orientation.PORTRAIT, (5, 0, 5, 0), Unit.INCH)
    assert isinstance(outcome, Rejected)
    assert outcome.reason == MARGINS_EXCEED_PAGE_AREA
    assert outcome.kind is RejectionKind.INVALID_GEOMETRY
    assert outcome.message == "Margins are too large, no remaining printable area"


def test_from_fields_rejects_exact_fit() -> None:
    outcome = PageGeometry.from_fields(100, 100, Orientation.PORTRAIT, (50, 0, 50, 0), Unit.POINT)
    assert isinstance(outcome, Rejected)


def test_from_fields_rejects_negative_values() -> None:
    outcome = PageGeometry.from_fields(-1, 11, Orientation.PORTRAIT, (0, 0, 0, 0), Unit.INCH)
    assert outcome == Rejected(NEGATIVE_DIMENSIONS, RejectionKind.INVALID_GEOMETRY)

    outcome = PageGeometry.from_fields(8.5, 11, Orientation.PORTRAIT, (0, -0.5, 0, 0), Unit.INCH)
    assert outcome.reason == NEGATIVE_DIMENSIONS
    assert not outcome.ok


def test_from_fields_requires_four_margins() -> None:
    with pytest.raises(InvalidGeometryError):
        PageGeometry.from_fields(8.5, 11, Orientation.PORTRAIT, (1, 1, 1), Unit.INCH)


def test_to_fields_rounds_per_unit() -> None:
    geometry = PageGeometry.from_fields(210, 297, Orientation.PORTRAIT, (25.4, 25.4, 25.4, 25.4), Unit.MILLIMETER)

    inches = to_fields(geometry, Unit.INCH)
    assert (inches.width, inches.height) == (8.27, 11.69)
    assert inches.margins == (1.0, 1.0, 1.0, 1.0)
    assert inches.orientation is Orientation.PORTRAIT

    millimeters = geometry.to_fields("mm")
    assert (millimeters.width, millimeters.height) == (210.0, 297.0)
    assert millimeters.left == 25.4

    points = geometry.to_fields(Unit.POINT)
    assert (points.width, points.height) == (595.0, 842.0)


FIELD_VALUES = {
    Unit.INCH: (8.5, 11, (0.25, 0.5, 0.75, 1.0)),
    Unit.MILLIMETER: (210, 297, (10, 12.5, 15, 20.3)),
    Unit.POINT: (612, 792, (18, 36, 54, 72)),
}


@pytest.mark.parametrize("orientation", list(Orientation))
@pytest.mark.parametrize("unit", list(Unit))
def test_to_fields_recovers_from_fields(unit: Unit, orientation: Orientation) -> None:
    width, height, margins = FIELD_VALUES[unit]

    geometry = PageGeometry.from_fields(width, height, orientation, margins, unit)
    fields = geometry.to_fields(unit)

    assert fields.unit is unit
    assert fields.orientation is orientation
    assert fields.width == pytest.approx(width, abs=unit.granularity)
    assert fields.height == pytest.approx(height, abs=unit.granularity)
    assert fields.margins == pytest.approx(margins, abs=unit.granularity)


def test_values_are_validated() -> None:
    with pytest.raises(InvalidGeometryError):
        PageSize(-1, 10)
    with pytest.raises(InvalidGeometryError):
        Margins(left=float("nan"))
    with pytest.raises(UnknownOrientationError):
        PageGeometry(PageSize(10, 10), orientation="portrait")


def test_non_printable_geometry_can_exist() -> None:
    geometry = PageGeometry(PageSize(100, 100), margins=Margins.uniform(60))
    assert not geometry.is_printable
    assert geometry.imageable_width == -20


def test_with_paper_sets_orientation_from_shape(catalog: PaperCatalog) -> None:
    base = PageGeometry(PageSize(612, 792), margins=Margins.uniform(18))

    envelope = base.with_paper(catalog.find("10 (Common)"))
    assert envelope.orientation is Orientation.LANDSCAPE
    assert envelope.width > envelope.height
    assert envelope.margins == Margins.uniform(18)

    a4 = envelope.with_paper(catalog.find("A4"))
    assert a4.orientation is Orientation.PORTRAIT
    assert a4.width == pytest.approx(595.28, abs=0.01)

    square = base.with_paper(PageSize(300, 300))
    assert square.orientation is Orientation.PORTRAIT

    with pytest.raises(TypeError):
        base.with_paper("A4")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("portrait", Orientation.PORTRAIT),
        ("LANDSCAPE", Orientation.LANDSCAPE),
        ("reverse_landscape", Orientation.REVERSE_LANDSCAPE),
        ("Reverse Landscape", Orientation.REVERSE_LANDSCAPE),
    ],
)
def test_parse_orientation(text: str, expected: Orientation) -> None:
    assert Orientation.parse(text) is expected


def test_parse_unknown_orientation() -> None:
    with pytest.raises(UnknownOrientationError):
        Orientation.parse("sideways")
    assert Orientation.REVERSE_LANDSCAPE.label == "Reverse Landscape"
