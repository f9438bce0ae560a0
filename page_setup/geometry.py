"""Page geometry model.

A :class:`PageGeometry` is what a user edits: a width and height as seen
on screen, an orientation, and four margins relative to that width and
height. :meth:`PageGeometry.physical` maps it onto the sheet as the
printer sees it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Sequence, Union

from .exceptions import InvalidGeometryError, UnknownOrientationError
from .types import MARGINS_EXCEED_PAGE_AREA, NEGATIVE_DIMENSIONS, Rejected, RejectionKind
from .units import Unit

# Inverse transforms can leave values like -1e-13 behind.
_SNAP_EPSILON = 1e-9


def _snap(value: float) -> float:
    if -_SNAP_EPSILON < value < 0:
        return 0.0
    return value


def _check_non_negative(**values: float) -> None:
    for name, value in values.items():
        if not math.isfinite(value) or value < 0:
            raise InvalidGeometryError(f"{name} must be a non-negative number: {value}")


class Orientation(Enum):
    """Rotation of a page relative to portrait."""

    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"  # portrait turned 90 degrees counter-clockwise
    REVERSE_LANDSCAPE = "reverse-landscape"  # portrait turned 90 degrees clockwise

    @property
    def is_portrait(self) -> bool:
        return self is Orientation.PORTRAIT

    @property
    def label(self) -> str:
        return self.value.replace("-", " ").title()

    @classmethod
    def parse(cls, value: Union["Orientation", str]) -> "Orientation":
        """Resolve a member, member name or value to an :class:`Orientation`."""

        if isinstance(value, Orientation):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("_", "-").replace(" ", "-")
            for orientation in cls:
                if key == orientation.value:
                    return orientation
        raise UnknownOrientationError(f"Unknown page orientation: {value!r}")


@dataclass(frozen=True)
class PageSize:
    """Width and height of a page in points."""

    width: float
    height: float

    def __post_init__(self) -> None:
        _check_non_negative(width=self.width, height=self.height)

    @classmethod
    def from_unit(cls, width: float, height: float, unit: Unit) -> "PageSize":
        return cls(unit.to_canonical(width), unit.to_canonical(height))

    @property
    def is_landscape(self) -> bool:
        """True when the page is wider than it is tall."""
        return self.width > self.height

    def rotated(self) -> "PageSize":
        return PageSize(self.height, self.width)


@dataclass(frozen=True)
class Margins:
    """Non-printable borders in points, relative to the user-facing page."""

    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    def __post_init__(self) -> None:
        _check_non_negative(left=self.left, top=self.top, right=self.right, bottom=self.bottom)

    @classmethod
    def uniform(cls, value: float) -> "Margins":
        return cls(value, value, value, value)

    @classmethod
    def zero(cls) -> "Margins":
        return cls()

    @classmethod
    def from_unit(cls, left: float, top: float, right: float, bottom: float, unit: Unit) -> "Margins":
        return cls(
            unit.to_canonical(left),
            unit.to_canonical(top),
            unit.to_canonical(right),
            unit.to_canonical(bottom),
        )

    @property
    def horizontal(self) -> float:
        return self.left + self.right

    @property
    def vertical(self) -> float:
        return self.top + self.bottom


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle with a top-left origin, in points."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class PhysicalPage:
    """
    A page as the printing device sees it.

    Attributes:
        orientation: Orientation the content is placed with
        width: Width of the unrotated sheet
        height: Height of the unrotated sheet
        imageable: Printable rectangle on the unrotated sheet
    """

    orientation: Orientation
    width: float
    height: float
    imageable: Rect


@dataclass(frozen=True)
class FieldValues:
    """Editable fields of a geometry, rounded for display in ``unit``."""

    width: float
    height: float
    left: float
    top: float
    right: float
    bottom: float
    unit: Unit
    orientation: Orientation

    @property
    def margins(self) -> tuple:
        return (self.left, self.top, self.right, self.bottom)


@dataclass(frozen=True)
class PageGeometry:
    """
    Canonical page description (immutable).

    Width, height and margins are always expressed in the user-facing,
    pre-rotation frame. A geometry whose imageable area is not positive
    can exist while a page is being edited, but is never accepted as a
    final result (see :attr:`is_printable`).

    Attributes:
        size: User-facing page size in points
        orientation: Page orientation
        margins: Margins in points

    Example:
        >>> geometry = PageGeometry(PageSize(612, 792), margins=Margins.uniform(72))
        >>> geometry.imageable_width
        468
    """

    size: PageSize
    orientation: Orientation = Orientation.PORTRAIT
    margins: Margins = field(default_factory=Margins)

    def __post_init__(self) -> None:
        if not isinstance(self.orientation, Orientation):
            raise UnknownOrientationError(f"Unknown page orientation: {self.orientation!r}")

    @property
    def width(self) -> float:
        return self.size.width

    @property
    def height(self) -> float:
        return self.size.height

    @property
    def imageable_width(self) -> float:
        """Width left for content once the left and right margins are removed."""
        return self.size.width - self.margins.horizontal

    @property
    def imageable_height(self) -> float:
        """Height left for content once the top and bottom margins are removed."""
        return self.size.height - self.margins.vertical

    @property
    def is_printable(self) -> bool:
        return self.imageable_width > 0 and self.imageable_height > 0

    # ------------------------------------------------------------------
    # Orientation transform
    # ------------------------------------------------------------------
    def physical(self) -> PhysicalPage:
        """Map the user-facing geometry onto the unrotated sheet."""

        width, height = self.size.width, self.size.height
        margins = self.margins
        across = self.imageable_width
        down = self.imageable_height

        if self.orientation is Orientation.PORTRAIT:
            return PhysicalPage(self.orientation, width, height, Rect(margins.left, margins.top, across, down))
        if self.orientation is Orientation.LANDSCAPE:
            return PhysicalPage(self.orientation, height, width, Rect(margins.top, margins.right, down, across))
        return PhysicalPage(self.orientation, height, width, Rect(margins.bottom, margins.left, down, across))

    @classmethod
    def from_physical(cls, page: PhysicalPage) -> "PageGeometry":
        """Inverse of :meth:`physical`.

        Raises:
            InvalidGeometryError: If the imageable rectangle extends past the sheet.
        """

        area = page.imageable
        far_x = _snap(page.width - area.right)
        far_y = _snap(page.height - area.bottom)
        near_x = _snap(area.x)
        near_y = _snap(area.y)

        if page.orientation is Orientation.PORTRAIT:
            size = PageSize(page.width, page.height)
            margins = Margins(left=near_x, top=near_y, right=far_x, bottom=far_y)
        elif page.orientation is Orientation.LANDSCAPE:
            size = PageSize(page.height, page.width)
            margins = Margins(left=far_y, top=near_x, right=near_y, bottom=far_x)
        elif page.orientation is Orientation.REVERSE_LANDSCAPE:
            size = PageSize(page.height, page.width)
            margins = Margins(left=near_y, top=far_x, right=far_y, bottom=near_x)
        else:
            raise UnknownOrientationError(f"Unknown page orientation: {page.orientation!r}")
        return cls(size=size, orientation=page.orientation, margins=margins)

    def with_orientation(self, orientation: Union[Orientation, str]) -> "PageGeometry":
        """Return the geometry with a new orientation.

        Width and height are swapped only when the change crosses between
        portrait and one of the landscape orientations. Switching directly
        between landscape and reverse landscape keeps them, since both are
        already in the rotated frame. Margins are kept as entered.
        """

        orientation = Orientation.parse(orientation)
        if orientation is self.orientation:
            return self
        size = self.size
        if orientation.is_portrait != self.orientation.is_portrait:
            size = size.rotated()
        return replace(self, size=size, orientation=orientation)

    def with_margins(self, margins: Margins) -> "PageGeometry":
        return replace(self, margins=margins)

    def with_paper(self, paper: object) -> "PageGeometry":
        """Apply a paper size (a :class:`PageSize` or a catalog entry).

        The size is taken as listed; a size wider than tall selects
        landscape, anything else portrait. Margins are kept.
        """

        size = getattr(paper, "size", paper)
        if not isinstance(size, PageSize):
            raise TypeError(f"Expected a PageSize or catalog entry, got {type(paper).__name__}")
        orientation = Orientation.LANDSCAPE if size.is_landscape else Orientation.PORTRAIT
        return replace(self, size=size, orientation=orientation)

    # ------------------------------------------------------------------
    # Field conversion
    # ------------------------------------------------------------------
    @classmethod
    def from_fields(
        cls,
        width: float,
        height: float,
        orientation: Union[Orientation, str],
        margins: Sequence[float],
        unit: Union[Unit, str],
    ) -> Union["PageGeometry", Rejected]:
        """Build a geometry from raw field values.

        Args:
            width: User-facing page width in *unit*
            height: User-facing page height in *unit*
            orientation: Page orientation
            margins: ``(left, top, right, bottom)`` in *unit*
            unit: Unit every value is expressed in

        Returns:
            The new geometry, or :class:`~page_setup.types.Rejected` when a
            value is negative or the margins leave no printable area.
        """

        unit = Unit.parse(unit)
        orientation = Orientation.parse(orientation)
        values = tuple(margins)
        if len(values) != 4:
            raise InvalidGeometryError(f"Expected four margin values, got {len(values)}")

        for value in (width, height) + values:
            if not math.isfinite(value) or value < 0:
                return Rejected(NEGATIVE_DIMENSIONS, RejectionKind.INVALID_GEOMETRY)

        geometry = cls(
            size=PageSize.from_unit(width, height, unit),
            orientation=orientation,
            margins=Margins.from_unit(*values, unit=unit),
        )
        if not geometry.is_printable:
            return Rejected(MARGINS_EXCEED_PAGE_AREA, RejectionKind.INVALID_GEOMETRY)
        return geometry

    def to_fields(self, unit: Union[Unit, str]) -> FieldValues:
        """Return the editable field values in *unit*, rounded to its granularity."""

        unit = Unit.parse(unit)
        return FieldValues(
            width=unit.from_canonical(self.size.width),
            height=unit.from_canonical(self.size.height),
            left=unit.from_canonical(self.margins.left),
            top=unit.from_canonical(self.margins.top),
            right=unit.from_canonical(self.margins.right),
            bottom=unit.from_canonical(self.margins.bottom),
            unit=unit,
            orientation=self.orientation,
        )


def set_orientation(geometry: PageGeometry, orientation: Union[Orientation, str]) -> PageGeometry:
    """Functional form of :meth:`PageGeometry.with_orientation`."""
    return geometry.with_orientation(orientation)


def to_fields(geometry: PageGeometry, unit: Union[Unit, str]) -> FieldValues:
    """Functional form of :meth:`PageGeometry.to_fields`."""
    return geometry.to_fields(unit)
