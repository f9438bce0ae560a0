"""
Type definitions for validation outcomes.

A page geometry handed to :class:`page_setup.validation.PrinterValidator`
comes back as exactly one of :class:`Accepted`, :class:`Adjusted` or
:class:`Rejected`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Optional, Tuple, Union

if TYPE_CHECKING:  # pragma: no cover
    from .geometry import PageGeometry

MARGINS_EXCEED_PAGE_AREA = "margins exceed page area"
NEGATIVE_DIMENSIONS = "dimensions must not be negative"
SIZE_UNSUPPORTED = "paper dimensions unsupported by printer"
MARGINS_UNSUPPORTED = "margins unsupported by printer"


class RejectionKind(Enum):
    """Why a geometry was rejected."""

    INVALID_GEOMETRY = "invalid-geometry"
    UNSUPPORTED_SIZE = "unsupported-size"
    UNSUPPORTED_MARGINS = "unsupported-margins"
    PRINTER_ERROR = "printer-error"


@dataclass(frozen=True)
class Accepted:
    """
    The geometry is usable as given.

    Attributes:
        geometry: The accepted page geometry, unchanged
    """

    geometry: "PageGeometry"
    ok: ClassVar[bool] = True

    def __str__(self) -> str:
        return "Accepted"


@dataclass(frozen=True)
class Adjusted:
    """
    The printer proposed a different geometry.

    Attributes:
        geometry: The geometry proposed by the printer
        changed_fields: Names of the user-facing fields that moved
            (``orientation``, ``width``, ``height``, ``left``, ``top``,
            ``right``, ``bottom``)
    """

    geometry: "PageGeometry"
    changed_fields: Tuple[str, ...] = ()
    ok: ClassVar[bool] = True

    def __str__(self) -> str:
        return f"Adjusted({', '.join(self.changed_fields)})"


@dataclass(frozen=True)
class Rejected:
    """
    The geometry cannot be used.

    Attributes:
        reason: Short machine-comparable reason
        kind: Category of the rejection
        printer: Printer that rejected the geometry, if any
    """

    reason: str
    kind: RejectionKind = RejectionKind.INVALID_GEOMETRY
    printer: Optional[str] = None
    ok: ClassVar[bool] = False

    @property
    def message(self) -> str:
        """Sentence suitable for showing to a user."""
        if self.kind is RejectionKind.UNSUPPORTED_SIZE:
            return f'Paper dimensions are outside of the range suitable for the printer "{self.printer}"'
        if self.kind is RejectionKind.UNSUPPORTED_MARGINS:
            return f'Margins are outside of the printable area for the printer "{self.printer}"'
        if self.reason == MARGINS_EXCEED_PAGE_AREA:
            return "Margins are too large, no remaining printable area"
        return self.reason[:1].upper() + self.reason[1:]

    def __str__(self) -> str:
        return f"Rejected({self.reason})"


ValidationOutcome = Union[Accepted, Adjusted, Rejected]
