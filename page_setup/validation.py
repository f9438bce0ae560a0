"""Reconcile a requested page geometry with what a printer supports."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Tuple

from .backends.base import CapabilityProvider
from .config import COMPARISON_TOLERANCE
from .exceptions import PrinterCapabilityError
from .geometry import Margins, PageGeometry
from .types import (
    MARGINS_EXCEED_PAGE_AREA,
    MARGINS_UNSUPPORTED,
    SIZE_UNSUPPORTED,
    Accepted,
    Adjusted,
    Rejected,
    RejectionKind,
    ValidationOutcome,
)

LOGGER = logging.getLogger("page_setup.validation")

# Printer identity meaning "no particular printer": geometry is only
# checked for a positive printable area.
ANY_PRINTER = None

_FIELDS = ("width", "height", "left", "top", "right", "bottom")


def dimensions_match(a: float, b: float, tolerance: float = COMPARISON_TOLERANCE) -> bool:
    """Return ``True`` when *a* and *b* differ by less than *tolerance* points."""
    return abs(a - b) < tolerance


def changed_fields(
    before: PageGeometry,
    after: PageGeometry,
    tolerance: float = COMPARISON_TOLERANCE,
) -> Tuple[str, ...]:
    """Names of the user-facing fields that differ between two geometries."""

    changed: List[str] = []
    if before.orientation is not after.orientation:
        changed.append("orientation")
    old = (before.width, before.height) + _margin_values(before.margins)
    new = (after.width, after.height) + _margin_values(after.margins)
    for name, a, b in zip(_FIELDS, old, new):
        if not dimensions_match(a, b, tolerance):
            changed.append(name)
    return tuple(changed)


def _margin_values(margins: Margins) -> Tuple[float, float, float, float]:
    return (margins.left, margins.top, margins.right, margins.bottom)


class PrinterValidator:
    """Check page geometries against a :class:`CapabilityProvider`.

    The provider is called synchronously and exactly once per request; a
    failure is reported, never retried.
    """

    def __init__(self, provider: CapabilityProvider, *, tolerance: float = COMPARISON_TOLERANCE) -> None:
        self.provider = provider
        self.tolerance = tolerance

    def printers(self) -> List[str]:
        return list(self.provider.list_printers())

    def validate(self, geometry: PageGeometry, printer: Optional[str] = ANY_PRINTER) -> ValidationOutcome:
        """Decide whether *geometry* can be printed as-is on *printer*.

        The printable-area check applies to every printer, including
        :data:`ANY_PRINTER`, which otherwise accepts everything. For a real
        printer the provider's adjusted page must match the request in
        orientation, sheet size and imageable area, within the tolerance.

        Returns:
            :class:`Accepted` with the unchanged geometry, or
            :class:`Rejected` describing the first mismatch.
        """

        if not geometry.is_printable:
            return Rejected(MARGINS_EXCEED_PAGE_AREA, RejectionKind.INVALID_GEOMETRY, printer)
        if printer is ANY_PRINTER:
            return Accepted(geometry)

        try:
            adjusted = self.provider.validate_page(printer, geometry)
        except PrinterCapabilityError as exc:
            LOGGER.warning("Capability check failed for printer %s: %s", printer, exc)
            return Rejected(str(exc), RejectionKind.PRINTER_ERROR, printer)

        requested = geometry.physical()
        offered = adjusted.physical()
        close = self._close

        if (
            offered.orientation is not requested.orientation
            or not close(offered.width, requested.width)
            or not close(offered.height, requested.height)
        ):
            LOGGER.warning("Printer %s does not support the requested paper size", printer)
            return Rejected(SIZE_UNSUPPORTED, RejectionKind.UNSUPPORTED_SIZE, printer)

        want, got = requested.imageable, offered.imageable
        if not (
            close(got.x, want.x)
            and close(got.y, want.y)
            and close(got.width, want.width)
            and close(got.height, want.height)
        ):
            LOGGER.warning("Printer %s does not support the requested margins", printer)
            return Rejected(MARGINS_UNSUPPORTED, RejectionKind.UNSUPPORTED_MARGINS, printer)

        return Accepted(geometry)

    def adjust(self, geometry: PageGeometry, printer: Optional[str]) -> ValidationOutcome:
        """Ask *printer* for the nearest geometry it supports.

        Returns:
            :class:`Adjusted` with the printer's proposal when any field
            moved, :class:`Accepted` when nothing did (or for
            :data:`ANY_PRINTER`), :class:`Rejected` when the provider fails
            or when the request or the proposal has no printable area.
        """

        if not geometry.is_printable:
            return Rejected(MARGINS_EXCEED_PAGE_AREA, RejectionKind.INVALID_GEOMETRY, printer)
        if printer is ANY_PRINTER:
            return Accepted(geometry)
        try:
            adjusted = self.provider.validate_page(printer, geometry)
        except PrinterCapabilityError as exc:
            LOGGER.warning("Capability check failed for printer %s: %s", printer, exc)
            return Rejected(str(exc), RejectionKind.PRINTER_ERROR, printer)
        if not adjusted.is_printable:
            LOGGER.warning("Printer %s proposed a page without printable area", printer)
            return Rejected(MARGINS_EXCEED_PAGE_AREA, RejectionKind.INVALID_GEOMETRY, printer)

        changed = changed_fields(geometry, adjusted, self.tolerance)
        if not changed:
            return Accepted(geometry)
        LOGGER.debug("Printer %s adjusted %s", printer, ", ".join(changed))
        return Adjusted(adjusted, changed)

    def defaults_for(self, printer: Optional[str] = None) -> PageGeometry:
        """Default page of *printer* with the smallest margins it supports.

        The provider's default page is stripped of its margins and checked
        again, so the printer itself reports its minimum margins.

        Raises:
            PrinterCapabilityError: If the provider cannot answer, or its
                answer leaves no printable area.
        """

        default = self.provider.default_page(printer)
        bare = replace(default, margins=Margins.zero())
        result = self.provider.validate_page(printer, bare)
        if not result.is_printable:
            label = printer if printer is not None else "default printer"
            raise PrinterCapabilityError(f'Printer "{label}" reported a default page without printable area')
        return result

    def _close(self, a: float, b: float) -> bool:
        return dimensions_match(a, b, self.tolerance)
