"""Capability provider protocol for printer-aware validation."""

from __future__ import annotations

from typing import List, Optional, Protocol

from ..geometry import PageGeometry


class CapabilityProvider(Protocol):
    """Protocol describing what the validator needs to know about printers.

    Implementations may block (a spooler query, a network round trip);
    callers that need a timeout apply it around the call.
    """

    def list_printers(self) -> List[str]:
        """Return the identities of the printers this provider knows."""

    def default_page(self, printer: Optional[str] = None) -> PageGeometry:
        """Return the default page of *printer*, or of the default printer for ``None``."""

    def validate_page(self, printer: Optional[str], geometry: PageGeometry) -> PageGeometry:
        """Return *geometry* adjusted to the sizes and margins *printer* supports."""
