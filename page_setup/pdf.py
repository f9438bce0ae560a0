"""Exchange page geometries with PDF page boxes via pypdf.

A geometry is stored as a blank page whose MediaBox is the unrotated sheet,
whose ArtBox is the imageable area and whose ``/Rotate`` entry carries the
orientation (0 portrait, 90 landscape, 270 reverse landscape).
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional, Union

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PdfReadError
from pypdf.generic import RectangleObject

from .exceptions import InvalidGeometryError, InvalidPDFError, PageSetupError
from .geometry import Orientation, PageGeometry, PhysicalPage, Rect

LOGGER = logging.getLogger("page_setup.pdf")

PathLike = Union[str, Path]

_ROTATION = {
    Orientation.PORTRAIT: 0,
    Orientation.LANDSCAPE: 90,
    Orientation.REVERSE_LANDSCAPE: 270,
}


def orientation_for_rotation(rotation: int) -> Orientation:
    """Map a ``/Rotate`` value to an orientation; 0 and 180 read as portrait."""

    rotation %= 360
    if rotation == 90:
        return Orientation.LANDSCAPE
    if rotation == 270:
        return Orientation.REVERSE_LANDSCAPE
    return Orientation.PORTRAIT


def write_page_template(
    geometry: PageGeometry,
    output: PathLike,
    *,
    title: Optional[str] = None,
) -> Path:
    """Write a one-page blank PDF describing *geometry* and return its path.

    Raises:
        InvalidGeometryError: If the geometry has no printable area.
    """

    if not geometry.is_printable:
        raise InvalidGeometryError("Margins are too large, no remaining printable area")

    sheet = geometry.physical()
    area = sheet.imageable
    writer = PdfWriter()
    page = writer.add_blank_page(width=sheet.width, height=sheet.height)
    # PDF boxes use a bottom-left origin.
    page.artbox = RectangleObject(
        [area.x, sheet.height - area.bottom, area.right, sheet.height - area.y]
    )
    rotation = _ROTATION[sheet.orientation]
    if rotation:
        page.rotate(rotation)

    metadata = {"/Producer": "Page Setup"}
    if title:
        metadata["/Title"] = title
    writer.add_metadata(metadata)

    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as handle:
        writer.write(handle)
    LOGGER.info("Page template written to %s", path)
    return path


def read_page_geometry(pdf_path: PathLike, page_number: int = 1) -> PageGeometry:
    """Read the geometry of one page of a PDF.

    Args:
        pdf_path: PDF file to read
        page_number: 1-based page number

    Raises:
        InvalidPDFError: If the file is missing or not a readable PDF.
        PageSetupError: If *page_number* is out of range.
        InvalidGeometryError: If the page's ArtBox extends past its MediaBox.
    """

    path = Path(pdf_path)
    if not path.exists() or not path.is_file():
        raise InvalidPDFError(f"PDF file not found: {pdf_path}")

    try:
        reader = PdfReader(io.BytesIO(path.read_bytes()))
        total = len(reader.pages)
    except OSError as exc:
        raise InvalidPDFError(f"Unable to read PDF file: {pdf_path}. Error: {exc}") from exc
    except PdfReadError as exc:
        raise InvalidPDFError(f"Corrupted or invalid PDF file: {pdf_path}. Error: {exc}") from exc

    if page_number < 1 or page_number > total:
        raise PageSetupError(f"Page {page_number} is out of range (PDF has {total} pages).")

    page = reader.pages[page_number - 1]
    media = page.mediabox
    art = page.artbox
    width = float(media.width)
    height = float(media.height)
    left = float(media.left)
    top = float(media.top)
    LOGGER.debug("Page %s of %s: MediaBox %s, ArtBox %s", page_number, path, list(media), list(art))

    physical = PhysicalPage(
        orientation=orientation_for_rotation(int(page.rotation)),
        width=width,
        height=height,
        imageable=Rect(
            x=float(art.left) - left,
            y=top - float(art.top),
            width=float(art.width),
            height=float(art.height),
        ),
    )
    return PageGeometry.from_physical(physical)
