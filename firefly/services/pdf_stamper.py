# firefly/services/pdf_stamper.py
"""
Stamp placeholder values onto a copy of a report template.

Text is drawn on a transparent reportlab overlay (one page per template page
that receives text) and merged onto the template pages with pypdf. The
template bytes passed in are never modified.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from io import BytesIO
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from firefly.core.placeholders import PlaceholderPosition, PositionTable
from firefly.services.placeholder_extractor import format_value

logger = logging.getLogger(__name__)

DEFAULT_FONT = "Helvetica"


class StampingError(RuntimeError):
    """Drawing, font or serialisation failure while stamping."""


class TemplateLoadError(StampingError):
    """Template bytes are not a readable PDF."""


class EmptyTemplateError(StampingError):
    """Template parsed but has no pages."""


class StampOutcome(str, Enum):
    PLACED = "placed"
    SKIPPED_NO_MAPPING = "skipped_no_mapping"
    SKIPPED_PAGE_OUT_OF_RANGE = "skipped_page_out_of_range"
    SKIPPED_EMPTY_VALUE = "skipped_empty_value"


@dataclass
class StampResult:
    pdf_bytes: bytes
    outcomes: Dict[str, StampOutcome] = field(default_factory=dict)
    page_count: int = 0

    @property
    def placed(self) -> List[str]:
        return [n for n, o in self.outcomes.items() if o is StampOutcome.PLACED]

    @property
    def skipped(self) -> List[str]:
        return [n for n, o in self.outcomes.items() if o is not StampOutcome.PLACED]


def load_template(template_bytes: bytes) -> PdfReader:
    if not template_bytes:
        raise TemplateLoadError("Template is empty")
    try:
        reader = PdfReader(BytesIO(template_bytes))
        page_count = len(reader.pages)
    except (PyPdfError, ValueError, KeyError, TypeError) as exc:
        raise TemplateLoadError(f"Failed to load PDF template: {exc}") from exc
    if page_count == 0:
        raise EmptyTemplateError("PDF template has no pages")
    return reader


def _resolve_font(font_name: str) -> str:
    try:
        pdfmetrics.getFont(font_name)
    except Exception as exc:
        raise StampingError(f"Failed to embed font '{font_name}'") from exc
    return font_name


def plan_stamps(
    values: Mapping[str, Any],
    positions: PositionTable,
    page_count: int,
) -> Tuple[Dict[int, List[Tuple[str, PlaceholderPosition, str]]], Dict[str, StampOutcome]]:
    """
    Decide, per placeholder, whether and where it is drawn.

    Returns draws grouped by 0-based page index, and the outcome of every
    input name.
    """
    draws: Dict[int, List[Tuple[str, PlaceholderPosition, str]]] = {}
    outcomes: Dict[str, StampOutcome] = {}

    for name, raw in values.items():
        text = format_value(raw)
        if not text:
            outcomes[name] = StampOutcome.SKIPPED_EMPTY_VALUE
            continue

        position = positions.get(name)
        if position is None:
            logger.warning("No position defined for placeholder [%s]", name)
            outcomes[name] = StampOutcome.SKIPPED_NO_MAPPING
            continue

        if position.page > page_count:
            logger.warning(
                "Page %d not found for placeholder [%s] (template has %d pages)",
                position.page, name, page_count,
            )
            outcomes[name] = StampOutcome.SKIPPED_PAGE_OUT_OF_RANGE
            continue

        draws.setdefault(position.page - 1, []).append((name, position, text))
        outcomes[name] = StampOutcome.PLACED

    return draws, outcomes


def _build_overlay(
    draws: Dict[int, List[Tuple[str, PlaceholderPosition, str]]],
    page_sizes: Sequence[Tuple[float, float]],
    font_name: str,
) -> Dict[int, Any]:
    """Render one overlay page per stamped template page."""
    buffer = BytesIO()
    # invariant=1 keeps reportlab from writing timestamps and random ids
    canv = canvas.Canvas(buffer, invariant=1)

    page_order = sorted(draws)
    for page_index in page_order:
        canv.setPageSize(page_sizes[page_index])
        canv.setFillColorRGB(0, 0, 0)
        for name, position, text in draws[page_index]:
            try:
                canv.setFont(font_name, position.font_size)
                canv.drawString(position.x, position.y, text)
            except Exception as exc:
                raise StampingError(f"Failed to draw text for {name}") from exc
        canv.showPage()
    canv.save()

    buffer.seek(0)
    overlay = PdfReader(buffer)
    return {page_index: overlay.pages[i] for i, page_index in enumerate(page_order)}


def stamp_pdf(
    template_bytes: bytes,
    values: Mapping[str, Any],
    positions: PositionTable,
    font_name: str = DEFAULT_FONT,
) -> StampResult:
    """
    Draw every value that has a position onto its configured page.

    Args:
        template_bytes: the template PDF
        values: placeholder name -> value; non-strings are stringified
        positions: where each placeholder goes
        font_name: one of the standard PDF fonts, used for all text

    Returns:
        StampResult with the new PDF bytes and a per-placeholder outcome.

    Raises:
        TemplateLoadError, EmptyTemplateError, StampingError
    """
    reader = load_template(template_bytes)
    font_name = _resolve_font(font_name)
    page_count = len(reader.pages)

    draws, outcomes = plan_stamps(values, positions, page_count)

    page_sizes = [
        (
            float(page.mediabox.right) - float(page.mediabox.left),
            float(page.mediabox.top) - float(page.mediabox.bottom),
        )
        for page in reader.pages
    ]
    overlays = _build_overlay(draws, page_sizes, font_name) if draws else {}

    # Merge onto the writer's copies so the reader's pages stay untouched.
    writer = PdfWriter(clone_from=reader)
    for index, overlay_page in overlays.items():
        writer.pages[index].merge_page(overlay_page)

    out = BytesIO()
    try:
        writer.write(out)
    except Exception as exc:
        raise StampingError("Failed to save modified PDF") from exc

    pdf_bytes = out.getvalue()
    if not pdf_bytes:
        raise StampingError("Generated PDF is empty")

    placed = sum(1 for o in outcomes.values() if o is StampOutcome.PLACED)
    logger.info(
        "Stamped %d of %d placeholders onto %d-page template (%d bytes)",
        placed, len(outcomes), page_count, len(pdf_bytes),
    )
    return StampResult(pdf_bytes=pdf_bytes, outcomes=outcomes, page_count=page_count)
