"""Thermal-printer output of pie diagrams."""

from __future__ import annotations

import logging
import math
import os
from pathlib import Path

from pizza.config import (
    PRINTER_FONT_PATH,
    PRINTER_FONT_SIZE,
    PRINTER_USB_PRODUCT_ID,
    PRINTER_USB_VENDOR_ID,
    PRINTER_WIDTH_PX,
)
from pizza.data import print_label_for_topping
from pizza.diagram import Diagram

logger = logging.getLogger(__name__)

_PIE_MARGIN_PX = 12
_CAPTION_GAP_PX = 6
_UNCOVERED_DASH_DEG = 12
_FONT_OVERRIDE_ENV = "PIZZA_PRINTER_FONT_PATH"
_LINUX_FONT_FALLBACKS = (
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/noto/NotoSans-Regular.ttf",
    "/usr/share/fonts/liberation/LiberationSans-Regular.ttf",
)


def resolve_printer_font_path() -> str:
    """
    Resolve a printer font path.

    Resolution order:
    1. PIZZA_PRINTER_FONT_PATH (if set)
    2. PRINTER_FONT_PATH
    3. Known Linux fallbacks
    """
    env_override = os.environ.get(_FONT_OVERRIDE_ENV, "").strip()
    candidates: list[str] = []
    if env_override:
        candidates.append(env_override)
    candidates.append(PRINTER_FONT_PATH)
    candidates.extend(_LINUX_FONT_FALLBACKS)

    seen: set[str] = set()
    for candidate in candidates:
        if not candidate or candidate in seen:
            continue
        seen.add(candidate)
        if Path(candidate).is_file():
            return candidate

    raise RuntimeError(
        f"No usable printer font found. Set {_FONT_OVERRIDE_ENV} to a valid .ttf/.otf file. "
        f"Tried: {', '.join(seen)}"
    )


def check_printer_dependencies() -> tuple[bool, str]:
    """Check whether printer dependencies are importable."""
    try:
        from escpos.printer import Usb  # noqa: F401
        from PIL import ImageFont

        ImageFont.truetype(resolve_printer_font_path(), PRINTER_FONT_SIZE)
    except Exception as exc:
        return (False, f"Printer deps unavailable: {exc}")
    return (True, "Printer ready")


def _caption(index: int, diagram: Diagram) -> str:
    if diagram.uncovered:
        return f"#{index} unallocated {diagram.slice_total}/{diagram.slices_per_pie}"
    return f"#{index} {diagram.slice_total}/{diagram.slices_per_pie}"


def render_pie_image(diagram: Diagram, font: object, index: int = 1) -> object:
    """Rasterise one diagram into a 1-bit image as wide as the paper."""
    from PIL import Image, ImageDraw

    diameter = PRINTER_WIDTH_PX - 2 * _PIE_MARGIN_PX
    scale = (diameter / 2) / diagram.radius if diagram.radius > 0 else 0.0
    center = PRINTER_WIDTH_PX / 2

    probe = Image.new("1", (1, 1), color=1)
    caption = _caption(index, diagram)
    caption_bbox = ImageDraw.Draw(probe).textbbox((0, 0), caption, font=font)
    caption_height = caption_bbox[3] - caption_bbox[1]

    top = caption_height + _CAPTION_GAP_PX
    img = Image.new("1", (PRINTER_WIDTH_PX, top + PRINTER_WIDTH_PX), color=1)
    draw = ImageDraw.Draw(img)
    draw.text((_PIE_MARGIN_PX, -caption_bbox[1]), caption, font=font, fill=0)

    cy = top + center
    box = (center - diameter / 2, cy - diameter / 2, center + diameter / 2, cy + diameter / 2)
    if diagram.uncovered:
        # Dashed rim marks the pie that still needs ordering.
        for start in range(0, 360, 2 * _UNCOVERED_DASH_DEG):
            draw.arc(box, start, start + _UNCOVERED_DASH_DEG, fill=0, width=2)
    else:
        draw.ellipse(box, outline=0, width=2)

    for wedge in diagram.wedges:
        # Pillow angles run clockwise on screen, like the SVG output.
        if wedge.angle < 2 * math.pi:
            draw.pieslice(box, math.degrees(wedge.start_angle), math.degrees(wedge.end_angle), outline=0, width=2)
        label = f"{print_label_for_topping(wedge.topping)} {wedge.slices}"
        x, y = wedge.label_anchor
        bbox = draw.textbbox((0, 0), label, font=font)
        text_width = bbox[2] - bbox[0]
        text_height = bbox[3] - bbox[1]
        # Centre the label box on the anchor, offset by the bbox origin.
        text_x = center + x * scale - text_width / 2 - bbox[0]
        text_y = cy + y * scale - text_height / 2 - bbox[1]
        draw.text((text_x, text_y), label, font=font, fill=0)
    return img


def print_pie_plan(diagrams: list[Diagram], printer: object | None = None, font: object | None = None) -> None:
    """Print every pie, one image each, and cut the ticket at the end."""
    if not diagrams:
        return

    try:
        from PIL import ImageFont
    except Exception as exc:
        raise RuntimeError(f"Printer dependencies unavailable: {exc}") from exc

    if printer is None:
        try:
            from escpos.printer import Usb
        except Exception as exc:
            raise RuntimeError(f"Printer dependencies unavailable: {exc}") from exc
        printer = Usb(PRINTER_USB_VENDOR_ID, PRINTER_USB_PRODUCT_ID)
    if font is None:
        font = ImageFont.truetype(resolve_printer_font_path(), PRINTER_FONT_SIZE)

    for index, diagram in enumerate(diagrams, start=1):
        printer.image(render_pie_image(diagram, font, index=index))
    printer.cut()
    logger.info("printed %s pie(s)", len(diagrams))
