"""SVG file export of pie diagrams."""

from __future__ import annotations

import logging
from pathlib import Path

from pizza.diagram import Diagram

logger = logging.getLogger(__name__)


def svg_filename(index: int, diagram: Diagram) -> str:
    suffix = "-unallocated" if diagram.uncovered else ""
    return f"pie-{index:02d}{suffix}.svg"


def export_svgs(diagrams: list[Diagram], directory: str | Path) -> list[Path]:
    """Write one SVG per diagram, replacing previous exports in `directory`."""
    target = Path(directory)
    target.mkdir(parents=True, exist_ok=True)
    for stale in target.glob("pie-*.svg"):
        stale.unlink()

    written: list[Path] = []
    for index, diagram in enumerate(diagrams, start=1):
        path = target / svg_filename(index, diagram)
        path.write_text(diagram.to_svg(), encoding="utf-8")
        written.append(path)
    logger.info("exported %s diagram(s) to %s", len(written), target)
    return written
