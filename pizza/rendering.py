"""Rich text helpers for the terminal panes."""

from __future__ import annotations

from rich.text import Text

from pizza.data import topping_color, topping_label
from pizza.diagram import Diagram
from pizza.models import Topping


def badge_style(topping: Topping) -> str:
    """Return a consistent badge style for a topping's colour."""
    return f"bold #0b0b0b on {topping_color(topping)}"


def format_topping_label(topping: Topping) -> Text:
    """Render a topping name with a coloured marker; composites get a tag."""
    text = Text()
    text.append(" ", style=badge_style(topping))
    text.append(f" {topping_label(topping)}")
    if not topping.is_plain:
        text.append(f" [{len(topping.parts)} parts]", style="dim")
    return text


def format_count_row(topping: Topping, value: int, selected: bool) -> Text:
    text = Text()
    text.append("➤ " if selected else "  ")
    text.append(f"{value:>3} ", style="bold" if value else "dim")
    text.append_text(format_topping_label(topping))
    return text


def format_pie_line(index: int, diagram: Diagram) -> Text:
    """One pie as `#1 8/8  Pepperoni 5 · Mushroom 3`."""
    text = Text()
    if diagram.uncovered:
        text.append(f"#{index} ", style="bold #ff4d4d")
        text.append(f"{diagram.slice_total}/{diagram.slices_per_pie} unallocated  ", style="#ff4d4d")
    else:
        text.append(f"#{index} ", style="bold")
        text.append(f"{diagram.slice_total}/{diagram.slices_per_pie}  ")
    for idx, wedge in enumerate(diagram.wedges):
        if idx > 0:
            text.append(" · ", style="dim")
        text.append(topping_label(wedge.topping), style=f"bold {topping_color(wedge.topping)}")
        text.append(f" {wedge.slices}")
    return text


def format_pie_plan(diagrams: list[Diagram]) -> Text:
    if not diagrams:
        return Text("(no pies needed)", style="dim")

    full = sum(1 for diagram in diagrams if not diagram.uncovered)
    text = Text()
    text.append(f"{full} full pie(s)", style="bold")
    if full != len(diagrams):
        text.append(" + 1 to complete", style="#ff4d4d")
    for index, diagram in enumerate(diagrams, start=1):
        text.append("\n")
        text.append_text(format_pie_line(index, diagram))
    return text
