"""Pie diagram geometry: wedges, label anchors and SVG output."""

from __future__ import annotations

import math
from dataclasses import dataclass

import svgwrite

from pizza.config import DIAGRAM_RADIUS
from pizza.constant import UNCOVERED_STROKE_COLOR
from pizza.count import Count
from pizza.data import topping_color, topping_label
from pizza.division import divide_all
from pizza.models import Pair, PieConfig, Topping

_FULL_TURN = 2 * math.pi
_LABEL_FONT_SIZE = 10


def polar_to_cartesian(radius: float, angle: float) -> tuple[float, float]:
    return (radius * math.cos(angle), radius * math.sin(angle))


def label_radius(radius: float, wedge_angle: float) -> float:
    """Shrinks from 2r/3 (thin wedge) towards the centre as the wedge widens."""
    if wedge_angle >= _FULL_TURN:
        return 0.0
    return (2 * radius / 3) * (1 - wedge_angle / (4 * _FULL_TURN))


def _fmt(value: float) -> str:
    # `+ 0.0` folds -0.0 into 0.0 so output is stable across platforms.
    text = f"{round(value, 3) + 0.0:.3f}".rstrip("0").rstrip(".")
    return text or "0"


def wedge_path(radius: float, start_angle: float, end_angle: float) -> str:
    """SVG path data for one wedge; a full turn is drawn as a plain circle."""
    r = _fmt(radius)
    if end_angle - start_angle >= _FULL_TURN:
        # Two half arcs: a single arc cannot start and end at the same point.
        x0, y0 = polar_to_cartesian(radius, start_angle)
        x1, y1 = polar_to_cartesian(radius, start_angle + math.pi)
        return (
            f"M {_fmt(x0)} {_fmt(y0)} "
            f"A {r} {r} 0 1 1 {_fmt(x1)} {_fmt(y1)} "
            f"A {r} {r} 0 1 1 {_fmt(x0)} {_fmt(y0)} Z"
        )

    x0, y0 = polar_to_cartesian(radius, start_angle)
    x1, y1 = polar_to_cartesian(radius, end_angle)
    large_arc = 1 if end_angle - start_angle > math.pi else 0
    return f"M {_fmt(x0)} {_fmt(y0)} A {r} {r} 0 {large_arc} 1 {_fmt(x1)} {_fmt(y1)} L 0 0 Z"


@dataclass(frozen=True)
class Wedge:
    """One topping's region of a pie."""

    topping: Topping
    slices: int
    start_angle: float
    end_angle: float
    path: str
    label_anchor: tuple[float, float]

    @property
    def angle(self) -> float:
        return self.end_angle - self.start_angle


@dataclass(frozen=True)
class Diagram:
    """A self-contained pie drawing centred on the origin."""

    radius: float
    slices_per_pie: int
    wedges: tuple[Wedge, ...]
    uncovered: bool = False

    @property
    def size(self) -> float:
        return 2 * self.radius + 2

    @property
    def view_box(self) -> tuple[float, float, float, float]:
        half = self.radius + 1
        return (-half, -half, self.size, self.size)

    @property
    def slice_total(self) -> int:
        return sum(wedge.slices for wedge in self.wedges)

    def to_svg(self) -> str:
        size = _fmt(self.size)
        drawing = svgwrite.Drawing(
            size=(size, size),
            viewBox=" ".join(_fmt(value) for value in self.view_box),
            debug=False,
        )
        stroke = UNCOVERED_STROKE_COLOR if self.uncovered else "#ffffff"
        for wedge in self.wedges:
            drawing.add(drawing.path(d=wedge.path, fill=topping_color(wedge.topping), stroke=stroke, stroke_width=1))
        for wedge in self.wedges:
            x, y = wedge.label_anchor
            drawing.add(
                drawing.text(
                    f"{topping_label(wedge.topping)} ({wedge.slices})",
                    insert=(_fmt(x), _fmt(y)),
                    text_anchor="middle",
                    font_size=_LABEL_FONT_SIZE,
                )
            )
        return drawing.tostring()


def layout_wedges(slices_per_pie: int, pairs: list[Pair], radius: float = DIAGRAM_RADIUS) -> tuple[Wedge, ...]:
    """Lay the pie's pairs out from angle 0 in increasing angle, largest first."""
    if slices_per_pie <= 0:
        return ()

    ordered = sorted(pairs, key=lambda pair: -pair[1])
    wedges: list[Wedge] = []
    offset = 0
    for topping, slices in ordered:
        if slices <= 0:
            continue
        start_angle = _FULL_TURN * offset / slices_per_pie
        if offset + slices >= slices_per_pie:
            # Close on exactly one turn; `2pi * n / n` can round just short of it.
            end_angle = _FULL_TURN
        else:
            end_angle = _FULL_TURN * (offset + slices) / slices_per_pie
        sweep = end_angle - start_angle
        anchor = polar_to_cartesian(label_radius(radius, sweep), (start_angle + end_angle) / 2)
        wedges.append(
            Wedge(
                topping=topping,
                slices=slices,
                start_angle=start_angle,
                end_angle=end_angle,
                path=wedge_path(radius, start_angle, end_angle),
                label_anchor=anchor,
            )
        )
        offset += slices
    return tuple(wedges)


def draw_pie(
    slices_per_pie: int,
    pairs: list[Pair],
    radius: float = DIAGRAM_RADIUS,
    uncovered: bool = False,
) -> Diagram:
    return Diagram(
        radius=radius,
        slices_per_pie=slices_per_pie,
        wedges=layout_wedges(slices_per_pie, pairs, radius),
        uncovered=uncovered,
    )


def draw_pies(config: PieConfig, demand: Count, radius: float = DIAGRAM_RADIUS) -> list[Diagram]:
    """Allocate `demand` once and draw every resulting pie, residue pie last."""
    plan = divide_all(config, demand)
    diagrams = [draw_pie(config.slices_per_pie, pie, radius) for pie in plan.pies]
    residue = plan.all_pies()[len(plan.pies) :]
    diagrams.extend(draw_pie(config.slices_per_pie, pie, radius, uncovered=True) for pie in residue)
    return diagrams
