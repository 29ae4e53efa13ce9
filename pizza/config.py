"""Runtime configuration defaults for pie sizing, persistence and printing."""

from __future__ import annotations

import os
from typing import Mapping

from pizza.models import ConfigError, PieConfig

DB_PATH = "data/pizza.db"
DEBUG_LOG_PATH = "/tmp/pizza-debug.log"

SLICES_PER_PART = 2
PARTS_PER_PIE = 4
DIAGRAM_RADIUS = 100

PRINTER_USB_VENDOR_ID = 0x28E9
PRINTER_USB_PRODUCT_ID = 0x0289
PRINTER_WIDTH_PX = 384
PRINTER_FONT_SIZE = 28
PRINTER_FONT_PATH = "/System/Library/Fonts/SFNS.ttf"

SLICES_PER_PART_ENV = "PIZZA_SLICES_PER_PART"
PARTS_PER_PIE_ENV = "PIZZA_PARTS_PER_PIE"
DB_PATH_ENV = "PIZZA_DB_PATH"


def _int_from_env(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def load_pie_config(environ: Mapping[str, str] | None = None) -> PieConfig:
    """
    Build the pie configuration.

    Resolution order for each value:
    1. PIZZA_SLICES_PER_PART / PIZZA_PARTS_PER_PIE (if set)
    2. SLICES_PER_PART / PARTS_PER_PIE
    """
    env = os.environ if environ is None else environ
    return PieConfig(
        slices_per_part=_int_from_env(env, SLICES_PER_PART_ENV, SLICES_PER_PART),
        parts_per_pie=_int_from_env(env, PARTS_PER_PIE_ENV, PARTS_PER_PIE),
    )


def resolve_db_path(environ: Mapping[str, str] | None = None) -> str:
    env = os.environ if environ is None else environ
    return env.get(DB_PATH_ENV, "").strip() or DB_PATH
