"""Entry point for the pizza-pies Textual app."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from pizza.config import DB_PATH_ENV, DEBUG_LOG_PATH, load_pie_config
from pizza.diagram import draw_pies
from pizza.export import export_svgs
from pizza.logs import configure_logging
from pizza.models import ConfigError
from pizza.persistence import bootstrap_schema, clear_orders, load_order_book

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pizza-pies", description="Collect topping orders and plan whole pies.")
    parser.add_argument("--db", help="order store path (default: data/pizza.db or $PIZZA_DB_PATH)")
    parser.add_argument("--log-file", default=DEBUG_LOG_PATH, help="debug log file")
    parser.add_argument("--export", metavar="DIR", help="write SVGs for the stored orders and exit")
    parser.add_argument("--reset", action="store_true", help="delete all stored orders and exit")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the Textual application, or one of the non-interactive commands."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)
    if args.db:
        os.environ[DB_PATH_ENV] = args.db

    try:
        config = load_pie_config()
    except ConfigError as exc:
        print(f"pizza-pies: {exc}", file=sys.stderr)
        return 2

    bootstrap_schema()
    if args.reset:
        clear_orders()
        logger.info("orders cleared")
        return 0

    if args.export:
        book = load_order_book()
        written = export_svgs(draw_pies(config, book.aggregate()), Path(args.export))
        for path in written:
            print(path)
        return 0

    from pizza.pizza_app import PizzaApp

    PizzaApp(config=config).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
