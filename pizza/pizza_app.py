"""Main Textual app class."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.widgets import Header, Static

from pizza.config import load_pie_config
from pizza.count import Count
from pizza.data import index_of_topping, menu_count, ordered_toppings, topping_label
from pizza.diagram import Diagram, draw_pies
from pizza.export import export_svgs
from pizza.models import PieConfig, Topping, UpdateEvent
from pizza.participant_modal import ParticipantModal
from pizza.persistence import (
    HOST_PARTICIPANT_ID,
    bootstrap_schema,
    latest_version,
    load_order_book,
    load_participant_count,
    save_update,
)
from pizza.printer import check_printer_dependencies, print_pie_plan
from pizza.rendering import format_count_row, format_pie_plan
from pizza.session import ApplyUpdate, BecomeHost, Guest, Host, JoinAsGuest, Leave, Role, Undetermined, transition
from pizza.topping_modal import ToppingModal

logger = logging.getLogger(__name__)

EXPORT_DIR = Path("pies")
POLL_SECONDS = 2.0


class PizzaApp(App):
    """A Textual app for collecting topping orders and planning pies."""

    TITLE = "Pizza Pies"
    SUB_TITLE = "How many pies, and what's on them"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #toppings-pane {
        width: 2fr;
        border: round $primary;
        padding: 1;
    }

    #pies-pane {
        width: 3fr;
        border: round $secondary;
        padding: 1;
    }

    #status-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #toppings-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #pies-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        ("j", "move_selection(1)", "Next topping"),
        ("k", "move_selection(-1)", "Previous topping"),
        ("down", "move_selection(1)", "Next topping"),
        ("up", "move_selection(-1)", "Previous topping"),
        ("right", "change_selected(1)", "+1 slice"),
        ("left", "change_selected(-1)", "-1 slice"),
        ("plus", "change_selected(1)", "+1 slice"),
        ("minus", "change_selected(-1)", "-1 slice"),
        ("c", "compose_topping", "Composite topping"),
        ("x", "leave", "Leave role"),
        Binding("ctrl+s", "export_and_print", "Export + Print", priority=True),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, config: PieConfig | None = None, export_dir: Path = EXPORT_DIR) -> None:
        super().__init__()
        self.config = config or load_pie_config()
        self.export_dir = export_dir
        self.role: Role = Undetermined()
        self.selected_index = 0
        self.diagrams: list[Diagram] = []
        self.system_status = ""
        logger.debug("app_init slices_per_part=%s parts_per_pie=%s", self.config.slices_per_part, self.config.parts_per_pie)

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="toppings-pane"):
                yield Static("Toppings (slices)", classes="pane-title")
                yield Static(id="toppings-list")
            with Vertical(id="pies-pane"):
                yield Static(id="status-bar")
                yield Static(id="pies-list")

    def on_mount(self) -> None:
        bootstrap_schema()
        _, msg = check_printer_dependencies()
        self.system_status = msg
        logger.debug("on_mount printer_status=%r", msg)
        self.set_interval(POLL_SECONDS, self._poll_orders)
        self._refresh_all()

    def on_key(self, event: Key) -> None:
        if isinstance(self.screen, (ToppingModal, ParticipantModal)):
            return
        if not isinstance(self.role, Undetermined):
            return
        if not event.is_printable or not event.character:
            return

        choice = event.character.lower()
        if choice == "h":
            self._become_host()
            event.stop()
            return
        if choice == "g":
            self.push_screen(ParticipantModal(), self._join_as_guest)
            event.stop()

    def _become_host(self) -> None:
        try:
            book = load_order_book()
        except sqlite3.Error as exc:
            logger.exception("load_order_book failed")
            self.system_status = f"Could not load orders: {exc}"
            self._refresh_all()
            return
        self.role = transition(self.role, BecomeHost(book=book))
        self.selected_index = 0
        self.system_status = f"Hosting ({len(book.participants())} guest(s) so far)"
        self._refresh_all()

    def _join_as_guest(self, participant_id: str | None) -> None:
        if participant_id is None:
            return
        role = transition(self.role, JoinAsGuest(participant_id))
        try:
            stored = load_participant_count(participant_id)
        except sqlite3.Error as exc:
            logger.exception("load_participant_count failed")
            self.system_status = f"Could not load orders: {exc}"
            self._refresh_all()
            return
        assert isinstance(role, Guest)
        self.role = Guest(participant_id=role.participant_id, count=stored)
        self.selected_index = 0
        self.system_status = f"Ordering as {participant_id}"
        self._refresh_all()

    def action_leave(self) -> None:
        if isinstance(self.role, Undetermined):
            return
        self.role = transition(self.role, Leave())
        self.system_status = ""
        self._refresh_all()

    def action_move_selection(self, delta: int) -> None:
        rows = self._rows()
        if not rows:
            return
        self.selected_index = (self.selected_index + delta) % len(rows)
        self._refresh_toppings()

    def action_change_selected(self, delta: int) -> None:
        rows = self._rows()
        if not rows or isinstance(self.role, Undetermined):
            return
        topping, value = rows[self.selected_index]
        self._set_count(topping, max(0, value + delta))

    def action_compose_topping(self) -> None:
        if isinstance(self.role, Undetermined):
            return
        self.push_screen(ToppingModal(), self._add_composite)

    def _add_composite(self, topping: Topping | None) -> None:
        if topping is None:
            return
        current = self._active_count().get(topping)
        self._set_count(topping, current + self.config.slices_per_part)
        found = index_of_topping([row_topping for row_topping, _ in self._rows()], topping)
        if found is not None:
            self.selected_index = found
        self._refresh_toppings()

    def _set_count(self, topping: Topping, value: int) -> None:
        if isinstance(self.role, Host):
            participant_id = HOST_PARTICIPANT_ID
        elif isinstance(self.role, Guest):
            participant_id = self.role.participant_id
        else:
            return

        event = UpdateEvent(participant_id=participant_id, topping=topping, count=value)
        try:
            version = save_update(event)
        except sqlite3.Error as exc:
            logger.exception("save_update failed")
            self.system_status = f"Could not save: {exc}"
            self._refresh_status()
            return
        logger.debug("saved participant=%r topping=%r count=%s version=%s", participant_id, topping_label(topping), value, version)

        if isinstance(self.role, Host):
            self.role = Host(book=self.role.book.set_host(topping, value))
            self._poll_orders()
        else:
            self.role = transition(self.role, ApplyUpdate(event, version=version))
        self._refresh_all()

    def _poll_orders(self) -> None:
        if not isinstance(self.role, Host):
            return
        try:
            version = latest_version()
            if version == self.role.book.version:
                return
            book = load_order_book()
        except sqlite3.Error:
            logger.exception("poll failed")
            return
        logger.debug("reload book version %s -> %s", self.role.book.version, book.version)
        self.role = transition(transition(self.role, Leave()), BecomeHost(book=book))
        self._refresh_all()

    def action_export_and_print(self) -> None:
        if isinstance(self.screen, (ToppingModal, ParticipantModal)):
            return
        if not self.diagrams:
            self.system_status = "Nothing to export"
            self._refresh_status()
            return

        written = export_svgs(self.diagrams, self.export_dir)
        try:
            print_pie_plan(self.diagrams)
        except Exception as exc:
            self.system_status = f"Exported {len(written)} SVG(s) but print failed: {exc}"
            self._refresh_status()
            logger.debug("print_failed error=%r", exc)
            return

        self.system_status = f"Exported + printed {len(written)} pie(s)"
        self._refresh_status()

    def _active_count(self) -> Count:
        if isinstance(self.role, Host):
            return self.role.book.host
        if isinstance(self.role, Guest):
            return self.role.count
        return Count.empty()

    def _plan_demand(self) -> Count:
        if isinstance(self.role, Host):
            return self.role.book.aggregate()
        return self._active_count()

    def _rows(self) -> list[tuple[Topping, int]]:
        if isinstance(self.role, Undetermined):
            return []
        shown = menu_count().join(self._active_count().filter_zeros())
        return [(topping, shown.get(topping)) for topping in ordered_toppings(shown)]

    def _refresh_all(self) -> None:
        self.diagrams = draw_pies(self.config, self._plan_demand())
        self._refresh_toppings()
        self._refresh_status()
        self._refresh_pies()

    def _refresh_toppings(self) -> None:
        try:
            widget = self.query_one("#toppings-list", Static)
        except NoMatches:
            return
        if isinstance(self.role, Undetermined):
            widget.update("Press H to host, G to join as a guest.")
            return

        rows = self._rows()
        if self.selected_index >= len(rows):
            self.selected_index = max(0, len(rows) - 1)

        lines = Text()
        for idx, (topping, value) in enumerate(rows):
            if idx > 0:
                lines.append("\n")
            lines.append_text(format_count_row(topping, value, idx == self.selected_index))
        widget.update(lines)

    def _refresh_status(self) -> None:
        try:
            bar = self.query_one("#status-bar", Static)
        except NoMatches:
            return
        if isinstance(self.role, Host):
            who = f"HOST · {len(self.role.book.participants())} guest(s) · v{self.role.book.version}"
        elif isinstance(self.role, Guest):
            who = f"GUEST {self.role.participant_id}"
        else:
            who = "No role yet"

        text = Text()
        text.append(who, style="bold")
        text.append(f"  ({self.config.slices_per_part} slices/part, {self.config.slices_per_pie} slices/pie)")
        text.append(f"\n{self.system_status or 'Ready'}")
        lost = self._plan_demand().undecodable()
        if lost:
            text.append(f"\n{len(lost)} unreadable topping(s) ignored", style="#ffb3b3")
        bar.update(text)

    def _refresh_pies(self) -> None:
        try:
            widget = self.query_one("#pies-list", Static)
        except NoMatches:
            return
        widget.update(format_pie_plan(self.diagrams))
