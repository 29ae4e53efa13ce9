"""Composite topping builder modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from pizza.data import BASE_TOPPINGS, parse_topping
from pizza.models import BaseTopping, Topping


class ToppingModal(ModalScreen[Topping | None]):
    """Centered modal to pick, in order, the parts of a composite topping."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("ctrl+c", "close", "Close"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("enter", "toggle_current", "Toggle"),
        ("a", "accept", "Accept"),
    ]

    CSS = """
    ToppingModal {
        align: center middle;
        background: $background 60%;
    }

    #topping-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #topping-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #topping-body {
        margin-bottom: 1;
        color: white;
    }

    #topping-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)
    _OTHER_FACTORY_KIND = "other_factory"
    _BASE_KIND = "base"

    def __init__(self) -> None:
        super().__init__()
        self.available: list[BaseTopping] = list(BASE_TOPPINGS)
        self.selected: list[BaseTopping] = []
        self.typing_other = False
        self.other_input_value = ""

    def compose(self) -> ComposeResult:
        with Container(id="topping-dialog"):
            yield Static("Composite topping", id="topping-title")
            yield Static(id="topping-body")
            yield Static(id="topping-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event) -> None:
        if not self.typing_other:
            return

        if event.key == "escape":
            self.typing_other = False
            self.other_input_value = ""
            self._refresh_content()
            event.stop()
            return

        if event.key == "enter":
            self._confirm_other_topping()
            event.stop()
            return

        if event.key == "backspace":
            if self.other_input_value:
                self.other_input_value = self.other_input_value[:-1]
            self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            self.other_input_value += event.character
            self._refresh_content()
            event.stop()
            return

        # Ignore all non-text keys while typing.
        event.stop()

    def action_close(self) -> None:
        if self.typing_other:
            self.typing_other = False
            self.other_input_value = ""
            self._refresh_content()
            return
        self.dismiss(None)

    def action_accept(self) -> None:
        if self.typing_other:
            return
        if not self.selected:
            self.dismiss(None)
            return
        self.dismiss(Topping(tuple(self.selected)))

    def action_move_cursor(self, delta: int) -> None:
        if self.typing_other:
            return
        rows = self._rows()
        self.cursor_index = (self.cursor_index + delta) % len(rows)
        self._refresh_content()

    def action_toggle_current(self) -> None:
        rows = self._rows()
        row_kind, base = rows[self.cursor_index]

        if row_kind == self._OTHER_FACTORY_KIND:
            self.typing_other = True
            self.other_input_value = ""
            self._refresh_content()
            return

        assert base is not None
        if base in self.selected:
            self.selected.remove(base)
        else:
            self.selected.append(base)
        self._refresh_content()

    def _rows(self) -> list[tuple[str, BaseTopping | None]]:
        rows: list[tuple[str, BaseTopping | None]] = [(self._BASE_KIND, base) for base in self.available]
        rows.append((self._OTHER_FACTORY_KIND, None))
        return rows

    def _confirm_other_topping(self) -> None:
        typed = parse_topping(self.other_input_value)
        self.typing_other = False
        self.other_input_value = ""
        if typed is not None:
            for base in typed.parts:
                if base not in self.available:
                    self.available.append(base)
                if base not in self.selected:
                    self.selected.append(base)
        self.cursor_index = len(self._rows()) - 1
        self._refresh_content()

    def _refresh_content(self) -> None:
        body = self.query_one("#topping-body", Static)
        help_text = self.query_one("#topping-help", Static)

        content = Text(style="white")
        if self.selected:
            content.append(" + ".join(base.name for base in self.selected), style="bold white")
        else:
            content.append("(pick one or more parts)", style="dim")
        rows = self._rows()
        if self.cursor_index >= len(rows):
            self.cursor_index = max(0, len(rows) - 1)

        content.append("\n\n")
        for idx, (row_kind, base) in enumerate(rows):
            if idx > 0:
                content.append("\n")
            pointer = "➤ " if idx == self.cursor_index else "  "
            if row_kind == self._BASE_KIND:
                assert base is not None
                position = self.selected.index(base) + 1 if base in self.selected else None
                checked = f"[{position}]" if position is not None else "[ ]"
                style = "bold white" if position is not None else "white"
                content.append(f"{pointer}{checked} {base.name}", style=style)
            elif self.typing_other and idx == self.cursor_index:
                content.append(f"{pointer}[ ] Other topping: {self.other_input_value}|", style="bold white")
            else:
                content.append(f"{pointer}[ ] Other topping", style="white")

        if self.typing_other:
            help_text.update("Type text, Enter confirm, Esc cancel typing")
        else:
            help_text.update("J/K/↑/↓ move, Enter toggle, A accept, Esc/q/Ctrl+C close")
        body.update(content)
