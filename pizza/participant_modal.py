"""Participant name entry modal screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from pizza.persistence import HOST_PARTICIPANT_ID

MAX_PARTICIPANT_ID_LENGTH = 24


def validate_participant_id(value: str) -> str | None:
    """Return an error message, or None when `value` is usable."""
    normalized = value.strip()
    if not normalized:
        return "Name is required."
    if normalized.lower() == HOST_PARTICIPANT_ID:
        return f"'{HOST_PARTICIPANT_ID}' is reserved."
    if len(normalized) > MAX_PARTICIPANT_ID_LENGTH:
        return f"Name must be at most {MAX_PARTICIPANT_ID_LENGTH} characters."
    return None


class ParticipantModal(ModalScreen[str | None]):
    """Prompt for the guest's name before joining."""

    CSS = """
    ParticipantModal {
        align: center middle;
        background: $background 60%;
    }

    #participant-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #participant-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #participant-prompt {
        color: white;
        margin-bottom: 1;
    }

    #participant-value {
        border: heavy $secondary;
        padding: 0 1;
        color: white;
        margin-bottom: 1;
    }

    #participant-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #participant-help {
        color: #dddddd;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self.value = ""
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(id="participant-dialog"):
            yield Static("Join as guest", id="participant-title")
            yield Static("Enter your name", id="participant-prompt")
            yield Static(id="participant-value")
            yield Static(id="participant-error")
            yield Static("Enter confirm. Backspace delete. Esc/Ctrl+C cancel.", id="participant-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "ctrl+c"}:
            self.dismiss(None)
            event.stop()
            return

        if event.key == "enter":
            self._confirm()
            event.stop()
            return

        if event.key == "backspace":
            if self.value:
                self.value = self.value[:-1]
                self.error = ""
                self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            if len(self.value) < MAX_PARTICIPANT_ID_LENGTH:
                self.value += event.character
            self.error = ""
            self._refresh_content()
            event.stop()

    def _confirm(self) -> None:
        error = validate_participant_id(self.value)
        if error is not None:
            self.error = error
            self._refresh_content()
            return

        self.dismiss(self.value.strip())

    def _refresh_content(self) -> None:
        value_widget = self.query_one("#participant-value", Static)
        error_widget = self.query_one("#participant-error", Static)
        value_widget.update(self.value or "")
        error_widget.update(self.error or "")
