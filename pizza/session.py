"""Role state for one running app: undecided, hosting, or ordering as a guest."""

from __future__ import annotations

from dataclasses import dataclass, field

from pizza.count import Count
from pizza.models import UpdateEvent
from pizza.orders import OrderBook


@dataclass(frozen=True)
class Undetermined:
    """No role picked yet."""


@dataclass(frozen=True)
class Host:
    book: OrderBook = field(default_factory=OrderBook)


@dataclass(frozen=True)
class Guest:
    participant_id: str
    count: Count = field(default_factory=Count.empty)


Role = Undetermined | Host | Guest


@dataclass(frozen=True)
class BecomeHost:
    book: OrderBook = field(default_factory=OrderBook)


@dataclass(frozen=True)
class JoinAsGuest:
    participant_id: str


@dataclass(frozen=True)
class ApplyUpdate:
    event: UpdateEvent
    version: int | None = None


@dataclass(frozen=True)
class Leave:
    pass


Action = BecomeHost | JoinAsGuest | ApplyUpdate | Leave


def transition(role: Role, action: Action) -> Role:
    """Return the next role; raises ValueError for transitions that make no sense."""
    if isinstance(action, Leave):
        return Undetermined()

    if isinstance(role, Undetermined):
        if isinstance(action, BecomeHost):
            return Host(book=action.book)
        if isinstance(action, JoinAsGuest):
            participant_id = action.participant_id.strip()
            if not participant_id:
                raise ValueError("participant id is required")
            return Guest(participant_id=participant_id)
        raise ValueError(f"{type(action).__name__} needs a role first")

    if isinstance(role, Host) and isinstance(action, ApplyUpdate):
        return Host(book=role.book.apply(action.event, version=action.version))

    if isinstance(role, Guest) and isinstance(action, ApplyUpdate):
        if action.event.participant_id != role.participant_id:
            # Guests only track their own demand.
            return role
        if action.event.count < 0:
            raise ValueError(f"count must be non-negative, got {action.event.count}")
        return Guest(participant_id=role.participant_id, count=role.count.set(action.event.topping, action.event.count))

    raise ValueError(f"cannot apply {type(action).__name__} while {type(role).__name__}")
