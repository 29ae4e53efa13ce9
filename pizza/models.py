"""Domain models for pizza-pies."""

from __future__ import annotations

from dataclasses import dataclass


class ConfigError(ValueError):
    """Raised when pie configuration values are unusable."""


@dataclass(frozen=True)
class BaseTopping:
    """An atomic ingredient, identified by name."""

    name: str


@dataclass(frozen=True)
class Topping:
    """An ordered combination of base toppings (e.g. half pepperoni, half mushroom)."""

    parts: tuple[BaseTopping, ...]

    def __post_init__(self) -> None:
        if not self.parts:
            raise ValueError("Topping needs at least one part")

    @property
    def is_plain(self) -> bool:
        return len(self.parts) == 1

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(part.name for part in self.parts)


Pair = tuple[Topping, int]


@dataclass(frozen=True)
class PieConfig:
    """Pie capacity: `parts_per_pie` parts of `slices_per_part` slices each."""

    slices_per_part: int
    parts_per_pie: int

    def __post_init__(self) -> None:
        for field_name in ("slices_per_part", "parts_per_pie"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{field_name} must be an integer, got {value!r}")
            if value <= 0:
                raise ConfigError(f"{field_name} must be positive, got {value}")

    @property
    def slices_per_pie(self) -> int:
        return self.slices_per_part * self.parts_per_pie

    def single_slice(self) -> PieConfig:
        """Same capacity, but every slice is its own part."""
        return PieConfig(slices_per_part=1, parts_per_pie=self.slices_per_pie)


@dataclass(frozen=True)
class UpdateEvent:
    """One participant's current (absolute) demand for one topping."""

    participant_id: str
    topping: Topping
    count: int
