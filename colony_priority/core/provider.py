"""Game-state provider contract consumed by the consideration library.

GameStateProvider — abstract read-only facade over host facts.
SnapshotProvider  — the default implementation backed by a ColonySnapshot.

Considerations only ever talk to a GameStateProvider, so tests (or a host
with live accessors) can substitute any implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from colony_priority.core.models import Actor, Thought
from colony_priority.core.settings import ConsiderationSettings
from colony_priority.core.snapshot import Alerts, ColonyMetrics, ColonySnapshot


class GameStateProvider(ABC):
    """Read-only facts about the colony at one evaluation instant."""

    @property
    @abstractmethod
    def tick(self) -> int:
        """Current game tick."""

    @property
    @abstractmethod
    def alerts(self) -> Alerts:
        """Boolean colony alerts."""

    @property
    @abstractmethod
    def metrics(self) -> ColonyMetrics:
        """Numeric colony metrics."""

    @property
    @abstractmethod
    def settings(self) -> ConsiderationSettings:
        """Player-chosen consideration weights."""

    @abstractmethod
    def colonists(self) -> tuple[Actor, ...]:
        """All player-faction actors on the map, the evaluated one included."""

    @abstractmethod
    def thoughts(self) -> tuple[Thought, ...]:
        """Colony-wide mood thoughts."""

    @abstractmethod
    def is_category_disabled(self, category_key: str) -> bool:
        """True when the player switched the category off for the whole map."""

    @abstractmethod
    def last_bored_tick(self, actor_id: int) -> int | None:
        """Tick at which the actor was last idle, or None if never."""


class SnapshotProvider(GameStateProvider):
    """GameStateProvider backed by an immutable ColonySnapshot."""

    __slots__ = ("_snapshot",)

    def __init__(self, snapshot: ColonySnapshot) -> None:
        self._snapshot = snapshot

    @property
    def snapshot(self) -> ColonySnapshot:
        return self._snapshot

    @property
    def tick(self) -> int:
        return self._snapshot.tick

    @property
    def alerts(self) -> Alerts:
        return self._snapshot.alerts

    @property
    def metrics(self) -> ColonyMetrics:
        return self._snapshot.metrics

    @property
    def settings(self) -> ConsiderationSettings:
        return self._snapshot.settings

    def colonists(self) -> tuple[Actor, ...]:
        return self._snapshot.colonists

    def thoughts(self) -> tuple[Thought, ...]:
        return self._snapshot.thoughts

    def is_category_disabled(self, category_key: str) -> bool:
        return category_key in self._snapshot.disabled_categories

    def last_bored_tick(self, actor_id: int) -> int | None:
        return self._snapshot.last_bored.get(actor_id)
