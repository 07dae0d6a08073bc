"""ConsiderationState — the scored value object and its adjustment primitives.

A state is immutable: every primitive returns a new state, so a pipeline is
simply a fold of steps over an initial state.  Each primitive that changes
``value``, ``enabled`` or ``disabled`` appends one human-readable line to
``justifications``; primitives that change nothing leave the log untouched.

Magnitude primitives (set / add / multiply) are no-ops on a disabled state.
Flag primitives (always_do / never_do) always apply, last writer wins.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Callable, Union

from colony_priority.core.enums import Tier
from colony_priority.core.errors import InvalidStateError
from colony_priority.core.models import Actor, WorkCategoryDef

# Reasons may be produced lazily; they are only rendered when recorded.
Reason = Union[str, Callable[[], str]]

LOWEST_TIER = int(Tier.LOWEST)
DISABLED_CUTOFF = 100 // (LOWEST_TIER + 1)                    # 20
ACTIVE_RANGE = 100 - DISABLED_CUTOFF                          # 80
TIER_WIDTH = ACTIVE_RANGE / LOWEST_TIER                       # 20.0

# Representative value for each tier, centred in its band.
TIER_VALUES: dict[int, float] = {
    Tier.HIGHEST: 0.9,
    Tier.HIGH: 0.7,
    Tier.LOW: 0.5,
    Tier.LOWEST: 0.3,
}


def clamp01(x: float) -> float:
    """Clamp to [0.0, 1.0]; NaN collapses to 0.0."""
    if math.isnan(x):
        return 0.0
    return max(0.0, min(1.0, x))


def _render(reason: Reason) -> str:
    text = reason() if callable(reason) else reason
    return text[:1].upper() + text[1:]


@dataclass(frozen=True, slots=True)
class ConsiderationState:
    """Desirability of one task category for one actor."""

    actor: Actor | None = None
    category: WorkCategoryDef | None = None
    value: float = 0.0
    enabled: bool = False
    disabled: bool = False
    justifications: tuple[str, ...] = ()

    @property
    def category_key(self) -> str | None:
        return self.category.key if self.category is not None else None

    def _record(self, line: str, **changes) -> ConsiderationState:
        return replace(self, justifications=self.justifications + (line,), **changes)

    # -- magnitude primitives --

    def set(self, value: float, reason: Reason) -> ConsiderationState:
        if self.disabled:
            return self
        new_value = clamp01(value)
        if new_value == self.value:
            return self
        return self._record(f"{_render(reason)}: {new_value:.0%}", value=new_value)

    def add(self, delta: float, reason: Reason) -> ConsiderationState:
        if self.disabled:
            return self
        new_value = clamp01(self.value + delta)
        if new_value == self.value:
            return self
        diff = new_value - self.value
        sign = "+" if diff > 0 else "-"
        return self._record(f"{_render(reason)}: {sign}{abs(diff):.0%}", value=new_value)

    def multiply(self, factor: float, reason: Reason) -> ConsiderationState:
        # A zero value cannot move under multiplication.
        if self.disabled or self.value == 0.0:
            return self
        new_value = clamp01(self.value * factor)
        if new_value == self.value:
            return self
        ratio = new_value / self.value
        return self._record(f"{_render(reason)}: x{ratio:.0%}", value=new_value)

    # -- flag primitives --

    def always_do_if(self, cond: bool, reason: Reason) -> ConsiderationState:
        if not cond or self.enabled:
            return self
        return self._record(f"{_render(reason)}: enabled", enabled=True, disabled=False)

    def always_do(self, reason: Reason) -> ConsiderationState:
        return self.always_do_if(True, reason)

    def never_do_if(self, cond: bool, reason: Reason) -> ConsiderationState:
        if not cond or self.disabled:
            return self
        return self._record(f"{_render(reason)}: disabled", disabled=True, enabled=False)

    def never_do(self, reason: Reason) -> ConsiderationState:
        return self.never_do_if(True, reason)

    # -- tier conversion --

    def to_tier(self) -> Tier:
        """Export as the host's discrete tier (0 = never, 1 best, 4 worst)."""
        if self.disabled:
            return Tier.NEVER
        if math.isnan(self.value):
            raise InvalidStateError(
                f"cannot export a tier for {self.category_key!r}: value is NaN"
            )
        percent = round(clamp01(self.value) * 100)
        if percent <= DISABLED_CUTOFF:
            return Tier.LOWEST if self.enabled else Tier.NEVER
        inverted = ACTIVE_RANGE - (percent - DISABLED_CUTOFF)   # 0-79
        tier = int(inverted // TIER_WIDTH) + 1
        return Tier(min(max(tier, int(Tier.HIGHEST)), LOWEST_TIER))

    @classmethod
    def from_tier(
        cls,
        tier: int,
        actor: Actor | None = None,
        category: WorkCategoryDef | None = None,
    ) -> ConsiderationState:
        """Seed a state from a previously exported tier; out-of-range tiers clamp."""
        tier = min(max(int(tier), int(Tier.NEVER)), LOWEST_TIER)
        base = cls(actor=actor, category=category)
        if tier == Tier.NEVER:
            return base.never_do(f"Restored from tier {tier}")
        return base.set(TIER_VALUES[tier], f"Restored from tier {tier}")
