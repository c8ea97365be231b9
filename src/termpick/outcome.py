"""Results a behavior hands back to the engine after each key."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Continue:
    """Keep looping; the frame is redrawn."""


@dataclass(frozen=True)
class FinishSingle:
    """Stop with one item, or ``None`` when the user cancelled."""

    item: Any | None = None


@dataclass(frozen=True)
class FinishMulti:
    """Stop with the chosen items in display order. Cancel yields ``[]``."""

    items: list[Any] = field(default_factory=list)


Outcome = Continue | FinishSingle | FinishMulti

CONTINUE = Continue()


def is_finished(outcome: Outcome) -> bool:
    return not isinstance(outcome, Continue)
