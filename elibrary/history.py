"""Undo history for borrow/return operations.

Only borrowing and returning are recorded; adding a book is permanent.
Entries hold the operation kind and the book's title, never a snapshot of
the book, because the inverse of each kind is fixed.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class ActionKind(Enum):
    """Reversible operation kinds."""
    BORROW = "borrow"
    RETURN = "return"

    def inverse_availability(self) -> bool:
        """Availability flag that undoes an operation of this kind."""
        if self is ActionKind.BORROW:
            return True
        if self is ActionKind.RETURN:
            return False
        raise ValueError(f"Unknown action kind: {self!r}")


@dataclass(frozen=True)
class Action:
    kind: ActionKind
    item_key: str

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "item_key": self.item_key}


class ActionLog:
    """LIFO stack of reversible actions."""

    def __init__(self) -> None:
        self._actions: List[Action] = []

    def push(self, action: Action) -> None:
        self._actions.append(action)

    def pop(self) -> Optional[Action]:
        """Remove and return the latest action, or ``None`` when empty."""
        if self.is_empty():
            return None
        return self._actions.pop()

    def entries(self) -> List[Action]:
        """Pending actions, most recent first."""
        return list(reversed(self._actions))

    def is_empty(self) -> bool:
        return not self._actions

    def __len__(self) -> int:
        return len(self._actions)
