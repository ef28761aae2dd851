"""
Focus Manager

Tracks which application owns the primary slot of the focus layout and how
repeated next/previous commands move it.
"""

from __future__ import annotations
import logging
import threading
from enum import Enum, auto
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence

if TYPE_CHECKING:
    from .window_resolver import EligibleWindow

logger = logging.getLogger(__name__)


class CycleDirection(Enum):
    """Direction to cycle the focused owner."""

    NEXT = auto()
    PREV = auto()


def unique_owners(windows: Iterable["EligibleWindow"]) -> List[int]:
    """Owner pids in order of first appearance."""
    owners = []
    for win in windows:
        if win.pid is not None and win.pid not in owners:
            owners.append(win.pid)
    return owners


class FocusCycleState:
    """Focused owner for the focus layout.

    Starts unset. The owner only ever changes through advance(), which is
    safe to call from concurrent triggers.
    """

    def __init__(self):
        self.focused_owner: Optional[int] = None
        self._lock = threading.Lock()

    def advance(
        self,
        direction: CycleDirection,
        candidates: Sequence[int],
        frontmost_owner: Optional[int] = None,
    ) -> Optional[int]:
        """Move focus to the next or previous owner.

        When nothing is focused yet, or the focused owner is no longer among
        the candidates, focus resets to the frontmost owner (or the first
        candidate if the frontmost owner is not a candidate) without stepping.

        Args:
            direction: Which way to cycle
            candidates: Owner pids on screen, in cycle order
            frontmost_owner: Owner pid of the frontmost window, if any

        Returns:
            The newly focused owner, or None when there are no candidates
        """
        if not candidates:
            return None

        with self._lock:
            current = self.focused_owner
            if current is None or current not in candidates:
                if frontmost_owner in candidates:
                    target = frontmost_owner
                else:
                    target = candidates[0]
                logger.debug(f"Focus reset to owner {target} (was {current})")
            else:
                step = 1 if direction == CycleDirection.NEXT else -1
                index = candidates.index(current)
                target = candidates[(index + step) % len(candidates)]
                logger.debug(f"Focus cycled {direction.name} from {current} to {target}")

            self.focused_owner = target
            return target

    def reset(self):
        """Forget the focused owner."""
        with self._lock:
            self.focused_owner = None
