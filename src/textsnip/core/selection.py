# -*- coding: utf-8 -*-
"""
src/textsnip/core/selection.py

The region-selection state machine behind the capture overlay.

The overlay widget only translates raw mouse and keyboard events into the
small event vocabulary below and applies the returned effects (show, redraw,
hide). All decisions about anchors, normalization, the minimum size and
cancellation live in `transition()`, which is a pure function and can be
driven without any display.

    Idle --Arm--> Armed --Press--> Dragging --Move--> Dragging
    Dragging --Release--> Finalized            (selection large enough)
    Dragging --Release--> Idle                 (too small, discarded)
    Armed | Dragging --Cancel--> Cancelled
    Idle | Finalized | Cancelled --Arm--> Armed
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

from .geometry import Point, Rect, SelectionRectangle, size_label

logger = logging.getLogger(__name__)

# Selections must be strictly larger than this in both dimensions.
DEFAULT_MIN_SELECTION_SIZE = 10

# The size label sits this far above the rectangle's top-left corner.
LABEL_OFFSET_Y = 25


class OverlayState(Enum):
    IDLE = "idle"
    ARMED = "armed"
    DRAGGING = "dragging"
    FINALIZED = "finalized"
    CANCELLED = "cancelled"


# --- Events -------------------------------------------------------------------

@dataclass(frozen=True)
class Arm:
    """A snapshot was taken and the overlay should come up."""


@dataclass(frozen=True)
class Press:
    x: int
    y: int
    primary: bool = True


@dataclass(frozen=True)
class Move:
    x: int
    y: int


@dataclass(frozen=True)
class Release:
    x: int
    y: int
    primary: bool = True


@dataclass(frozen=True)
class Cancel:
    """The cancellation key was pressed."""


Event = Union[Arm, Press, Move, Release, Cancel]


# --- Effects ------------------------------------------------------------------

@dataclass(frozen=True)
class Show:
    pass


@dataclass(frozen=True)
class Redraw:
    rect: Rect
    label: str
    label_pos: Point


@dataclass(frozen=True)
class Hide:
    pass


@dataclass(frozen=True)
class Accept:
    rect: Rect


class DiscardReason(Enum):
    CANCELLED = "cancelled"
    TOO_SMALL = "too_small"


@dataclass(frozen=True)
class Discard:
    reason: DiscardReason


Effect = Union[Show, Redraw, Hide, Accept, Discard]


@dataclass(frozen=True)
class SelectionState:
    """The machine's full state: the phase plus the drag corners, if any."""
    phase: OverlayState = OverlayState.IDLE
    selection: Optional[SelectionRectangle] = None

    @property
    def rect(self) -> Optional[Rect]:
        return self.selection.normalized() if self.selection else None


IDLE = SelectionState()

_REARMABLE = (OverlayState.IDLE, OverlayState.FINALIZED, OverlayState.CANCELLED)


def _redraw(selection: SelectionRectangle) -> Redraw:
    rect = selection.normalized()
    label_pos = Point(rect.x, max(0, rect.y - LABEL_OFFSET_Y))
    return Redraw(rect=rect, label=size_label(rect), label_pos=label_pos)


def transition(state: SelectionState, event: Event,
               min_size: int = DEFAULT_MIN_SELECTION_SIZE) -> Tuple[SelectionState, List[Effect]]:
    """
    Computes the next state and the side effects the overlay must perform.

    Pairs that have no transition leave the state untouched and return no
    effects, so stray input (a right click, a move before the button is
    down, Escape while idle) is simply ignored.
    """
    phase = state.phase

    if isinstance(event, Arm):
        if phase in _REARMABLE:
            return SelectionState(OverlayState.ARMED), [Show()]
        return state, []

    if isinstance(event, Cancel):
        if phase in (OverlayState.ARMED, OverlayState.DRAGGING):
            return SelectionState(OverlayState.CANCELLED, state.selection), \
                [Hide(), Discard(DiscardReason.CANCELLED)]
        return state, []

    if isinstance(event, Press):
        if phase is OverlayState.ARMED and event.primary:
            selection = SelectionRectangle.at(event.x, event.y)
            return SelectionState(OverlayState.DRAGGING, selection), [_redraw(selection)]
        return state, []

    if isinstance(event, Move):
        if phase is OverlayState.DRAGGING:
            selection = state.selection.moved_to(event.x, event.y)
            return SelectionState(OverlayState.DRAGGING, selection), [_redraw(selection)]
        return state, []

    if isinstance(event, Release):
        if phase is OverlayState.DRAGGING and event.primary:
            selection = state.selection.moved_to(event.x, event.y)
            rect = selection.normalized()
            if rect.is_larger_than(min_size):
                return SelectionState(OverlayState.FINALIZED, selection), [Hide(), Accept(rect)]
            return IDLE, [Hide(), Discard(DiscardReason.TOO_SMALL)]
        return state, []

    raise TypeError(f"Unknown selection event: {event!r}")


class SelectionMachine:
    """
    Stateful wrapper around `transition()` for one overlay.

    Keeps the current `SelectionState` and the configured minimum size; the
    orchestrator creates one per capture session.
    """

    def __init__(self, min_size: int = DEFAULT_MIN_SELECTION_SIZE):
        self.min_size = min_size
        self.state = IDLE

    @property
    def phase(self) -> OverlayState:
        return self.state.phase

    @property
    def rect(self) -> Optional[Rect]:
        return self.state.rect

    def feed(self, event: Event) -> List[Effect]:
        previous = self.state.phase
        self.state, effects = transition(self.state, event, self.min_size)
        if self.state.phase is not previous:
            logger.debug(f"Selection {previous.value} -> {self.state.phase.value} on {type(event).__name__}")
        return effects

    def reset(self) -> None:
        self.state = IDLE
