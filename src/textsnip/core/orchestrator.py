# -*- coding: utf-8 -*-
"""
src/textsnip/core/orchestrator.py

Drives one capture from trigger to result.

    Idle -> CaptureRequested -> Snapshotting -> AwaitingSelection
         -> Recognizing -> Presenting -> Idle
         -> Aborted -> Idle                      (cancelled or too small)

The orchestrator owns the single session slot. A trigger that arrives while a
capture is in any state other than Idle is ignored, so two recognitions can
never overlap. Every failure is caught here and turned into an error notice;
nothing escapes into the event loop.

The overlay widget, the presenter and the way recognition is scheduled are
all injected, which keeps this module free of Qt.
"""

import logging
from enum import Enum
from typing import Callable, Iterable, Optional, Protocol, Tuple

import numpy as np

from .errors import CaptureError, OcrEngineError, TextSnipError
from .extractor import crop, to_snapshot_pixels
from .geometry import Rect
from .presentation import Presenter
from .result import Result
from .selection import (
    DEFAULT_MIN_SELECTION_SIZE, Accept, Arm, Discard, DiscardReason, Effect, Event, Hide, Redraw, Show,
)
from .session import CaptureSession, SessionSlot
from .snapshot import Snapshot

logger = logging.getLogger(__name__)

RecognitionJob = Callable[[], Result[str]]
RecognitionCallback = Callable[[Result[str]], None]


class CaptureState(Enum):
    IDLE = "idle"
    CAPTURE_REQUESTED = "capture_requested"
    SNAPSHOTTING = "snapshotting"
    AWAITING_SELECTION = "awaiting_selection"
    RECOGNIZING = "recognizing"
    PRESENTING = "presenting"
    ABORTED = "aborted"


class OverlaySurface(Protocol):
    """What the orchestrator needs from the on-screen selection surface."""

    def show(self) -> None: ...

    def render(self, redraw: Redraw) -> None: ...

    def hide(self) -> None: ...

    def surface_size(self) -> Tuple[int, int]:
        """Width and height of the surface in the units its events use."""
        ...


class Recognizer(Protocol):
    def recognize(self, image: np.ndarray) -> Result[str]: ...


def run_inline(job: RecognitionJob, on_done: RecognitionCallback) -> None:
    """Runs recognition on the calling thread."""
    on_done(job())


class CaptureOrchestrator:
    """
    Wires snapshot, overlay, extractor, OCR adapter and presenter into one
    request/response cycle.

    Args:
        snapshotter: Returns a fresh `Snapshot`; may raise `CaptureError`.
        overlay: The selection surface.
        recognizer: Usually an `OcrPipelineAdapter`.
        presenter: Shows text, the no-text notice or errors.
        run_recognition: Schedules a recognition job and calls back with its
            result. The default runs it inline; the tray app passes a runner
            that uses a worker thread and delivers the result on the GUI
            thread.
        min_selection_size: Selections must exceed this in both dimensions.
    """

    def __init__(self,
                 snapshotter: Callable[[], Snapshot],
                 overlay: OverlaySurface,
                 recognizer: Recognizer,
                 presenter: Presenter,
                 run_recognition: Callable[[RecognitionJob, RecognitionCallback], None] = run_inline,
                 min_selection_size: int = DEFAULT_MIN_SELECTION_SIZE):
        self._snapshotter = snapshotter
        self._overlay = overlay
        self._recognizer = recognizer
        self._presenter = presenter
        self._run_recognition = run_recognition
        self._min_selection_size = min_selection_size
        self._slot = SessionSlot()
        self._state = CaptureState.IDLE

    @property
    def state(self) -> CaptureState:
        return self._state

    @property
    def session(self) -> Optional[CaptureSession]:
        return self._slot.session

    @property
    def busy(self) -> bool:
        return self._state is not CaptureState.IDLE

    def _set_state(self, state: CaptureState) -> None:
        logger.debug(f"Capture {self._state.value} -> {state.value}")
        self._state = state

    # --- Entry points -------------------------------------------------------

    def start_capture(self) -> bool:
        """
        Begins a capture session.

        Returns:
            bool: False if the trigger was ignored because a capture is
            already in progress.
        """
        if self.busy:
            logger.info(f"Capture already in progress ({self._state.value}); trigger ignored.")
            return False

        session = self._slot.open(self._min_selection_size)
        if session is None:
            logger.warning("Session slot still occupied while idle; trigger ignored.")
            return False
        self._set_state(CaptureState.CAPTURE_REQUESTED)

        self._set_state(CaptureState.SNAPSHOTTING)
        try:
            session.snapshot = self._snapshotter()
        except TextSnipError as e:
            self._fail(e)
            return True
        except Exception as e:
            logger.error(f"Unexpected error while taking snapshot: {e}", exc_info=True)
            self._fail(CaptureError.from_exception(e, "Failed to capture the screen"))
            return True

        self._set_state(CaptureState.AWAITING_SELECTION)
        try:
            self._apply(session.machine.feed(Arm()))
        except Exception as e:
            logger.error(f"Could not show the selection overlay: {e}", exc_info=True)
            self._fail(CaptureError.from_exception(e, "Could not show the selection overlay"))
        return True

    def handle_overlay_event(self, event: Event) -> None:
        """Feeds one overlay input event to the session's selection machine."""
        if self._state is not CaptureState.AWAITING_SELECTION:
            logger.debug(f"Overlay event {event!r} ignored in state {self._state.value}")
            return
        try:
            self._apply(self._slot.session.machine.feed(event))
        except Exception as e:
            logger.error(f"Error while handling selection: {e}", exc_info=True)
            self._fail(CaptureError.from_exception(e, "Could not process the selection"))

    def finish_recognition(self, result: Result[str]) -> None:
        """Receives the recognition outcome and hands it to the presenter."""
        if self._state is not CaptureState.RECOGNIZING:
            logger.warning(f"Recognition result arrived in state {self._state.value}; dropped.")
            return

        self._set_state(CaptureState.PRESENTING)
        try:
            if result.is_success:
                self._presenter.present(result.value)
            else:
                self._presenter.present_error(result.error)
        except Exception as e:
            logger.error(f"Presenting the result failed: {e}", exc_info=True)
        finally:
            self._end_session()

    def reset(self) -> None:
        """
        Abandons a capture that is still waiting for a selection.

        A running recognition is left to finish since it cannot be
        interrupted; its result is still delivered.
        """
        if self._state is CaptureState.RECOGNIZING:
            logger.info("Recognition in progress; reset deferred until it completes.")
            return
        if self._state is CaptureState.AWAITING_SELECTION:
            self._overlay.hide()
        self._end_session()

    # --- Internals ----------------------------------------------------------

    def _apply(self, effects: Iterable[Effect]) -> None:
        for effect in effects:
            if isinstance(effect, Show):
                self._overlay.show()
            elif isinstance(effect, Redraw):
                self._overlay.render(effect)
            elif isinstance(effect, Hide):
                self._overlay.hide()
            elif isinstance(effect, Accept):
                self._on_accept(effect.rect)
            elif isinstance(effect, Discard):
                self._on_discard(effect.reason)

    def _on_accept(self, rect: Rect) -> None:
        session = self._slot.session
        session.finalize(rect)
        logger.info(f"Selection accepted: {rect.as_tuple()}")
        pixel_rect = to_snapshot_pixels(rect, self._overlay.surface_size(), session.snapshot)
        image = crop(session.snapshot, pixel_rect)
        # The crop owns its pixels; the full-screen snapshot is no longer needed.
        session.release()

        self._set_state(CaptureState.RECOGNIZING)

        def job() -> Result[str]:
            try:
                return self._recognizer.recognize(image)
            except Exception as e:
                logger.error(f"Unexpected recognition failure: {e}", exc_info=True)
                return Result.fail(OcrEngineError.from_exception(e, "Unexpected recognition failure"))

        self._run_recognition(job, self.finish_recognition)

    def _on_discard(self, reason: DiscardReason) -> None:
        session = self._slot.session
        if reason is DiscardReason.CANCELLED:
            session.cancel()
            logger.info("Capture cancelled by user.")
        else:
            logger.info("Selection too small; capture discarded.")
        self._set_state(CaptureState.ABORTED)
        self._end_session()

    def _fail(self, error: TextSnipError) -> None:
        logger.error(f"Capture aborted: {error}")
        if self._state is CaptureState.AWAITING_SELECTION:
            self._overlay.hide()
        self._set_state(CaptureState.ABORTED)
        try:
            self._presenter.present_error(error)
        except Exception as e:
            logger.error(f"Showing the error notice failed: {e}", exc_info=True)
        finally:
            self._end_session()

    def _end_session(self) -> None:
        self._slot.close()
        self._set_state(CaptureState.IDLE)
