# -*- coding: utf-8 -*-
"""
src/textsnip/core/session.py

The capture session and the process-wide slot that holds it.
"""

import itertools
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .geometry import Rect
from .selection import SelectionMachine
from .snapshot import Snapshot

logger = logging.getLogger(__name__)

_session_ids = itertools.count(1)


class SessionStatus(Enum):
    SELECTING = "selecting"
    FINALIZED = "finalized"
    CANCELLED = "cancelled"


@dataclass
class CaptureSession:
    """One trigger-to-result cycle: its snapshot, its selection and its status."""
    machine: SelectionMachine
    snapshot: Optional[Snapshot] = None
    status: SessionStatus = SessionStatus.SELECTING
    rect: Optional[Rect] = None
    session_id: int = field(default_factory=lambda: next(_session_ids))

    def finalize(self, rect: Rect) -> None:
        self.rect = rect
        self.status = SessionStatus.FINALIZED

    def cancel(self) -> None:
        self.status = SessionStatus.CANCELLED

    def release(self) -> None:
        """Drops the snapshot so its pixels can be freed."""
        self.snapshot = None


class SessionSlot:
    """Holds at most one `CaptureSession`."""

    def __init__(self):
        self._session: Optional[CaptureSession] = None

    @property
    def session(self) -> Optional[CaptureSession]:
        return self._session

    def open(self, min_size: int) -> Optional[CaptureSession]:
        """Creates a session, or returns None if one is already in flight."""
        if self._session is not None:
            return None
        self._session = CaptureSession(machine=SelectionMachine(min_size))
        logger.debug(f"Session {self._session.session_id} opened")
        return self._session

    def close(self) -> None:
        if self._session is None:
            return
        self._session.release()
        logger.debug(f"Session {self._session.session_id} closed ({self._session.status.value})")
        self._session = None
