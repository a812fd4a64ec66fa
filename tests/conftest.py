"""
Shared pytest fixtures for the TextSnip test suite.

Provides fakes for the overlay surface, the presenter and the OCR engine so
the whole capture pipeline runs headless: no display, no Qt, no OCR models.
The few widget tests use the offscreen Qt platform.
"""

import os
from pathlib import Path
from types import SimpleNamespace
from typing import List, Optional

import cv2
import numpy as np
import pytest

from textsnip.core.ocr_adapter import OcrPipelineAdapter
from textsnip.core.ocr_engine import OcrEngine
from textsnip.core.orchestrator import CaptureOrchestrator, run_inline
from textsnip.core.presentation import Presenter
from textsnip.core.snapshot import Snapshot

# Widget tests run without a display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class FakeOverlay:
    """Records what the orchestrator asks the surface to do."""

    def __init__(self, size=(100, 100)):
        self.calls = []
        self.visible = False
        self.last_redraw = None
        self.size = size

    def show(self):
        self.calls.append("show")
        self.visible = True

    def render(self, redraw):
        self.calls.append("render")
        self.last_redraw = redraw

    def hide(self):
        self.calls.append("hide")
        self.visible = False

    def surface_size(self):
        return self.size


class FakePresenter(Presenter):
    """Records which presentation branch was taken."""

    def __init__(self):
        self.calls = []

    def show_text(self, text):
        self.calls.append(("text", text))

    def show_no_text(self):
        self.calls.append(("no_text",))

    def show_error(self, title, message):
        self.calls.append(("error", title, message))


class FakeEngine(OcrEngine):
    """
    Reads the artifact back with OpenCV so tests can check exactly what was
    serialized, then returns canned text or raises a canned error.
    """

    def __init__(self, text: str = "", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.paths: List[Path] = []
        self.images: List[np.ndarray] = []

    def read_file(self, image_path):
        path = Path(image_path)
        self.paths.append(path)
        self.images.append(cv2.imread(str(path), cv2.IMREAD_UNCHANGED))
        if self.error is not None:
            raise self.error
        return self.text


class DeferredRunner:
    """Holds recognition jobs until the test runs them, like a busy worker thread."""

    def __init__(self):
        self.pending = []

    def __call__(self, job, on_done):
        self.pending.append((job, on_done))

    def run_all(self):
        while self.pending:
            job, on_done = self.pending.pop(0)
            on_done(job())


# ---------------------------------------------------------------------------
# Image fixtures
# ---------------------------------------------------------------------------

def solid_grid(width=100, height=100, color=(30, 144, 255)):
    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    pixels[:, :] = color
    return pixels


def patterned_grid(width=100, height=100):
    """A BGR grid where every pixel is distinguishable from its neighbours."""
    ys, xs = np.mgrid[0:height, 0:width]
    pixels = np.stack([xs % 256, ys % 256, (xs * 7 + ys * 13) % 256], axis=-1)
    return pixels.astype(np.uint8)


@pytest.fixture
def solid_snapshot():
    return Snapshot.from_array(solid_grid())


@pytest.fixture
def patterned_snapshot():
    return Snapshot.from_array(patterned_grid())


# ---------------------------------------------------------------------------
# Pipeline fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def artifact_dir(tmp_path):
    """A private temp directory so leftover artifacts are easy to spot."""
    directory = tmp_path / "artifacts"
    directory.mkdir()
    return directory


@pytest.fixture
def make_pipeline(artifact_dir, patterned_snapshot):
    """
    Builds an orchestrator wired to fakes and a real OcrPipelineAdapter.

    Returns a namespace with the orchestrator and every collaborator so tests
    can inspect what happened.
    """
    def factory(engine=None, snapshot=None, snapshotter=None, run_recognition=run_inline, min_size=10,
                overlay_size=(100, 100)):
        engine = engine if engine is not None else FakeEngine(text="Hello")
        snapshot = snapshot if snapshot is not None else patterned_snapshot
        overlay = FakeOverlay(size=overlay_size)
        presenter = FakePresenter()
        snapshots_taken = []

        def default_snapshotter():
            snapshots_taken.append(snapshot)
            return snapshot

        adapter = OcrPipelineAdapter(lambda: engine, temp_dir=artifact_dir)
        orchestrator = CaptureOrchestrator(
            snapshotter=snapshotter or default_snapshotter,
            overlay=overlay,
            recognizer=adapter,
            presenter=presenter,
            run_recognition=run_recognition,
            min_selection_size=min_size,
        )
        return SimpleNamespace(
            orchestrator=orchestrator,
            overlay=overlay,
            presenter=presenter,
            engine=engine,
            adapter=adapter,
            snapshots_taken=snapshots_taken,
            artifact_dir=artifact_dir,
        )

    return factory
