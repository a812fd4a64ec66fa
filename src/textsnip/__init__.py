# -*- coding: utf-8 -*-
"""
TextSnip Application Package.

A tray-resident utility that reads the printed text in any rectangle you drag
on the screen: select, recognize, copy.

Subpackages:
- core: the selection state machine and the capture/OCR pipeline (no Qt).
- gui: the PyQt6 overlay, result dialog and presenter.
- utils: clipboard, global hotkey and logging helpers.

The tray controller is in `textsnip.app`; it is not imported here so that
the core can be used without a display.
"""

__version__ = "0.1.0"
