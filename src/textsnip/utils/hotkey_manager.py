# -*- coding: utf-8 -*-
"""
src/textsnip/utils/hotkey_manager.py

Global capture hotkey, backed by 'pynput'.

The listener runs on its own daemon thread; the callback is invoked from that
thread, so callers must marshal it onto the GUI thread themselves (the tray
app does this with a Qt signal).
"""

import logging
from typing import Callable, Optional

from pynput import keyboard

logger = logging.getLogger(__name__)

CAPTURE_HOTKEY = "<ctrl>+<alt>+o"


class HotkeyManager:
    """
    Manages a global hotkey listener in a separate thread.

    Attributes:
        hotkey_str (str): The pynput hotkey string, e.g. '<ctrl>+<alt>+o'.
        callback (Callable[[], None]): Called when the hotkey is pressed.
        listener (Optional[keyboard.GlobalHotKeys]): The pynput listener instance.
    """

    def __init__(self, callback: Callable[[], None], hotkey_str: str = CAPTURE_HOTKEY):
        self.hotkey_str = hotkey_str
        self.callback = callback
        self.listener: Optional[keyboard.GlobalHotKeys] = None

    def _on_activate(self):
        logger.debug(f"Hotkey '{self.hotkey_str}' activated.")
        try:
            self.callback()
        except Exception as e:
            # An exception here would kill the listener thread.
            logger.error(f"Error executing hotkey callback: {e}", exc_info=True)

    def start(self) -> bool:
        """
        Starts the hotkey listener thread.

        Returns:
            bool: True if the listener is running afterwards.
        """
        if self.listener and self.listener.is_alive():
            logger.warning("Hotkey listener is already running. Stopping it before starting a new one.")
            self.stop()

        try:
            self.listener = keyboard.GlobalHotKeys({self.hotkey_str: self._on_activate})
            self.listener.start()
        except Exception as e:
            # pynput raises backend-specific errors, e.g. when no X server is reachable.
            logger.error(f"Failed to start hotkey listener for '{self.hotkey_str}': {e}", exc_info=True)
            self.listener = None
            return False

        logger.info(f"Global hotkey listener started for '{self.hotkey_str}'.")
        return True

    def stop(self):
        """Stops the hotkey listener thread if it is running."""
        if self.listener and self.listener.is_alive():
            logger.info("Stopping global hotkey listener.")
            self.listener.stop()
        self.listener = None
