# -*- coding: utf-8 -*-
"""
src/textsnip/utils/clipboard_manager.py

A simple wrapper utility for interacting with the system clipboard.

This module centralizes clipboard operations, primarily using the 'pyperclip'
library, with error handling for environments where a clipboard might not be
available.
"""

import logging

import pyperclip

logger = logging.getLogger(__name__)


def copy_to_clipboard(text: str) -> bool:
    """
    Copies the given text to the system clipboard.

    Args:
        text (str): The string to be copied.

    Returns:
        bool: True if the text was copied successfully, False otherwise.
    """
    try:
        pyperclip.copy(text)
        logger.info(f"Copied {len(text)} characters to clipboard")
        return True
    except pyperclip.PyperclipException as e:
        # This can happen on systems without a clipboard (e.g., some Linux servers)
        # or if the necessary copy/paste mechanism is not installed (e.g., xclip/xsel).
        logger.error(f"Failed to copy text to clipboard: {e}")
        logger.warning(
            "Clipboard functionality may not be available on this system. "
            "If on Linux, please ensure 'xclip' or 'xsel' is installed."
        )
        return False
