# -*- coding: utf-8 -*-
"""
The Utilities Package for TextSnip.

Small helpers shared by the tray app: clipboard access, the global hotkey
listener and logging setup.

The hotkey module imports pynput, which needs a running display server on
Linux, so nothing is re-exported here; import the submodules directly.
"""
