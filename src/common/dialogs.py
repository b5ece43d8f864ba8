"""
User-facing notices for vulkan-check.

Shows a blocking GTK4/Adwaita message dialog when a display is available
and falls back to stderr otherwise.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

try:
    import gi
    gi.require_version("Gtk", "4.0")
    gi.require_version("Adw", "1")
    from gi.repository import Gtk, Adw, GLib
    GTK_AVAILABLE = True
except (ImportError, ValueError):
    GTK_AVAILABLE = False
    Gtk = None
    Adw = None
    GLib = None

logger = logging.getLogger(__name__)


def _display_available() -> bool:
    if not GTK_AVAILABLE:
        return False
    return bool(Gtk.init_check())


def show_notice(
    title: str,
    message: str,
    parent=None,
) -> None:
    """
    Show a notice and wait until the user dismisses it.

    Args:
        title: Notice heading
        message: Notice body
        parent: Optional parent window
    """
    if not _display_available():
        print(f"NOTICE: {title}\n{message}", file=sys.stderr)
        return

    Adw.init()
    loop = GLib.MainLoop()

    dialog = Adw.MessageDialog(
        transient_for=parent,
        modal=True,
        heading=title,
        body=message,
    )
    dialog.add_response("ok", "OK")
    dialog.set_default_response("ok")
    dialog.set_close_response("ok")
    dialog.connect("response", lambda d, r: loop.quit())
    dialog.present()

    logger.debug(f"Waiting for notice '{title}' to be dismissed")
    loop.run()
    dialog.destroy()
