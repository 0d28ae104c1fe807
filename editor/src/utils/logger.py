"""Global logging and error handling utilities"""
import os
import sys
import logging
import traceback

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Detect debug mode - True if running from source, False if packaged.
# CIRCUIT_CANVAS_DEBUG=0/1 overrides.
_env_debug = os.environ.get('CIRCUIT_CANVAS_DEBUG')
if _env_debug is not None:
    DEBUG_MODE = _env_debug.strip().lower() not in ('0', 'false', 'no', '')
else:
    DEBUG_MODE = not getattr(sys, 'frozen', False)

_logger = logging.getLogger('circuit_canvas')
_main_window = None


def configure_logging(verbose=False):
    """Configure root logging for an entry point (stdout, WARNING unless verbose)"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def set_main_window(window):
    """Set the main window reference for showing popups"""
    global _main_window
    _main_window = window


def loggerRaise(e: Exception, user_message: str = None, title: str = "Error"):
    """Handle exceptions with optional popup in release mode

    Args:
        e: The exception to handle
        user_message: User-friendly message to show in popup (optional)
        title: Title for the popup dialog

    In DEBUG_MODE:
        - Just raises the exception (shows full traceback)

    In RELEASE_MODE:
        - Logs the full traceback
        - Shows popup with user message or exception string
        - Then raises the exception
    """
    if DEBUG_MODE:
        raise e

    _logger.error("%s\n%s", user_message or str(e),
                  ''.join(traceback.format_exception(type(e), e, e.__traceback__)))

    message = user_message if user_message else str(e)
    if _main_window:
        from PyQt5.QtWidgets import QMessageBox
        QMessageBox.critical(_main_window, title, f"{message}\n\n{e}")
    else:
        _logger.error("ERROR POPUP (no window): %s - %s", title, message)

    # Re-raise so application can handle it appropriately
    raise e
