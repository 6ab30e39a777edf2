"""Terminal UI module for studymate.

Provides a Textual-based TUI over the StudyAssistant.

Module structure (Parnas principle - each module hides a design decision):
- config.py: UI constants and log levels
- widgets.py: Per-mode views, log panel and the logging bridge
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- screens.py: Modal dialogs (event add/edit)
- app.py: Application orchestration (user interaction flow)
"""

from .app import StudymateApp, run_tui
from .config import LogLevel
from .widgets import DebugPanel, PanelLogHandler

__all__ = [
    "DebugPanel",
    "LogLevel",
    "PanelLogHandler",
    "StudymateApp",
    "run_tui",
]
