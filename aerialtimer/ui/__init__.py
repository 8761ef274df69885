"""UI package."""

from .timer_widget import TimerWidget
from .config_dialog import ConfigDialog

__all__ = [
    "TimerWidget",
    "ConfigDialog",
]
