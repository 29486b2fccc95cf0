"""UI package."""

from .timer_widget import TimerWidget
from .blocks_panel import BlocksPanel
from .login_dialog import LoginDialog

__all__ = [
    "TimerWidget",
    "BlocksPanel",
    "LoginDialog",
]
