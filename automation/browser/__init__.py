"""Browser session management for venue scrapes."""

from .human import human_delay
from .session import BrowserSession, SessionManager

__all__ = [
    "BrowserSession",
    "SessionManager",
    "human_delay",
]
