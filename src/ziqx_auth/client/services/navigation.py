"""Navigation strategies for sending the user to the gateway.

Allows different strategies for browser interaction:
- System browser (default)
- Recording only, for headless callers and tests
- Custom UI integration via any object with a ``navigate`` method
"""

from __future__ import annotations

import logging
import webbrowser
from typing import Protocol

logger = logging.getLogger(__name__)


class Navigator(Protocol):
    """Protocol for performing a full-page redirect to a URL."""

    def navigate(self, url: str) -> None:
        """Send the user agent to ``url``."""
        ...


class BrowserNavigator:
    """Opens the authorization URL in the system web browser."""

    def navigate(self, url: str) -> None:
        opened = webbrowser.open(url)
        if not opened:
            logger.warning(f"No browser available; visit {url} to sign in")


class RecordingNavigator:
    """Keeps every URL it is asked to visit instead of opening it."""

    def __init__(self):
        self.visited: list[str] = []

    def navigate(self, url: str) -> None:
        self.visited.append(url)

    @property
    def last_url(self) -> str | None:
        return self.visited[-1] if self.visited else None
