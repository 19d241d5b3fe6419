"""Isolated Playwright browser sessions, one per venue scrape."""

from __future__ import annotations
from tracking import t

import logging
import random
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Callable, Optional

from playwright.async_api import Browser, BrowserContext, Page, async_playwright

from automation.errors import SessionError
from infrastructure.constants import (
    BROWSER_LOCALE,
    CHROMIUM_ARGS,
    STEALTH_INIT_SCRIPT,
    USER_AGENTS,
    VIEWPORT,
)
from infrastructure.settings import AppSettings, get_settings

logger = logging.getLogger(__name__)


@dataclass
class BrowserSession:
    """Handles owned by a single venue scrape."""

    venue_key: str
    playwright: Any
    browser: Browser
    context: BrowserContext
    page: Page
    user_agent: str


class SessionManager:
    """Open and close stealth-configured Chromium sessions.

    ``playwright_factory`` defaults to ``async_playwright``; tests pass a fake
    returning an object with an async ``start()``.
    """

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        *,
        playwright_factory: Callable[[], Any] = async_playwright,
    ) -> None:
        t('automation.browser.session.SessionManager.__init__')
        self.settings = settings or get_settings()
        self._playwright_factory = playwright_factory

    async def open(self, venue_key: str = "") -> BrowserSession:
        """Launch a browser and return a ready page.

        Raises:
            SessionError: if any step fails; partial resources are released.
        """
        t('automation.browser.session.SessionManager.open')
        playwright = browser = context = None
        user_agent = random.choice(USER_AGENTS)
        try:
            playwright = await self._playwright_factory().start()
            browser = await playwright.chromium.launch(
                headless=self.settings.headless,
                args=list(CHROMIUM_ARGS),
            )
            context = await browser.new_context(
                viewport=dict(VIEWPORT),
                user_agent=user_agent,
                locale=BROWSER_LOCALE,
                timezone_id=self.settings.timezone,
            )
            await context.add_init_script(STEALTH_INIT_SCRIPT)
            page = await context.new_page()
            page.set_default_timeout(self.settings.page_timeout_ms)
            page.set_default_navigation_timeout(self.settings.navigation_timeout_ms)
        except Exception as exc:
            logger.error("Failed to open browser session for %s: %s", venue_key or "venue", exc)
            await self._release(venue_key, playwright, browser, context)
            raise SessionError(f"Failed to open browser session: {exc}", venue_key) from exc
        except BaseException:
            logger.warning("Browser session open for %s interrupted; releasing", venue_key or "venue")
            await self._release(venue_key, playwright, browser, context)
            raise

        if not self.settings.production_mode:
            logger.debug("Opened browser session for %s (UA %s)", venue_key, user_agent)
        return BrowserSession(
            venue_key=venue_key,
            playwright=playwright,
            browser=browser,
            context=context,
            page=page,
            user_agent=user_agent,
        )

    async def close(self, session: Optional[BrowserSession]) -> None:
        """Release every handle owned by ``session``. Never raises."""
        t('automation.browser.session.SessionManager.close')
        if session is None:
            return
        await self._release(session.venue_key, session.playwright, session.browser, session.context)

    @asynccontextmanager
    async def session(self, venue_key: str = "") -> AsyncIterator[BrowserSession]:
        """Async context manager that always closes the session it opened."""
        t('automation.browser.session.SessionManager.session')
        opened = await self.open(venue_key)
        try:
            yield opened
        finally:
            await self.close(opened)

    async def _release(self, venue_key: str, playwright, browser, context) -> None:
        t('automation.browser.session.SessionManager._release')
        steps = (
            ("context", context, "close"),
            ("browser", browser, "close"),
            ("playwright", playwright, "stop"),
        )
        for label, handle, method in steps:
            if handle is None:
                continue
            try:
                await getattr(handle, method)()
            except Exception as exc:
                logger.warning("Error closing %s for %s: %s", label, venue_key or "venue", exc)
