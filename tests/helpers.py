"""Shared fakes and utilities for unit tests."""

from __future__ import annotations
from tracking import t

from typing import Any, Dict, List, Optional, Tuple

from domain.venues import BookingFamily, Venue


class DummyLogger:
    """Lightweight stand-in for ``logging.Logger`` that records calls."""

    def __init__(self) -> None:
        t('tests.helpers.DummyLogger.__init__')
        self.records: List[Tuple[str, Tuple[Any, ...], Dict[str, Any]]] = []

    def _record(self, level: str, *args: Any, **kwargs: Any) -> None:
        t('tests.helpers.DummyLogger._record')
        self.records.append((level, args, kwargs))

    def debug(self, *args: Any, **kwargs: Any) -> None:
        t('tests.helpers.DummyLogger.debug')
        self._record("debug", *args, **kwargs)

    def info(self, *args: Any, **kwargs: Any) -> None:
        t('tests.helpers.DummyLogger.info')
        self._record("info", *args, **kwargs)

    def warning(self, *args: Any, **kwargs: Any) -> None:
        t('tests.helpers.DummyLogger.warning')
        self._record("warning", *args, **kwargs)

    def error(self, *args: Any, **kwargs: Any) -> None:
        t('tests.helpers.DummyLogger.error')
        self._record("error", *args, **kwargs)

    @property
    def messages(self) -> List[Tuple[str, Any]]:
        """Return formatted messages for quick assertions."""
        t('tests.helpers.DummyLogger.messages')

        formatted: List[Tuple[str, Any]] = []
        for level, args, _kwargs in self.records:
            message: Any = None
            if args:
                template = args[0]
                if isinstance(template, str) and len(args) > 1:
                    try:
                        message = template % args[1:]
                    except (TypeError, ValueError):
                        message = template
                else:
                    message = template
            formatted.append((level, message))
        return formatted


class FakeLocator:
    """Records clicks made through ``page.locator(...).first.click()``."""

    def __init__(self, page: "FakePage", selector: str) -> None:
        t('tests.helpers.FakeLocator.__init__')
        self._page = page
        self.selector = selector

    @property
    def first(self) -> "FakeLocator":
        return self

    async def click(self, **_kwargs: Any) -> None:
        t('tests.helpers.FakeLocator.click')
        self._page.clicks.append(self.selector)


class FakePage:
    """Minimal async Playwright ``Page`` double.

    ``evaluate`` returns queued results in order (an exception instance in the
    queue is raised instead); once the queue is empty it returns ``default``.
    """

    def __init__(
        self,
        evaluate_results: Optional[List[Any]] = None,
        *,
        url: str = "about:blank",
        default: Any = None,
    ) -> None:
        t('tests.helpers.FakePage.__init__')
        self._results = list(evaluate_results or [])
        self._default = default
        self.url = url
        self.evaluate_calls: List[Tuple[str, Any]] = []
        self.clicks: List[str] = []
        self.visited: List[str] = []
        self.screenshots: List[str] = []
        self.wait_error: Optional[Exception] = None
        self.goto_error: Optional[Exception] = None
        self.screenshot_error: Optional[Exception] = None
        self.timeouts: Dict[str, int] = {}

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        t('tests.helpers.FakePage.evaluate')
        self.evaluate_calls.append((script, arg))
        if not self._results:
            return self._default
        result = self._results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    async def goto(self, url: str, **_kwargs: Any) -> None:
        t('tests.helpers.FakePage.goto')
        if self.goto_error is not None:
            raise self.goto_error
        self.visited.append(url)
        self.url = url

    async def wait_for_selector(self, selector: str, **_kwargs: Any) -> None:
        t('tests.helpers.FakePage.wait_for_selector')
        if self.wait_error is not None:
            raise self.wait_error

    def locator(self, selector: str) -> FakeLocator:
        t('tests.helpers.FakePage.locator')
        return FakeLocator(self, selector)

    async def screenshot(self, path: str, **_kwargs: Any) -> None:
        t('tests.helpers.FakePage.screenshot')
        if self.screenshot_error is not None:
            raise self.screenshot_error
        self.screenshots.append(path)

    def set_default_timeout(self, value: int) -> None:
        self.timeouts["default"] = value

    def set_default_navigation_timeout(self, value: int) -> None:
        self.timeouts["navigation"] = value


def make_venue(
    key: str = "testVenue",
    *,
    family: BookingFamily = BookingFamily.TENNISVENUES,
    postcode: str = "2034",
    url: str = "https://example.com/booking/test",
    courts: int = 4,
    location: Optional[str] = None,
) -> Venue:
    """Build a catalog entry with sensible defaults for tests."""
    t('tests.helpers.make_venue')
    return Venue(
        key=key,
        name=f"{key} Tennis",
        family=family,
        url=url,
        address="1 Test St",
        postcode=postcode,
        phone="0400 000 000",
        courts=courts,
        surface="Hard Court",
        location=location,
    )
