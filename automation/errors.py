"""Exception hierarchy for the scraping engine."""


class CourtFinderError(Exception):
    """Base class for every error raised by the scraper."""


class SessionError(CourtFinderError):
    """A browser session could not be created for a venue."""

    def __init__(self, message: str, venue_key: str = "") -> None:
        super().__init__(message)
        self.venue_key = venue_key


class ScraperEnvironmentError(CourtFinderError):
    """No browser session could be created for any selected venue."""

    def __init__(self, message: str, failures: int = 0) -> None:
        super().__init__(message)
        self.failures = failures
