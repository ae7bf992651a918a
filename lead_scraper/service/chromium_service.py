from dataclasses import dataclass, field
from typing import Optional

from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from lead_scraper.core.config import settings
from lead_scraper.core.exceptions import BrowserLaunchError, NavigationError
from lead_scraper.utils.logging import setup_logger

logger = setup_logger(__name__)


# =============================================================================
# Stealth Browser Session
# =============================================================================


HIDE_WEBDRIVER_SCRIPT = """
Object.defineProperty(navigator, 'webdriver', {
    get: () => false,
});
"""


@dataclass
class StealthConfig:
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/114.0.0.0 Safari/537.36"
    )
    viewport: dict[str, int] = field(default_factory=lambda: {"width": 1280, "height": 720})
    locale: str = "en-US"
    timezone_id: str = "Asia/Kolkata"
    headless: bool = field(default_factory=lambda: settings.BROWSER_HEADLESS)
    navigation_timeout_ms: int = field(default_factory=lambda: settings.NAVIGATION_TIMEOUT_MS)
    chrome_args: list[str] = field(default_factory=lambda: [
        "--no-first-run",
        "--no-default-browser-check",
        "--disable-extensions",
        "--disable-blink-features=AutomationControlled",
    ])


class StealthBrowserSession:
    """
    One Chromium process with one isolated, fingerprint-hardened context.

    Sessions are never shared. Use it as an async context manager so that
    `close()` runs on every exit path:

        async with await StealthBrowserSession.open() as session:
            await session.navigate(url)
    """

    def __init__(self, config: Optional[StealthConfig] = None):
        self.config = config or StealthConfig()
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None
        self._closed = False

    @classmethod
    async def open(cls, config: Optional[StealthConfig] = None) -> "StealthBrowserSession":
        session = cls(config)
        try:
            await session._launch()
        except Exception as e:
            await session.close()
            logger.error("Browser launch failed", extra={"error": str(e)})
            raise BrowserLaunchError(f"Failed to launch browser: {e}") from e
        except BaseException:
            # Cancelled mid-launch: release whatever was started, then re-raise.
            await session.close()
            raise
        return session

    @property
    def page(self) -> Page:
        if self._page is None or self._closed:
            raise RuntimeError("Browser session is not open.")
        return self._page

    @property
    def is_closed(self) -> bool:
        return self._closed

    async def _launch(self) -> None:
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=self.config.headless,
            args=self.config.chrome_args,
        )
        self._context = await self._browser.new_context(
            user_agent=self.config.user_agent,
            viewport=self.config.viewport,
            locale=self.config.locale,
            timezone_id=self.config.timezone_id,
            java_script_enabled=True,
        )
        await self._context.add_init_script(HIDE_WEBDRIVER_SCRIPT)
        self._page = await self._context.new_page()
        logger.debug(
            "Browser session opened",
            extra={"headless": self.config.headless, "locale": self.config.locale},
        )

    async def navigate(self, url: str) -> None:
        """Load `url` and return once the DOM has been parsed."""
        try:
            await self.page.goto(
                url,
                wait_until="domcontentloaded",
                timeout=self.config.navigation_timeout_ms,
            )
        except PlaywrightTimeoutError as e:
            raise NavigationError(
                url, f"timed out after {self.config.navigation_timeout_ms}ms"
            ) from e
        except PlaywrightError as e:
            raise NavigationError(url, str(e)) from e

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True

        # Each step is attempted even if an earlier one fails or is cancelled.
        cancelled: Optional[BaseException] = None
        for name, closer in (
            ("context", self._context.close if self._context else None),
            ("browser", self._browser.close if self._browser else None),
            ("playwright", self._playwright.stop if self._playwright else None),
        ):
            if closer is None:
                continue
            try:
                await closer()
            except Exception as e:
                logger.warning(
                    "Error while closing browser session",
                    extra={"component": name, "error": str(e)},
                )
            except BaseException as e:
                cancelled = cancelled or e

        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None
        logger.debug("Browser session closed")

        if cancelled is not None:
            raise cancelled

    async def __aenter__(self) -> "StealthBrowserSession":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
