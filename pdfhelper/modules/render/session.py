"""
Renderer session - one headless Chromium owned by one HTTP request.

A session launches Playwright and a browser, hands out pages, and tears
everything down on close. Pages are short-lived: one per document.
"""

from typing import Callable

from playwright.async_api import Browser, Page, Playwright, async_playwright

from pdfhelper.shared.errors import RendererError
from pdfhelper.shared.logging import get_logger

from .schemas import RenderOptions

logger = get_logger(__name__)


class RenderPage:
    """A single rendering surface inside a session."""

    def __init__(self, page: Page, options: RenderOptions) -> None:
        self._page = page
        self._options = options
        self.closed = False

    async def render_to_pdf(self, html: str) -> bytes:
        """
        Load HTML and print it to PDF bytes.

        Waits for network idle so fonts, images and stylesheets referenced by
        the markup are loaded before printing.
        """
        try:
            await self._page.set_content(html, wait_until="networkidle")
            pdf_bytes = await self._page.pdf(**self._options.to_pdf_kwargs())
        except Exception as e:
            raise RendererError("Failed to render PDF", error=str(e)) from e

        logger.info(f"Generated PDF: {len(pdf_bytes)} bytes")
        return pdf_bytes

    async def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        await self._page.close()


class RendererSession:
    """
    Exclusive owner of one browser process.

    Use as an async context manager so the browser is released on every
    exit path::

        async with RendererSession(options) as session:
            page = await session.new_page()
            pdf = await page.render_to_pdf(html)
    """

    def __init__(
        self,
        options: RenderOptions,
        headless: bool = True,
        browser_args: list[str] | None = None,
    ) -> None:
        self.options = options
        self.headless = headless
        self.browser_args = browser_args or []
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._pages: list[RenderPage] = []

    @property
    def is_open(self) -> bool:
        return self._browser is not None

    async def open(self) -> "RendererSession":
        """Start Playwright and launch Chromium."""
        if self.is_open:
            return self

        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.headless,
                args=self.browser_args,
            )
        except Exception as e:
            await self.close()
            raise RendererError("Failed to launch renderer", error=str(e)) from e

        logger.debug("Renderer session opened")
        return self

    async def new_page(self) -> RenderPage:
        if self._browser is None:
            raise RendererError("Renderer session is not open")

        try:
            page = await self._browser.new_page()
        except Exception as e:
            raise RendererError("Failed to open page", error=str(e)) from e

        render_page = RenderPage(page, self.options)
        self._pages.append(render_page)
        return render_page

    async def close(self) -> None:
        """Close all pages, the browser and the driver. Safe to call twice."""
        pages, self._pages = self._pages, []
        for page in pages:
            try:
                await page.close()
            except Exception as e:
                logger.warning(f"Error closing page: {e}")

        browser, self._browser = self._browser, None
        if browser is not None:
            try:
                await browser.close()
            except Exception as e:
                logger.warning(f"Error closing browser: {e}")

        playwright, self._playwright = self._playwright, None
        if playwright is not None:
            try:
                await playwright.stop()
            except Exception as e:
                logger.warning(f"Error stopping Playwright: {e}")
            logger.debug("Renderer session closed")

    async def __aenter__(self) -> "RendererSession":
        return await self.open()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


SessionFactory = Callable[[], RendererSession]


def session_factory_from_settings(settings) -> SessionFactory:
    """Build a factory producing fresh, unopened sessions for each request."""
    options = RenderOptions.from_settings(settings)

    def factory() -> RendererSession:
        return RendererSession(
            options,
            headless=settings.headless,
            browser_args=list(settings.browser_args),
        )

    return factory
