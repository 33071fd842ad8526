import logging
from urllib.parse import quote

from playwright.async_api import Page, async_playwright
from playwright_stealth import Stealth

from upwork_jobs_api import config
from upwork_jobs_api.extractor import JobExtractor
from upwork_jobs_api.models import JobListing
from upwork_jobs_api.scrapers.base import BaseScraper

logger = logging.getLogger(__name__)

PAGE_SIZE = 50
CLOUDFLARE_TIMEOUT = 30000  # milliseconds
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36"
)
BROWSER_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]


class UpworkScraper(BaseScraper):
    """
    Scrapes one page of Upwork job search results.
    Launches a fresh headless Chromium per call, waits for the job tiles (or
    the no-results state) to render, and hands the page HTML to JobExtractor.
    The browser is always closed before returning or raising. Failures are
    not retried.
    """

    SEARCH_URL = "https://www.upwork.com/nx/search/jobs"
    LISTING_SELECTOR = JobExtractor.LISTING_SELECTOR
    # Shown instead of job tiles when a search has no results
    EMPTY_RESULTS_SELECTOR = '[data-test="empty-state"], [data-test="jobs-empty-state"]'
    READY_SELECTOR = f"{LISTING_SELECTOR}, {EMPTY_RESULTS_SELECTOR}"

    def __init__(self, headless: bool | None = None, timeout_ms: int | None = None):
        self.headless = config.HEADLESS if headless is None else headless
        self.timeout_ms = config.BROWSER_TIMEOUT_MS if timeout_ms is None else timeout_ms

    @classmethod
    def build_search_url(cls, query: str = "", page: int = 1) -> str:
        """
        Build the search URL, newest jobs first. The page number is embedded
        as given; callers are responsible for sensible values.
        """
        # Same escaping as JavaScript's encodeURIComponent
        encoded = quote(query or "", safe="-_.!~*'()")
        return f"{cls.SEARCH_URL}?per_page={PAGE_SIZE}&q={encoded}&sort=recency&page={page}"

    async def scrape(self, query: str = "", page: int = 1) -> list[JobListing]:
        url = self.build_search_url(query, page)
        logger.info(f"Scraping Upwork jobs: {url}")

        async with Stealth().use_async(async_playwright()) as pw:
            browser = await pw.chromium.launch(headless=self.headless, args=BROWSER_ARGS)
            try:
                context = await browser.new_context(
                    user_agent=USER_AGENT,
                    viewport={"width": 1920, "height": 1080},
                )
                browser_page = await context.new_page()
                if self.timeout_ms:
                    browser_page.set_default_timeout(self.timeout_ms)

                html = await self._fetch_listings(browser_page, url)
            except Exception as e:
                logger.error(f"Scrape failed for {url}: {e}")
                raise
            finally:
                await browser.close()

        jobs = JobExtractor.extract_jobs(html)
        logger.info(f"Scraped {len(jobs)} jobs for query '{query}' (page {page})")
        return jobs

    async def _fetch_listings(self, page: Page, url: str) -> str:
        """
        Navigate to the search page and return its HTML once it shows either
        job tiles or the no-results state.
        """
        await page.goto(url, wait_until="networkidle")
        await self._wait_for_cloudflare(page)
        await page.wait_for_selector(self.READY_SELECTOR)
        return await page.content()

    @staticmethod
    async def _wait_for_cloudflare(page: Page, timeout: int = CLOUDFLARE_TIMEOUT) -> None:
        """
        Wait for a Cloudflare "Just a moment..." interstitial to clear.
        Problems here are only logged; the selector wait that follows decides
        whether the page actually rendered.
        """
        try:
            title = await page.title()
            if "just a moment" in title.lower():
                logger.info("Cloudflare challenge detected, waiting for resolution...")
                await page.wait_for_function(
                    "() => !document.title.toLowerCase().includes('just a moment')",
                    timeout=timeout,
                )
                logger.info("Cloudflare challenge resolved.")
        except Exception as e:
            logger.warning(f"Cloudflare wait issue: {e}")
