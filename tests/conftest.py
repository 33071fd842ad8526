import os
from unittest.mock import AsyncMock, MagicMock

import pytest
from bs4 import BeautifulSoup
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

# Set environment variables for tests before any imports happen
os.environ["PORT"] = "3000"
os.environ["HEADLESS"] = "true"
os.environ.pop("BROWSER_TIMEOUT_MS", None)

from upwork_jobs_api.models import JobListing  # noqa: E402

# Two job tiles resembling the rendered Upwork search page. The second one is
# missing most optional elements.
SAMPLE_HTML = """
<!DOCTYPE html>
<html>
<body>
  <section>
    <article class="job-tile" data-ev-job-uid="1">
      <h2 class="job-tile-title">
        <a href="/jobs/Senior-React-Developer_~0112233~abcdef/?referrer_url_path=find-work-home">
          Senior React Developer
        </a>
      </h2>
      <span data-test="job-pubilshed-date">  Posted 2 hours ago </span>
      <div data-test="JobDescription"><p>
        Build a dashboard with React and Node.js.
      </p></div>
      <ul>
        <li data-test="job-type-label"><strong>Hourly: $15-$30</strong></li>
        <li data-test="experience-level"><strong> Expert </strong></li>
        <li data-test="total-spent"> $10K+ spent </li>
        <li data-test="proposals-tier"> Proposals: 10 to 15 </li>
      </ul>
      <div data-test="payment-verified">
        <svg><path fill="currentColor" d="M0 0"></path></svg>
      </div>
      <div class="air3-rating-value-text">4.9</div>
      <div data-test="location"> United States </div>
      <div data-test="TokenClamp JobAttrs">
        <span> React </span>
        <span>Node.js</span>
        <span>React</span>
      </div>
    </article>
    <article class="job-tile" data-ev-job-uid="2">
      <h2 class="job-tile-title"><a href="/jobs/Logo-design">Logo design</a></h2>
      <ul>
        <li data-test="is-fixed-price"> Fixed-price $500 </li>
      </ul>
      <div data-test="payment-verified"><svg><path d="M0 0"></path></svg></div>
    </article>
  </section>
</body>
</html>
"""

EMPTY_HTML = """
<!DOCTYPE html>
<html><body>
  <section data-test="empty-state">
    <h4>There are no results that match your search</h4>
  </section>
</body></html>
"""


@pytest.fixture
def sample_html():
    return SAMPLE_HTML


@pytest.fixture
def sample_job():
    """A reusable sample JobListing for tests."""
    return JobListing(
        id="abcdef",
        title="Senior React Developer",
        link="https://www.upwork.com/jobs/Senior-React-Developer_~0112233~abcdef",
        description="Build a dashboard with React and Node.js.",
        posted="2 hours ago",
        location="United States",
        budget="Fixed-price $500",
        client_spent="$10K+ spent",
        payment_verified=True,
        client_rating=4.9,
        experience_level="Expert",
        proposals="10 to 15",
        skills=["React", "Node.js"],
        timestamp="2024-01-31T12:00:00.000Z",
    )


def make_job(**overrides) -> JobListing:
    """Build a JobListing with sensible defaults, overriding selected fields."""
    fields = {
        "id": "1",
        "title": "Job",
        "link": "https://www.upwork.com/jobs/~1",
        "timestamp": "2024-01-31T12:00:00.000Z",
    }
    fields.update(overrides)
    return JobListing(**fields)


@pytest.fixture
def job_factory():
    return make_job


@pytest.fixture
def empty_html():
    return EMPTY_HTML


# Upwork's shell page before (or instead of) rendering any results
UNRENDERED_HTML = """
<!DOCTYPE html>
<html><body><div id="nuxt-loading"></div></body></html>
"""


def mock_browser_stack(html: str = "", title: str = "Upwork"):
    """
    Build a mocked Playwright stack: stealth -> playwright -> browser -> context -> page.

    page.wait_for_selector behaves like Playwright's: it returns once the page
    HTML matches the selector and raises a timeout otherwise.
    """

    async def wait_for_selector(selector, **kwargs):
        element = BeautifulSoup(html, "html.parser").select_one(selector)
        if element is None:
            raise PlaywrightTimeoutError(f"Timeout 30000ms exceeded waiting for {selector}")
        return element

    page = MagicMock()
    page.goto = AsyncMock()
    page.title = AsyncMock(return_value=title)
    page.wait_for_function = AsyncMock()
    page.wait_for_selector = AsyncMock(side_effect=wait_for_selector)
    page.content = AsyncMock(return_value=html)

    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)

    browser = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()

    pw = MagicMock()
    pw.chromium.launch = AsyncMock(return_value=browser)

    stealth_cm = MagicMock()
    stealth_cm.__aenter__ = AsyncMock(return_value=pw)
    stealth_cm.__aexit__ = AsyncMock(return_value=False)

    stealth = MagicMock()
    stealth.return_value.use_async.return_value = stealth_cm

    return stealth, pw, browser, page


@pytest.fixture
def unrendered_html():
    return UNRENDERED_HTML


@pytest.fixture
def browser_stack():
    return mock_browser_stack
