import logging
import re
from datetime import UTC, datetime

from bs4 import BeautifulSoup, Tag

from upwork_jobs_api.models import JobListing

logger = logging.getLogger(__name__)

# Leading decimal number, the way a browser's parseFloat reads "4.9 of 5 stars"
_LEADING_FLOAT = re.compile(r"^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class JobExtractor:
    """
    Turns a rendered Upwork search results page into JobListing records.

    Every field lookup falls back to a default when its element is missing,
    so a partially rendered tile still yields a record.
    """

    BASE_URL = "https://www.upwork.com"

    LISTING_SELECTOR = "article.job-tile"
    TITLE_SELECTOR = "h2.job-tile-title"
    LINK_SELECTOR = "h2 a"
    DESCRIPTION_SELECTOR = 'div[data-test="JobDescription"] p'
    # Upwork's own attribute value is misspelled
    POSTED_SELECTOR = 'span[data-test="job-pubilshed-date"]'
    LOCATION_SELECTOR = 'div[data-test="location"]'
    BUDGET_SELECTOR = 'li[data-test="is-fixed-price"], li[data-test="job-type-label"]'
    CLIENT_SPENT_SELECTOR = 'li[data-test="total-spent"]'
    PAYMENT_VERIFIED_SELECTOR = 'div[data-test="payment-verified"] svg path[fill]'
    RATING_SELECTOR = "div.air3-rating-value-text"
    EXPERIENCE_SELECTOR = 'li[data-test="experience-level"] strong'
    PROPOSALS_SELECTOR = 'li[data-test="proposals-tier"]'
    SKILLS_SELECTOR = 'div[data-test="TokenClamp JobAttrs"] span'

    @classmethod
    def extract_jobs(cls, html: str) -> list[JobListing]:
        """Extract one JobListing per job tile. A page without tiles yields []."""
        soup = BeautifulSoup(html, "html.parser")
        articles = soup.select(cls.LISTING_SELECTOR)
        jobs = [cls.parse_listing(article) for article in articles]
        logger.debug(f"Extracted {len(jobs)} listings from {len(html)} bytes of HTML")
        return jobs

    @classmethod
    def parse_listing(cls, article: Tag) -> JobListing:
        link = cls.canonicalize_link(cls._get_attr(article, cls.LINK_SELECTOR, "href"))

        return JobListing(
            id=cls.job_id_from_link(link),
            title=cls._get_text(article, cls.TITLE_SELECTOR),
            link=link,
            description=cls._get_text(article, cls.DESCRIPTION_SELECTOR),
            posted=cls.strip_label(cls._get_text(article, cls.POSTED_SELECTOR), "Posted"),
            location=cls._get_text(article, cls.LOCATION_SELECTOR),
            budget=cls._get_text(article, cls.BUDGET_SELECTOR),
            client_spent=cls._get_text(article, cls.CLIENT_SPENT_SELECTOR),
            payment_verified=article.select_one(cls.PAYMENT_VERIFIED_SELECTOR) is not None,
            client_rating=cls.parse_rating(cls._get_text(article, cls.RATING_SELECTOR)),
            experience_level=cls._get_text(article, cls.EXPERIENCE_SELECTOR),
            proposals=cls.strip_label(
                cls._get_text(article, cls.PROPOSALS_SELECTOR), "Proposals:"
            ),
            skills=[el.get_text().strip() for el in article.select(cls.SKILLS_SELECTOR)],
            timestamp=cls._now_iso(),
        )

    @classmethod
    def canonicalize_link(cls, href: str | None) -> str:
        """
        Make the href absolute and drop the tracking suffix starting at "/?".
        A tile without a link element (href None) gets an empty link.
        """
        if href is None:
            return ""
        return (cls.BASE_URL + href).split("/?", 1)[0]

    @staticmethod
    def job_id_from_link(link: str) -> str:
        """Return the segment after the last "~" in the link, or "" when there is none."""
        if "~" not in link:
            return ""
        return link.rsplit("~", 1)[-1]

    @staticmethod
    def strip_label(text: str, label: str) -> str:
        """Remove a leading label such as "Posted" from an already trimmed value."""
        return text.removeprefix(label).strip()

    @staticmethod
    def parse_rating(text: str) -> float:
        match = _LEADING_FLOAT.match(text.strip())
        if not match:
            return 0.0
        return float(match.group())

    @staticmethod
    def _get_text(article: Tag, selector: str) -> str:
        element = article.select_one(selector)
        return element.get_text().strip() if element else ""

    @staticmethod
    def _get_attr(article: Tag, selector: str, attr: str) -> str | None:
        element = article.select_one(selector)
        if not element:
            return None
        value = element.get(attr)
        return str(value).strip() if value else ""

    @staticmethod
    def _now_iso() -> str:
        # 2024-01-31T12:00:00.000Z
        return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
