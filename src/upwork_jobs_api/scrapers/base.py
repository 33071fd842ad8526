from abc import ABC, abstractmethod

from upwork_jobs_api.models import JobListing


class BaseScraper(ABC):
    """
    Abstract base class for job listing scrapers.
    """

    @abstractmethod
    async def scrape(self, query: str = "", page: int = 1) -> list[JobListing]:
        """
        Scrape one page of search results for the query and return JobListing objects.
        """
        pass
