import logging

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse

from upwork_jobs_api.filters import JobFilter, parse_int
from upwork_jobs_api.models import JobListing
from upwork_jobs_api.scrapers.upwork_scraper import UpworkScraper

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1

app = FastAPI(
    title="Upwork Jobs API",
    description="Scrapes Upwork job search results with a headless browser and serves them as JSON",
    version="0.1.0",
)


def _page_number(raw: str | None) -> int:
    page = parse_int(raw)
    return DEFAULT_PAGE if page is None else page


def _error_response(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": message})


async def _scrape(query: str, page: int) -> list[JobListing]:
    # A new scraper (and browser) for every request; nothing is shared
    scraper = UpworkScraper()
    return await scraper.scrape(query, page)


@app.get("/api/health")
async def health():
    return {"status": "healthy"}


@app.get("/api/jobs", response_model=list[JobListing])
async def list_jobs(
    query: str = Query(default="", description="Free-text search query"),
    page: str | None = Query(default=None, description="1-based results page"),
):
    """Scrape one page of Upwork search results for the query."""
    try:
        return await _scrape(query, _page_number(page))
    except Exception as e:
        logger.error(f"Failed to fetch jobs for query '{query}': {e}")
        return _error_response(str(e))


@app.get("/api/jobs/search", response_model=list[JobListing])
async def search_jobs(
    q: str = Query(default="", description="Free-text search query"),
    page: str | None = Query(default=None, description="1-based results page"),
    skills: str | None = Query(default=None, description="Comma-separated skills, any match"),
    location: str | None = Query(default=None, description="Case-insensitive location substring"),
    min_budget: str | None = Query(default=None, alias="minBudget"),
    max_budget: str | None = Query(default=None, alias="maxBudget"),
):
    """Scrape one page of results and narrow it by skills, location and budget."""
    try:
        jobs = await _scrape(q, _page_number(page))
    except Exception as e:
        logger.error(f"Failed to search jobs for query '{q}': {e}")
        return _error_response(str(e))

    job_filter = JobFilter(
        skills=skills,
        location=location,
        min_budget=min_budget,
        max_budget=max_budget,
    )
    filtered = job_filter.apply(jobs)
    logger.info(f"{len(filtered)}/{len(jobs)} jobs matched the search filters")
    return filtered
