import argparse
import asyncio
import json
import logging

from upwork_jobs_api.scrapers.upwork_scraper import UpworkScraper

# Set up logging
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO
)
logger = logging.getLogger(__name__)


async def main(query: str, page: int):
    logger.info(f"Scraping Upwork for '{query}' (page {page})...")
    scraper = UpworkScraper()
    jobs = await scraper.scrape(query, page)

    logger.info(f"Scraped {len(jobs)} jobs.")
    print(json.dumps([job.model_dump(by_alias=True) for job in jobs], indent=2))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run a single Upwork scrape and print JSON.")
    parser.add_argument("query", nargs="?", default="")
    parser.add_argument("--page", type=int, default=1)
    args = parser.parse_args()

    asyncio.run(main(args.query, args.page))
