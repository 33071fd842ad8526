import re

from upwork_jobs_api.models import JobListing

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def parse_int(value: str | int | None) -> int | None:
    """
    Read the leading integer of a query value ("12abc" -> 12).
    Returns None when the value has no leading integer.
    """
    if value is None:
        return None
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


class JobFilter:
    """
    Narrows a list of scraped jobs by skills, location and budget range.

    Each criterion is optional; an unset (None or empty) criterion lets every
    job through. A job is kept only when it passes every active criterion.
    """

    # Only the first dollar amount in the budget text is considered, so an
    # hourly range like "$15-$30/hr" is compared on 15.
    BUDGET_PATTERN = re.compile(r"\$([0-9]+)")

    def __init__(
        self,
        skills: str | None = None,
        location: str | None = None,
        min_budget: str | int | None = None,
        max_budget: str | int | None = None,
    ):
        self.skills = {s.strip().lower() for s in skills.split(",")} if skills else None
        self.location = location.lower() if location else None

        # A bound that was supplied but is not numeric stays active and matches nothing
        self.has_min = min_budget is not None and min_budget != ""
        self.has_max = max_budget is not None and max_budget != ""
        self.min_budget = parse_int(min_budget) if self.has_min else None
        self.max_budget = parse_int(max_budget) if self.has_max else None

    def apply(self, jobs: list[JobListing]) -> list[JobListing]:
        return [
            job
            for job in jobs
            if self.matches_skills(job) and self.matches_location(job) and self.matches_budget(job)
        ]

    def matches_skills(self, job: JobListing) -> bool:
        if self.skills is None:
            return True
        return any(skill.lower() in self.skills for skill in job.skills)

    def matches_location(self, job: JobListing) -> bool:
        if self.location is None:
            return True
        return self.location in job.location.lower()

    def matches_budget(self, job: JobListing) -> bool:
        if not (self.has_min or self.has_max):
            return True

        amount = self.budget_amount(job.budget)
        if amount is None:
            return False

        if self.has_min and (self.min_budget is None or amount < self.min_budget):
            return False
        if self.has_max and (self.max_budget is None or amount > self.max_budget):
            return False
        return True

    @classmethod
    def budget_amount(cls, budget: str) -> int | None:
        """Return the first "$<digits>" amount in the budget text, if any."""
        match = cls.BUDGET_PATTERN.search(budget or "")
        return int(match.group(1)) if match else None
