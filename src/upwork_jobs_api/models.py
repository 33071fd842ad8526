from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class JobListing(BaseModel):
    """
    One job posting extracted from the Upwork search results page.
    Serialized with camelCase field names (clientSpent, paymentVerified, ...).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = ""
    title: str = ""
    link: str = ""
    description: str = ""
    posted: str = ""
    location: str = ""
    budget: str = ""
    client_spent: str = ""
    payment_verified: bool = False
    client_rating: float = 0
    experience_level: str = ""
    proposals: str = ""
    skills: list[str] = Field(default_factory=list)
    timestamp: str
