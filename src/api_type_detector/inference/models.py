"""Data models at the ingestion and persistence boundaries."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Route(BaseModel):
    """A logical route: the external grouping key for observations."""

    id: str
    name: str


class Observation(BaseModel):
    """One captured response for a route.

    ``response`` holds the already-decoded JSON body; ``None`` means no body
    was decoded and the observation is dropped before windowing.
    """

    model_config = ConfigDict(extra="ignore")

    route_id: str
    response: Any = None
    status_code: int | None = None
    timestamp: float = 0.0
    method: str = "GET"
    url: str | None = None

    @property
    def has_response(self) -> bool:
        return self.response is not None


class GeneratedDeclaration(BaseModel):
    """Declarations synthesized for one route, ready to persist verbatim."""

    route_id: str
    route_name: str
    type_name: str
    type_definition: str
    sample_count: int
    signature: str
    last_updated: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GeneratedDeclaration":
        return cls.model_validate(data)
