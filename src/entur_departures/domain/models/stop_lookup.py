"""Stop discovery domain models."""

from pydantic import BaseModel, ConfigDict, Field


class StopInfo(BaseModel):
    """A stop place found by name search."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    locality: str | None = None


class QuayInfo(BaseModel):
    """A quay of a stop place with the lines currently calling there."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    lines: list[str] = Field(default_factory=list)


class LineDestinationInfo(BaseModel):
    """Distinct lines and destinations seen at a stop (or one of its quays)."""

    model_config = ConfigDict(frozen=True)

    lines: list[str] = Field(default_factory=list)
    destinations: list[str] = Field(default_factory=list)
