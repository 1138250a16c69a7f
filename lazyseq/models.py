"""Configuration models for lazy collections."""

import logging
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class CollectionOptions(BaseModel):
    """Options controlling how a LazyCollection realizes its pipeline."""
    cache_enabled: bool = Field(
        False,
        description="Memoize realized results across iterations"
    )
    shuffle_seed: Optional[int] = Field(
        None,
        description="Seed for shuffle() when no random generator is passed"
    )
    log_level: str = Field(
        "WARNING",
        description="Level name applied by setup_logging()"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Accept standard logging level names, case-insensitive."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


class PageRequest(BaseModel):
    """A single 1-indexed page of a collection."""
    page_number: int = Field(..., description="Page number, starting at 1", ge=1)
    page_size: int = Field(..., description="Number of items per page", ge=1)

    @property
    def offset(self) -> int:
        """Number of items preceding this page."""
        return (self.page_number - 1) * self.page_size
