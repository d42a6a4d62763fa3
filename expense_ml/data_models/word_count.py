"""Word/category counter domain model."""

from pydantic import BaseModel, Field


class WordCategoryCount(BaseModel):
    """How often a word was seen in expenses of one category."""

    word: str
    category: str
    count: int = Field(default=1, ge=1)
