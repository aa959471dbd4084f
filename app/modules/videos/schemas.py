from typing import Literal
from pydantic import BaseModel, Field, field_validator
from app.core.config import settings

SortField = Literal["createdAt", "updatedAt", "title", "duration", "views"]

class VideoSearchParams(BaseModel):
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=settings.LIST_MAX_LIMIT)
    query: str | None = None
    sortBy: SortField = "createdAt"
    sortType: str = "desc"
    userId: str | None = None

    @field_validator("query", "userId")
    @classmethod
    def _blank_is_none(cls, v: str | None):
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def ascending(self) -> bool:
        return self.sortType == "asc"

class VideoPublish(BaseModel):
    title: str | None = None
    description: str | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.title and self.title.strip()) and not (self.description and self.description.strip())

class VideoUpdate(BaseModel):
    title: str | None = None
    description: str | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.title and self.title.strip()) and bool(self.description and self.description.strip())
