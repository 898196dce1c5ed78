from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from blog_api.models import Blog

# JSON on the wire is camelCase; snake_case names are accepted on input too.
_CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Blog ---

class BlogIn(BaseModel):
    """Request body for create / update.  Timestamps are accepted but ignored."""

    id: int | None = None
    title: str
    content: str
    category: str
    tags: list[str] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = _CAMEL_CONFIG

    @field_validator("title", "content", "category")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    def to_entity(self, blog_id: int | None = None) -> Blog:
        """Build a transient Blog.  The body id is never used; pass *blog_id* for updates."""
        blog = Blog(
            title=self.title,
            content=self.content,
            category=self.category,
            tags=list(self.tags) if self.tags is not None else None,
        )
        if blog_id is not None:
            blog.id = blog_id
        return blog


class BlogOut(BaseModel):
    id: int
    title: str
    content: str
    category: str
    tags: list[str] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, **_CAMEL_CONFIG)


# --- Health ---

class HealthResponse(BaseModel):
    status: str
    version: str
