"""
Blog repository: query layer for the Blog table.

The repository owns no business rules: timestamps and tag defaults are
applied by ``BlogService`` before anything reaches this module.  Absent
rows are reported as ``None`` / ``0``, never as exceptions, and engine
errors propagate unchanged.
"""
import logging
from abc import ABC, abstractmethod

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.models import Blog

logger = logging.getLogger(__name__)

# Fields a full-replace update copies from the incoming entity.
_MUTABLE_FIELDS = ("title", "content", "category", "tags", "created_at", "updated_at")


class AbstractBlogRepository(ABC):
    """Persistence contract for Blog entities."""

    @abstractmethod
    async def get_all(self, search_term: str | None = None) -> list[Blog]:
        ...

    @abstractmethod
    async def get_by_id(self, blog_id: int) -> Blog | None:
        ...

    @abstractmethod
    async def create(self, blog: Blog) -> Blog:
        ...

    @abstractmethod
    async def update(self, blog: Blog) -> Blog | None:
        ...

    @abstractmethod
    async def delete(self, blog_id: int) -> int:
        ...


class BlogRepository(AbstractBlogRepository):
    """SQLAlchemy implementation bound to one request-scoped session."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_all(self, search_term: str | None = None) -> list[Blog]:
        """
        Return every blog, or only those whose title, content or category
        contains *search_term* (case-insensitive).  A blank term means no
        filter.  Rows come back ordered by id.
        """
        q = select(Blog)
        if search_term and search_term.strip():
            q = q.where(
                or_(
                    Blog.title.icontains(search_term, autoescape=True),
                    Blog.content.icontains(search_term, autoescape=True),
                    Blog.category.icontains(search_term, autoescape=True),
                )
            )
        result = await self.db.execute(q.order_by(Blog.id))
        return list(result.scalars().all())

    async def get_by_id(self, blog_id: int) -> Blog | None:
        return await self.db.get(Blog, blog_id)

    async def create(self, blog: Blog) -> Blog:
        self.db.add(blog)
        await self.db.flush()
        logger.debug("Inserted blog id=%s", blog.id)
        return blog

    async def update(self, blog: Blog) -> Blog | None:
        """
        Overwrite every mutable field of the stored row with the values
        on *blog* (full replace, no partial update).  Returns the stored
        entity, or None when no row has ``blog.id``.
        """
        existing = await self.db.get(Blog, blog.id)
        if existing is None:
            return None

        if existing is not blog:
            for field in _MUTABLE_FIELDS:
                setattr(existing, field, getattr(blog, field))

        await self.db.flush()
        return existing

    async def delete(self, blog_id: int) -> int:
        """Remove the row with *blog_id*; returns the affected row count."""
        if await self.db.get(Blog, blog_id) is None:
            return 0

        result = await self.db.execute(delete(Blog).where(Blog.id == blog_id))
        return result.rowcount
