"""
Blog service: business rules for the Blog aggregate.

Design notes
------------
- ``create`` stamps ``created_at`` and ``updated_at`` with the same UTC
  instant, overwriting whatever the caller supplied.
- ``update`` loads the stored row first: an unknown id is rejected here
  (``None``) without touching the repository's update, and the stored
  ``created_at`` is carried over so callers can never rewrite it.
- ``tags=None`` is normalised to ``[]`` on every write.
- Persistence errors are not caught; they propagate to the router layer.
"""
import logging
from abc import ABC, abstractmethod

from blog_api.database import utcnow
from blog_api.models import Blog
from blog_api.repositories.blog_repository import AbstractBlogRepository

logger = logging.getLogger(__name__)


class AbstractBlogService(ABC):
    """Operations the HTTP layer may invoke on blogs."""

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
    async def delete(self, blog_id: int) -> bool:
        ...


class BlogService(AbstractBlogService):

    def __init__(self, repository: AbstractBlogRepository) -> None:
        self.repository = repository

    async def get_all(self, search_term: str | None = None) -> list[Blog]:
        return await self.repository.get_all(search_term)

    async def get_by_id(self, blog_id: int) -> Blog | None:
        return await self.repository.get_by_id(blog_id)

    async def create(self, blog: Blog) -> Blog:
        now = utcnow()
        blog.created_at = now
        blog.updated_at = now
        if blog.tags is None:
            blog.tags = []

        created = await self.repository.create(blog)
        logger.info("Created blog id=%s", created.id)
        return created

    async def update(self, blog: Blog) -> Blog | None:
        """
        Replace all mutable fields of blog ``blog.id``.

        Returns None (and performs no write) when the blog does not exist.
        """
        existing = await self.repository.get_by_id(blog.id)
        if existing is None:
            logger.info("Update rejected: blog id=%s not found", blog.id)
            return None

        blog.created_at = existing.created_at
        blog.updated_at = utcnow()
        if blog.tags is None:
            blog.tags = []

        updated = await self.repository.update(blog)
        logger.info("Updated blog id=%s", blog.id)
        return updated

    async def delete(self, blog_id: int) -> bool:
        rows_affected = await self.repository.delete(blog_id)
        if rows_affected > 0:
            logger.info("Deleted blog id=%s", blog_id)
        return rows_affected > 0
