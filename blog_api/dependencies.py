"""
Per-request wiring of the blog layers.

FastAPI builds the chain session → repository → service for every
request::

    @router.get("/api/posts")
    async def list_posts(service: AbstractBlogService = Depends(get_blog_service)):
        ...

Tests swap a layer by overriding the matching provider in
``app.dependency_overrides``.
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.database import get_db
from blog_api.repositories.blog_repository import AbstractBlogRepository, BlogRepository
from blog_api.services.blog_service import AbstractBlogService, BlogService


def get_blog_repository(db: AsyncSession = Depends(get_db)) -> AbstractBlogRepository:
    return BlogRepository(db)


def get_blog_service(
    repository: AbstractBlogRepository = Depends(get_blog_repository),
) -> AbstractBlogService:
    return BlogService(repository)
