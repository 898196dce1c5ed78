"""Database seeder for local development of the blog API."""
import argparse
import asyncio
import random
import time

import blog_api.models  # noqa: F401
from blog_api.database import Base, async_session, engine, ensure_schema
from blog_api.models import Blog
from blog_api.repositories.blog_repository import BlogRepository
from blog_api.services.blog_service import BlogService

CATEGORIES = ["Engineering", "Databases", "Web", "DevOps", "Career", "Testing"]

TAGS = ["python", "fastapi", "postgresql", "sqlalchemy", "docker", "kubernetes",
        "react", "typescript", "aws", "devops", "testing", "performance",
        "security", "microservices", "graphql", "rest-api"]


async def seed(count: int = 50, reset: bool = False):
    print(f"Seeding: {count} blog posts (reset={reset})")
    start = time.perf_counter()

    if reset:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
    await ensure_schema()

    async with async_session() as session:
        service = BlogService(BlogRepository(session))
        for i in range(count):
            topic = random.choice(TAGS)
            await service.create(Blog(
                title=f"Post {i}: Getting started with {topic}",
                content=f"This is the full content of post {i} about {topic}. " * 10,
                category=random.choice(CATEGORIES),
                tags=random.sample(TAGS, k=random.randint(0, 4)),
            ))
        await session.commit()

    await engine.dispose()
    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")


def main():
    parser = argparse.ArgumentParser(description="Seed the blog database")
    parser.add_argument("--count", type=int, default=50, help="Number of posts to create")
    parser.add_argument("--reset", action="store_true", help="Drop the Blog table before seeding")
    args = parser.parse_args()
    asyncio.run(seed(count=args.count, reset=args.reset))


if __name__ == "__main__":
    main()
