from __future__ import annotations

from datetime import datetime
from typing import List

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from blog_api.database import Base, TagList, UTCDateTime


# ---------------------------------------------------------------------------
# Blog
# ---------------------------------------------------------------------------
class Blog(Base):
    __tablename__ = "Blog"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(Text, nullable=False)
    # JSON array text; see database.TagList
    tags: Mapped[List[str]] = mapped_column(TagList, nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    def __repr__(self) -> str:
        return f"<Blog id={self.id!r} title={self.title!r}>"
