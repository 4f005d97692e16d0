"""
Jokes API response models.
"""

from __future__ import annotations

from pydantic import BaseModel

from .catalog import category_for_param
from .parsing import JokeRecord


class Joke(BaseModel):
    id: int
    title: str | None = None
    joke: str | None = None
    category: str | None = None
    categoryHebrew: str | None = None
    url: str

    @classmethod
    def from_record(cls, record: JokeRecord) -> "Joke":
        category = category_for_param(record.category)
        return cls(
            id=record.id,
            title=record.title,
            joke=record.body,
            category=category.slug if category else None,
            categoryHebrew=category.he if category else record.category,
            url=record.url,
        )


class CategoryOut(BaseModel):
    slug: str
    nameHebrew: str
