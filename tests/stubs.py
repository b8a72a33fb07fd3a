from typing import Optional

from sqlmodel import Field, SQLModel


class Author(SQLModel, table=True):
    __tablename__ = "authors"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    age: Optional[int] = Field(default=None)


class Post(SQLModel, table=True):
    __tablename__ = "posts"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(nullable=False)
    description: Optional[str] = Field(default=None)
    author_id: Optional[int] = Field(default=None, foreign_key="authors.id")


POST_COLUMNS = [
    "posts.title",
    "description",
    ("author_name", "authors.name"),
    "authors.age as author_age",
]
