"""Task model for SQLModel."""
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, String, Text


class Task(SQLModel, table=True):
    """A scheduled task.

    ``date`` uses the YYYYMMDD format; ``repeat`` holds a repeat rule string
    (empty for one-off tasks).
    """

    __tablename__ = "scheduler"

    id: int | None = Field(default=None, primary_key=True)
    date: str = Field(default="", sa_column=Column(String(8), nullable=False, default="", index=True))
    title: str = Field(default="", sa_column=Column(String(256), nullable=False, default=""))
    comment: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    repeat: str = Field(default="", sa_column=Column(String(128), nullable=False, default=""))
