"""Task schemas for the Task Scheduler API."""
from pydantic import BaseModel, Field, field_validator
from typing import List


class TaskCreate(BaseModel):
    """Schema for creating a task."""
    date: str = Field(default="")  # YYYYMMDD, empty means today
    title: str = Field(..., min_length=1, max_length=256)
    comment: str = Field(default="")
    repeat: str = Field(default="", max_length=128)  # repeat rule, empty for one-off tasks


class TaskUpdate(TaskCreate):
    """Schema for updating a task; the id travels in the body."""
    id: str = Field(..., min_length=1)

    @field_validator("id", mode="before")
    @classmethod
    def id_as_string(cls, value):
        return str(value) if isinstance(value, int) else value


class TaskResponse(BaseModel):
    """Schema for task API responses; ids are rendered as strings."""
    id: str
    date: str
    title: str
    comment: str
    repeat: str

    @field_validator("id", mode="before")
    @classmethod
    def id_as_string(cls, value):
        return str(value)

    class Config:
        from_attributes = True


class TaskCreated(BaseModel):
    id: str


class TaskList(BaseModel):
    tasks: List[TaskResponse]
