"""Task router for the Task Scheduler."""
from fastapi import APIRouter, Depends, HTTPException, status, Query
from datetime import datetime
from typing import Optional
from sqlmodel import Session

from scheduler.config import Settings, get_settings
from scheduler.db.config import get_session
from scheduler.middleware.auth import require_auth
from scheduler.schemas.task import TaskCreate, TaskCreated, TaskList, TaskResponse, TaskUpdate
from scheduler.services.date_normalizer import normalize_task_date
from scheduler.services.exceptions import RecurrenceError
from scheduler.services.recurrence_validator import RecurrenceValidator
from scheduler.services.task_service import TaskService, TaskNotFoundError

router = APIRouter(tags=["Tasks"], dependencies=[Depends(require_auth)])


def get_task_service(session: Session = Depends(get_session)) -> TaskService:
    """Dependency for getting TaskService instance."""
    return TaskService(session)


def _require_id(task_id: Optional[str]) -> str:
    if not task_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Task id is required"
        )
    return task_id


def _task_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")


def _check_task_date(task_data: TaskCreate) -> None:
    """Validate the repeat rule and normalize the date of an incoming task."""
    try:
        RecurrenceValidator.validate(task_data.repeat)
        normalize_task_date(task_data, datetime.now())
    except RecurrenceError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )


@router.post("/task", response_model=TaskCreated)
def create_task(
    task_data: TaskCreate,
    service: TaskService = Depends(get_task_service),
):
    """Create a task; the date is defaulted, kept out of the past and moved to the next occurrence."""
    _check_task_date(task_data)
    task = service.create(
        date=task_data.date,
        title=task_data.title,
        comment=task_data.comment,
        repeat=task_data.repeat,
    )
    return TaskCreated(id=str(task.id))


@router.get("/task", response_model=TaskResponse)
def get_task(
    task_id: Optional[str] = Query(None, alias="id"),
    service: TaskService = Depends(get_task_service),
):
    """Get a specific task by ID."""
    try:
        return service.get(_require_id(task_id))
    except TaskNotFoundError:
        raise _task_not_found()


@router.put("/task")
def update_task(
    task_data: TaskUpdate,
    service: TaskService = Depends(get_task_service),
):
    """Replace a task's date, title, comment and repeat rule."""
    _check_task_date(task_data)
    try:
        service.update(
            task_data.id,
            date=task_data.date,
            title=task_data.title,
            comment=task_data.comment,
            repeat=task_data.repeat,
        )
    except TaskNotFoundError:
        raise _task_not_found()
    return {}


@router.delete("/task")
def delete_task(
    task_id: Optional[str] = Query(None, alias="id"),
    service: TaskService = Depends(get_task_service),
):
    """Delete a task."""
    try:
        service.delete(_require_id(task_id))
    except TaskNotFoundError:
        raise _task_not_found()
    return {}


@router.post("/task/done")
def complete_task(
    task_id: Optional[str] = Query(None, alias="id"),
    service: TaskService = Depends(get_task_service),
):
    """Mark a task as done: one-off tasks are deleted, repeating tasks move to the next date."""
    try:
        service.complete(_require_id(task_id))
    except TaskNotFoundError:
        raise _task_not_found()
    except RecurrenceError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot calculate the next date: {e.message}"
        )
    return {}


@router.get("/tasks", response_model=TaskList)
def list_tasks(
    search: Optional[str] = Query(None, description="Date as DD.MM.YYYY or text in title/comment"),
    settings: Settings = Depends(get_settings),
    service: TaskService = Depends(get_task_service),
):
    """List upcoming tasks, optionally filtered by date or text."""
    if search:
        tasks = service.search(search, settings.tasks_limit)
    else:
        tasks = service.list(settings.tasks_limit)
    return {"tasks": tasks}
