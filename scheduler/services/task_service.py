"""Task service: CRUD, search and completion of scheduled tasks."""
from sqlmodel import Session, select, or_
from typing import List, Optional
from datetime import datetime

from scheduler.models.task import Task
from scheduler.services.next_date import format_date, following_date
from scheduler.utils.logger import get_logger

logger = get_logger(__name__)

# Search strings in this format look up tasks by date instead of by text.
SEARCH_DATE_FORMAT = "%d.%m.%Y"


class TaskNotFoundError(LookupError):
    """Raised when a task id does not match any stored task."""

    def __init__(self, task_id):
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")


def _parse_id(task_id) -> int:
    try:
        return int(task_id)
    except (TypeError, ValueError):
        raise TaskNotFoundError(task_id)


class TaskService:
    """Service class for task persistence. Dates are expected to be normalized already."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, date: str, title: str, comment: str = "", repeat: str = "") -> Task:
        """Insert a new task and return it with its generated id."""
        task = Task(date=date, title=title, comment=comment, repeat=repeat)
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        logger.info("Task created", task_id=task.id, date=task.date, repeat=task.repeat)
        return task

    def get(self, task_id) -> Task:
        task = self.session.get(Task, _parse_id(task_id))
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def list(self, limit: int) -> List[Task]:
        """Upcoming tasks ordered by date."""
        statement = select(Task).order_by(Task.date).limit(limit)
        return list(self.session.exec(statement).all())

    def search(self, search: str, limit: int) -> List[Task]:
        """
        Search tasks.

        Args:
            search: Either a date in DD.MM.YYYY format or a substring of the
                title or comment
            limit: Maximum number of returned tasks

        Returns:
            Matching tasks ordered by date
        """
        try:
            day = datetime.strptime(search, SEARCH_DATE_FORMAT).date()
        except ValueError:
            day = None

        statement = select(Task)
        if day is not None:
            statement = statement.where(Task.date == format_date(day))
        else:
            pattern = f"%{search}%"
            statement = statement.where(or_(Task.title.ilike(pattern), Task.comment.ilike(pattern)))

        statement = statement.order_by(Task.date).limit(limit)
        return list(self.session.exec(statement).all())

    def update(self, task_id, date: str, title: str, comment: str, repeat: str) -> Task:
        task = self.get(task_id)
        task.date = date
        task.title = title
        task.comment = comment
        task.repeat = repeat
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        logger.info("Task updated", task_id=task.id, date=task.date, repeat=task.repeat)
        return task

    def update_date(self, task_id, date: str) -> Task:
        """Move a task to a new date, leaving the other fields alone."""
        task = self.get(task_id)
        task.date = date
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        return task

    def delete(self, task_id) -> None:
        task = self.get(task_id)
        self.session.delete(task)
        self.session.commit()
        logger.info("Task deleted", task_id=task_id)

    def complete(self, task_id, now: Optional[datetime] = None) -> Optional[Task]:
        """
        Mark a task as done.

        One-off tasks are deleted and None is returned. Repeating tasks move to
        their next occurrence after the current date and the updated task is
        returned.

        Raises:
            TaskNotFoundError: If the task does not exist
            RecurrenceError: If the stored repeat rule or date is invalid
        """
        task = self.get(task_id)
        if not task.repeat:
            self.delete(task_id)
            return None

        upcoming = following_date(now or datetime.now(), task.date, task.repeat)
        logger.info("Repeating task done", task_id=task.id, previous=task.date, next=upcoming)
        return self.update_date(task_id, upcoming)
