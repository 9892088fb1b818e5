from todo.models.user import User
from todo.models.task import Task

__all__ = ["User", "Task"]
