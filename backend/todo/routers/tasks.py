import logging
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_303_SEE_OTHER
from todo.core.database import get_db
from todo.core.dates import lenient_datetime
from todo.core.errors import ValidationError
from todo.core.flash import flash
from todo.core.templating import render
from todo.models.task import Task
from todo.routers.auth import get_session_identity
from todo.schemas.task import TaskCreate, TaskUpdate
from todo.schemas.user import SessionIdentity
from todo.services.tasks import Clock, TaskService, authorize_task_access

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["tasks"],
    responses={404: {"description": "Not found"}},
)

STATUS_FILTERS = {"all": None, "pending": False, "completed": True}

def get_clock() -> Clock:
    return datetime.now

def get_task_service(
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock)
) -> TaskService:
    return TaskService(db, clock=clock)

async def get_owned_task(
    task_id: int,
    identity: SessionIdentity = Depends(get_session_identity),
    tasks: TaskService = Depends(get_task_service)
) -> Task:
    """Every route that takes a task id goes through this gate."""
    task = await tasks.get_task_by_id(task_id)
    return authorize_task_access(task, identity)

def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=HTTP_303_SEE_OTHER)

@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    identity: SessionIdentity = Depends(get_session_identity),
    tasks: TaskService = Depends(get_task_service)
):
    return render(
        request,
        "home.html",
        tasks=await tasks.get_tasks_by_user(identity.user_id, ordered=True),
        upcoming=await tasks.get_upcoming_tasks(identity.user_id),
        current_date=tasks.clock(),
    )

@router.get("/tasks", response_class=HTMLResponse)
async def list_tasks(
    request: Request,
    status: str = "all",
    identity: SessionIdentity = Depends(get_session_identity),
    tasks: TaskService = Depends(get_task_service)
):
    if status not in STATUS_FILTERS:
        status = "all"
    items = await tasks.get_tasks_by_user(identity.user_id, completed=STATUS_FILTERS[status])
    logger.debug("Loaded %d tasks for user id=%s", len(items), identity.user_id)
    return render(
        request,
        "tasks.html",
        tasks=items,
        status=status,
        current_date=tasks.clock(),
    )

@router.post("/tasks")
async def create_task(
    request: Request,
    title: str = Form(""),
    description: Optional[str] = Form(None),
    due_date: Optional[str] = Form(None),
    reminder_time: Optional[str] = Form(None),
    identity: SessionIdentity = Depends(get_session_identity),
    tasks: TaskService = Depends(get_task_service)
):
    task_in = TaskCreate(
        title=title,
        description=description,
        due_date=lenient_datetime(due_date, "due_date"),
        reminder_time=lenient_datetime(reminder_time, "reminder_time"),
    )
    try:
        task = await tasks.create_task(identity.user_id, **task_in.model_dump())
    except ValidationError as e:
        flash(request, f"Error creating task: {e.message}", "error")
        return _redirect("/")

    flash(request, f"Task '{task.title}' created successfully!")
    return _redirect("/")

@router.post("/tasks/{task_id}/complete")
async def toggle_task(
    request: Request,
    task: Task = Depends(get_owned_task),
    tasks: TaskService = Depends(get_task_service)
):
    task = await tasks.toggle_completion(task.id)
    flash(request, "Task marked as completed!" if task.completed else "Task marked as pending!")
    return _redirect("/")

@router.post("/tasks/{task_id}/delete")
async def delete_task(
    request: Request,
    task: Task = Depends(get_owned_task),
    tasks: TaskService = Depends(get_task_service)
):
    title = task.title
    await tasks.delete_task(task.id)
    flash(request, f"Task '{title}' deleted successfully!")
    return _redirect("/")

@router.get("/tasks/{task_id}/edit", response_class=HTMLResponse)
async def edit_task_page(request: Request, task: Task = Depends(get_owned_task)):
    return render(request, "task_edit.html", task=task)

@router.post("/tasks/{task_id}/edit")
async def edit_task(
    request: Request,
    title: str = Form(""),
    description: Optional[str] = Form(None),
    completed: bool = Form(False),
    due_date: Optional[str] = Form(None),
    reminder_time: Optional[str] = Form(None),
    task: Task = Depends(get_owned_task),
    tasks: TaskService = Depends(get_task_service)
):
    changes = TaskUpdate(
        title=title,
        description=description,
        completed=completed,
        due_date=lenient_datetime(due_date, "due_date"),
        reminder_time=lenient_datetime(reminder_time, "reminder_time"),
    )
    try:
        await tasks.update_task(task.id, changes)
    except ValidationError as e:
        flash(request, f"Error updating task: {e.message}", "error")
        return _redirect(f"/tasks/{task.id}/edit")

    flash(request, "Task updated successfully!")
    return _redirect("/tasks")
