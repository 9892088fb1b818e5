from typing import List
from fastapi import APIRouter, Depends, Request
from todo.routers.auth import get_auth_service, get_session_identity
from todo.routers.tasks import get_task_service
from todo.schemas.task import TaskResponse
from todo.services.auth import AuthService
from todo.services.tasks import TaskService

router = APIRouter(prefix="/reminders", tags=["reminders"])

@router.get("/due", response_model=List[TaskResponse])
async def due_reminders(
    request: Request,
    tasks: TaskService = Depends(get_task_service),
    auth: AuthService = Depends(get_auth_service)
):
    """Incomplete tasks whose reminder time has passed.

    Global and unauthenticated unless REMINDERS_SCOPE_TO_OWNER is set, in
    which case only the caller's tasks are returned.
    """
    owner_id = None
    if request.app.state.settings.REMINDERS_SCOPE_TO_OWNER:
        identity = await get_session_identity(request, auth)
        owner_id = identity.user_id
    return await tasks.get_due_reminders(owner_id=owner_id)
