import logging
from typing import Optional
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status
from todo.core.database import get_db
from todo.core.errors import LoginRequired, NotFound, TodoError
from todo.core.flash import flash
from todo.core.templating import render
from todo.schemas.user import SessionIdentity, UserRegister
from todo.services.auth import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)

async def get_session_identity(
    request: Request,
    auth: AuthService = Depends(get_auth_service)
) -> SessionIdentity:
    """Resolve the session cookie into the authenticated user for this request."""
    user_id = request.session.get("user_id")
    if user_id is None:
        raise LoginRequired()
    try:
        user = await auth.find_by_id(user_id)
    except NotFound:
        # account vanished under a live session
        request.session.clear()
        raise LoginRequired()
    return SessionIdentity(user_id=user.id, username=user.username)

def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)

@router.get("/login", response_class=HTMLResponse)
async def login_page(request: Request):
    return render(request, "login.html")

@router.get("/signup", response_class=HTMLResponse)
async def signup_page(request: Request):
    return render(request, "signup.html")

@router.post("/signup")
async def signup(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    full_name: Optional[str] = Form(None),
    auth: AuthService = Depends(get_auth_service)
):
    user_in = UserRegister(username=username, password=password, full_name=full_name)
    try:
        await auth.register(user_in.username, user_in.password, full_name=user_in.full_name)
    except TodoError as e:
        flash(request, e.message, "error")
        return _redirect("/auth/signup")

    flash(request, "Registration successful! Please login.")
    return _redirect("/auth/login")

@router.post("/login")
async def login(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    auth: AuthService = Depends(get_auth_service)
):
    try:
        user = await auth.login(username, password)
    except TodoError as e:
        flash(request, e.message, "error")
        return _redirect("/auth/login")

    request.session.clear()
    request.session["user_id"] = user.id
    request.session["username"] = user.username
    return _redirect("/")

@router.get("/logout")
async def logout(request: Request):
    user_id = request.session.get("user_id")
    request.session.clear()
    if user_id is not None:
        logger.info("User id=%s logged out", user_id)
    return _redirect("/auth/login")
