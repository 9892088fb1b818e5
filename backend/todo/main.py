from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette import status
from starlette.middleware.sessions import SessionMiddleware
from todo.core.config import Settings, settings as default_settings
from todo.core.database import build_engine, build_sessionmaker, init_models
from todo.core.errors import LoginRequired, TodoError
from todo.core.flash import flash
from todo.core.templating import TEMPLATES_DIR
from todo.routers import auth, tasks, reminders

STATIC_DIR = TEMPLATES_DIR.parent / "static"

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    engine = build_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await init_models(engine)
        yield
        await engine.dispose()

    app = FastAPI(title="Todo Manager", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.sessionmaker = build_sessionmaker(engine)

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SECRET_KEY,
        session_cookie=settings.SESSION_COOKIE,
        max_age=settings.SESSION_MAX_AGE,
        same_site="lax",
    )

    app.include_router(auth.router)
    app.include_router(tasks.router)
    app.include_router(reminders.router)
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    @app.exception_handler(LoginRequired)
    async def login_required_handler(request: Request, exc: LoginRequired):
        return RedirectResponse(url="/auth/login", status_code=status.HTTP_303_SEE_OTHER)

    @app.exception_handler(TodoError)
    async def todo_error_handler(request: Request, exc: TodoError):
        flash(request, exc.message, "error")
        return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app

app = create_app()
