from pathlib import Path
from fastapi import Request
from fastapi.templating import Jinja2Templates
from .flash import get_flashed_messages

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

def _input_datetime(value):
    """Format a timestamp for a datetime-local input."""
    return value.strftime("%Y-%m-%dT%H:%M") if value else ""

templates.env.filters["input_datetime"] = _input_datetime

def render(request: Request, name: str, **context):
    context.setdefault("session_user", request.session.get("username"))
    context["flashes"] = get_flashed_messages(request)
    return templates.TemplateResponse(request, name, context)
