from typing import List, Tuple
from fastapi import Request

_SESSION_KEY = "_flashes"

def flash(request: Request, message: str, category: str = "success") -> None:
    """Queue a message for the next rendered page."""
    flashes = request.session.get(_SESSION_KEY, [])
    flashes.append([category, message])
    request.session[_SESSION_KEY] = flashes

def get_flashed_messages(request: Request) -> List[Tuple[str, str]]:
    """Pop every queued message as (category, message) pairs."""
    flashes = request.session.pop(_SESSION_KEY, [])
    return [(category, message) for category, message in flashes]
