from pydantic import BaseModel
from typing import Optional

class UserRegister(BaseModel):
    username: str
    password: str
    full_name: Optional[str] = None

class SessionIdentity(BaseModel):
    """The authenticated user bound to the current request."""
    user_id: int
    username: str

    class Config:
        frozen = True
