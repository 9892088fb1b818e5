from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class TaskCreate(BaseModel):
    title: str = ""
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    reminder_time: Optional[datetime] = None

class TaskUpdate(BaseModel):
    """The fields a user may edit. Everything else on a task is system-owned."""
    title: str
    description: Optional[str] = None
    completed: bool = False
    due_date: Optional[datetime] = None
    reminder_time: Optional[datetime] = None

class TaskResponse(BaseModel):
    id: int
    title: str
    description: Optional[str]
    completed: bool
    due_date: Optional[datetime]
    reminder_time: Optional[datetime]
    created_at: datetime
    updated_at: datetime
    user_id: int

    class Config:
        from_attributes = True
