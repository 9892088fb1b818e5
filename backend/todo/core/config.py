from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./todo.db"
    DATABASE_ECHO: bool = False
    DATABASE_SSL: bool = False
    SECRET_KEY: str = "change-me"
    SESSION_COOKIE: str = "todo_session"
    SESSION_MAX_AGE: int = 60 * 60 * 24
    REMINDERS_SCOPE_TO_OWNER: bool = False
    LOG_LEVEL: str = "INFO"
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 8000

    class Config:
        env_file = ".env"

    @property
    def ASYNC_DATABASE_URL(self) -> str:
        url = self.DATABASE_URL
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        if url.startswith("sqlite://"):
            return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return url

settings = Settings()
