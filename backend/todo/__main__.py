import uvicorn
from todo.core.config import settings
from todo.core.logging_setup import setup_logging

def main() -> None:
    setup_logging(settings.LOG_LEVEL)
    uvicorn.run("todo.main:app", host=settings.API_HOST, port=settings.API_PORT, log_config=None)

if __name__ == "__main__":
    main()
