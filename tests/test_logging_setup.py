import logging

from todo.core.logging_setup import _AppOnlyFilter


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_keeps_app_records_at_any_level():
    f = _AppOnlyFilter()
    assert f.filter(_record("todo.services.tasks", logging.DEBUG))
    assert f.filter(_record("todo", logging.INFO))


def test_third_party_records_need_warning():
    f = _AppOnlyFilter()
    assert not f.filter(_record("sqlalchemy.engine", logging.INFO))
    assert not f.filter(_record("todoist", logging.INFO))
    assert f.filter(_record("uvicorn.error", logging.WARNING))
