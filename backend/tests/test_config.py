import pytest
from pydantic import ValidationError

from tempo.core.config import Settings


@pytest.mark.parametrize("age", [0, -3, 220, 300])
def test_default_age_must_give_positive_max_hr(age):
    with pytest.raises(ValidationError):
        Settings(default_age=age)


def test_default_age_from_env(monkeypatch):
    monkeypatch.setenv("DEFAULT_AGE", "45")
    assert Settings().default_age == 45


def test_json_logging_renders_exceptions():
    import structlog

    from tempo.core.logging import configure_logging

    try:
        configure_logging("INFO", "json")
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert structlog.processors.format_exc_info in processors

        configure_logging("INFO", "console")
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
        assert structlog.processors.format_exc_info not in processors
    finally:
        configure_logging("WARNING", "console")
