"""로깅 설정 Unit 테스트"""

import logging

import pytest

from src.core.config import settings
from src.core.logging import (
    DEVELOPMENT_FORMAT,
    PRODUCTION_FORMAT,
    logger,
    resolve_log_level,
    setup_logging,
)


@pytest.fixture
def fresh_logger_name(request):
    name = f"user_items_proxy.test.{request.node.name}"
    yield name
    logging.getLogger(name).handlers.clear()


def test_module_logger_uses_configured_name():
    assert logger.name == settings.log_name


@pytest.mark.parametrize(
    "level, production, expected",
    [
        ("debug", True, "INFO"),
        ("debug", False, "DEBUG"),
        ("warning", True, "WARNING"),
    ],
)
def test_resolve_log_level(level, production, expected):
    assert resolve_log_level(level, production) == expected


def test_production_drops_debug_and_source_location(fresh_logger_name):
    configured = setup_logging(fresh_logger_name, level="DEBUG", production=True)

    assert configured.level == logging.INFO
    assert configured.handlers[0].formatter._fmt == PRODUCTION_FORMAT


def test_development_keeps_debug(fresh_logger_name):
    configured = setup_logging(fresh_logger_name, level="DEBUG", production=False)

    assert configured.level == logging.DEBUG
    assert configured.handlers[0].formatter._fmt == DEVELOPMENT_FORMAT


def test_handler_added_once(fresh_logger_name):
    setup_logging(fresh_logger_name, production=False)
    configured = setup_logging(fresh_logger_name, production=False)

    assert len(configured.handlers) == 1
