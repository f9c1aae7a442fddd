"""The main entry point for pytest fixtures.

This will run before any tests are executed when `import pytest` is called.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterator, List

import httpx
import pytest
from loguru import logger

from algo_lab.core.generator import Generator
from algo_lab.core.settings import GeneratorSettings
from tests.helpers import SAMPLE_HTML, gemini_body

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level:^7} | {file.name}:{line} | {message}"

Handler = Callable[[httpx.Request], httpx.Response]


def _setup_logging() -> None:
    """Add a file sink to the default pytest console logging."""
    # logs/pytest_YYYYMMDD.log
    logs_dir = Path(__file__).resolve().parent.parent / "logs"
    logs_dir.mkdir(exist_ok=True)
    logfile = logs_dir / f"pytest_{datetime.now():%Y%m%d}.log"

    # Add file sink to existing pytest console handler
    logger.add(
        logfile,
        level="DEBUG",
        format=LOG_FORMAT,
        rotation="00:00",
        retention="7 days",
        compression="zip",
    )

    # Intercept stdlib logging so everything funnels through Loguru
    class InterceptHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            try:
                level = logger.level(record.levelname).name
            except ValueError:
                level = logging.getLevelName(record.levelno)
            logger.opt(depth=6, exception=record.exc_info, colors=False).log(
                level, record.getMessage()
            )

    # Force stdlib logging to go through our intercept handler
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


def pytest_configure(config: pytest.Config) -> None:
    """Pytest configuration hook to add a file sink to default pytest logging."""
    _setup_logging()


@pytest.fixture
def settings() -> GeneratorSettings:
    """Generator settings with a fake key and fixed endpoint."""
    return GeneratorSettings(
        api_key="test-key",
        model="test-model",
        base_url="https://example.test/v1beta",
        request_timeout=5,
        ready_timeout=30,
    )


@pytest.fixture
def make_generator(
    settings: GeneratorSettings,
) -> Iterator[Callable[[Handler], Generator]]:
    """Build generators whose HTTP traffic is served by a handler function.

    Every request seen is appended to the generator's `requests` attribute so
    tests can assert on what was sent.
    """
    created: List[Generator] = []

    def _make(handler: Handler) -> Generator:
        seen: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        client = httpx.Client(transport=httpx.MockTransport(_record))
        generator = Generator(settings=settings, client=client)
        generator.requests = seen  # type: ignore[attr-defined]
        created.append(generator)
        return generator

    yield _make
    for generator in created:
        generator.close()


@pytest.fixture
def ok_generator(make_generator: Callable[[Handler], Generator]) -> Generator:
    """Generator that always returns SAMPLE_HTML wrapped in a code fence."""
    fenced = f"```html\n{SAMPLE_HTML}\n```"
    return make_generator(lambda request: httpx.Response(200, json=gemini_body(fenced)))


@pytest.fixture
def failing_generator(make_generator: Callable[[Handler], Generator]) -> Generator:
    """Generator whose upstream always answers 429."""
    body = {"error": {"code": 429, "message": "quota exceeded"}}
    return make_generator(lambda request: httpx.Response(429, json=body))
