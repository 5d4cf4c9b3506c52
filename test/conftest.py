"""
Test configuration and shared fixtures for the identifier allocator.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, Optional

import pytest

from idservice.application.services.uniqueness_verifier import UniquenessVerifier
from idservice.application.use_cases.local_random_identifier_source import (
    LocalRandomIdentifierSource,
)
from idservice.core.config import settings
from idservice.infrastructure.adapters import (
    InMemoryComponentSearch,
    SequenceItemIdProvider,
)


def setup_logging():
    """Configure logging for the whole test run."""
    log_dir = Path("test/test_output/logs")
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "test_run.log"

    formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)-8s [%(name)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = logging.FileHandler(filename=log_file, mode="a", encoding="utf-8")
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Drop existing handlers to avoid duplicate lines
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logging.getLogger("idservice").setLevel(logging.DEBUG)
    logging.getLogger("test").setLevel(logging.DEBUG)

    return log_file


def pytest_configure(config):  # pylint: disable=unused-argument
    """Configure pytest for tests."""
    log_file = setup_logging()

    logger = logging.getLogger("pytest")
    logger.info("=" * 80)
    logger.info("STARTING TEST RUN")
    logger.info("Log file: %s", log_file)
    logger.info("-" * 80)


@pytest.fixture(autouse=True)
def log_test_name(request):
    """Log test name when test starts and finishes."""
    logger = logging.getLogger(request.node.nodeid)
    logger.info("Starting test: %s", request.node.name)
    start_time = datetime.now()

    def log_test_end():
        duration = (datetime.now() - start_time).total_seconds()
        has_rep_call = hasattr(request.node, "rep_call")
        if has_rep_call and request.node.rep_call.failed:
            logger.error("Test failed after %.2fs", duration)
        else:
            logger.info("Test finished after %.2fs", duration)

    request.addfinalizer(log_test_end)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep tests independent from a developer's .env file."""
    monkeypatch.setattr(settings, "store_backend", "memory", raising=False)
    monkeypatch.setattr(settings, "strict_partition_check", False, raising=False)
    monkeypatch.setattr(settings, "verification_chunk_size", 10_000, raising=False)
    monkeypatch.setattr(settings, "verification_max_workers", 1, raising=False)
    monkeypatch.setattr(settings, "log_file", "", raising=False)


@pytest.fixture
def memory_store() -> InMemoryComponentSearch:
    return InMemoryComponentSearch()


@pytest.fixture
def make_source(memory_store) -> Callable[..., LocalRandomIdentifierSource]:
    """Factory for an identifier source over the in-memory store.

    Pass ``item_ids`` to replay a fixed sequence of item identifiers.
    """

    def factory(
        item_ids: Optional[Iterable[str]] = None,
        *,
        store: Optional[InMemoryComponentSearch] = None,
        chunk_size: int = 10_000,
        **kwargs,
    ) -> LocalRandomIdentifierSource:
        verifier = UniquenessVerifier(store or memory_store, chunk_size=chunk_size)
        provider = SequenceItemIdProvider(item_ids) if item_ids is not None else None
        return LocalRandomIdentifierSource(verifier, provider, **kwargs)

    return factory


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Add test result to report object."""
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)
