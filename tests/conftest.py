"""Shared pytest fixtures for the leakprobe project."""

import logging
import pathlib
from collections.abc import Iterator

import pytest

from leakprobe.config.probe_config import ProbeConfig
from leakprobe.consts.WorkloadVariant import WorkloadVariant
from tests.fakes import RecordingChannelFactory

KB = 1024


@pytest.fixture(scope="session")
def project_root() -> Iterator[pathlib.Path]:
    """Return repository root for convenience in tests."""
    yield pathlib.Path(__file__).resolve().parent.parent


@pytest.fixture
def small_config(tmp_path: pathlib.Path) -> ProbeConfig:
    """Three quick iterations over a 64 KB buffer inside tmp_path."""
    return ProbeConfig(
        variant=WorkloadVariant.READ,
        iterations=3,
        buffer_size=64 * KB,
        fixture_size=128 * KB,
        sleep_interval=0,
        fixture_path=tmp_path / "fixture.bin",
        scratch_path=tmp_path / "scratch.bin",
    )


@pytest.fixture
def channel_factory() -> RecordingChannelFactory:
    return RecordingChannelFactory()


@pytest.fixture
def restore_package_loggers() -> Iterator[None]:
    """Undo level and handler changes made to leakprobe loggers by a test."""
    loggers = [
        existing
        for name, existing in logging.root.manager.loggerDict.items()
        if name.startswith("leakprobe") and isinstance(existing, logging.Logger)
    ]
    saved = [(existing, existing.level, list(existing.handlers), [h.level for h in existing.handlers])
             for existing in loggers]
    yield
    for existing, level, handlers, handler_levels in saved:
        for handler in existing.handlers:
            if handler not in handlers:
                handler.close()
        existing.setLevel(level)
        existing.handlers[:] = handlers
        for handler, handler_level in zip(handlers, handler_levels):
            handler.setLevel(handler_level)
