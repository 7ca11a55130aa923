from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from panpack.toolchain.runner import CommandRunner
from tests._fixtures.fake_toolchain import FakeToolchain
from tests._fixtures.module_builder import ModuleBuilder


@pytest.fixture
def module_builder(tmp_path: Path) -> ModuleBuilder:
    """Provide a reusable game crate builder rooted at the pytest tmp_path."""
    return ModuleBuilder(tmp_path)


@pytest.fixture
def toolchain() -> FakeToolchain:
    return FakeToolchain()


@pytest.fixture
def command_runner(toolchain: FakeToolchain) -> CommandRunner:
    return CommandRunner(runner=toolchain)


@pytest.fixture(autouse=True)
def _propagate_panpack_logs() -> Iterator[None]:
    # configure_logging() turns propagation off; caplog needs it on.
    logger = logging.getLogger("panpack")
    logger.propagate = True
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
