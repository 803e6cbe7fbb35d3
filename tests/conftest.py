"""Shared pytest fixtures and configuration for all tests."""

import logging

import pytest

from mflow.cli.output import configure_output


SAMPLE_PROGRAM = """// sample
let radius = 60

fn ring(x, y) {
  circle at (x, y) size radius color #F5A623
}

repeat 3 {
  ring(100, 100)
}

animate {
  move 3 right
  rotate 2
}
"""


@pytest.fixture(autouse=True)
def reset_mflow_state():
    """Undo logger and console changes made by ``mflow.cli.main``."""
    yield
    logger = logging.getLogger("mflow")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    configure_output()


@pytest.fixture
def sample_program():
    """A small program exercising functions, loops and animation."""
    return SAMPLE_PROGRAM


@pytest.fixture
def write_source(tmp_path):
    """Write MFlow source to a file under ``tmp_path`` and return its path."""

    def _write(text, name="main.mflow"):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
