import logging

import pytest

from arena import Arena


@pytest.fixture
def arena():
    """The reference 20x100 arena."""
    return Arena.from_size(20, 100)


@pytest.fixture
def restore_root_logger():
    """Puts the root logger back the way it was after setup_logging runs."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
