import logging

import pytest


def pytest_configure(config):
    config.addinivalue_line("markers", "wraparound: cases that cross the antimeridian")


def pytest_collection_modifyitems(config, items):
    """Tag tests whose name mentions the antimeridian or wrapping.

    Run only those with `pytest -m wraparound`.
    """
    keywords = ('wrap', 'antimeridian')
    for item in items:
        if any(k in item.name.lower() for k in keywords):
            item.add_marker(pytest.mark.wraparound)


@pytest.fixture(autouse=True)
def _restore_root_level():
    # the cli configures the root logger; keep runs independent
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
