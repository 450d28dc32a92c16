import pytest

from revad import set_config, get_config, use_tape


@pytest.fixture(autouse=True)
def tape():
    """Every test records on its own tape."""
    with use_tape() as t:
        yield t


@pytest.fixture
def restore_config():
    prev = get_config()
    yield
    set_config(prev)
