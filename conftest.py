import pytest

from config import reset_config


@pytest.fixture(autouse=True)
def fresh_config():
    # Engine settings are read from the environment on first use
    reset_config()
    yield
    reset_config()
