import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _reset_loguru():
    # setup_logging() dodaje sinki na sys.stdout podmienionym przez capsys
    yield
    logger.remove()
