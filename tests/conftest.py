import logging

import pytest

from augmentor.config import reset_config
from augmentor.logger import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def _isolate_global_state():
    reset_config()
    yield
    reset_config()
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)
