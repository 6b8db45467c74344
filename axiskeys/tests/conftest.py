import numpy as np
import pytest

from axiskeys import wrapdims
from axiskeys.config import config
from axiskeys.wrap import reset_warnings


@pytest.fixture(autouse=True)
def reset_state():
    config.reset()
    reset_warnings()
    yield
    config.reset()
    reset_warnings()


@pytest.fixture(params=[False, True], ids=["keyed-outer", "named-outer"])
def nameouter(request):
    return request.param


@pytest.fixture
def table(nameouter):
    return wrapdims(np.array([[1, 2, 3], [4, 5, 6]]), nameouter=nameouter,
                    row=range(10, 30, 10), col=["a", "b", "c"])
