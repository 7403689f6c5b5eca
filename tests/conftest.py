import pytest

import evsim

@pytest.fixture
def sim():
    return evsim.simulator()
