import numpy as np
import pytest


@pytest.fixture(scope="session")
def mixture_pars():
    return {"alpha": [1, 2.5, 0.5], "maxoctave": [4, 10, 7], "w": [0.2, 0.5, 0.3]}


@pytest.fixture
def rng():
    return np.random.default_rng(20190101)
