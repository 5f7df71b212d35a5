import numpy as np
import pytest

from quantum_tools.system import System


@pytest.fixture
def system2():
    # sigma_y up to sign; eigenvalues -1, +1
    H = np.array([
        [0, 1j],
        [-1j, 0],
    ], dtype=complex)
    return System(H)


@pytest.fixture
def random_system():
    rng = np.random.default_rng(42)
    A = rng.normal(size=(4, 4)) + 1j * rng.normal(size=(4, 4))
    return System((A + A.conj().T) / 2)


@pytest.fixture
def random_amplitudes():
    rng = np.random.default_rng(7)
    return rng.normal(size=4) + 1j * rng.normal(size=4)
