from __future__ import annotations

from typing import Iterable, Iterator, Optional, Tuple

import numpy as np

from .basis import Basis
from .system import System


def evolution_phases(eigenvalues: np.ndarray, t: float) -> np.ndarray:
    ## diagonal of U = exp(-i H t) in the eigenbasis
    return np.exp(-1j * np.asarray(eigenvalues, dtype=float) * float(t))


def unitary_from_hamiltonian(H, t: float) -> np.ndarray:
    """
    Full propagator U = V diag(exp(-i w t)) V^dagger in the Problem basis.
    H may be a System (its cached spectrum is reused) or a Hermitian matrix.
    """
    system = H if isinstance(H, System) else System(H)
    return system.unitary(t)


def evolve_steps(state, dt: float, steps: int):
    if steps <= 0:
        raise ValueError("Steps must be positive")

    out = state
    for _ in range(int(steps)):
        out = out.evolve(dt)

    return out


def trajectory(
    state,
    times: Iterable[float],
    *,
    basis: Optional[Basis] = None,
) -> Iterator[Tuple[float, np.ndarray]]:
    """
    Yield (t, probabilities) for each t, each evolved from the same initial
    state. With basis given the probabilities are read in that basis,
    otherwise in the state's own.
    """
    for t in times:
        psi_t = state.evolve(t)
        if basis is not None:
            psi_t = psi_t.to_basis(basis)
        yield float(t), psi_t.get_probabilities()
