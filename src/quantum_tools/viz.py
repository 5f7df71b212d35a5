from __future__ import annotations

from collections import deque
from typing import Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt

from .basis import Basis
from .errors import DimensionMismatch
from .state import State
from .system import System


class ProbabilityHistory:
    """
    Rolling buffer of (t, probabilities) samples for display.

    Holds at most capacity samples; adding past that evicts the oldest.
    """

    def __init__(self, dim: int, capacity: int = 1000):
        if dim <= 0:
            raise ValueError("dim must be positive")
        if capacity <= 0:
            raise ValueError("capacity must be positive")

        self.dim = int(dim)
        self.capacity = int(capacity)
        self._t = deque(maxlen=self.capacity)
        self._data = [deque(maxlen=self.capacity) for _ in range(self.dim)]

    def __len__(self) -> int:
        return len(self._t)

    def add(self, t: float, probabilities) -> None:
        probs = np.asarray(probabilities, dtype=float).reshape(-1)
        if probs.shape[0] != self.dim:
            raise DimensionMismatch(probs.shape[0], self.dim, "probabilities")

        self._t.append(float(t))
        for series, p in zip(self._data, probs):
            series.append(float(p))

    def add_state(self, state: State, t: float, *, basis: Optional[Basis] = Basis.PROBLEM) -> None:
        psi_t = state.evolve(t)
        if basis is not None:
            psi_t = psi_t.to_basis(basis)
        self.add(t, psi_t.get_probabilities())

    @property
    def times(self) -> np.ndarray:
        return np.array(self._t, dtype=float)

    def series(self, k: int) -> np.ndarray:
        return np.array(self._data[k], dtype=float)

    def x_range(self) -> Tuple[float, float]:
        first = self._t[0] if self._t else 0.0
        last = self._t[-1] if self._t else 0.0
        return max(0.0, first), max(12.0, last)


def _basis_labels(dim: int) -> list[str]:
    return [f"|{i}>" for i in range(dim)]


def plot_probabilities(state: State, *, title: str = "State probabilities"):

    probs = state.get_probabilities()
    labels = _basis_labels(len(probs))

    fig = plt.figure()
    plt.bar(range(len(probs)), probs)
    plt.xticks(range(len(probs)), labels)
    plt.ylim(0.0, 1.0)
    plt.ylabel("Probability")
    plt.title(f"{title} ({state.basis.value} basis)")
    plt.tight_layout()
    return fig


def plot_history(history: ProbabilityHistory, *, title: str = "quantum"):

    t = history.times

    fig = plt.figure()
    for k in range(history.dim):
        plt.plot(t, history.series(k), color="red")

    plt.xlim(*history.x_range())
    plt.ylim(0.0, 1.0)
    plt.xlabel("t")
    plt.ylabel("Probability")
    plt.title(title)
    plt.tight_layout()
    return fig


def two_level_demo() -> Tuple[System, State]:
    """
    H = [[0, i], [-i, 0]] with initial Problem-basis ket (1, 2), returned
    already converted to the Solution basis so each frame only needs evolve().
    """
    system = System(np.array([
        [0, 1j],
        [-1j, 0],
    ], dtype=complex))

    psi_0 = State.problem_ket_from_slice([1.0, 2.0], system).to_solution()
    return system, psi_0
