from __future__ import annotations

from typing import Optional

import numpy as np

from .basis import Basis, BasisTagged
from .braket import Ket
from .errors import DimensionMismatch
from .state import State
from .system import System


def _as_matrix(M) -> np.ndarray:
    M = np.array(M, dtype=complex)
    if M.ndim != 2 or M.shape[0] != M.shape[1]:
        raise ValueError(f"Operator must be a square matrix, got shape {M.shape}")
    M.flags.writeable = False
    return M


class Operator(BasisTagged):
    """
    A square matrix tagged with the basis it acts in.

    Changing basis conjugates by the eigenvector matrix V of the bound
    System: M_solution = V^dagger M_problem V.
    """

    __slots__ = ()

    @classmethod
    def problem(cls, matrix, system: Optional[System] = None) -> "Operator":
        return cls._wrap(Basis.PROBLEM, _as_matrix(matrix), system)

    @classmethod
    def solution(cls, matrix, system: Optional[System] = None) -> "Operator":
        return cls._wrap(Basis.SOLUTION, _as_matrix(matrix), system)

    @classmethod
    def hamiltonian(cls, system: System) -> "Operator":
        return cls._wrap(Basis.PROBLEM, system.hamiltonian, system)

    @staticmethod
    def _payload_equal(a, b) -> bool:
        return a.shape == b.shape and bool(np.all(a == b))

    @property
    def matrix(self) -> np.ndarray:
        return self.get_value()

    @property
    def dim(self) -> int:
        return self.matrix.shape[0]

    def _check_dim(self, system: System) -> None:
        if self.dim != system.dim:
            raise DimensionMismatch(self.dim, system.dim, "op")

    def to_solution(self) -> "Operator":
        if self.is_solution():
            return self

        system = self._require_system("convert")
        self._check_dim(system)
        V = system.eigenvectors
        return Operator.solution(V.conj().T @ self.matrix @ V, system)

    def to_problem(self) -> "Operator":
        if self.is_problem():
            return self

        system = self._require_system("convert")
        self._check_dim(system)
        V = system.eigenvectors
        return Operator.problem(V @ self.matrix @ V.conj().T, system)

    def _aligned(self, state: State) -> "Operator":
        if state.is_bra():
            raise ValueError("Operators act on kets; take the dual of a bra first")

        if len(state) != self.dim:
            raise DimensionMismatch(len(state), self.dim)

        op = self
        if op.basis is not state.basis:
            if op.system is None and state.system is not None:
                op = op.with_system(state.system)
            op = op.to_basis(state.basis)
        return op

    def apply_vector(self, state: State) -> Ket:
        """
        Raw M|psi> in the basis of psi, as a bare Ket. M need not be unitary,
        so the norm is whatever M gives.
        """
        op = self._aligned(state)
        return Ket(op.matrix @ state.amplitudes)

    def apply(self, state: State) -> State:
        """
        M|psi> as a new normalised State in the basis and binding of psi.
        Raises InvalidVector if M annihilates psi.
        """
        vec = self.apply_vector(state).vector
        if state.is_problem():
            return State.problem_ket(vec, state.system)
        return State.solution_ket(vec, state.system)

    def expectation(self, state: State) -> complex:
        op = self._aligned(state)
        psi = state.amplitudes
        return complex(np.vdot(psi, op.matrix @ psi))
