from __future__ import annotations

from typing import Iterable, Optional

import numpy as np

from .basis import Basis, BasisTagged
from .braket import Bra, Braket, Ket, as_vector, normalize
from .errors import DimensionMismatch
from .evolution import evolution_phases
from .system import System


class State(BasisTagged):
    """
    A normalised bra or ket tagged with the basis its amplitudes live in.

    Problem basis: the basis the Hamiltonian was written in.
    Solution basis: the Hamiltonian's eigenbasis, ordered by ascending
    eigenvalue, where evolution is a phase per component.

    States are immutable. Every factory normalises its input, and every
    operation returns a new State bound to the same System.
    """

    __slots__ = ()

    @classmethod
    def _build(cls, basis: Basis, kind: type, data, system: Optional[System]) -> "State":
        braket = kind(normalize(as_vector(data)))
        return cls._wrap(basis, braket, system)

    @classmethod
    def problem_ket(cls, vec, system: Optional[System] = None) -> "State":
        return cls._build(Basis.PROBLEM, Ket, vec, system)

    @classmethod
    def solution_ket(cls, vec, system: Optional[System] = None) -> "State":
        return cls._build(Basis.SOLUTION, Ket, vec, system)

    @classmethod
    def problem_bra(cls, vec, system: Optional[System] = None) -> "State":
        return cls._build(Basis.PROBLEM, Bra, vec, system)

    @classmethod
    def solution_bra(cls, vec, system: Optional[System] = None) -> "State":
        return cls._build(Basis.SOLUTION, Bra, vec, system)

    @classmethod
    def problem_ket_from_slice(cls, data: Iterable, system: Optional[System] = None) -> "State":
        return cls.problem_ket(list(data), system)

    @classmethod
    def solution_ket_from_slice(cls, data: Iterable, system: Optional[System] = None) -> "State":
        return cls.solution_ket(list(data), system)

    @classmethod
    def problem_bra_from_slice(cls, data: Iterable, system: Optional[System] = None) -> "State":
        return cls.problem_bra(list(data), system)

    @classmethod
    def solution_bra_from_slice(cls, data: Iterable, system: Optional[System] = None) -> "State":
        return cls.solution_bra(list(data), system)

    @classmethod
    def basis_state(
        cls,
        index: int,
        dim: int,
        *,
        basis: Basis = Basis.PROBLEM,
        bra: bool = False,
        system: Optional[System] = None,
    ) -> "State":
        if index < 0 or index >= dim:
            raise ValueError(f"index must be between 0 and {dim - 1}, got {index}")

        vec = np.zeros(dim, dtype=complex)
        vec[index] = 1.0
        return cls._build(basis, Bra if bra else Ket, vec, system)

    @property
    def braket(self) -> Braket:
        return self.get_value()

    def get_braket(self) -> Braket:
        return self.get_value()

    @property
    def amplitudes(self) -> np.ndarray:
        return self.braket.vector

    def __len__(self) -> int:
        return len(self.braket)

    def is_bra(self) -> bool:
        return self.braket.is_bra()

    def is_ket(self) -> bool:
        return self.braket.is_ket()

    def dual(self) -> "State":
        return self._wrap(self.basis, self.braket.dual(), self.system)

    def get_probabilities(self) -> np.ndarray:
        # Born rule; relies on the unit norm every constructor enforces
        return self.braket.probabilities()

    def _check_dim(self, system: System) -> None:
        if len(self) != system.dim:
            raise DimensionMismatch(len(self), system.dim, "bra" if self.is_bra() else "ket")

    def to_solution(self) -> "State":
        if self.is_solution():
            return self

        system = self._require_system("convert")
        self._check_dim(system)
        V = system.eigenvectors
        vec = self.amplitudes

        if self.is_ket():
            return State.solution_ket(V.conj().T @ vec, system)
        return State.solution_bra(vec @ V, system)

    def to_problem(self) -> "State":
        if self.is_problem():
            return self

        system = self._require_system("convert")
        self._check_dim(system)
        V = system.eigenvectors
        vec = self.amplitudes

        if self.is_ket():
            return State.problem_ket(V @ vec, system)
        return State.problem_bra(vec @ V.conj().T, system)

    def evolve(self, t: float) -> "State":
        """
        Evolve by time t (any sign) under the bound Hamiltonian.

        A ket picks up exp(-i E_k t) on each eigen-component. A bra is the
        adjoint, so it is multiplied from the right by U^dagger, which for a
        diagonal U means the conjugate phases exp(+i E_k t). Problem-basis
        states are evolved through the Solution basis and converted back.
        """
        system = self._require_system("evolve")
        self._check_dim(system)

        if self.is_problem():
            return self.to_solution().evolve(t).to_problem()

        phases = evolution_phases(system.eigenvalues, t)

        if self.is_ket():
            return State.solution_ket(phases * self.amplitudes, system)
        return State.solution_bra(self.amplitudes * phases.conj(), system)

    def inner(self, other: "State") -> complex:
        """
        <self|other>. Kets on the left are turned into bras and bras on the
        right into kets. If the tags differ, other is converted into the basis
        of self.
        """
        left = self.dual() if self.is_ket() else self
        right = other.dual() if other.is_bra() else other

        if right.basis is not left.basis:
            right = right.to_basis(left.basis)

        if len(left) != len(right):
            raise ValueError(f"Cannot take inner product of lengths {len(left)} and {len(right)}")

        return complex(np.dot(left.amplitudes, right.amplitudes))
