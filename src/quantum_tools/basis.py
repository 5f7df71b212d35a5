from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional

from .errors import UnboundSystem
from .system import System


class Basis(enum.Enum):
    PROBLEM = "problem"
    SOLUTION = "solution"


@dataclass(frozen=True, eq=False)
class Context:
    value: Any
    system: Optional[System] = None


class BasisTagged:
    """
    A payload (braket or operator matrix) tagged with the basis its numbers
    are expressed in, plus an optional reference to the System that defines
    the Solution basis.

    Equality compares the tag and the payload only. Two values bound to
    different Systems, or one bound and one detached, compare equal when
    their numbers agree.
    """

    __slots__ = ("_basis", "_context")

    def __init__(self, basis: Basis, context: Context):
        if not isinstance(basis, Basis):
            raise TypeError(f"basis must be a Basis, got {basis!r}")
        self._basis = basis
        self._context = context

    @classmethod
    def _wrap(cls, basis: Basis, value, system: Optional[System]):
        return cls(basis, Context(value=value, system=system))

    @property
    def basis(self) -> Basis:
        return self._basis

    @property
    def value(self):
        return self._context.value

    @property
    def system(self) -> Optional[System]:
        return self._context.system

    def get_value(self):
        return self._context.value

    def get_system(self) -> Optional[System]:
        return self._context.system

    def is_problem(self) -> bool:
        return self._basis is Basis.PROBLEM

    def is_solution(self) -> bool:
        return self._basis is Basis.SOLUTION

    def is_bound(self) -> bool:
        return self._context.system is not None

    def with_system(self, system: System):
        if not isinstance(system, System):
            raise TypeError(f"system must be a System, got {type(system).__name__}")
        return self._wrap(self._basis, self._context.value, system)

    def without_system(self):
        return self._wrap(self._basis, self._context.value, None)

    def _require_system(self, action: str) -> System:
        system = self._context.system
        if system is None:
            raise UnboundSystem(action)
        return system

    def to_basis(self, basis: Basis):
        if basis is Basis.SOLUTION:
            return self.to_solution()
        return self.to_problem()

    def to_solution(self):
        raise NotImplementedError

    def to_problem(self):
        raise NotImplementedError

    def __eq__(self, other) -> bool:
        if not isinstance(other, BasisTagged):
            return NotImplemented
        if type(self) is not type(other) or self._basis is not other._basis:
            return False
        return self._payload_equal(self._context.value, other._context.value)

    @staticmethod
    def _payload_equal(a, b) -> bool:
        return a == b

    __hash__ = None

    def __repr__(self) -> str:
        bound = "bound" if self.is_bound() else "unbound"
        return f"{type(self).__name__}.{self._basis.name}({self._context.value!r}, {bound})"
