from __future__ import annotations

import numpy as np

from .errors import InvalidVector


def as_vector(data) -> np.ndarray:
    vec = np.array(data, dtype=complex)
    if vec.ndim == 2 and 1 in vec.shape:
        vec = vec.reshape(-1)

    if vec.ndim != 1:
        raise InvalidVector(f"Expected a one-dimensional vector, got shape {vec.shape}")

    if vec.shape[0] == 0:
        raise InvalidVector("Cannot build a state from an empty vector")

    return vec


def normalize(vec: np.ndarray) -> np.ndarray:
    norm = np.linalg.norm(vec)
    if not np.isfinite(norm):
        raise InvalidVector("Cannot normalise vector with non-finite entries!")
    if norm == 0:
        raise InvalidVector("Cannot normalise zero vector!")
    return vec / norm


class Braket:
    """
    A ket (column vector) or a bra (row vector) of complex amplitudes.

    Use the Ket and Bra subclasses; the class is the tag. Amplitudes are
    stored as a read-only 1-D complex array, the row/column orientation only
    matters for how operators are applied.
    """

    __slots__ = ("_vec",)

    def __init__(self, data):
        if type(self) is Braket:
            raise TypeError("Braket is abstract; build a Bra or a Ket")

        vec = as_vector(data)
        vec.flags.writeable = False
        self._vec = vec

    @property
    def vector(self) -> np.ndarray:
        return self._vec

    def __len__(self) -> int:
        return self._vec.shape[0]

    def is_bra(self) -> bool:
        return isinstance(self, Bra)

    def is_ket(self) -> bool:
        return isinstance(self, Ket)

    def norm(self) -> float:
        return float(np.linalg.norm(self._vec))

    def normalized(self) -> "Braket":
        return type(self)(normalize(self._vec))

    def probabilities(self) -> np.ndarray:
        v = self._vec
        return v.real * v.real + v.imag * v.imag

    def dual(self) -> "Braket":
        raise NotImplementedError

    def __eq__(self, other) -> bool:
        if not isinstance(other, Braket):
            return NotImplemented
        if type(self) is not type(other):
            return False
        return self._vec.shape == other._vec.shape and bool(np.all(self._vec == other._vec))

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({np.array2string(self._vec, precision=6)})"


class Ket(Braket):
    __slots__ = ()

    def dual(self) -> "Bra":
        return Bra(self._vec.conj())


class Bra(Braket):
    __slots__ = ()

    def dual(self) -> "Ket":
        return Ket(self._vec.conj())
