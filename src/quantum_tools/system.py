from __future__ import annotations

import logging
import threading
from typing import NamedTuple, Optional

import numpy as np

from .errors import NonHermitianError

logger = logging.getLogger(__name__)

DEFAULT_ATOL = 1e-10


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr


class Eigensystem(NamedTuple):
    # eigenvalues ascending, eigenvectors as columns
    eigenvalues: np.ndarray
    eigenvectors: np.ndarray


class System:
    """
    A time-independent Hamiltonian together with its lazily computed spectrum.

    The Hamiltonian is copied on construction and stored read-only; it is
    never mutated afterwards. The eigendecomposition is computed on the first
    call to eigensystem() and cached for the lifetime of the System, so states
    that are never evolved never pay for it.

    Sharing: states hold a plain reference to their System. The cached arrays
    are read-only, so once populated they can be read from any thread. The
    first computation is guarded by a lock.
    """

    def __init__(self, hamiltonian, *, validate: bool = False, atol: float = DEFAULT_ATOL):
        H = np.array(hamiltonian, dtype=complex)

        if H.ndim != 2 or H.shape[0] != H.shape[1]:
            raise ValueError(f"Hamiltonian must be a square matrix, got shape {H.shape}")

        if H.shape[0] == 0:
            raise ValueError("Hamiltonian must have at least one row")

        if validate and not np.allclose(H, H.conj().T, atol=atol):
            raise NonHermitianError("Hamiltonian is not Hermitian")

        self._ham = _readonly(H)
        self._eigensystem: Optional[Eigensystem] = None
        self._lock = threading.Lock()

    @property
    def hamiltonian(self) -> np.ndarray:
        return self._ham

    @property
    def dim(self) -> int:
        return self._ham.shape[0]

    def __len__(self) -> int:
        return self.dim

    @property
    def is_solved(self) -> bool:
        return self._eigensystem is not None

    def eigensystem(self) -> Eigensystem:
        es = self._eigensystem
        if es is not None:
            return es

        with self._lock:
            if self._eigensystem is None:
                # eigh assumes Hermitian input and returns real, ascending eigenvalues
                w, V = np.linalg.eigh(self._ham)
                self._eigensystem = Eigensystem(
                    eigenvalues=_readonly(np.asarray(w, dtype=float)),
                    eigenvectors=_readonly(np.asarray(V, dtype=complex)),
                )
                logger.debug("Computed eigensystem for %dx%d Hamiltonian", self.dim, self.dim)

            return self._eigensystem

    @property
    def eigenvalues(self) -> np.ndarray:
        return self.eigensystem().eigenvalues

    @property
    def eigenvectors(self) -> np.ndarray:
        return self.eigensystem().eigenvectors

    def unitary(self, t: float) -> np.ndarray:
        """
        Build U = exp(-i H t) in the Problem basis from the cached spectrum.
        """
        w, V = self.eigensystem()
        phases = np.exp(-1j * w * float(t))
        return (V * phases) @ V.conj().T

    def __repr__(self) -> str:
        return f"System(dim={self.dim}, solved={self.is_solved})"
