from __future__ import annotations


class QuantumToolsError(Exception):
    pass


class DimensionMismatch(QuantumToolsError, ValueError):
    """
    Raised when a state's length disagrees with the Hamiltonian dimension.

    expected is the length of the offending vector, actual the dimension of
    the bound Hamiltonian.
    """

    def __init__(self, expected: int, actual: int, kind: str = "ket"):
        self.expected = int(expected)
        self.actual = int(actual)
        self.kind = kind
        super().__init__(
            f"Dimensions of {kind}({self.expected}) and ham({self.actual}) don't match!"
        )


class UnboundSystem(QuantumToolsError, RuntimeError):

    def __init__(self, action: str = "evolve"):
        self.action = action
        super().__init__(f"Can't {action} a state not tied to any system!")


class InvalidVector(QuantumToolsError, ValueError):
    pass


class NonHermitianError(QuantumToolsError, ValueError):
    pass
