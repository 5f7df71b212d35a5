from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from .state import State
from .system import DEFAULT_ATOL


@dataclass(frozen=True)
class MeasurementResult:
    outcome: int
    probability: float
    post_state: State


def measure(
    state: State,
    *,
    rng: Optional[np.random.Generator] = None,
    validate: bool = True,
) -> MeasurementResult:
    """
    Sample one basis outcome of state in its own basis (Born rule).

    The post-measurement state is the collapsed basis vector, keeping the
    basis tag, bra/ket kind and System binding of the input.
    """
    probs = state.get_probabilities()

    total = float(probs.sum())
    if validate and not np.isclose(total, 1.0, atol=DEFAULT_ATOL):
        raise ValueError(f"State is not normalised: sum(p)={total}")

    if rng is None:
        rng = np.random.default_rng()

    outcome = int(rng.choice(len(probs), p=probs / total))
    prob = float(probs[outcome])

    post = State.basis_state(
        outcome,
        len(state),
        basis=state.basis,
        bra=state.is_bra(),
        system=state.system,
    )
    return MeasurementResult(outcome=outcome, probability=prob, post_state=post)


def sample_counts(state: State, shots: int = 1024, *, seed: Optional[int] = None) -> Dict[int, int]:
    if shots <= 0:
        raise ValueError("shots must be positive")

    probs = state.get_probabilities()
    rng = np.random.default_rng(seed)
    outcomes = rng.choice(len(probs), size=int(shots), p=probs / probs.sum())

    counts: Dict[int, int] = {}
    for k in outcomes:
        counts[int(k)] = counts.get(int(k), 0) + 1
    return counts
