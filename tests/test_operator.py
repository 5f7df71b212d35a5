import numpy as np
import pytest

from quantum_tools.basis import Basis
from quantum_tools.errors import DimensionMismatch, InvalidVector, UnboundSystem
from quantum_tools.operator import Operator
from quantum_tools.state import State


def test_hamiltonian_is_diagonal_in_solution_basis(random_system):
    H = Operator.hamiltonian(random_system)
    assert H.is_problem()

    D = H.to_solution()
    assert D.is_solution()
    assert np.allclose(D.matrix, np.diag(random_system.eigenvalues), atol=1e-10)


def test_operator_round_trip(random_system):
    rng = np.random.default_rng(3)
    M = rng.normal(size=(4, 4)) + 1j * rng.normal(size=(4, 4))
    op = Operator.problem(M, random_system)

    back = op.to_solution().to_problem()
    assert back.is_problem()
    assert np.allclose(back.matrix, M, atol=1e-12)


def test_conversion_needs_system():
    with pytest.raises(UnboundSystem):
        Operator.problem(np.eye(2)).to_solution()

    op = Operator.solution(np.eye(2))
    assert op.to_solution() is op


def test_expectation_of_hamiltonian_on_eigenstates(system2):
    H = Operator.hamiltonian(system2)
    ground = State.basis_state(0, 2, basis=Basis.SOLUTION, system=system2)

    assert np.isclose(H.expectation(ground), -1.0)
    assert np.isclose(H.expectation(ground.to_problem()), -1.0)


def test_expectation_is_conserved(random_system, random_amplitudes):
    H = Operator.hamiltonian(random_system)
    psi = State.problem_ket(random_amplitudes, random_system)

    e0 = H.expectation(psi)
    assert np.isclose(e0.imag, 0.0, atol=1e-12)
    assert np.isclose(H.expectation(psi.evolve(3.0)), e0, atol=1e-10)


def test_apply_matches_matrix_product(system2):
    X = Operator.problem([[0, 1], [1, 0]], system2)
    psi = State.problem_ket([1.0, 0.0], system2)

    out = X.apply(psi)
    assert out.is_problem() and out.is_ket()
    assert np.allclose(out.amplitudes, [0.0, 1.0])


def test_apply_in_other_basis(system2):
    X = Operator.problem([[0, 1], [1, 0]], system2)
    psi = State.problem_ket([1.0, 2.0j], system2)

    out = X.apply(psi.to_solution())
    assert out.is_solution()
    assert np.allclose(out.to_problem().amplitudes, X.matrix @ psi.amplitudes, atol=1e-12)


def test_apply_returns_normalised_state(system2):
    op = Operator.problem(2.0 * np.eye(2), system2)
    psi = State.problem_ket([1.0, 2.0j], system2)

    assert np.isclose(op.apply_vector(psi).norm(), 2.0)

    out = op.apply(psi)
    assert out.is_problem() and out.system is system2
    assert np.allclose(out.amplitudes, psi.amplitudes, atol=1e-15)
    assert np.isclose(out.get_probabilities().sum(), 1.0)

    back = out.to_solution().to_problem()
    assert np.allclose(back.amplitudes, out.amplitudes, atol=1e-12)


def test_apply_round_trips_through_solution_basis(system2):
    X = Operator.problem([[0, 1], [1, 0]], system2)
    out = X.apply(State.problem_ket([1.0, 2.0j], system2))

    back = out.to_solution().to_problem()
    assert np.allclose(back.amplitudes, out.amplitudes, atol=1e-12)


def test_apply_annihilating_operator_rejected(system2):
    zero = Operator.problem(np.zeros((2, 2)), system2)
    psi = State.problem_ket([1.0, 2.0j], system2)

    assert np.allclose(zero.apply_vector(psi).vector, 0.0)
    with pytest.raises(InvalidVector):
        zero.apply(psi)
    with pytest.raises(InvalidVector):
        zero.apply(psi.to_solution())


def test_apply_rejects_bra_and_wrong_size():
    op = Operator.problem(np.eye(2))

    with pytest.raises(ValueError):
        op.apply(State.problem_bra([1.0, 0.0]))

    with pytest.raises(DimensionMismatch):
        op.apply(State.problem_ket([1.0, 0.0, 0.0]))


def test_operator_equality_ignores_system(system2):
    assert Operator.problem(np.eye(2), system2) == Operator.problem(np.eye(2))
    assert Operator.problem(np.eye(2)) != Operator.solution(np.eye(2))
    assert Operator.problem(np.eye(2)) != Operator.problem(np.eye(3))


def test_non_square_operator_rejected():
    with pytest.raises(ValueError):
        Operator.problem(np.zeros((2, 3)))
