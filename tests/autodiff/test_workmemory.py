import numpy as np
import pytest

from fwdiff.autodiff import (
    Banded,
    BlockDiagonal,
    Dense,
    Dual,
    JacobianWorkMemory,
    ShapeMismatchError,
    SparsityError,
)


def test_allocation():
    wrk = JacobianWorkMemory(6, Banded(3))
    assert wrk.n == 6
    assert wrk.seed_width == 3
    assert wrk.sparsity == Banded(3)
    assert len(wrk.inputs) == len(wrk.outputs) == 6
    assert all(x.width == 3 for x in wrk.inputs + wrk.outputs)
    assert wrk.inputs[0].imag is not wrk.inputs[1].imag

    wrk = JacobianWorkMemory(4)
    assert wrk.sparsity == Dense()
    assert wrk.seed_width == 4


def test_create():
    assert JacobianWorkMemory.create(4).sparsity == Dense()
    assert JacobianWorkMemory.create(4, "banded", bandwidth=3).sparsity == Banded(3)

    wrk = JacobianWorkMemory.create(4, "block_diagonal", blocksize=2)
    assert wrk.sparsity == BlockDiagonal(2)
    assert repr(wrk) == "JacobianWorkMemory(n=4, sparsity=BlockDiagonal(blocksize=2))"

    with pytest.raises(SparsityError):
        JacobianWorkMemory.create(4, "banded")

    with pytest.raises(SparsityError):
        JacobianWorkMemory.create(4, "block_diagonal")

    with pytest.raises(SparsityError):
        JacobianWorkMemory.create(4, "sparse")


def test_invalid():
    with pytest.raises(ShapeMismatchError):
        JacobianWorkMemory(0)

    with pytest.raises(SparsityError):
        JacobianWorkMemory(4, BlockDiagonal(3))

    with pytest.raises(SparsityError):
        JacobianWorkMemory(2, Banded(3))

    with pytest.raises(SparsityError):
        JacobianWorkMemory(4, "banded")  # type: ignore


def test_seed_cyclic():
    wrk = JacobianWorkMemory(7, Banded(3))
    xx = wrk.seed(np.arange(7.0))
    assert xx is wrk.inputs
    assert [x.real for x in xx] == list(np.arange(7.0))
    assert [wrk.seed_slot(j) for j in range(7)] == [0, 1, 2, 0, 1, 2, 0]

    seeds = np.array([x.imag for x in xx])
    expected = np.zeros((7, 3))
    expected[np.arange(7), np.arange(7) % 3] = 1.0
    np.testing.assert_array_equal(seeds, expected)


def test_seed_dense():
    wrk = JacobianWorkMemory(3)
    wrk.seed([1.0, 2.0, 3.0])
    np.testing.assert_array_equal([x.imag for x in wrk.inputs], np.eye(3))


def test_seed_resets():
    wrk = JacobianWorkMemory(4, BlockDiagonal(2))
    wrk.seed([1.0, 2.0, 3.0, 4.0])
    wrk.inputs[0].imag[:] = 7.0
    wrk.outputs[0] = wrk.inputs[1]
    wrk.outputs[1].real = 5.0
    stored = Dual(9.0, [1.0, 1.0])
    wrk.outputs[2] = stored

    wrk.seed([5.0, 6.0, 7.0, 8.0])
    assert [x.real for x in wrk.inputs] == [5.0, 6.0, 7.0, 8.0]
    assert wrk.inputs[0].imag.tolist() == [1.0, 0.0]
    assert wrk.inputs[1].imag.tolist() == [0.0, 1.0]
    assert wrk.outputs[0] is not wrk.inputs[1]
    assert wrk.outputs[1].real == 0.0
    assert wrk.outputs[2] is not stored
    assert stored.real == 9.0
    assert stored.imag.tolist() == [1.0, 1.0]
    assert all(y.real == 0.0 and not y.imag.any() for y in wrk.outputs)


def test_seed_shape():
    wrk = JacobianWorkMemory(3)

    with pytest.raises(ShapeMismatchError):
        wrk.seed([1.0, 2.0])

    with pytest.raises(ShapeMismatchError):
        wrk.seed([[1.0, 2.0, 3.0]])
