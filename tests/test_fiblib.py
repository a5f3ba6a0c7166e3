import numpy as np
import pytest

import fiblib


ALGORITHMS = [
    fiblib.get_single_recursive,
    fiblib.get_single_iterative,
    fiblib.get_single_lookup,
]


def test_lookup_table_shape():
    assert len(fiblib.LOOKUP_TABLE) == fiblib.TABLE_SIZE == 94
    assert fiblib.LOOKUP_TABLE.dtype == np.uint64
    assert int(fiblib.LOOKUP_TABLE[93]) == 12200160415121876738
    assert list(fiblib.LOOKUP_TABLE[:11]) == [0, 1, 1, 2, 3, 5, 8, 13, 21, 34, 55]


def test_lookup_table_is_read_only():
    with pytest.raises(ValueError):
        fiblib.LOOKUP_TABLE[0] = 7


@pytest.mark.parametrize("fib", ALGORITHMS)
def test_small_values(fib):
    assert fib(0) == 0
    assert fib(1) == 1
    assert fib(2) == 1
    assert fib(7) == 13
    assert fib(10) == 55


@pytest.mark.parametrize("fib", ALGORITHMS)
def test_agrees_with_table_everywhere(fib):
    for n in range(len(fiblib.LOOKUP_TABLE)):
        assert fib(n) == int(fiblib.LOOKUP_TABLE[n])


@pytest.mark.parametrize("fib", ALGORITHMS)
@pytest.mark.parametrize("n", [-1, 94, 255])
def test_out_of_range(fib, n):
    with pytest.raises(ValueError):
        fib(n)


def test_check_index_rejects_non_integers():
    with pytest.raises(ValueError):
        fiblib.check_index(1.5)
    with pytest.raises(ValueError):
        fiblib.check_index(True)


def test_check_index_accepts_numpy_integers():
    fiblib.check_index(np.uint8(93))
    assert fiblib.get_single_iterative(np.uint8(10)) == 55
