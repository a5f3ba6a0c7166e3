# fiblib.py
# Fibonacci algorithms and the reference lookup table they are checked against

import numpy as np

# --- Configuration ---
INDEX_LIMIT = 256  # Indices are drawn from the 8-bit range
TABLE_SIZE = 94    # F(93) is the largest Fibonacci number that fits in 64 unsigned bits


def _build_lookup_table(size):
    """Builds a read-only uint64 table of the first `size` Fibonacci numbers."""
    values = [0, 1]
    while len(values) < size:
        values.append(values[-1] + values[-2])
    table = np.array(values[:size], dtype=np.uint64)
    table.setflags(write=False)
    return table


LOOKUP_TABLE = _build_lookup_table(TABLE_SIZE)


def check_index(n):
    """Raises ValueError unless n is a valid index into LOOKUP_TABLE."""
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise ValueError(f"index must be an integer, got {type(n).__name__}")
    if n < 0 or n >= len(LOOKUP_TABLE):
        raise ValueError(f"index {n} is outside 0..{len(LOOKUP_TABLE) - 1}")


def _doubling(n):
    # Returns (F(n), F(n + 1))
    if n == 0:
        return 0, 1
    a, b = _doubling(n // 2)
    c = a * (2 * b - a)
    d = a * a + b * b
    if n % 2 == 0:
        return c, d
    return d, c + d


def get_single_recursive(n):
    """Compute nth Fibonacci number recursively (fast doubling)."""
    check_index(n)
    return _doubling(int(n))[0]


def get_single_iterative(n):
    """Compute nth Fibonacci number iteratively."""
    check_index(n)
    a, b = 0, 1
    for _ in range(int(n)):
        a, b = b, a + b
    return a


def get_single_lookup(n):
    """Read nth Fibonacci number from the lookup table."""
    check_index(n)
    return int(LOOKUP_TABLE[n])
