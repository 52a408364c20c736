import pytest
from whitespace_interp.utils.int_ops import trunc_div, trunc_mod


@pytest.mark.parametrize("a, b, quotient, remainder", [
    (7, 2, 3, 1),
    (-7, 2, -3, -1),
    (7, -2, -3, 1),
    (-7, -2, 3, -1),
    (6, 3, 2, 0),
    (-6, 3, -2, 0),
    (0, 5, 0, 0),
    (1, 2, 0, 1),
    (-1, 2, 0, -1),
])
def test_truncating_division(a, b, quotient, remainder):
    """Quotient rounds toward zero; remainder follows the dividend's sign."""
    assert trunc_div(a, b) == quotient
    assert trunc_mod(a, b) == remainder
    assert quotient * b + remainder == a


def test_large_values():
    big = 10 ** 40 + 7
    assert trunc_div(-big, 10) == -(10 ** 39)
    assert trunc_mod(-big, 10) == -7
