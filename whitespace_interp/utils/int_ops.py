"""Integer arithmetic with C-style division semantics."""


def trunc_div(a: int, b: int) -> int:
    """Divide, truncating toward zero (7 / -2 == -3)."""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def trunc_mod(a: int, b: int) -> int:
    """Remainder matching trunc_div; the result takes the dividend's sign (-7 % 2 == -1)."""
    return a - b * trunc_div(a, b)
