"""Register values are signed 64-bit integers. Number literals must fit in that range, and arithmetic wraps around on
overflow (two's complement), as a native 64-bit register would.
"""

import operator

from regcalc.lang.grammar import Operand
from regcalc.lang.lexical import is_number


BITS = 64
MIN = -(1 << (BITS - 1))
MAX = (1 << (BITS - 1)) - 1

OPERATIONS = {
    Operand.ADD: operator.add,
    Operand.SUBTRACT: operator.sub,
    Operand.MULTIPLY: operator.mul,
}


def number(token):
    """Returns int value of number token. If token isn't a number or doesn't fit in 64 bits, returns None."""
    if not is_number(token):
        return None

    digits = token.lstrip("0") or "0"
    if len(digits) > len(str(MAX)):  # also keeps int() clear of its digit limit
        return None

    num = int(digits)
    return num if num <= MAX else None


def wrap(num):
    """Wraps num into the signed 64-bit range."""
    return (num - MIN) % (1 << BITS) + MIN


def apply(operand, total, num):
    """Returns total <operand> num, wrapped to 64 bits."""
    try:
        return wrap(OPERATIONS[operand](total, num))
    except KeyError:
        raise ValueError(f"'{operand}' is not an arithmetic operand")
