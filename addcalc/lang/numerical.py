"""Numbers in addcalc are signed 32-bit integers. This module checks that range and substitutes variables with the
numbers they hold.
"""

from addcalc.lang.error import IntegerOverflow, UndefinedVariable
from addcalc.pure.tokens import Kind, Token


INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1
MAX_DIGITS = len(str(INT_MAX))


def int32(value, token=None, line=""):
    """Returns value (an int, or a str of decimal digits) as an int. Raises IntegerOverflow if it does not fit a signed
    32-bit integer; token, if given, is blamed in the error.
    """
    if isinstance(value, str):
        digits = value.lstrip("0") or "0"
        num = int(digits) if len(digits) <= MAX_DIGITS else None  # longer literals may not even convert
    else:
        num = value

    if num is None or not INT_MIN <= num <= INT_MAX:
        if token is None:
            raise IntegerOverflow(str(value), line=line)
        raise IntegerOverflow.at(token, str(value), line=line)
    return num


def substitute(tokens, variables, line=""):
    """Returns a copy of tokens with every variable replaced by a number token holding its value in variables. Does not
    modify variables.
    """
    substituted = []
    for token in tokens:
        if token.kind is Kind.VARIABLE:
            if token.text not in variables:
                raise UndefinedVariable(token.text, line=line, start=token.start, end=token.end)
            token = Token(Kind.NUMBER, str(variables[token.text]), token.start)
        substituted.append(token)
    return substituted
