"""Postfix conversion and stack evaluation of substituted additive expressions.

Since '+' and '-' share one precedence and there are no parentheses, the shunting-yard algorithm degenerates into a
single pending-operator slot: each operator is emitted as soon as the next one is read.

Evaluation seeds the stack with a dummy 0, so a leading unary operator evaluates as `0 op operand`:

```
- 5 + 3   ->   5 - 3 +   ->   [0] [0 5] [-5] [-5 3] [-2]
4 + 6     ->   4 6 +     ->   [0] [0 4] [0 4 6] [0 10]
```

The second example shows that the dummy is only consumed by a leading operator; otherwise it stays at the bottom of
the stack, under the result.
"""

import logging

from addcalc.lang.error import EmptyExpression, MalformedExpression
from addcalc.lang.numerical import int32
from addcalc.pure.tokens import Kind

logger = logging.getLogger(__name__)


def to_postfix(tokens, line=""):
    """Converts a substituted infix list of tokens to postfix order."""
    if not tokens:
        raise EmptyExpression(line=line)

    postfix = []
    pending = None
    for token in tokens:
        if token.kind is Kind.NUMBER:
            postfix.append(token)
        elif token.kind.is_additive:
            if pending is not None:
                postfix.append(pending)
            pending = token
        else:
            raise MalformedExpression.at(token, token.text, line=line)

    if pending is not None:
        postfix.append(pending)
    return postfix


def evaluate(postfix, line=""):
    """Evaluates a postfix list of tokens. Returns the result as an int."""
    stack = [0]
    seeded = True  # whether the dummy 0 is still at the bottom of the stack

    for token in postfix:
        if token.kind is Kind.NUMBER:
            stack.append(int32(token.text, token, line))

        elif token.kind.is_additive:
            if len(stack) < 2:
                raise MalformedExpression.at(token, token.text, line=line)
            if seeded and len(stack) == 2:
                seeded = False

            operand1 = stack.pop()
            operand2 = stack.pop()
            if token.kind is Kind.MINUS:
                result = operand2 - operand1
            else:
                result = operand1 + operand2
            stack.append(int32(result, token, line))

        else:
            raise MalformedExpression.at(token, token.text, line=line)

    if len(stack) != (2 if seeded else 1):
        logger.debug("stack %s left after evaluating %s", stack, " ".join(map(str, postfix)))
        raise MalformedExpression(" ".join(map(str, postfix)), line=line)
    return stack[-1]
