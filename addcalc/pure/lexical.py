"""Lexical analysis of additive expressions: raw text to a validated infix token list.

The accepted grammar can be loosely defined as follows:

```
<line>       ::= [<variable> "="] <expression>
<expression> ::= <operator>* <operand> (<operator>+ <operand>)* <operator>*
<operand>    ::= <number> | <variable>              ; <number> is decimal digits, <variable> is ASCII letters
<operator>   ::= "+" | "-"
```

Operators are read as runs: any run of '+' and '-' characters collapses into a single '+' or '-' (every '-' negates,
so '--' is '+' and '-+-' is '+'), and any run of '=' is a single '='. Whitespace separates words and is never part of
a run, so '+ +' is two operators, not one run.

Tokenizing and validating are separate passes. tokenize only fails on characters or runs it cannot read; validate then
checks the shape of the whole token list and reports the earliest offending token.
"""

import re

from addcalc.lang.error import (InvalidAssignmentTarget, InvalidCharacter, InvalidOperator, MissingOperator,
                                MultipleAssignments, UnsupportedToken)
from addcalc.pure.tokens import Kind, Token


ALLOWED_CHARS = re.compile(r"[a-zA-Z0-9+\-=]*")
WORD = re.compile(r"\S+")

EQUALS_RUN = re.compile(r"=+")
PLUS_RUN = re.compile(r"\++")
PLUS_MINUS_RUN = re.compile(r"[-+]+")
MINUS_RUN = re.compile(r"-*")


def normalize_operator(run, line="", start=0):
    """Converts an operator run to its unified form, e.g. '---' = '-', '++++' = '+', '--' = '+'. Returns the Kind of
    the unified operator. Raises InvalidOperator if run cannot be converted.
    """
    if EQUALS_RUN.fullmatch(run):
        return Kind.EQUALS
    if PLUS_RUN.fullmatch(run):
        return Kind.PLUS

    minuses = run
    if PLUS_MINUS_RUN.fullmatch(run):
        minuses = run.replace("+", "")

    if MINUS_RUN.fullmatch(minuses):
        return Kind.PLUS if len(minuses) % 2 == 0 else Kind.MINUS

    raise InvalidOperator(run, line=line, start=start, end=start + len(run))


def _make_token(run, kind, line, start):
    """Materializes a scanned run as a Token, normalizing operator runs."""
    if kind is Kind.UNSUPPORTED:
        raise InvalidCharacter(run, line=line, start=start, end=start + len(run))

    if kind.is_operator:
        kind = normalize_operator(run, line, start)
        run = kind.value
    return Token(kind, run, start)


def _scan_word(word, line, offset):
    """Splits a single word into tokens, grouping consecutive characters of the same group into one run."""
    if len(word) == 1:
        return [_make_token(word, Kind.classify(word), line, offset)]

    tokens = []
    run_start, run_kind = 0, Kind.classify(word[0])
    for idx, char in enumerate(word[1:], start=1):
        kind = Kind.classify(char)
        if kind is Kind.UNSUPPORTED:
            raise InvalidCharacter(char, line=line, start=offset + idx, end=offset + idx + 1)

        if kind.group is not run_kind.group:
            tokens.append(_make_token(word[run_start:idx], run_kind, line, offset + run_start))
            run_start, run_kind = idx, kind

    tokens.append(_make_token(word[run_start:], run_kind, line, offset + run_start))
    return tokens


def tokenize(line):
    """Converts line to an infix list of Tokens with normalized operators. Does not check the order of the tokens: see
    validate.
    """
    if not ALLOWED_CHARS.fullmatch("".join(line.split())):
        pos, char = next((idx, char) for idx, char in enumerate(line)
                         if not char.isspace() and not ALLOWED_CHARS.fullmatch(char))
        raise InvalidCharacter(char, line=line, start=pos, end=pos + 1)

    tokens = []
    for word in WORD.finditer(line):
        tokens.extend(_scan_word(word.group(), line, word.start()))
    return tokens


def validate(tokens, line=""):
    """Checks that tokens form an additive expression with at most one assignment, whose left side is a single
    variable. Returns the assignment target Token, or None if tokens is not an assignment. Raises on the first
    offending token.
    """
    target = None
    prev = None

    for idx, token in enumerate(tokens):
        if token.kind is Kind.UNSUPPORTED:
            raise UnsupportedToken.at(token, token.text, line=line)

        if token.kind is Kind.EQUALS:
            if target is not None:
                raise MultipleAssignments.at(token, line=line)
            elif prev is None or prev.kind is not Kind.VARIABLE or idx != 1:
                lval = "".join(str(tok) for tok in tokens[:idx + 1])
                raise InvalidAssignmentTarget.at(token, lval, line=line)
            target = prev

        elif token.kind in (Kind.NUMBER, Kind.VARIABLE):
            if prev is not None and not prev.kind.is_operator:
                raise MissingOperator.at(token, f"{prev.text} {token.text}", line=line)

        prev = token

    return target
