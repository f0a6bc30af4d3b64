"""Tokens of the additive expression language.

A token is a classified fragment of an input line. The kind is a plain tag, not a class hierarchy: every token is
the same `Token` value with a different `Kind`.
"""

from dataclasses import dataclass, field
from enum import Enum


class Kind(Enum):
    NUMBER = "number"
    VARIABLE = "variable"
    PLUS = "+"
    MINUS = "-"
    EQUALS = "="
    UNSUPPORTED = "unsupported"  # only ever a scanning result, never a materialized token

    @classmethod
    def classify(cls, char):
        """Returns the Kind of a single character."""
        if char.isascii() and char.isdigit():
            return cls.NUMBER
        elif char.isascii() and char.isalpha():
            return cls.VARIABLE
        elif char in ("+", "-", "="):
            return cls(char)
        return cls.UNSUPPORTED

    @property
    def group(self):
        """Characters of the same group are scanned into one run. '+' and '-' share a group so that runs like '+-+'
        can be normalized as a whole; '=' has its own group.
        """
        if self is Kind.MINUS:
            return Kind.PLUS
        return self

    @property
    def is_operator(self):
        """Whether or not an operand may follow a token of this kind."""
        return self in (Kind.PLUS, Kind.MINUS, Kind.EQUALS)

    @property
    def is_additive(self):
        return self in (Kind.PLUS, Kind.MINUS)


@dataclass(frozen=True)
class Token:
    kind: Kind
    text: str
    start: int = field(default=0, compare=False)  # column in the original line, used for error messages

    @property
    def end(self):
        return self.start + len(self.text)

    def __str__(self):
        return self.text
