"""Additive integer calculator with variables.

For reference:
- "pure": the token-level pipeline (tokenize, validate, to_postfix, evaluate), which knows nothing about variables
- "lang": variables, sessions, error reporting and the interactive shell

Basic program flow for a line:
    1. Lexical analysis: raw text to an infix token list, validated as a whole
    2. Substitution: variables are replaced by the numbers they hold
    3. Evaluation: infix to postfix conversion, then stack evaluation
"""

from addcalc.lang.session import EvaluationResult, ExpressionEngine, Session, format_variables, parse_and_evaluate
