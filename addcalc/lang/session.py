"""Session control for addcalc. Runs single lines through the evaluation pipeline:

    1. tokenize: raw text to an infix token list, with operator runs normalized
    2. validate: checks the shape of the token list and finds the assignment target, if any
    3. substitute: variables are replaced by the numbers they hold
    4. to_postfix: infix to postfix order
    5. evaluate: stack evaluation of the postfix list

The variable table is a plain dict of name: int. It is owned by the caller (normally a Session) and passed in
explicitly; the engine itself holds no state between lines.
"""

import logging
from typing import List, NamedTuple, Optional

from addcalc.lang.error import ErrorHandler
from addcalc.lang.numerical import int32, substitute
from addcalc.pure.lexical import tokenize, validate
from addcalc.pure.postfix import evaluate, to_postfix
from addcalc.pure.tokens import Kind, Token

logger = logging.getLogger(__name__)


class EvaluationResult(NamedTuple):
    value: int
    assigned_variable: Optional[str] = None

    def __str__(self):
        if self.assigned_variable is None:
            return str(self.value)
        return f"{self.assigned_variable} = {self.value}"


class ParsedExpression(NamedTuple):
    line: str
    infix: List[Token]
    target: Optional[Token] = None  # assignment target

    @property
    def is_assignment(self):
        return self.target is not None

    @property
    def rhs(self):
        """Tokens to evaluate: everything after '=' for an assignment, else the whole line."""
        if self.is_assignment:
            return self.infix[2:]  # validate guarantees the target is the first token
        return self.infix


class ExpressionEngine:
    """Parses and evaluates lines. Both steps are static: a fresh token list is built for every line."""

    @staticmethod
    def parse(line):
        """Tokenizes and validates line. Returns a ParsedExpression."""
        infix = tokenize(line)
        target = validate(infix, line)
        logger.debug("infix: %s", " ".join(map(str, infix)))
        return ParsedExpression(line, infix, target)

    @staticmethod
    def evaluate(parsed, variables):
        """Evaluates a ParsedExpression against variables. If parsed is an assignment, the value is stored in variables
        under the target's name. Returns an EvaluationResult.
        """
        rhs = parsed.rhs

        if parsed.is_assignment and len(rhs) == 1 and rhs[0].kind is Kind.NUMBER:
            value = int32(rhs[0].text, rhs[0], parsed.line)  # plain literal assignment
        else:
            substituted = substitute(rhs, variables, parsed.line)
            logger.debug("substituted: %s", " ".join(map(str, substituted)))

            postfix = to_postfix(substituted, parsed.line)
            logger.debug("postfix: %s", " ".join(map(str, postfix)))

            value = evaluate(postfix, parsed.line)

        if parsed.is_assignment:
            variables[parsed.target.text] = value
            logger.debug("assigned %s = %d", parsed.target.text, value)
            return EvaluationResult(value, parsed.target.text)
        return EvaluationResult(value)


def parse_and_evaluate(line, variables):
    """Evaluates a single line against variables, storing the value if line is an assignment."""
    return ExpressionEngine.evaluate(ExpressionEngine.parse(line), variables)


def format_variables(variables):
    """Returns variables in insertion order, as displayed by the /vars command."""
    if not variables:
        return "Variables are not set"
    return "Variables: " + " ".join(f"{name} = {value}" for name, value in variables.items())


class Session:
    """Governs an addcalc session: owns the session's variables and reports errors through error_handler."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler=None, path=SH_FILE):
        if error_handler is None:
            error_handler = ErrorHandler(fatal=False)

        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path    # used for error messages
        self.variables = {}

    def run(self, line, line_num=None):
        """Evaluates line in this session. Returns its EvaluationResult. Errors are raised, not reported: wrap calls in
        self.error_handler to report them. line_num is only needed for the traceback of lines read from a file.
        """
        if line_num is not None:
            self.error_handler.register_line(self.path, line.strip(), line_num)  # in case error is raised
        result = parse_and_evaluate(line, self.variables)
        self.error_handler.remove_line(self.path)  # error was not raised
        return result

    def __str__(self):
        return format_variables(self.variables)
