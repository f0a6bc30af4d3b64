"""Error handling for addcalc. Only GenericExceptions should be encountered while evaluating lines: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Every way a line can fail has its own EvalError subclass. None of them is ever recovered from inside the evaluation
pipeline; they propagate to whoever called the engine (normally the shell, through ErrorHandler).
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to throw an addcalc error. str(error) is the plain message,
    error.msg is the same message with its expr snippets bolded.
    """

    def __init__(self, msg, exprs=None, line="", start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException. line is the input line that caused the error, and start/end delimit the
        offending part of it.
        """
        if exprs is None:
            exprs = ()
        if isinstance(exprs, str):
            exprs = (exprs,)

        super().__init__(msg.format(*exprs))
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.exprs = tuple(exprs)

        self.line = line
        self.start = start
        self.end = end if end != -1 else len(line)  # needed for error display

        self.diagnosis = diagnosis
        self.internal = internal


class EvalError(GenericException):
    """Base class for errors raised while evaluating a single line."""
    MSG = "can't process an expression"

    def __init__(self, *exprs, line="", start=0, end=-1):
        super().__init__(self.MSG, exprs, line=line, start=start, end=end)

    @classmethod
    def at(cls, token, *exprs, line=""):
        """Builds the error pointing at token's position in line."""
        return cls(*exprs, line=line, start=token.start, end=token.end)


class InvalidCharacter(EvalError):
    MSG = "unsupported character '{}'"


class InvalidOperator(EvalError):
    MSG = "unsupported operator '{}'"


class UnsupportedToken(EvalError):
    MSG = "can't add a word of unsupported type: '{}'"


class MultipleAssignments(EvalError):
    MSG = "expression can't contain more than one assignment"


class InvalidAssignmentTarget(EvalError):
    MSG = "left side of an assignment operator should be a variable, got '{}'"


class MissingOperator(EvalError):
    MSG = "left side of a variable or value should be an operator, got '{}'"


class UndefinedVariable(EvalError):
    MSG = "undefined variable '{}'"

    def __init__(self, name, line="", start=0, end=-1):
        super().__init__(name, line=line, start=start, end=end)
        self.name = name


class EmptyExpression(EvalError):
    MSG = "right side of an expression should not be empty"


class MalformedExpression(EvalError):
    MSG = "can't process an expression: '{}'"


class IntegerOverflow(EvalError):
    MSG = "numbers in an expression should be in range of integer type: -2^31 ... 2^31-1, got '{}'"


class ErrorHandler:
    """Context manager that reports addcalc errors and turns anything else into an internal error. Unless fatal,
    execution continues after the with block.
    """
    ERROR = "red"

    def __init__(self, fatal=True, diagnose=False):
        self.fatal = fatal
        self.diagnose = diagnose
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called before a line is run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after a line ran successfully."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnosis(error):
        """Returns error.line with the offending part highlighted, and a caret line pointing at it."""
        end = max(error.end, error.start + 1)

        diagnosis = "  " + error.line[:error.start]
        diagnosis += colored(error.line[error.start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += error.line[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Prints error, which must be a GenericException, along with self.traceback. Exits if self.fatal."""
        error_msg = ""
        for file, (line, line_num) in self.traceback.items():
            if line is not None:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"

        if error_msg:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        print(error_msg + error.msg)

        if self.diagnose and not error.internal and error.line and error.diagnosis:
            print(ErrorHandler.diagnosis(error))

        if self.fatal:
            sys.exit(1)
        for path in self.traceback:
            self.remove_line(path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt", diagnosis=False))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}: {}'", (exc_type.__name__, str(exc_val)), internal=True))
            do_exit = True

        return not do_exit
