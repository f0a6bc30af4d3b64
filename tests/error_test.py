import io
import unittest
from unittest.mock import patch

from addcalc.lang.error import (ErrorHandler, EvalError, GenericException, IntegerOverflow, MissingOperator,
                                UndefinedVariable)
from addcalc.pure.tokens import Kind, Token


class GenericExceptionTestCase(unittest.TestCase):

    def test_messages(self):
        error = UndefinedVariable("y", line="y + 1", start=0, end=1)
        self.assertEqual("undefined variable 'y'", str(error))
        self.assertIn("y", error.msg)
        self.assertEqual("y", error.name)

        error = GenericException("'{}' could not be opened", "a.txt")
        self.assertEqual("'a.txt' could not be opened", str(error))
        self.assertEqual(("a.txt",), error.exprs)

    def test_span(self):
        error = IntegerOverflow.at(Token(Kind.NUMBER, "2147483648", 4), "2147483648", line="1 + 2147483648")
        self.assertEqual((4, 14), (error.start, error.end))

        error = MissingOperator("4 5", line="4 5")
        self.assertEqual((0, 3), (error.start, error.end))

    def test_hierarchy(self):
        for error in (UndefinedVariable("x"), IntegerOverflow("1"), MissingOperator("4 5")):
            self.assertIsInstance(error, EvalError)
            self.assertIsInstance(error, GenericException)


class ErrorHandlerTestCase(unittest.TestCase):

    def test_non_fatal(self):
        with patch("sys.stdout", new_callable=io.StringIO) as stdout:
            with ErrorHandler(fatal=False):
                raise UndefinedVariable("y", line="y + 1", start=0, end=1)
        self.assertIn("undefined variable", stdout.getvalue())

    def test_fatal(self):
        with patch("sys.stdout", new_callable=io.StringIO):
            with self.assertRaises(SystemExit):
                with ErrorHandler(fatal=True):
                    raise MissingOperator("4 5", line="4 5", start=2, end=3)

    def test_internal_error_propagates(self):
        with patch("sys.stdout", new_callable=io.StringIO) as stdout:
            with self.assertRaises(ZeroDivisionError):
                with ErrorHandler(fatal=False):
                    raise ZeroDivisionError("{oops}")
        self.assertIn("[internal]", stdout.getvalue())
        self.assertIn("ZeroDivisionError", stdout.getvalue())

    def test_keyboard_interrupt(self):
        with patch("sys.stdout", new_callable=io.StringIO) as stdout:
            with ErrorHandler(fatal=False):
                raise KeyboardInterrupt
        self.assertIn("keyboard interrupt", stdout.getvalue())

    def test_diagnosis(self):
        with patch("sys.stdout", new_callable=io.StringIO) as stdout:
            with ErrorHandler(fatal=False, diagnose=True):
                raise MissingOperator("4 5", line="4 5", start=2, end=3)
        lines = stdout.getvalue().splitlines()
        self.assertEqual(3, len(lines))
        self.assertIn("5", lines[1])
        self.assertIn("^", lines[2])

    def test_traceback_is_reset(self):
        handler = ErrorHandler(fatal=False)
        handler.register_file("lines.txt")
        handler.register_line("lines.txt", "4 5", 7)
        with patch("sys.stdout", new_callable=io.StringIO) as stdout:
            with handler:
                raise MissingOperator("4 5", line="4 5", start=2, end=3)
        self.assertIn("File 'lines.txt', line 7", stdout.getvalue())
        self.assertEqual((None, None), handler.traceback["lines.txt"])


if __name__ == '__main__':
    unittest.main()
