import unittest

from addcalc.lang.error import EmptyExpression, IntegerOverflow, MalformedExpression
from addcalc.lang.numerical import INT_MAX, INT_MIN
from addcalc.pure.lexical import tokenize
from addcalc.pure.postfix import evaluate, to_postfix
from addcalc.pure.tokens import Kind, Token


def postfix(expr):
    return to_postfix(tokenize(expr), expr)


class ToPostfixTestCase(unittest.TestCase):

    def test_to_postfix(self):
        should_raise = {"": EmptyExpression, "x + 1": MalformedExpression, "1 + x": MalformedExpression}
        for case, error in should_raise.items():
            self.assertRaises(error, postfix, case)

        should_pass = {
            "4 + 6 - 8": "4 6 + 8 -",
            "- 5 + 3": "5 - 3 +",
            "4 + + 2": "4 + 2 +",
            "1 - 2 - 3 + 4": "1 2 - 3 - 4 +",
            "7": "7",
            "-7": "7 -",
        }
        for case, expected in should_pass.items():
            self.assertEqual(expected, " ".join(map(str, postfix(case))), case)

    def test_stray_equals(self):
        self.assertRaises(MalformedExpression, to_postfix, [Token(Kind.NUMBER, "1"), Token(Kind.EQUALS, "=")])

    def test_input_not_modified(self):
        infix = tokenize("1 + 2 - 3")
        copy = list(infix)
        to_postfix(infix)
        self.assertEqual(copy, infix)


class EvaluateTestCase(unittest.TestCase):

    def test_evaluate(self):
        should_pass = {
            "4 + 6 - 8": 2,
            "2 - 3 - 4": -5,
            "- 5 + 3": -2,
            "7": 7,
            "-7": -7,
            "+7": 7,
            "3 --- 2": 1,
            "3 ---- 2": 5,
            "3 +++ 2": 5,
            "4 + + 2": 6,
            "10 - 20": -10,
            "2147483647": INT_MAX,
            "-2147483647 - 1": INT_MIN,
            "2147483647 - 2147483647": 0,
        }
        for case, expected in should_pass.items():
            self.assertEqual(expected, evaluate(postfix(case), case), case)

    def test_overflow(self):
        should_raise = ["2147483647 + 1", "2147483648", "- 2147483647 - 2", "0 - 2147483648", "99999999999 - 1",
                        "1" * 5000 + " - 1", "0 + " + "9" * 5000]
        for case in should_raise:
            self.assertRaises(IntegerOverflow, evaluate, postfix(case), case)

    def test_malformed(self):
        plus = Token(Kind.PLUS, "+")
        should_raise = [
            [],
            [plus],
            [Token(Kind.NUMBER, "4"), Token(Kind.NUMBER, "5")],
            [Token(Kind.NUMBER, "4"), Token(Kind.NUMBER, "5"), Token(Kind.NUMBER, "6"), plus],
            [Token(Kind.VARIABLE, "x")],
            [Token(Kind.EQUALS, "=")],
        ]
        for case in should_raise:
            self.assertRaises(MalformedExpression, evaluate, case)


if __name__ == '__main__':
    unittest.main()
