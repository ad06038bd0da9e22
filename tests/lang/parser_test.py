from collections import deque
import io
import os
import unittest

from regcalc.lang.error import ErrorHandler
from regcalc.lang.grammar import Arithmetic, Operand, Print, Quit
from regcalc.lang.parser import Parser

os.environ["ANSI_COLORS_DISABLED"] = "1"


def parse(text):
    """Returns (instructions, output) from parsing text with a fresh parser."""
    out = io.StringIO()
    error_handler = ErrorHandler(fatal=False, out=out)
    error_handler.register_file("test.rc")

    instructions = deque()
    Parser(error_handler).parse(instructions, io.StringIO(text))
    return list(instructions), out.getvalue()


class InstructionTestCase(unittest.TestCase):

    def test_arithmetic_operand(self):
        should_raise = [Operand.PRINT, Operand.QUIT, "add"]
        for case in should_raise:
            self.assertRaises(ValueError, Arithmetic, case, "a", "1")

        for operand in (Operand.ADD, Operand.SUBTRACT, Operand.MULTIPLY):
            self.assertEqual(operand, Arithmetic(operand, "a", "1").operand)

    def test_register_required(self):
        self.assertRaises(TypeError, Print)
        self.assertRaises(TypeError, Arithmetic, Operand.ADD)
        self.assertRaises(TypeError, Arithmetic, Operand.ADD, "a")

        self.assertEqual("a", Print("a").register)
        self.assertEqual("a", Arithmetic(Operand.ADD, "a", "1").register)

    def test_operand(self):
        self.assertIs(Operand.QUIT, Quit().operand)
        self.assertIs(Operand.PRINT, Print("a").operand)

    def test_equality_ignores_token(self):
        instructions, __ = parse("print a")
        self.assertEqual([Print("a")], instructions)
        self.assertIsNotNone(instructions[0].token)


class ParserTestCase(unittest.TestCase):

    def test_parse(self):
        cases = {
            "quit": [Quit()],
            "print a": [Print("a")],
            "a add 5": [Arithmetic(Operand.ADD, "a", "5")],
            "a subtract b": [Arithmetic(Operand.SUBTRACT, "a", "b")],
            "x1 multiply 007": [Arithmetic(Operand.MULTIPLY, "x1", "007")],
            "a add 5 print a": [Arithmetic(Operand.ADD, "a", "5"), Print("a")],
            "a add 5 quit print a": [Arithmetic(Operand.ADD, "a", "5"), Quit(), Print("a")],
            "a\nadd\n5\n\nprint\na": [Arithmetic(Operand.ADD, "a", "5"), Print("a")],
            "A ADD B Print b QUIT": [Arithmetic(Operand.ADD, "a", "b"), Print("b"), Quit()],
            "": [],
            "  \n ": [],
        }
        for case, expected in cases.items():
            instructions, output = parse(case)
            self.assertEqual(expected, instructions, case)
            self.assertEqual("", output, case)

    def test_invalid_start(self):
        instructions, output = parse("5 add 3 print a")

        self.assertEqual([Print("a")], instructions)
        self.assertIn("test.rc:1:1: syntax error: '5' is an invalid start of expression", output)
        self.assertIn("test.rc:1:3: syntax error: 'add' is an invalid start of expression", output)
        self.assertIn("test.rc:1:7: syntax error: '3' is an invalid start of expression", output)

    def test_invalid_start_symbol(self):
        instructions, output = parse("a-b add 1")

        self.assertEqual([], instructions)
        self.assertIn("'a-b' is an invalid start of expression", output)
        self.assertEqual(3, output.count("invalid start of expression"))

    def test_print(self):
        should_fail = ["print", "print 5", "print add", "print quit", "print a-b"]
        for case in should_fail:
            instructions, output = parse(case)
            self.assertEqual([], instructions, case)
            self.assertEqual(1, output.count("'print' must be followed by a register"), case)

    def test_print_discards_token(self):
        # the number is consumed by print, so it is not reported as an invalid start
        instructions, output = parse("print 5 print b")
        self.assertEqual([Print("b")], instructions)
        self.assertNotIn("invalid start", output)

    def test_missing_operand(self):
        should_fail = ["a", "a 5 5", "a print 5", "a b 1", "a quit 1"]
        for case in should_fail:
            instructions, output = parse(case)
            self.assertEqual([], instructions, case)
            self.assertIn("missing or invalid operand after register 'a'", output, case)

    def test_missing_value(self):
        should_fail = ["a add", "a add add", "a multiply -1", "a subtract print"]
        for case in should_fail:
            instructions, output = parse(case)
            self.assertEqual([], instructions, case)
            self.assertIn("missing or invalid value after operand", output, case)
            self.assertNotIn("missing or invalid operand", output, case)

    def test_both_missing(self):
        for case in ["a", "a b c-d", "a print quit"]:
            instructions, output = parse(case)
            self.assertEqual([], instructions, case)
            self.assertIn("missing or invalid operand after register 'a'", output, case)
            self.assertIn("missing or invalid value after operand", output, case)

    def test_reads_whole_instruction(self):
        # both tokens after the register are always consumed, even if the operand is invalid
        instructions, output = parse("a foo 1 b add 2")
        self.assertEqual([Arithmetic(Operand.ADD, "b", "2")], instructions)
        self.assertEqual(1, output.count("syntax error"))

    def test_diagnosis(self):
        __, output = parse("a add 1\nb add -2\n")

        expected = ("test.rc:2:7: syntax error: missing or invalid value after operand\n"
                    "  b add -2\n"
                    "        ^~\n")
        self.assertEqual(expected, output)

    def test_returns_count(self):
        error_handler = ErrorHandler(fatal=False, out=io.StringIO())
        instructions = deque([Quit()])

        added = Parser(error_handler).parse(instructions, io.StringIO("a add 1 5 print a"))
        self.assertEqual(2, added)
        self.assertEqual([Quit(), Arithmetic(Operand.ADD, "a", "1"), Print("a")], list(instructions))


if __name__ == '__main__':
    unittest.main()
