"""Parsing of regcalc source into instructions. Note that this module does not care where the source comes from: a
whole file and a single line typed in the shell are parsed the same way.
"""

from regcalc.lang.grammar import Instruction
from regcalc.lang.lexical import Scanner


class Parser:
    """Turns text streams into instructions. Syntax errors are reported to error_handler and the offending
    instruction is dropped; parsing always carries on with the next token.
    """

    def __init__(self, error_handler):
        self.error_handler = error_handler

    def parse(self, instructions, stream, first_line=1):
        """Reads stream until it is exhausted, appending every well-formed instruction to the instructions deque (in
        order). first_line is the line number of the first line of stream. Returns the number of instructions added.
        """
        scanner = Scanner(stream, first_line)

        added = 0
        for token in scanner:
            instruction = Instruction.infer(token, scanner, self.error_handler)
            if instruction is not None:
                instructions.append(instruction)
                added += 1

        return added
