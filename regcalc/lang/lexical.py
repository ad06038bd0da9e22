"""Lexical analysis for regcalc: token classification and scanning of text streams into tokens.

Tokens can be loosely defined as follows:

```
<keyword>  ::= "quit" | "print" | "add" | "subtract" | "multiply"
<number>   ::= <digit>+                     ; no sign, leading zeros allowed
<register> ::= (<letter> | <digit>)+        ; at least one <letter>, must not be a <keyword>
```

Tokens are separated by whitespace and are case-insensitive: the scanner lowercases (ASCII only) every token before it
is classified. Classification predicates assume they are given an already lowercased token.
"""

from dataclasses import dataclass
import string


QUIT = "quit"
PRINT = "print"
ADD = "add"
SUBTRACT = "subtract"
MULTIPLY = "multiply"

KEYWORDS = (QUIT, PRINT, ADD, SUBTRACT, MULTIPLY)

DIGITS = frozenset(string.digits)
ALPHANUMERICS = frozenset(string.ascii_lowercase + string.ascii_uppercase + string.digits)
ASCII_LOWERCASE = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def is_quit_operand(token):
    return token == QUIT


def is_print_operand(token):
    return token == PRINT


def is_add_operand(token):
    return token == ADD


def is_subtract_operand(token):
    return token == SUBTRACT


def is_multiply_operand(token):
    return token == MULTIPLY


def is_keyword(token):
    """Whether or not token is any of the five keyword operands."""
    return (is_quit_operand(token)
            or is_print_operand(token)
            or is_add_operand(token)
            or is_subtract_operand(token)
            or is_multiply_operand(token))


def is_number(token):
    """Whether or not token is a string of decimal digits. The empty string is not a number."""
    return bool(token) and all(char in DIGITS for char in token)


def is_register(token):
    """Whether or not token is a register name: alphanumeric, with at least one letter, and not a keyword."""
    return (bool(token)
            and all(char in ALPHANUMERICS for char in token)
            and not is_number(token)
            and not is_keyword(token))


@dataclass(frozen=True)
class Token:
    """A lowercased token and where it was read from. col is 1-based, source is the line the token appears in."""
    text: str
    line_num: int = 1
    col: int = 1
    source: str = ""


class Scanner:
    """Reads whitespace-delimited tokens from a text stream, one at a time and without lookahead. The stream can be any
    iterable of lines (an open file, io.StringIO, a list of strings).
    """

    def __init__(self, stream, first_line=1):
        self._tokens = Scanner._scan(stream, first_line)

    @staticmethod
    def _scan(stream, first_line):
        for line_num, line in enumerate(stream, first_line):
            line = line.rstrip("\r\n")

            col = 0
            for word in line.split():
                col = line.index(word, col)
                yield Token(word.translate(ASCII_LOWERCASE), line_num, col + 1, line)
                col += len(word)

    def read(self):
        """Returns the next Token, or None if the stream is exhausted."""
        return next(self._tokens, None)

    def __iter__(self):
        return self

    def __next__(self):
        token = self.read()
        if token is None:
            raise StopIteration
        return token
