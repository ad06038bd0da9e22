"""Instructions of the regcalc language. The grammar is small enough to be read one token at a time with no lookahead,
since the first token of an instruction always determines its type:

```
<quit_stmt>       ::= "quit"
<print_stmt>      ::= "print" <register>
<arithmetic_stmt> ::= <register> <operand> <value>    ; <operand> is one of "add", "subtract", "multiply"
<value>           ::= <number> | <register>           ; registers may be used before they are defined
```

See lexical.py for <register> and <number>.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from regcalc.lang.error import ErrorHandler
from regcalc.lang.lexical import Token, is_number, is_print_operand, is_quit_operand, is_register


class Operand(Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    PRINT = "print"
    QUIT = "quit"

    @property
    def is_arithmetic(self):
        return self in (Operand.ADD, Operand.SUBTRACT, Operand.MULTIPLY)


ARITHMETIC_OPERANDS = {operand.value: operand for operand in Operand if operand.is_arithmetic}


class Instruction(ABC):
    """Superclass representing any instruction in regcalc. Subclasses are immutable and compare equal if they have the
    same fields, regardless of where in the source they were read from.
    """

    @staticmethod
    @abstractmethod
    def check_grammar(text):
        """This method should return whether or not text (a lowercased token) starts this type of instruction."""

    @classmethod
    @abstractmethod
    def read(cls, token, scanner, error_handler):
        """Given the leading token, this method should read the rest of the instruction from scanner and return it. If
        the instruction is malformed, it should report every syntax error to error_handler and return None.
        """

    @classmethod
    def infer(cls, token, scanner, error_handler):
        """Infers the type of instruction that token starts, reads it and returns it. Returns None (after reporting a
        syntax error) if the instruction is malformed or token can't start any instruction.
        """
        for subclass in cls.__subclasses__():
            if subclass.check_grammar(token.text):
                return subclass.read(token, scanner, error_handler)

        error_handler.report(ErrorHandler.SYNTAX, "'{}' is an invalid start of expression", token.text, token=token)
        return None


@dataclass(frozen=True)
class Quit(Instruction):
    """quit: stops execution. Anything after it is never executed."""
    token: Token = field(default=None, compare=False, repr=False)

    operand = Operand.QUIT

    @staticmethod
    def check_grammar(text):
        return is_quit_operand(text)

    @classmethod
    def read(cls, token, scanner, error_handler):
        return cls(token=token)


@dataclass(frozen=True)
class Print(Instruction):
    """print <register>: evaluates register and prints its value."""
    register: str = field()  # ABC.register must not become the default
    token: Token = field(default=None, compare=False, repr=False)

    operand = Operand.PRINT

    @staticmethod
    def check_grammar(text):
        return is_print_operand(text)

    @classmethod
    def read(cls, token, scanner, error_handler):
        register = scanner.read()
        if register is not None and is_register(register.text):
            return cls(register.text, token=register)

        # the invalid token (if any) has been consumed and is discarded
        error_handler.report(ErrorHandler.SYNTAX, "'{}' must be followed by a register", "print",
                             token=register if register is not None else token)
        return None


@dataclass(frozen=True)
class Arithmetic(Instruction):
    """<register> <operand> <value>: records an add, subtract or multiply on register. Evaluation is deferred."""
    operand: Operand
    register: str = field()  # ABC.register must not become the default
    value: str
    token: Token = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if not isinstance(self.operand, Operand) or not self.operand.is_arithmetic:
            raise ValueError(f"'{self.operand}' is not an arithmetic operand")

    @staticmethod
    def check_grammar(text):
        return is_register(text)

    @classmethod
    def read(cls, token, scanner, error_handler):
        # always read both tokens so that the whole malformed instruction is consumed
        operand_token = scanner.read()
        value_token = scanner.read()

        operand = ARITHMETIC_OPERANDS.get(operand_token.text) if operand_token is not None else None
        valid_value = value_token is not None and (is_number(value_token.text) or is_register(value_token.text))

        if operand is not None and valid_value:
            return cls(operand, token.text, value_token.text, token=token)

        if operand is None:
            error_handler.report(ErrorHandler.SYNTAX, "missing or invalid operand after register '{}'", token.text,
                                 token=operand_token if operand_token is not None else token)
        if not valid_value:
            error_handler.report(ErrorHandler.SYNTAX, "missing or invalid value after operand",
                                 token=value_token or operand_token or token)
        return None
