"""Execution of parsed regcalc instructions.

Registers do not hold values. Instead, the symbol table holds, for every register that has been assigned to, the
list of operations performed on it in program order. A register is only evaluated when it is printed: its value is
0, with each operation applied in order, where operation values that are registers are themselves evaluated
recursively. This is what allows a register to be used before it is defined:

```
a add b
b add 1
print a    ; 1
```
"""

from dataclasses import dataclass

from regcalc.lang import numerical
from regcalc.lang.error import ErrorHandler
from regcalc.lang.grammar import Operand
from regcalc.lang.lexical import is_number


@dataclass(frozen=True)
class Operation:
    """One pending arithmetic step on a register. value is a number or a register name."""
    operand: Operand
    value: str


class Evaluator:
    """Executes instructions against a symbol table that persists across calls to execute."""

    def __init__(self, error_handler, out=None):
        self.error_handler = error_handler
        self.out = out if out is not None else error_handler.out
        self.registers = {}  # dict of register name: list of Operations, in program order

    def execute(self, instructions):
        """Pops and executes instructions from the front of the instructions deque until it is empty. Returns False as
        soon as a quit instruction is executed (leaving the rest of the instructions alone), True otherwise.
        """
        while instructions:
            instruction = instructions.popleft()

            if instruction.operand is Operand.QUIT:
                return False
            elif instruction.operand is Operand.PRINT:
                self.print_register(instruction)
            else:
                self.add_operation(instruction)

        return True

    def add_operation(self, instruction):
        """Records instruction's operation on its register, creating the register if needed."""
        operation = Operation(instruction.operand, instruction.value)
        self.registers.setdefault(instruction.register, []).append(operation)

    def print_register(self, instruction):
        """Evaluates the register of a print instruction and prints it, if evaluation was successful."""
        try:
            success, value = self.evaluate(instruction.register, instruction.token)
        except RecursionError:
            self.error_handler.report(ErrorHandler.EVALUATION, "register '{}' is nested too deeply to evaluate",
                                      instruction.register, token=instruction.token)
            return

        if success:
            print(value, file=self.out)

    def evaluate(self, value, token=None):
        """Evaluates value (a number or a register name). Returns a tuple of (success, int value). On failure, the
        value is None and the error has already been reported. token is used to locate errors.
        """
        return self._evaluate(value, token, [], {})

    def _evaluate(self, value, token, pending, evaluated):
        """pending is the list of registers currently being evaluated (used to detect cycles), evaluated is a dict of
        register name: value for registers that have already been evaluated.
        """
        if is_number(value):
            num = numerical.number(value)
            if num is None:
                self.error_handler.report(ErrorHandler.EVALUATION, "'{}' does not fit in a 64-bit register", value,
                                          token=token)
                return False, None
            return True, num

        if value in evaluated:
            return True, evaluated[value]

        if value in pending:
            cycle = " -> ".join(pending[pending.index(value):] + [value])
            self.error_handler.report(ErrorHandler.EVALUATION, "register '{}' is defined in terms of itself ({})",
                                      (value, cycle), token=token)
            return False, None

        if value not in self.registers:
            self.error_handler.report(ErrorHandler.LOOKUP, "no register named '{}'", value, token=token)
            return False, None

        pending.append(value)
        try:
            total = 0
            for operation in self.registers[value]:
                success, num = self._evaluate(operation.value, token, pending, evaluated)
                if not success:
                    return False, None
                total = numerical.apply(operation.operand, total, num)
        finally:
            pending.pop()

        evaluated[value] = total
        return True, total
