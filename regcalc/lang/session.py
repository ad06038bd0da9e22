"""Session control for regcalc. Ties the parser and the evaluator together to run regcalc, either in command-line
mode (one line at a time) or file interpretation mode (the whole file at once).
"""

from collections import deque
import io

from regcalc.lang.error import GenericException
from regcalc.lang.evaluator import Evaluator
from regcalc.lang.parser import Parser


class Session:
    """Governs a regcalc session: its registers persist for as long as the session does."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, out=None):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.parser = Parser(error_handler)
        self.evaluator = Evaluator(error_handler, out)
        self.instructions = deque()  # instructions parsed but not executed yet
        self.running = True          # False once a quit instruction has been executed

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    self.parser.parse(self.instructions, file)
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @property
    def registers(self):
        return self.evaluator.registers

    def add(self, line, line_num=1):
        """Parses line into this session. Evaluation is lazy and is delayed until run is called."""
        return self.parser.parse(self.instructions, io.StringIO(line), line_num)

    def run(self):
        """Executes this session's parsed instructions. Returns whether or not the session is still running, i.e. no
        quit instruction has been executed. Once a session has quit, nothing else is ever executed.
        """
        if self.running:
            self.running = self.evaluator.execute(self.instructions)

        if not self.running:
            self.instructions.clear()

        return self.running
