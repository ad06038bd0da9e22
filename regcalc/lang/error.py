"""Error handling for regcalc. Syntax, lookup and evaluation errors are reported through ErrorHandler.report and
recovered from in place. Only GenericExceptions raised out of a session are fatal: if another type of error makes it
all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to report or throw a regcalc error."""

    def __init__(self, msg, exprs=None, token=None, diagnosis=True, internal=False):
        """Parses args for GenericException. token is the offending Token, if known."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]
        self.token = token

        self.diagnosis = diagnosis and token is not None
        self.internal = internal

        super().__init__(msg.format(*exprs))


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom regcalc errors."""
    ERROR = "red"

    SYNTAX = "syntax error"
    LOOKUP = "lookup error"
    EVALUATION = "evaluation error"

    def __init__(self, fatal=True, out=None):
        self.fatal = fatal
        self.out = out if out is not None else sys.stdout
        self.path = "<unknown>"  # origin of reported tokens, see register_file

    def register_file(self, path):
        """Registers path as the origin of the tokens reported from now on."""
        self.path = path

    @staticmethod
    def diagnose(error):
        """Returns the source line of error.token with the token highlighted and underlined."""
        color = ErrorHandler.ERROR
        line = error.token.source
        start = error.token.col - 1
        end = start + max(len(error.token.text), 1)

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], color, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), color, attrs=["bold"])

        return diagnosis

    def report(self, kind, *args, **kwargs):
        """Generates and prints a recoverable error of the given kind (ex: ErrorHandler.SYNTAX) based on args. Unlike
        throw, this never exits.
        """
        error = GenericException(*args, **kwargs)

        error_msg = ""
        if error.token is not None:
            error_msg += colored(f"{self.path}:{error.token.line_num}:{error.token.col}: ", attrs=["bold"])
        error_msg += colored(f"{kind}: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg

        print(error_msg, file=self.out)

        if error.diagnosis:
            print(ErrorHandler.diagnose(error), file=self.out)

    def throw(self, error):
        """Throws error, which must be a GenericException. Exits if self.fatal."""
        error_msg = ""
        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg, file=self.out)

        if not error.internal and error.diagnosis:
            print(ErrorHandler.diagnose(error), file=self.out)

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded"))
        elif exc_type is GenericException:
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
