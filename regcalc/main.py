"""Uses the regcalc language implementation to interpret files or run in command-line mode. Also uses error handling
context manager. Installed as the regcalc executable script.
"""

import argparse
import sys

from regcalc.lang.error import ErrorHandler
from regcalc.lang.shell import Shell
from regcalc.lang.session import Session


def main(argv=None):
    """Runs regcalc interpreter. Called from regcalc executable script."""
    assert sys.version_info >= (3, 7), "regcalc cannot be run with python < 3.7"

    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="regcalc", description="Lazily evaluated register calculator.")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        args = parser.parse_args(argv)

        if args.file is not None:
            Session(error_handler, args.file, cmd_line=False).run()

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
