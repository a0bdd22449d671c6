"""Runs the monkey interpreter on a .mk file or in command-line mode. Uses the error handling context manager so that
monkey errors are reported instead of Python tracebacks. Called from the monkey console script.
"""

import argparse
import sys

from monkey.lang.error import ErrorHandler
from monkey.lang.session import Session
from monkey.lang.shell import Shell


def main(argv=None):
    """Runs monkey interpreter. Called from monkey executable script."""
    assert sys.version_info >= (3, 8), "monkey cannot be run with python < 3.8"

    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="monkey")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--trace", action="store_true", help="print every node as it is evaluated")
        args = parser.parse_args(argv)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, trace=args.trace)
            sess.run()

            if sess.results:
                print(sess.pop())

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, trace=args.trace)).cmdloop()
