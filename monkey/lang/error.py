"""Error reporting for the monkey interpreter. The core never raises: the parser collects messages and the evaluator
returns Error objects. Session turns both into GenericExceptions, and ErrorHandler prints them. Any other exception
that makes it all the way to ErrorHandler is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be thrown by ErrorHandler. Each "{}" in msg is filled with the
    corresponding entry of exprs, in bold. details are extra lines printed under the message.
    """

    def __init__(self, msg, exprs=None, details=None, internal=False):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]

        if exprs:
            msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))
        self.msg = msg
        self.details = list(details) if details else []
        self.internal = internal

        super().__init__(self.msg)


class ParserErrors(GenericException):
    """Raised when source could not be parsed. details are the messages collected by the parser."""

    def __init__(self, errors):
        super().__init__("{} parser error(s)", str(len(errors)), details=errors)


class ErrorHandler:
    """Context manager that reports monkey errors in color and suppresses them, exiting the process if fatal."""
    ERROR = "red"
    STEP = "cyan"

    def __init__(self, fatal=True, verbose=False):
        self.fatal = fatal
        self.verbose = verbose  # whether to print evaluation steps
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    def register_step(self, step, expr):
        """Prints one evaluation step (node type and source) if verbose."""
        if self.verbose:
            print(colored(f"{step}: ", ErrorHandler.STEP, attrs=["bold"]) + expr)

    def throw(self, error):
        """Prints error, a GenericException, prefixed with the lines registered in self.traceback."""
        error_msg = ""
        for file, (line, line_num) in self.traceback.items():
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        for detail in error.details:
            error_msg += f"\n\t{detail}"
        print(error_msg)

        if self.fatal:
            sys.exit(1)
        for file in self.traceback:  # if error occurred, reset traceback (no need if error is fatal)
            self.remove_line(file)

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
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
