"""Session control for the monkey interpreter: drives the lexer, parser and evaluator over a file or over lines typed
into the shell, against one global Environment that lives as long as the session.
"""

from monkey.core.environment import Environment
from monkey.core.evaluator import Evaluator
from monkey.core.lexer import Lexer
from monkey.core.object import Error
from monkey.core.parser import parse
from monkey.lang.error import GenericException, ParserErrors


class Session:
    """Governs a monkey session: every program added to it shares the same global bindings."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, trace=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.env = Environment()
        self.evaluator = Evaluator(on_step=error_handler.register_step if trace else None)
        self.error_handler.verbose = trace

        self.to_exec = {}  # dict of line num: (source, Program) to evaluate
        self.results = []  # Objects produced by run, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path)

            self.add(source, 1)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, add_to_prev=""):
        """Preprocesses a line from the command-line. add_to_prev is the text of any previous lines this one continues.
        Returns the combined text and whether it still has unclosed parentheses or braces (a line continuation is
        needed).
        """
        line = line.rstrip()
        if add_to_prev:
            line = add_to_prev + "\n" + line

        unclosed = line.count("(") > line.count(")") or line.count("{") > line.count("}")
        return line, unclosed

    @staticmethod
    def summarize(source):
        """First non-blank line of source, with "..." appended if more lines follow. Used in tracebacks."""
        lines = [line.rstrip() for line in source.splitlines() if line.strip()]
        if not lines:
            return ""
        return lines[0] + (" ..." if len(lines) > 1 else "")

    def add(self, source, line_num):
        """Parses source and queues it to be evaluated by run. Raises ParserErrors if source is not valid monkey."""
        self.error_handler.register_line(self.path, Session.summarize(source), line_num)

        program, errors = parse(Lexer(source))
        if errors:
            raise ParserErrors(errors)
        self.to_exec[line_num] = (source, program)

        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Evaluates this session's queued programs in order. An Error result is raised as a GenericException, and
        other results (if any) are appended to self.results.
        """
        for line_num, (source, program) in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, Session.summarize(source), line_num)
            del self.to_exec[line_num]

            result = self.evaluator.eval(program, self.env)
            if isinstance(result, Error):
                raise GenericException(result.message)
            if result is not None:
                self.results.append(result)

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes the latest result and returns it rendered with inspect."""
        return self.results.pop().inspect()
