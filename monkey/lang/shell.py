"""Handles interactive/command-line mode for the monkey interpreter. Uses cmd as backend."""

import cmd

MONKEY_FACE = r"""
            __,__
   .--.  .-"     "-.  .--.
  / .. \/  .-. .-.  \/ .. \
 | |  '|  /   Y   \  |'  | |
 | \   \  \ 0 | 0 /  /   / |
  \ '- ,\.-'''''''-./, -' /
   ''-' /_   ^ ^   _\ '-''
       |  \._   _./  |
       \   \ '~' /   /
        '._ '-=-' _.'
           '-----'
"""


class Shell(cmd.Cmd):
    """Monkey interpreter shell. Only a line that is exactly a command name ("help", "?", "exit") is a shell command;
    everything else, `help(1)` and `exit;` included, is monkey source.
    """
    intro = MONKEY_FACE + "\nHello! This is the Monkey programming language!\nType '?' or 'help' for more information."
    prompt = ">> "
    secondary_prompt = ".. "  # used for line continuations
    _tmp_prompt = ">> "       # also used for prompt swapping in line continuations
    commands = ("help", "?", "exit")

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def onecmd(self, line):
        if line == "EOF":  # sent by cmdloop on ctrl-D, even mid-continuation
            return self.do_EOF("")
        if not self._tmp_line and line.strip() in Shell.commands:
            return super().onecmd(line.strip())
        return self.default(line)

    def default(self, line):
        """Executes monkey input, buffering it while parentheses or braces are left open."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            source, unclosed = self.sess.preprocess_line(line, self._tmp_line)

            if unclosed:
                self._tmp_line = source
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt
            if not source.strip(" \t\n;"):  # nothing but separators
                return

            self.sess.add(source, self.line_num)
            self.sess.run()

            if self.sess.results:
                print(self.sess.pop())

    def do_help(self, arg):
        """Prints a short introduction to the language."""
        print("Welcome to the monkey interpreter!\n\n"
              "Monkey is a small expression-oriented language with integers, booleans, let \n"
              "bindings, if/else and first-class functions with closures.\n\n"
              "Try it out by typing 'let add = fn(a, b) { a + b };'. This will bind a function \n"
              "to 'add'. Next, try typing 'add(1, 2)', giving '3' as the result. Input with \n"
              "unclosed parentheses or braces continues on the next line. Type 'exit' or press \n"
              "ctrl-D to leave.")

    def do_EOF(self, arg):
        print()
        return True

    def do_exit(self, arg):
        return True
