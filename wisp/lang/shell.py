"""Handles interactive/command-line mode for the Wisp interpreter. Uses cmd as backend."""

import cmd

from wisp.grammar.parser import skip_space
from wisp.lang.session import needs_continuation
from wisp.lang.values import represent


class Shell(cmd.Cmd):
    """Wisp interpreter shell."""
    intro = "Wisp interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._tmp_line = ""

    def default(self, line):
        """Executes arbitrary Wisp expression."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line = self._tmp_line + line

            if needs_continuation(line):
                self._tmp_line = line + "\n"
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            if skip_space(line) == len(line):  # nothing but whitespace and comments
                return

            self.sess.run(line)
            print(represent(self.sess.pop()), file=self.stdout)

    def onecmd(self, line):
        """Lines inside a continuation always belong to the expression being typed."""
        if self._tmp_line:
            return self.default(line)
        return super().onecmd(line)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the Wisp interpreter!\n\n"
              "Every Wisp program is a single expression: a number, a \"string\", a name, or an\n"
              "application like +(1, 2). Special forms control evaluation: if, while, do,\n"
              "define, and fun.\n\n"
              "Try it out by typing 'define(square, fun(x, *(x, x)))'. This will bind a\n"
              "function to the name 'square'. Next, try typing 'square(7)', giving 49 as\n"
              "the result.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
