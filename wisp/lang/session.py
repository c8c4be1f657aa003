"""Session control for Wisp. Runs programs from files or the command line against a global scope, and registers them
with an ErrorHandler so errors can be located in their source.
"""

from wisp.grammar.parser import STRING, parse
from wisp.grammar.tree import Application, Identifier
from wisp.lang.error import GenericException
from wisp.lang.evaluator import SPECIAL_FORMS, evaluate
from wisp.lang.prelude import create_global_scope


TOP_SCOPE = create_global_scope()  # lives as long as the process


def run(source, scope=None):
    """Parses and evaluates source in a new scope whose parent is scope (by default, TOP_SCOPE)."""
    return evaluate(parse(source), (scope if scope is not None else TOP_SCOPE).child())


def needs_continuation(text):
    """Whether text has more '(' than ')' outside of strings and comments, i.e. whether the expression goes on in the
    next line.
    """
    balance = 0
    pos = 0
    while pos < len(text):
        char = text[pos]
        if char == '"':
            match = STRING.match(text, pos)
            if not match:
                return False  # unterminated string, let the parser complain
            pos = match.end()
            continue
        elif char == "#":
            newline = text.find("\n", pos)
            if newline == -1:
                break
            pos = newline
        elif char == "(":
            balance += 1
        elif char == ")":
            balance -= 1
        pos += 1
    return balance > 0


class Session:
    """Governs a Wisp session, with a program scope that persists across runs (so shell definitions are kept)."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, output=None, cmd_line=False):
        self.error_handler = error_handler

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.globals = TOP_SCOPE if output is None else create_global_scope(output)
        self.scope = self.globals.child()
        self.results = []

        if self.cmd_line:
            self.error_handler.fatal = False
        elif path == Session.SH_FILE:
            raise GenericException("'{}' is a reserved filename", Session.SH_FILE)

    def load(self):
        """Reads and runs the program at self.path. Returns its value."""
        try:
            with open(self.path, "r", encoding="utf-8") as file:
                source = file.read()
        except OSError:
            raise GenericException("'{}' could not be opened", self.path, diagnosis=False)

        return self.run(source)

    def run(self, source):
        """Runs source in this session's scope. Will raise any errors that are encountered."""
        self.error_handler.register_source(self.path, source)  # in case error is raised

        tree = parse(source)
        self.check(tree)

        value = evaluate(tree, self.scope)
        self.results.append(value)

        self.error_handler.remove_source(self.path)  # error was not raised
        return value

    def check(self, tree):
        """Warns about definitions of special form names: an application of such a name always reaches the special
        form, never the binding.
        """
        if isinstance(tree, Application):
            operator = tree.operator
            if isinstance(operator, Identifier) and operator.name == "define" and tree.args:
                name = tree.args[0]
                if isinstance(name, Identifier) and name.name in SPECIAL_FORMS:
                    msg = "'{}' is a special form, calls to it will not use this definition"
                    self.error_handler.warn(msg, name.name, start=name.start, end=name.end)

        for node in tree.nodes:
            self.check(node)

    def pop(self):
        """Removes and returns the value of the most recent run."""
        return self.results.pop()
