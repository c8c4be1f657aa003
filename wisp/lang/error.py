"""Error handling for the Wisp language. Only GenericExceptions should be encountered while running a program: if
another type of error makes it all the way to ErrorHandler, it is assumed to be an internal issue.

The core (parser, evaluator, prelude) never recovers from an error. ErrorHandler is only used by the command-line front
end to present errors.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to throw a Wisp error. start and end are offsets into the
    program source the error was raised for, if known.
    """
    kind = "error"

    def __init__(self, msg, exprs=None, start=None, end=None, diagnosis=True, internal=False):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs]

        super().__init__(msg.format(*exprs))
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets

        self.start = start
        self.end = end if end is not None else start
        self.diagnosis = diagnosis
        self.internal = internal


class WispSyntaxError(GenericException):
    """Malformed source text or malformed use of a special form."""
    kind = "syntax error"


class WispReferenceError(GenericException):
    """Identifier not bound anywhere in the scope chain."""
    kind = "reference error"


class WispTypeError(GenericException):
    """Value of the wrong kind: applying a non-function, wrong argument count, wrong operand."""
    kind = "type error"


class WispRangeError(GenericException):
    """Numeric argument outside of its allowed range."""
    kind = "range error"


class ErrorHandler:
    """Context manager that will silently suppress Python errors and print Wisp errors/warnings instead."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, out=None):
        self.fatal = fatal
        self.out = out if out is not None else sys.stdout
        self.sources = {}  # path: source text, insertion-ordered
        self.current = None

    def register_source(self, path, source):
        """Registers source as the text of path. Errors raised afterwards are located in it."""
        self.sources[path] = source
        self.current = path

    def remove_source(self, path):
        """Forgets path. Should be called after a successful Session run."""
        self.sources.pop(path, None)
        self.current = next(reversed(self.sources), None)

    def locate(self, offset):
        """Returns (path, line, line_num, col) of offset in the current source."""
        source = self.sources.get(self.current, "")
        offset = min(max(offset, 0), len(source))

        line_start = source.rfind("\n", 0, offset) + 1
        line_end = source.find("\n", offset)
        if line_end == -1:
            line_end = len(source)

        line_num = source.count("\n", 0, offset) + 1
        return self.current, source[line_start:line_end], line_num, offset - line_start

    @staticmethod
    def diagnose(line, start, end, warning=False):
        """Returns line with line[start:end] highlighted and bolded, and a marker under it."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR
        end = min(max(end, start + 1), max(len(line), start + 1))

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], color, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), color, attrs=["bold"])

        return diagnosis

    def _report(self, error, label, color, warning=False):
        prefix = ""
        diagnosis = None

        if error.start is not None and self.current is not None:
            path, line, line_num, col = self.locate(error.start)
            prefix = colored(f"{path}:{line_num}:{col}: ", attrs=["bold"])

            if not error.internal and error.diagnosis and line.strip():
                end = col + (error.end - error.start)  # spans over several lines are cut at the line end
                diagnosis = ErrorHandler.diagnose(line, col, end, warning)

        elif self.current is not None:
            prefix = colored(f"{self.current}: ", attrs=["bold"])

        if error.internal:
            prefix += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        print(prefix + colored(f"{label}: ", color, attrs=["bold"]) + error.msg, file=self.out)
        if diagnosis:
            print(diagnosis, file=self.out)

    def warn(self, *args, **kwargs):
        """Generates and prints a warning message based on args."""
        self._report(GenericException(*args, **kwargs), "warning", ErrorHandler.WARNING, warning=True)

    def throw(self, error):
        """Prints error, which must be a GenericException, against the registered sources. Exits if fatal."""
        self._report(error, error.kind, ErrorHandler.ERROR)

        if self.fatal:
            sys.exit(1)
        self.sources = {}  # if error occurred, reset sources (no need if error is fatal)
        self.current = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is None:
            return False
        elif issubclass(exc_type, KeyboardInterrupt):
            self.throw(GenericException("keyboard interrupt"))
        elif issubclass(exc_type, SystemExit):
            do_exit = True
        elif issubclass(exc_type, RecursionError):
            self.throw(GenericException("maximum recursion depth exceeded", diagnosis=False))
        elif issubclass(exc_type, GenericException):
            self.throw(exc_val)
        else:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
