"""Runs Wisp programs from files, from the command line (-e), or in an interactive shell. Also uses the error handling
context manager. Called from the wisp executable script.
"""

import argparse
import sys

from wisp.lang.error import ErrorHandler
from wisp.lang.session import Session
from wisp.lang.shell import Shell
from wisp.lang.values import represent


EVAL_FILE = "<eval>"  # filename used for -e sources in error messages
RECURSION_LIMIT = 5000  # each Wisp call level takes several Python frames


def main(argv=None):
    """Runs Wisp interpreter. Called from wisp executable script."""
    parser = argparse.ArgumentParser(prog="wisp", description="Wisp interpreter")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("-e", "--eval", metavar="SOURCE", help="run SOURCE and print its value")
    args = parser.parse_args(argv)

    if sys.getrecursionlimit() < RECURSION_LIMIT:
        sys.setrecursionlimit(RECURSION_LIMIT)

    with ErrorHandler() as error_handler:
        if args.eval is not None:
            sess = Session(error_handler, EVAL_FILE)
            print(represent(sess.run(args.eval)))

        elif args.file is not None:
            Session(error_handler, args.file).load()

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()

    return 0


if __name__ == "__main__":
    main()
