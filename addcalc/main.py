"""Runs the additive calculator, either interactively or by replaying the lines of a file. Also sets up the error
handling context manager. Called from the addcalc console script.
"""

import argparse
import logging
import sys

from addcalc.lang.error import ErrorHandler, GenericException
from addcalc.lang.session import Session
from addcalc.lang.shell import Shell


def main(argv=None):
    """Runs addcalc. Called from the addcalc console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="addcalc", description="Evaluates additive integer expressions.")
        parser.add_argument("file", help="file to replay line by line (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("-d", "--diagnose", action="store_true", help="point at the offending part of bad lines")
        parser.add_argument("-v", "--verbose", action="store_true", help="log every evaluation stage")
        args = parser.parse_args(argv)

        logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                            format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)
        error_handler.diagnose = args.diagnose

        if args.file is not None:
            try:
                file = open(args.file, "r")
            except OSError:
                raise GenericException("'{}' could not be opened", args.file, diagnosis=False)

            with file:
                sess = Session(error_handler, args.file)
                Shell(sess, stdin=file).cmdloop(intro="")

        else:
            error_handler.fatal = False
            Shell(Session(error_handler)).cmdloop()
