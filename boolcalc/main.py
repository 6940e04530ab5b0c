"""Uses the boolcalc pipeline to interpret files, single expressions, or run in command-line mode. Also uses error
handling context manager. Called from the boolcalc console script.
"""

import argparse

from boolcalc.lang.error import ErrorHandler
from boolcalc.lang.session import Session
from boolcalc.lang.shell import Shell


def main(argv=None):
    """Runs boolcalc interpreter. Called from boolcalc console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="boolcalc", description="Boolean expression interpreter.")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("-e", "--expr", help="interpret a single expression instead of a file")
        parser.add_argument("--tree", help="also print the syntax tree of each result", action="store_true")
        parser.add_argument("--trace", help="also print the derivation of each result", action="store_true")
        args = parser.parse_args(argv)

        if args.file is not None and args.expr is not None:
            parser.error("cannot interpret a file and an expression at the same time")

        if args.file is not None or args.expr is not None:
            if args.expr is not None:
                sess = Session(error_handler, Session.ARG_FILE, cmd_line=False, show_tree=args.tree,
                               trace=args.trace, read=False)
                sess.add(args.expr, 1)
            else:
                sess = Session(error_handler, args.file, cmd_line=False, show_tree=args.tree, trace=args.trace)
            sess.run()

            while sess.results:
                print(sess.pop())

        else:
            sess = Session(error_handler, Session.SH_FILE, cmd_line=True, show_tree=args.tree, trace=args.trace)
            Shell(sess).cmdloop()


if __name__ == "__main__":
    main()
