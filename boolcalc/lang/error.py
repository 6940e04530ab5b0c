"""Error handling for the boolcalc language. Only GenericExceptions should be encountered during running: if another type
of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a boolcalc error/warning. The first of exprs
    is the offending source text, and start/end delimit the part of it that caused the error.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException or warning."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        super().__init__(msg.format(*exprs))
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal


class LexError(GenericException):
    """Raised when source text contains a character that starts no token."""

    def __init__(self, character, position, source=""):
        self.character = character
        self.position = position

        super().__init__("'{}' contains unrecognized character '{}'", (source, character),
                         start=position, end=position + 1, diagnosis=bool(source))


class ParseError(GenericException):
    """Raised when a token stream does not match the grammar. expected is the set of tokens that would have been
    accepted, found is the token that was there instead. msg replaces the default expected/found message.
    """

    def __init__(self, expected, found, position, source="", end=None, msg=None):
        self.expected = frozenset(expected)
        self.found = found
        self.position = position

        if end is None or end <= position:
            end = position + 1

        if msg is None:
            msg = f"expected {ParseError.describe(self.expected)}, found {found.label}"
        super().__init__(msg, source, start=position, end=end, diagnosis=bool(source))

    @staticmethod
    def describe(tokens):
        """Readable listing of tokens, in grammar order."""
        ordered = sorted(tokens, key=lambda token: token.order)
        if len(ordered) == 1:
            return ordered[0].label
        return "one of " + ", ".join(token.label for token in ordered)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom boolcalc errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
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

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = GenericException(*args, **kwargs)

        error_msg = ""
        for file, (line, line_num) in self.traceback.items():
            if line is not None:
                error_msg = colored(f"{file}:{line_num}: ", attrs=["bold"])
                break

        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        for file, (line, line_num) in self.traceback.items():  # assumes dict is insertion-ordered
            if line is not None:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        self.traceback = {path: (None, None) for path in self.traceback}  # if error occurred, reset traceback

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("expression is nested too deeply, maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            detail = f"{exc_type.__name__}: {exc_val}".replace("{", "{{").replace("}", "}}")
            self.throw(GenericException(f"unknown error: '{detail}'", internal=True))
            do_exit = True

        return not do_exit
