"""Session control for the boolcalc language. Runs the interpreter either in command line mode or file interpretation
mode: statements are parsed as they are added and evaluated when run is called.
"""

from dataclasses import dataclass, field
from typing import List

from boolcalc import interpreter
from boolcalc.lang.error import GenericException
from boolcalc.pure.semantics import Judgment, derivation, format_value
from boolcalc.pure.syntax import Expr


@dataclass
class Result:
    """Outcome of one executed statement."""
    line_num: int
    term: Expr
    value: bool
    trace: List[Judgment] = field(default_factory=list)

    def __str__(self):
        return format_value(self.value)


class Session:
    """Governs a boolcalc session: the statements waiting to be run and the results of those already run."""
    SH_FILE = "<in>"    # command-line interpreter filename
    ARG_FILE = "<arg>"  # filename for expressions passed as program arguments
    RESERVED = (SH_FILE, ARG_FILE)

    def __init__(self, error_handler, path, cmd_line, show_tree=False, trace=False, read=True):
        """Unless in command-line mode or read is False, path is read and each of its expressions is added."""
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path            # used for error messages
        self.cmd_line = cmd_line    # whether or not in command-line mode
        self.show_tree = show_tree  # whether or not to print the syntax tree of each result
        self.trace = trace          # whether or not to print the derivation of each result

        self.to_exec = {}  # dict of line num: Expr to evaluate
        self.results = []  # list of Results, in the order they were run

        if self.cmd_line:
            self.error_handler.fatal = False

        if read and not cmd_line:
            if path in Session.RESERVED:
                raise GenericException("'{}' is a reserved filename", path, diagnosis=False)

            exprs = []
            add_to_prev = False

            try:
                with open(path, "r", encoding="utf-8-sig") as file:
                    for line_num, line in enumerate(file):
                        __, add_to_prev = self.preprocess_line(line, line_num + 1, add_to_prev, exprs)
            except UnicodeDecodeError:
                raise GenericException("'{}' is not valid UTF-8 text", path, diagnosis=False)
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            if not exprs:
                self.error_handler.warn("'{}' contains no expressions", path, diagnosis=False)

            for expr in exprs:
                self.add(*expr)

    @staticmethod
    def preprocess_line(line, line_num, add_to_prev, exprs=None):
        """Preprocesses a line from a file or command-line. In command-line mode, exprs can be ignored (used to keep
        track of file's exprs), but add_to_prev will indicate whether a line continuation is necessary. Returns
        updated value of line and add_to_prev. Must be called before calling add.
        """
        line = line.rstrip()

        if exprs is not None:
            if add_to_prev:
                prev, prev_line_num = exprs.pop()
                line = f"{prev} {line.strip()}"
                exprs.append((line, prev_line_num))
            elif line.strip():
                exprs.append((line, line_num))

        return line, line.count("(") > line.count(")")

    def add(self, expr, line_num):
        """Parses expr and queues it to be run. Evaluation is delayed until run is called."""
        self.error_handler.register_line(self.path, expr, line_num)  # in case error is raised

        self.to_exec[line_num] = interpreter.parse(expr)

        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Evaluates this session's queued statements in line order. Will raise any errors that are encountered."""
        for line_num, term in sorted(self.to_exec.items()):
            self.error_handler.register_line(self.path, term.expr, line_num)

            try:
                trace = [] if self.trace else None
                value = interpreter.eval(term, trace)
                self.results.append(Result(line_num, term, value, trace or []))
            finally:
                if self.cmd_line:
                    del self.to_exec[line_num]

            self.error_handler.remove_line(self.path)

        if not self.cmd_line:
            self.to_exec = {}

    def render(self, result):
        """String form of result, with its syntax tree and derivation if those are switched on."""
        parts = []
        if self.show_tree:
            parts.append(result.term.display())
        if self.trace:
            parts.append(derivation(result.trace))
        parts.append(str(result))
        return "\n".join(parts)

    def pop(self):
        """Removes and renders the oldest result."""
        return self.render(self.results.pop(0))
