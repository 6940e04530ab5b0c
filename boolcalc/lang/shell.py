"""Handles interactive/command-line mode for boolcalc interpreter. Uses cmd as backend."""

import cmd

from boolcalc.lang.error import GenericException


class Shell(cmd.Cmd):
    """Boolean expression interpreter shell."""
    intro = "Boolean expression interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    SWITCHES = {"on": True, "off": False}

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Evaluates an arbitrary boolcalc expression."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            joined = f"{self._tmp_line} {line}" if self._tmp_line else line
            line, add_to_prev = self.sess.preprocess_line(joined, self.line_num, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            if not line.strip():
                return

            self.sess.add(line, self.line_num)
            self.sess.run()

            while self.sess.results:
                print(self.sess.pop())

    def _switch(self, command, attr, arg):
        """Sets or flips one of the session's display toggles."""
        arg = arg.strip()
        if not arg:
            setattr(self.sess, attr, not getattr(self.sess, attr))
        elif arg in Shell.SWITCHES:
            setattr(self.sess, attr, Shell.SWITCHES[arg])
        else:
            raise GenericException("'{}' expects 'on' or 'off', got '{}'", (command, arg), diagnosis=False)

        print(f"{command} {'on' if getattr(self.sess, attr) else 'off'}")

    def do_tree(self, arg):
        """tree [on|off]: show the syntax tree of every result."""
        with self.sess.error_handler:
            self._switch("tree", "show_tree", arg)

    def do_trace(self, arg):
        """trace [on|off]: show the big-step derivation of every result."""
        with self.sess.error_handler:
            self._switch("trace", "trace", arg)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the boolcalc interpreter!\n\n"
              "The language has two values, 'true' and 'false', and one way of combining\n"
              "them: 'if <expr> then <expr> else <expr>'. Parentheses group expressions.\n\n"
              "Try it out by typing 'if true then false else true'. The result is 'false'.\n"
              "Type 'tree' or 'trace' to also see the syntax tree or the derivation of\n"
              "each result, and 'exit' to leave.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
