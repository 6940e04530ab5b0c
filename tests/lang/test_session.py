import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from boolcalc.lang.error import ErrorHandler, GenericException, LexError, ParseError
from boolcalc.lang.session import Result, Session
from boolcalc.pure.syntax import FalseExpr, IfExpr, TrueExpr


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp.cleanup()

    def write(self, contents):
        path = os.path.join(self.tmp.name, "test.bc")
        with open(path, "w", encoding="utf-8") as file:
            file.write(contents)
        return path

    def test_preprocess_line(self):
        cases = {
            "true\n": ("true", False),
            "  if true then false else true  \r\n": ("  if true then false else true", False),
            "(if true": ("(if true", True),
            "((true) ": ("((true)", True),
            "true)": ("true)", False),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, Session.preprocess_line(case, 1, False), case)

    def test_preprocess_continuation(self):
        exprs = []
        add_to_prev = False
        for line_num, line in enumerate(["(if true\n", "  then false\n", "\n", "  else true)\n", "false\n"]):
            __, add_to_prev = Session.preprocess_line(line, line_num + 1, add_to_prev, exprs)

        self.assertEqual([("(if true then false  else true)", 1), ("false", 5)], exprs)
        self.assertFalse(add_to_prev)

    def test_file(self):
        path = self.write("true\n\nif true then false else true\n(if false\n then false\n else true)\n")
        sess = Session(ErrorHandler(), path, cmd_line=False)
        sess.run()

        expected = [
            Result(1, TrueExpr(), True),
            Result(3, IfExpr(TrueExpr(), FalseExpr(), TrueExpr()), False),
            Result(4, IfExpr(FalseExpr(), FalseExpr(), TrueExpr()), True),
        ]
        self.assertEqual(expected, sess.results)
        self.assertEqual({}, sess.to_exec)
        self.assertEqual(["true", "false", "true"], [sess.pop() for __ in range(3)])

    def test_file_errors(self):
        path = self.write("true\nif true then\n")
        self.assertRaises(ParseError, Session, ErrorHandler(), path, False)

        path = self.write("tru3\n")
        self.assertRaises(LexError, Session, ErrorHandler(), path, False)

        missing = os.path.join(self.tmp.name, "missing.bc")
        self.assertRaises(GenericException, Session, ErrorHandler(), missing, False)

    def test_empty_file(self):
        path = self.write("\n   \n")
        output = io.StringIO()
        with redirect_stdout(output):
            sess = Session(ErrorHandler(), path, cmd_line=False)
            sess.run()

        self.assertIn("contains no expressions", output.getvalue())
        self.assertEqual([], sess.results)

    def test_encoding(self):
        path = os.path.join(self.tmp.name, "latin1.bc")
        with open(path, "wb") as file:
            file.write(b"true\n\xff\xfe\n")

        with self.assertRaises(GenericException) as ctx:
            Session(ErrorHandler(), path, cmd_line=False)
        self.assertEqual(f"'{path}' is not valid UTF-8 text", str(ctx.exception))
        self.assertFalse(ctx.exception.internal)

        path = os.path.join(self.tmp.name, "bom.bc")
        with open(path, "wb") as file:
            file.write("\ufefftrue\nfalse\n".encode("utf-8"))

        sess = Session(ErrorHandler(), path, cmd_line=False)
        sess.run()
        self.assertEqual([Result(1, TrueExpr(), True), Result(2, FalseExpr(), False)], sess.results)

    def test_reserved_filename(self):
        should_raise = [Session.SH_FILE, Session.ARG_FILE]
        for case in should_raise:
            with self.assertRaises(GenericException, msg=case) as ctx:
                Session(ErrorHandler(), case, False)
            self.assertEqual(f"'{case}' is a reserved filename", str(ctx.exception))

    def test_arg(self):
        sess = Session(ErrorHandler(), Session.ARG_FILE, cmd_line=False, read=False)
        sess.add("if (true) then true else false", 1)
        sess.run()

        self.assertEqual([Result(1, IfExpr(TrueExpr(), TrueExpr(), FalseExpr()), True)], sess.results)
        self.assertTrue(sess.error_handler.fatal)

    def test_cmd_line(self):
        handler = ErrorHandler()
        sess = Session(handler, Session.SH_FILE, cmd_line=True)
        self.assertFalse(handler.fatal)

        sess.add("false", 1)
        sess.run()
        sess.add("if false then false else true", 2)
        sess.run()

        self.assertEqual({}, sess.to_exec)
        self.assertEqual("false", sess.pop())
        self.assertEqual("true", sess.pop())
        self.assertEqual([], sess.results)

    def test_render(self):
        sess = Session(ErrorHandler(), Session.SH_FILE, cmd_line=True, show_tree=True, trace=True)
        sess.add("if true then false else true", 1)
        sess.run()

        expected = ("IfExpr(expr='if true then false else true', nodes=[\n"
                    "    TrueExpr(expr='true'),\n"
                    "    FalseExpr(expr='false'),\n"
                    "    TrueExpr(expr='true')\n"
                    "])\n"
                    "  true ⇓ true\n"
                    "  false ⇓ false\n"
                    "if true then false else true ⇓ false\n"
                    "false")
        self.assertEqual(expected, sess.pop())

    def test_traceback_registration(self):
        handler = ErrorHandler()
        sess = Session(handler, Session.ARG_FILE, cmd_line=False, read=False)

        self.assertRaises(ParseError, sess.add, "(true", 7)
        self.assertEqual(("(true", 7), handler.traceback[Session.ARG_FILE])

        sess.add("true", 8)
        self.assertEqual((None, None), handler.traceback[Session.ARG_FILE])


if __name__ == '__main__':
    unittest.main()
