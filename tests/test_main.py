import io
import os
import re
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

from boolcalc.main import main

ANSI = re.compile(r"\x1b\[[0-9;]*m")


def run(argv):
    """Runs main, returning (exit code, printed output without color codes)."""
    output = io.StringIO()
    code = 0
    with redirect_stdout(output), redirect_stderr(io.StringIO()):
        try:
            main(argv)
        except SystemExit as exc:
            code = exc.code
    return code, ANSI.sub("", output.getvalue())


class MainTestCase(unittest.TestCase):

    def test_expr(self):
        cases = {
            "true": "true\n",
            "if true then false else true": "false\n",
            "((if false then false else true))": "true\n",
        }
        for case, expected in cases.items():
            self.assertEqual((0, expected), run(["-e", case]), case)

    def test_expr_display(self):
        self.assertEqual((0, "true ⇓ true\ntrue\n"), run(["--trace", "-e", "true"]))
        self.assertEqual((0, "FalseExpr(expr='false')\nfalse\n"), run(["--tree", "-e", "(false)"]))

    def test_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "program.bc")
            with open(path, "w", encoding="utf-8") as file:
                file.write("false\nif false then false else true\n\n(true)\n")

            self.assertEqual((0, "false\ntrue\ntrue\n"), run([path]))

    def test_errors(self):
        code, output = run(["-e", "tru3"])
        self.assertEqual(1, code)
        self.assertIn("File '<arg>', line 1:", output)
        self.assertIn("error: 'tru3' contains unrecognized character 't'", output)

        code, output = run(["-e", "true false"])
        self.assertEqual(1, code)
        self.assertIn("error: expected end of input, found 'false'", output)

        code, output = run([os.path.join(tempfile.gettempdir(), "no", "such", "file.bc")])
        self.assertEqual(1, code)
        self.assertIn("could not be opened", output)

    def test_reserved_filename(self):
        for case in ["<arg>", "<in>"]:
            code, output = run([case])
            self.assertEqual(1, code, case)
            self.assertIn(f"error: '{case}' is a reserved filename", output, case)

    def test_file_and_expr(self):
        self.assertEqual(2, run(["program.bc", "-e", "true"])[0])

    def test_shell(self):
        with mock.patch("boolcalc.main.Shell") as shell:
            self.assertEqual((0, ""), run(["--trace"]))

        sess = shell.call_args[0][0]
        self.assertTrue(sess.cmd_line)
        self.assertTrue(sess.trace)
        shell.return_value.cmdloop.assert_called_once_with()


if __name__ == '__main__':
    unittest.main()
