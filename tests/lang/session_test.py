import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from wisp.lang.error import ErrorHandler, GenericException, WispReferenceError, WispSyntaxError, WispTypeError
from wisp.lang.scope import Scope
from wisp.lang.session import TOP_SCOPE, Session, needs_continuation, run


class RunTestCase(unittest.TestCase):

    def test_run(self):
        out = io.StringIO()
        with redirect_stdout(out):
            result = run('do(define(x, 10), if(>(x, 5), print("large"), print("small")))')
        self.assertEqual("large", result)
        self.assertEqual("large\n", out.getvalue())

    def test_runs_do_not_share_scope(self):
        self.assertEqual(1, run("define(leaked, 1)"))
        self.assertRaises(WispReferenceError, run, "leaked")
        self.assertNotIn("leaked", TOP_SCOPE.bindings)

    def test_run_in_scope(self):
        scope = Scope(TOP_SCOPE, {"x": 41})
        self.assertEqual(42, run("+(x, 1)", scope))
        self.assertEqual({"x": 41}, scope.bindings)

    def test_errors_propagate(self):
        cases = {
            "f(": WispSyntaxError,
            "undefined": WispReferenceError,
            "5(1)": WispTypeError,
            "fun(a, a)(1, 2)": WispTypeError,
        }
        for case, error in cases.items():
            self.assertRaises(error, run, case)


class NeedsContinuationTestCase(unittest.TestCase):

    def test_needs_continuation(self):
        should_fail = ["", "x", "f()", "f(1)(2)", 'print("(")', "x # (", "f())", '"unterminated (']
        for case in should_fail:
            self.assertFalse(needs_continuation(case), case)

        should_pass = ["f(", "do(define(x, 1),", 'f(")"', "f( # )\n", "f(g(1)"]
        for case in should_pass:
            self.assertTrue(needs_continuation(case), case)


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.printed = []
        self.out = io.StringIO()
        self.error_handler = ErrorHandler(fatal=False, out=self.out)

    def test_persistent_scope(self):
        sess = Session(self.error_handler, Session.SH_FILE, output=self.printed.append, cmd_line=True)
        sess.run("define(square, fun(x, *(x, x)))")
        self.assertEqual(49, sess.run("square(7)"))
        self.assertEqual(49, sess.pop())
        self.assertNotIn("square", sess.globals.bindings)

    def test_output(self):
        sess = Session(self.error_handler, Session.SH_FILE, output=self.printed.append, cmd_line=True)
        sess.run("print(array(1, 2))")
        self.assertEqual(["[1, 2]"], self.printed)

    def test_reserved_filename(self):
        self.assertRaises(GenericException, Session, self.error_handler, Session.SH_FILE)

    def test_load(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "sum.wisp")
            with open(path, "w") as file:
                file.write("# sums 1 to 10\n"
                           "do(define(total, 0),\n"
                           "   define(count, 1),\n"
                           "   while(<(count, 11),\n"
                           "         do(define(total, +(total, count)),\n"
                           "            define(count, +(count, 1)))),\n"
                           "   print(total))\n")

            sess = Session(self.error_handler, path, output=self.printed.append)
            self.assertEqual(55, sess.load())
            self.assertEqual(["55"], self.printed)

    def test_load_missing_file(self):
        sess = Session(self.error_handler, "/nonexistent/program.wisp", output=self.printed.append)
        self.assertRaises(GenericException, sess.load)

    def test_special_form_definition_warning(self):
        sess = Session(self.error_handler, Session.SH_FILE, output=self.printed.append, cmd_line=True)
        self.assertEqual(1, sess.run("define(if, 1)"))
        self.assertIn("warning", self.out.getvalue())
        self.assertIn("is a special form", self.out.getvalue())

    def test_error_is_located(self):
        sess = Session(self.error_handler, "prog.wisp", output=self.printed.append, cmd_line=True)
        with self.error_handler:
            sess.run("do(1,\n   nope)")
        self.assertIn("prog.wisp:2:3: ", self.out.getvalue())
        self.assertIn("reference error", self.out.getvalue())
        self.assertIn("undefined binding", self.out.getvalue())


if __name__ == '__main__':
    unittest.main()
