import io
import unittest

from wisp.lang.error import (ErrorHandler, GenericException, WispRangeError, WispReferenceError, WispSyntaxError,
                             WispTypeError)


class GenericExceptionTestCase(unittest.TestCase):

    def test_message(self):
        error = GenericException("undefined binding: '{}'", "x", start=3)
        self.assertEqual("undefined binding: 'x'", str(error))
        self.assertIn("x", error.msg)
        self.assertEqual((3, 3), (error.start, error.end))

        error = GenericException("'{}' expects {} argument(s)", ("f", 2))
        self.assertEqual("'f' expects 2 argument(s)", str(error))
        self.assertIsNone(error.start)

    def test_kinds(self):
        cases = {
            WispSyntaxError: "syntax error",
            WispReferenceError: "reference error",
            WispTypeError: "type error",
            WispRangeError: "range error",
        }
        for cls, kind in cases.items():
            self.assertTrue(issubclass(cls, GenericException), cls)
            self.assertEqual(kind, cls.kind)


class ErrorHandlerTestCase(unittest.TestCase):

    def setUp(self):
        self.out = io.StringIO()
        self.error_handler = ErrorHandler(fatal=False, out=self.out)
        self.error_handler.register_source("prog.wisp", "do(1,\n   f(x))\n")

    def test_locate(self):
        cases = {
            0: ("prog.wisp", "do(1,", 1, 0),
            4: ("prog.wisp", "do(1,", 1, 4),
            9: ("prog.wisp", "   f(x))", 2, 3),
        }
        for offset, expected in cases.items():
            self.assertEqual(expected, self.error_handler.locate(offset), offset)

    def test_diagnose(self):
        diagnosis = ErrorHandler.diagnose("   f(x))", 3, 7)
        line, marker = diagnosis.split("\n")
        self.assertIn("f(x)", line)
        self.assertIn("^~~~", marker)
        self.assertEqual(5, marker.index("^"))

    def test_throw(self):
        with self.error_handler:
            raise WispTypeError("applying a non-function", start=9, end=13)
        output = self.out.getvalue()
        self.assertIn("prog.wisp:2:3: ", output)
        self.assertIn("type error: ", output)
        self.assertIn("applying a non-function", output)
        self.assertEqual({}, self.error_handler.sources)

    def test_fatal(self):
        error_handler = ErrorHandler(fatal=True, out=self.out)
        with self.assertRaises(SystemExit):
            with error_handler:
                raise WispSyntaxError("unexpected text after program")

    def test_recursion(self):
        with self.error_handler:
            raise RecursionError()
        self.assertIn("maximum recursion depth exceeded", self.out.getvalue())

    def test_internal(self):
        with self.assertRaises(ValueError):
            with self.error_handler:
                raise ValueError("boom")
        self.assertIn("[internal]", self.out.getvalue())
        self.assertIn("ValueError: boom", self.out.getvalue())

    def test_warn(self):
        self.error_handler.warn("'{}' is a special form", "if", start=3, end=5)
        self.assertIn("warning: ", self.out.getvalue())
        self.assertIn("prog.wisp:1:3: ", self.out.getvalue())

    def test_remove_source(self):
        self.error_handler.register_source("other.wisp", "1")
        self.error_handler.remove_source("other.wisp")
        self.assertEqual("prog.wisp", self.error_handler.current)
        self.error_handler.remove_source("prog.wisp")
        self.assertIsNone(self.error_handler.current)


if __name__ == '__main__':
    unittest.main()
