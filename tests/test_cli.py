"""
Tests for the kaleidoscope command-line driver.

Author: xwest
"""

import io
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stdout, redirect_stderr

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

import kaleidoscope
from kaleidoscope.cli import main


class TestCLI(unittest.TestCase):
    """Test cases for the driver."""
    
    def _run(self, argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(argv)
        return code, out.getvalue(), err.getvalue()
    
    def _write_source(self, text):
        fd, path = tempfile.mkstemp(suffix=".ks")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        self.addCleanup(os.remove, path)
        return path
    
    def test_demo_program(self):
        code, out, err = self._run([])
        self.assertEqual(code, 0)
        self.assertIn("Prototype foo(x, y)", out)
        self.assertIn("Call foo", out)
        self.assertEqual(err, "")
    
    def test_version_flag(self):
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit):
            main(["--version"])
        self.assertEqual(out.getvalue().strip(), f"kaleidoscope {kaleidoscope.__version__}")
    
    def test_package_metadata(self):
        self.assertTrue(kaleidoscope.__email__.endswith("@kaleidoscope-lang.org"))
    
    def test_tokens_flag(self):
        code, out, _ = self._run(["--tokens"])
        self.assertEqual(code, 0)
        first_line = out.splitlines()[0]
        self.assertTrue(first_line.startswith("[DEFINE('def'), IDENTIFIER('foo')"))
    
    def test_source_file(self):
        path = self._write_source("def sq(x) x * x\nsq(3)\n")
        code, out, _ = self._run([path])
        self.assertEqual(code, 0)
        self.assertIn("Prototype sq(x)", out)
        self.assertIn("BinaryOp *", out)
    
    def test_parse_error_exit_code(self):
        path = self._write_source("(1 + 2")
        code, out, err = self._run([path])
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("Expected character ')'", err)
        self.assertIn(f"{path}:1:7", err)
    
    def test_missing_file(self):
        code, _, err = self._run([os.path.join(tempfile.gettempdir(), "no-such-file.ks")])
        self.assertEqual(code, 1)
        self.assertIn("File not found", err)
    
    def test_unreadable_path(self):
        path = tempfile.mkdtemp()
        self.addCleanup(os.rmdir, path)
        code, out, err = self._run([path])
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn(f"Cannot read {path}", err)
    
    def test_deeply_nested_input(self):
        path = self._write_source("(" * 1000 + "1" + ")" * 1000)
        code, out, err = self._run([path])
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("nested too deeply", err)
        self.assertNotIn("Traceback", err)


if __name__ == '__main__':
    unittest.main()
