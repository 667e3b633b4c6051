# test_cli.py
# Unit test for the command-line interface

import io
import json
import tempfile
import unittest

from pathlib import Path

from cli import EXIT_ERROR, EXIT_MISMATCH, EXIT_OK, main
from hashing import Algorithm, hash_string


class CliTest(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.dir = Path(self.tmp.name)

    def run_cli(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        code = main(list(argv), out=out, err=err)
        return code, out.getvalue(), err.getvalue()

    def test_quiet_string(self):
        code, out, _ = self.run_cli("abc", "-a", "sha1", "-q")
        self.assertEqual(code, EXIT_OK)
        self.assertEqual(out.strip(), "a9993e364706816aba3e25717850c26c9cd0d89d")

    def test_default_algorithm_is_sha256(self):
        code, out, _ = self.run_cli("hello world", "-q")
        self.assertEqual(code, EXIT_OK)
        self.assertEqual(out.strip(), hash_string("hello world", "sha256"))

    def test_display(self):
        code, out, _ = self.run_cli("abc", "--algorithm", "sha1")
        self.assertEqual(code, EXIT_OK)
        self.assertIn("Algorithm:  SHA1", out)
        self.assertIn("Input type: string", out)
        self.assertIn("Hash:       a9993e36", out)

    def test_file_input(self):
        path = self.dir / "doc.txt"
        path.write_bytes(b"abc")
        code, out, _ = self.run_cli(str(path), "-a", "sha1")
        self.assertEqual(code, EXIT_OK)
        self.assertIn("Input type: file", out)
        self.assertIn(f"File path:  {path}", out)
        self.assertIn("a9993e364706816aba3e25717850c26c9cd0d89d", out)

        code, out, _ = self.run_cli(str(path), "-a", "sha1", "-s", "-q")
        self.assertEqual(out.strip(), hash_string(str(path), "sha1"))

    def test_list_algorithms(self):
        code, out, _ = self.run_cli("-l")
        self.assertEqual(code, EXIT_OK)
        for algo in Algorithm.all():
            self.assertIn(algo.value, out)

    def test_missing_input(self):
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli()
        self.assertEqual(ctx.exception.code, 2)

    def test_unsupported_algorithm(self):
        code, _, err = self.run_cli("abc", "-a", "sha4")
        self.assertEqual(code, EXIT_ERROR)
        self.assertIn("Unsupported algorithm", err)

    def test_verify(self):
        expected = "A9993E364706816ABA3E25717850C26C9CD0D89D"
        code, out, _ = self.run_cli("abc", "-a", "sha1", "-c", expected)
        self.assertEqual(code, EXIT_OK)
        self.assertIn("PASSED", out)

        code, _, err = self.run_cli("abc", "-a", "sha1", "-c", "0" * 40)
        self.assertEqual(code, EXIT_MISMATCH)
        self.assertIn("FAILED", err)

        code, out, err = self.run_cli("abc", "-a", "sha1", "-c", "0" * 40, "-q")
        self.assertEqual((code, out, err), (EXIT_MISMATCH, "", ""))

    def test_compare(self):
        code, out, _ = self.run_cli("abc", "-C", "abc")
        self.assertEqual(code, EXIT_OK)
        self.assertIn("MATCH - Inputs are identical", out)

        code, out, _ = self.run_cli("abc", "-C", "abd")
        self.assertEqual(code, EXIT_MISMATCH)
        self.assertIn("NO MATCH", out)

    def test_compare_all(self):
        code, out, _ = self.run_cli("abc", "-C", "abc", "-A")
        self.assertEqual(code, EXIT_OK)
        self.assertIn("Results: 19 matches, 0 mismatches", out)

        code, out, _ = self.run_cli("abc", "-C", "xyz", "-A", "-q")
        self.assertEqual((code, out), (EXIT_MISMATCH, ""))

    def test_all_algorithms(self):
        code, out, _ = self.run_cli("abc", "-A")
        self.assertEqual(code, EXIT_OK)
        self.assertIn("SHA1:", out)
        self.assertIn("KECCAK512:", out)

    def test_export_json(self):
        target = self.dir / "out" / "result.json"
        code, out, _ = self.run_cli("abc", "-a", "sha1", "-e", str(target), "-f", "json")
        self.assertEqual(code, EXIT_OK)
        self.assertIn("Exported to:", out)
        data = json.loads(target.read_text(encoding="utf-8"))
        self.assertEqual(data["digest"], "a9993e364706816aba3e25717850c26c9cd0d89d")
        self.assertNotIn("input_path", data)

    def test_export_all_checksum(self):
        path = self.dir / "doc.txt"
        path.write_bytes(b"abc")
        base = self.dir / "sums.txt"
        code, _, _ = self.run_cli(str(path), "-A", "-q", "-e", str(base), "-f", "checksum")
        self.assertEqual(code, EXIT_OK)
        line = (self.dir / "sums.sha1.txt").read_text(encoding="utf-8")
        self.assertEqual(line, f"a9993e364706816aba3e25717850c26c9cd0d89d  {path}")
        self.assertTrue((self.dir / "sums.blake3.txt").exists())

    def test_verbose_logs_to_err_on_every_call(self):
        self.run_cli("abc", "-q")
        code, out, err = self.run_cli("abc", "-v", "-q", "-a", "sha1")
        self.assertEqual(code, EXIT_OK)
        self.assertEqual(out.strip(), "a9993e364706816aba3e25717850c26c9cd0d89d")
        self.assertIn("DEBUG hashing: new sha1 hasher", err)

        _, _, err = self.run_cli("abc", "-q")
        self.assertEqual(err, "")

    def test_unreadable_input_is_reported(self):
        code, _, err = self.run_cli(str(self.dir), "-a", "sha1")
        self.assertEqual(code, EXIT_ERROR)
        self.assertIn("error:", err)


if __name__ == "__main__":
    unittest.main()
