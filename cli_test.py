import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from cfg_simplifier import cli
from cfg_simplifier.config import DEFAULT_MAX_LEN, GeneratorConfig
from cfg_simplifier.utility.grammar_graph import grammar_graph
from cfg_simplifier.utility.text_format import parse_text


class TestConfig(unittest.TestCase):
    def test_defaults(self):
        config = GeneratorConfig.from_env({})
        self.assertEqual(config, GeneratorConfig(0, DEFAULT_MAX_LEN, True))

    def test_environment(self):
        config = GeneratorConfig.from_env(
            {"CFG_MIN_LEN": "2", "CFG_MAX_LEN": "5", "CFG_DIRECTION": "Right"})
        self.assertEqual(config, GeneratorConfig(2, 5, False))

    def test_invalid_values(self):
        with self.assertRaises(ValueError):
            GeneratorConfig.from_env({"CFG_DIRECTION": "up"})
        with self.assertRaises(ValueError):
            GeneratorConfig.from_env({"CFG_MIN_LEN": "4", "CFG_MAX_LEN": "1"})
        with self.assertRaises(ValueError):
            GeneratorConfig(-1, 3).validate()


class TestGrammarGraph(unittest.TestCase):
    def test_nodes_and_edges(self):
        dot = grammar_graph(parse_text("S -> aA |\nA -> b"))
        source = dot.source
        self.assertIn("n_S -> t_a", source)
        self.assertIn("n_S -> n_A", source)
        self.assertIn("n_A -> t_b", source)
        self.assertIn("n_S -> eps", source)
        self.assertIn("doublecircle", source)
        self.assertEqual(source.count("n_S -> t_a"), 1)


class TestCli(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.old_env = {k: os.environ.pop(k) for k in
                        ("CFG_MIN_LEN", "CFG_MAX_LEN", "CFG_DIRECTION") if k in os.environ}
        self.addCleanup(os.environ.update, self.old_env)

    def write(self, text):
        path = os.path.join(self.tmp.name, "grammar.txt")
        with open(path, "w", encoding="utf-8") as handler:
            handler.write(text)
        return path

    def run_cli(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = cli.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_prints_words(self):
        path = self.write("S -> aSb |\n")
        code, out, _ = self.run_cli(path, "--max", "4")
        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines(), ["ε", "ab", "aabb"])

    def test_unique_and_limit(self):
        path = self.write("S -> SS | a\n")
        code, out, _ = self.run_cli(path, "--min", "3", "--max", "3", "--unique")
        self.assertEqual((code, out), (0, "aaa\n"))
        code, out, _ = self.run_cli(path, "--max", "5", "--limit", "2", "--right")
        self.assertEqual(len(out.splitlines()), 2)

    def test_simplify_only_and_dot(self):
        path = self.write("S -> A\nA -> a\nB -> b\n")
        dot_path = os.path.join(self.tmp.name, "grammar.dot")
        code, out, _ = self.run_cli(path, "--simplify-only", "--dot", dot_path)
        self.assertEqual(code, 0)
        self.assertEqual(out, "S -> a\n")
        with open(dot_path, encoding="utf-8") as handler:
            self.assertIn("n_S -> t_a", handler.read())

    def test_format_errors_are_reported(self):
        path = self.write("s -> a\n")
        code, out, err = self.run_cli(path)
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("Terminal symbol at LHS", err)

    def test_missing_file(self):
        code, _, err = self.run_cli(os.path.join(self.tmp.name, "nope.txt"))
        self.assertEqual(code, 1)
        self.assertTrue(err.startswith("error:"))

    def test_bad_bounds(self):
        path = self.write("S -> a\n")
        code, _, err = self.run_cli(path, "--min", "3", "--max", "1")
        self.assertEqual(code, 1)
        self.assertIn("exceeds", err)


if __name__ == "__main__":
    unittest.main()
