import os
import tempfile
import unittest
from cfg_simplifier.CFG import CFG, Nonterminal, Production, Terminal
from cfg_simplifier.errors import BadRule, EmptyGrammar, TerminalOnLeft
from cfg_simplifier.utility.text_format import (format_grammar, format_word, parse_file,
                                                 parse_production, parse_text)

S, A = Nonterminal("S"), Nonterminal("A")
a, b = Terminal("a"), Terminal("b")


class TestParse(unittest.TestCase):
    def test_production_line(self):
        self.assertEqual(parse_production("S -> aA | b |"), [
            Production(S, (a, A)),
            Production(S, (b,)),
            Production(S, ()),
        ])

    def test_first_rule_gives_the_start_symbol(self):
        cfg = parse_text("""
            # comment
            A -> a

            S -> A
        """)
        self.assertEqual(cfg.start, A)
        self.assertEqual(cfg.productions, {Production(A, (a,)), Production(S, (A,))})

    def test_repeated_left_sides_merge(self):
        cfg = parse_text("S -> a\nS -> b | a")
        self.assertEqual(cfg.productions, {Production(S, (a,)), Production(S, (b,))})

    def test_bad_rules(self):
        with self.assertRaises(BadRule):
            parse_text("S aA")
        with self.assertRaises(BadRule):
            parse_text("SA -> a")
        with self.assertRaises(BadRule):
            parse_text("S -> a -> b")

    def test_terminal_on_left(self):
        with self.assertRaises(TerminalOnLeft) as ctx:
            parse_text("S -> a\n\ns -> b")
        self.assertEqual(ctx.exception.line, "s -> b")
        self.assertEqual(ctx.exception.lineno, 3)
        self.assertIn("Terminal symbol at LHS: s -> b", str(ctx.exception))

    def test_no_rule_found(self):
        with self.assertRaises(EmptyGrammar) as ctx:
            parse_text("\n# nothing here\n   \n")
        self.assertEqual(str(ctx.exception), "no rule found")

    def test_parse_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "grammar.txt")
            with open(path, "w", encoding="utf-8") as handler:
                handler.write("Я -> aЯ | a\n")
            cfg = parse_file(path)
        self.assertEqual(cfg.start, Nonterminal("Я"))
        self.assertEqual(len(cfg.productions), 2)


class TestFormat(unittest.TestCase):
    def test_start_line_first_then_sorted(self):
        cfg = parse_text("B -> b\nA -> a\nS -> BA | AB | a")
        cfg = CFG(Nonterminal("S"), cfg.productions)
        self.assertEqual(format_grammar(cfg), "S -> AB | BA | a\nA -> a\nB -> b\n")
        self.assertEqual(str(cfg), format_grammar(cfg))

    def test_epsilon_is_an_empty_alternative(self):
        self.assertEqual(format_grammar(parse_text("S -> a |")), "S ->  | a\n")

    def test_grammar_without_productions(self):
        self.assertEqual(format_grammar(CFG(S)), "S -> ")

    def test_start_without_productions_is_skipped(self):
        cfg = CFG(S, {Production(A, (a,))})
        self.assertEqual(format_grammar(cfg), "A -> a\n")

    def test_format_word(self):
        self.assertEqual(format_word((a, b, a)), "aba")
        self.assertEqual(format_word(()), "")


if __name__ == "__main__":
    unittest.main()
