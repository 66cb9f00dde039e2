from typing import Iterable, List

from cfg_simplifier.CFG import CFG, Production, classify, is_terminal
from cfg_simplifier.errors import BadRule, EmptyGrammar, TerminalOnLeft

# Grammar text, one rule per line:
#
#     S -> aSb | ab |
#     # comments and blank lines are skipped
#
# The left side is a single nonterminal character, every character of an
# alternative is a symbol of its own, and an empty alternative is epsilon.
# The left side of the first rule is the start symbol.

ARROW = "->"
SEPARATOR = "|"


def parse_production(line: str, lineno=None) -> List[Production]:
    """
    Parse one `LHS -> RHS | RHS ...` line into its productions.

    Raises:
        BadRule: no single arrow, or a left side that is not one character.
        TerminalOnLeft: the left side classifies as a terminal.
    """
    parts = [part.strip() for part in line.split(ARROW)]
    if len(parts) != 2 or len(parts[0]) != 1:
        raise BadRule(line, lineno)
    left = classify(parts[0])
    if is_terminal(left):
        raise TerminalOnLeft(line, lineno)
    return [Production(left, tuple(classify(c) for c in alt.strip()))
            for alt in parts[1].split(SEPARATOR)]


def parse_lines(lines: Iterable[str]) -> CFG:
    start = None
    productions = set()
    for lineno, raw_line in enumerate(lines, 1):
        rule = raw_line.strip()
        if not rule or rule.startswith("#"):
            continue
        new_productions = parse_production(rule, lineno)
        if start is None:
            start = new_productions[0].left
        productions.update(new_productions)
    if start is None:
        raise EmptyGrammar()
    return CFG(start, productions)


def parse_text(text: str) -> CFG:
    return parse_lines(text.splitlines())


def parse_file(path) -> CFG:
    with open(path, encoding="utf-8") as handler:
        return parse_lines(handler)


def format_word(symbols) -> str:
    return "".join(s.symbol for s in symbols)


def format_grammar(cfg: CFG) -> str:
    """
    Canonical text of a grammar: the start symbol's line first, the other
    nonterminals after it in ascending order. Alternatives on a line are
    sorted and joined by " | ", and every line ends with a newline.

    A grammar without productions renders as just "S -> ".
    """
    rules = {}
    for rule in cfg.productions:
        rules.setdefault(rule.left, []).append(format_word(rule.right))

    if not rules:
        return f"{cfg.start} {ARROW} "

    lines = []
    if cfg.start in rules:
        lines.append(_format_line(cfg.start, rules.pop(cfg.start)))
    for left in sorted(rules):
        lines.append(_format_line(left, rules[left]))
    return "".join(lines)


def _format_line(left, alternatives):
    return f"{left} {ARROW} {' | '.join(sorted(alternatives))}\n"
