from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Tuple, Union

from cfg_simplifier.errors import AlphabetExhausted, BadRule, EmptyGrammar, TerminalOnLeft

# Grammars here use single-character symbols. A character is a terminal when
# it is lowercase or numeric, and a nonterminal otherwise. That is the only
# way a symbol gets its kind: both the text reader and the fresh-symbol
# synthesis below go through `classify()`.
#
# When a pass needs a brand new nonterminal it picks one from this fixed
# pool of 52 uppercase Latin, Greek and Cyrillic letters. There is no
# fallback to longer names; a grammar already using all of them cannot be
# extended and `fresh_nonterminal()` raises `AlphabetExhausted`.

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZΓΔΘΛΞΣΦΨΩБДЁЖЗИЙПЦЧШЩЫЭЮЯ"


@dataclass(frozen=True, order=True)
class Terminal:
    symbol: str

    def __str__(self):
        return self.symbol


@dataclass(frozen=True, order=True)
class Nonterminal:
    symbol: str

    def __str__(self):
        return self.symbol


Symbol = Union[Terminal, Nonterminal]


def classify(char: str) -> Symbol:
    if char.islower() or char.isnumeric():
        return Terminal(char)
    return Nonterminal(char)


def is_terminal(sym: Symbol) -> bool:
    return isinstance(sym, Terminal)


def is_nonterminal(sym: Symbol) -> bool:
    return isinstance(sym, Nonterminal)


@dataclass(frozen=True)
class Production:
    left: Nonterminal
    right: Tuple[Symbol, ...] = ()

    def __post_init__(self):
        # lists are accepted for convenience, stored as tuples to stay hashable
        object.__setattr__(self, 'right', tuple(self.right))

    def is_epsilon(self):
        return not self.right

    def is_unit(self):
        return len(self.right) == 1 and is_nonterminal(self.right[0])

    def nonterminals(self):
        return {s for s in self.right if is_nonterminal(s)}

    def __str__(self):
        return f"{self.left} -> {''.join(str(s) for s in self.right)}"


def recompute_variables(productions: Iterable[Production]) -> FrozenSet[Nonterminal]:
    variables = set()
    for rule in productions:
        variables.add(rule.left)
        variables |= rule.nonterminals()
    return frozenset(variables)


def fresh_nonterminal(current_variables) -> Nonterminal:
    """
    Pick a nonterminal from ALPHABET that is not among `current_variables`.

    The pool is scanned from its end, so the Cyrillic letters are handed out
    first and the common Latin names stay free for grammar authors.

    Raises:
        AlphabetExhausted: every symbol of the pool is already a variable.
    """
    for char in reversed(ALPHABET):
        candidate = Nonterminal(char)
        if candidate not in current_variables:
            return candidate
    raise AlphabetExhausted(
        f"Exceeded the maximum number of nonterminal symbols ({len(ALPHABET)})")


@dataclass(frozen=True)
class CFG:
    """
    A context-free grammar value.

    `variables` is derived from `productions` on construction and is never
    passed in, so every CFG handed around is already closed under
    `recompute_variables`. Transformations build new CFG values; nothing
    mutates an existing one.
    """
    start: Nonterminal
    productions: FrozenSet[Production] = frozenset()
    variables: FrozenSet[Nonterminal] = field(init=False, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, 'productions', frozenset(self.productions))
        object.__setattr__(self, 'variables', recompute_variables(self.productions))

    @property
    def terminals(self) -> FrozenSet[Terminal]:
        return frozenset(s for rule in self.productions
                         for s in rule.right if is_terminal(s))

    def rules(self) -> Dict[Nonterminal, List[Tuple[Symbol, ...]]]:
        """Alternatives of each nonterminal, in a deterministic (sorted) order."""
        alts = defaultdict(list)
        for rule in sorted(self.productions, key=lambda r: (r.left, _sort_key(r.right))):
            alts[rule.left].append(rule.right)
        return dict(alts)

    def to_dict(self):
        """
        Convert to the dict-of-lists grammar shape used by the CYK and GLR
        parsers, e.g. {"S": [["a", "S"], []]}. The start symbol's key comes
        first.

        Returns:
            grammar (dict): nonterminal character -> list of alternatives,
                each alternative a list of characters.
        """
        rules = self.rules()
        keys = sorted(rules)
        if self.start in rules:
            keys.remove(self.start)
            keys.insert(0, self.start)
        return {k.symbol: [[s.symbol for s in alt] for alt in rules[k]] for k in keys}

    @classmethod
    def from_dict(cls, grammar, start=None) -> 'CFG':
        """
        Build a CFG from the dict-of-lists shape. Each symbol is classified
        by `classify()`; keys must classify as nonterminals. When `start` is
        not given, the first key is the start symbol.
        """
        if not grammar:
            raise EmptyGrammar()
        productions = set()
        for key, alternatives in grammar.items():
            if len(key) != 1:
                raise BadRule(f"{key} -> ...")
            left = classify(key)
            if not is_nonterminal(left):
                raise TerminalOnLeft(f"{key} -> ...")
            for alt in alternatives:
                productions.add(Production(left, tuple(classify(c) for c in "".join(alt))))
        start_symbol = Nonterminal(start) if start is not None else classify(next(iter(grammar)))
        return cls(start_symbol, productions)

    def __str__(self):
        from cfg_simplifier.utility.text_format import format_grammar
        return format_grammar(self)


def _sort_key(right):
    return ''.join(s.symbol for s in right)
