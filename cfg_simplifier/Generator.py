from collections import deque

from cfg_simplifier.CFG import CFG, is_nonterminal, is_terminal
from cfg_simplifier.Simplifier import simplify
from cfg_simplifier.config import GeneratorConfig
from cfg_simplifier.errors import InvariantViolation
from cfg_simplifier.utility.logging_config import get_logger
from cfg_simplifier.utility.text_format import format_word

logger = get_logger(__name__)

# # Generating strings from a grammar
#
# The generator enumerates the words of a grammar whose length lies in
# `[min_len, max_len]`. It keeps a FIFO worklist of sentential forms, tuples
# of terminals and nonterminals, starting with the alternatives of the start
# symbol. Each step takes one form off the front, and either reports it (all
# terminals), drops it (too long), or rewrites one nonterminal in it and puts
# every rewrite at the back.
#
# Dropping a form for being too long is only safe because the grammar is
# simplified first: after `remove_epsilon` no rewrite can shorten a form, so
# a form longer than `max_len` stays that way. Likewise, after
# `remove_useless` and `remove_unreachable` every nonterminal we meet has at
# least one alternative.

class Generator:
    def __init__(self, grammar: CFG, min_len, max_len, leftmost=True):
        """
        Args:
            grammar (CFG): The grammar to enumerate. It is simplified here.
            min_len (int): Shortest word to report.
            max_len (int): Longest word to report.
            leftmost (bool): Rewrite the leftmost nonterminal of a form when
                True, the rightmost otherwise.
        """
        self.grammar = simplify(grammar)
        self.min_len = min_len
        self.max_len = max_len
        self.leftmost = leftmost
        self.rules = self.grammar.rules()
        self.queue = deque(self.rules.get(self.grammar.start, []))
        logger.debug("generator: %d nonterminals, %d seed forms, bounds [%d, %d]",
                     len(self.rules), len(self.queue), min_len, max_len)

    @classmethod
    def from_config(cls, grammar: CFG, config: GeneratorConfig):
        config.validate()
        return cls(grammar, config.min_len, config.max_len, config.leftmost)

    def __iter__(self):
        return self

# ## Choosing what to rewrite
#
# Leftmost derivation rewrites the first nonterminal of a form, rightmost the
# last one. Either way exactly one occurrence is replaced per step.

class Generator(Generator):
    def expansion_index(self, form):
        indices = range(len(form)) if self.leftmost else range(len(form) - 1, -1, -1)
        return next(i for i in indices if is_nonterminal(form[i]))

    def expand(self, form):
        idx = self.expansion_index(form)
        nonterminal = form[idx]
        alternatives = self.rules.get(nonterminal)
        if not alternatives:
            raise InvariantViolation(
                f"no alternatives for {nonterminal} after simplification")
        for alt in alternatives:
            self.queue.append(form[:idx] + alt + form[idx + 1:])

# ## Pulling words
#
# One call to `next()` runs the worklist until it can report a word, and the
# worklist is kept for the next call. An ambiguous grammar reports a word
# once per derivation; callers wanting distinct words collect them in a set.

class Generator(Generator):
    def __next__(self):
        while self.queue:
            form = self.queue.popleft()
            if not form:
                if self.min_len == 0:
                    return form
                continue
            if len(form) > self.max_len:
                continue
            if all(is_terminal(s) for s in form):
                if len(form) >= self.min_len:
                    return form
                continue
            self.expand(form)
        raise StopIteration

    def words(self):
        for form in self:
            yield format_word(form)


def generate_set(grammar: CFG, min_len, max_len, leftmost=True):
    """Distinct words of `grammar` within the bounds, as strings."""
    return set(Generator(grammar, min_len, max_len, leftmost).words())
