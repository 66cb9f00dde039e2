# Errors come in two tiers. GrammarError and its subclasses are input
# problems the caller can report and recover from. InvariantViolation means
# the simplification pipeline broke one of its own guarantees and is never
# caught inside this package.


class GrammarError(Exception):
    def __init__(self, message, line=None, lineno=None):
        """
        Args:
            message (str): What went wrong.
            line (str): The offending grammar line, when there is one.
            lineno (int): 1-based line number of `line` in its source.
        """
        super().__init__(message)
        self.message = message
        self.line = line
        self.lineno = lineno

    def __str__(self):
        if self.lineno is not None:
            return f"line {self.lineno}: {self.message}"
        return self.message


class GrammarFormatError(GrammarError):
    pass


class BadRule(GrammarFormatError):
    def __init__(self, line, lineno=None):
        super().__init__(f"Bad rule: {line}", line, lineno)


class TerminalOnLeft(GrammarFormatError):
    def __init__(self, line, lineno=None):
        super().__init__(f"Terminal symbol at LHS: {line}", line, lineno)


class EmptyGrammar(GrammarFormatError):
    def __init__(self):
        super().__init__("no rule found")


class AlphabetExhausted(GrammarError):
    """All nonterminal characters of the alphabet are already variables."""


class InvariantViolation(AssertionError):
    pass
