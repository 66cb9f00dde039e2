from cfg_simplifier.Generator import Generator
from cfg_simplifier.utility.text_format import format_word, parse_text

def test0():
    grammar = parse_text("""
        # balanced a/b words, plus the empty word
        S -> aSb | SS |
    """)
    print(grammar.to_dict())

    for form in Generator(grammar, 0, 6, leftmost=True):
        print(repr(format_word(form)))

test0()
