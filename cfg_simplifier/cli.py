import argparse
import sys
from typing import Optional, Sequence

from cfg_simplifier.Generator import Generator
from cfg_simplifier.Simplifier import simplify
from cfg_simplifier.config import GeneratorConfig
from cfg_simplifier.errors import GrammarError
from cfg_simplifier.utility.grammar_graph import grammar_graph
from cfg_simplifier.utility.logging_config import setup_logger
from cfg_simplifier.utility.text_format import format_word, parse_file

EMPTY_WORD = "ε"


def build_parser(defaults: GeneratorConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cfg-simplifier",
        description="Simplify a context-free grammar and list the words it generates.")
    parser.add_argument("grammar", help="Path to the grammar file (UTF-8).")
    parser.add_argument("--min", dest="min_len", type=int, default=defaults.min_len,
                        help="Shortest word to print.")
    parser.add_argument("--max", dest="max_len", type=int, default=defaults.max_len,
                        help="Longest word to print.")
    side = parser.add_mutually_exclusive_group()
    side.add_argument("--left", dest="leftmost", action="store_true", default=defaults.leftmost,
                      help="Use leftmost derivations.")
    side.add_argument("--right", dest="leftmost", action="store_false",
                      help="Use rightmost derivations.")
    parser.add_argument("--unique", action="store_true",
                        help="Print each word once even if it has several derivations.")
    parser.add_argument("--limit", type=int, default=None,
                        help="Stop after printing this many words.")
    parser.add_argument("--simplify-only", action="store_true",
                        help="Print the simplified grammar instead of words.")
    parser.add_argument("--dot", metavar="PATH", default=None,
                        help="Write the simplified grammar's dependency graph as dot source.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return parser


def render_word(word: str) -> str:
    return word if word else EMPTY_WORD


def run(args, out=sys.stdout):
    grammar = parse_file(args.grammar)

    if args.simplify_only or args.dot:
        simplified = simplify(grammar)
        if args.dot:
            with open(args.dot, "w", encoding="utf-8") as handler:
                handler.write(grammar_graph(simplified).source)
        if args.simplify_only:
            out.write(str(simplified))
            return 0

    config = GeneratorConfig(args.min_len, args.max_len, args.leftmost)
    generator = Generator.from_config(grammar, config)
    seen = set()
    printed = 0
    for form in generator:
        word = format_word(form)
        if args.unique:
            if word in seen:
                continue
            seen.add(word)
        out.write(render_word(word) + "\n")
        printed += 1
        if args.limit is not None and printed >= args.limit:
            break
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        defaults = GeneratorConfig.from_env()
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    args = build_parser(defaults).parse_args(argv)
    logger = setup_logger("cfg_simplifier", level="DEBUG" if args.verbose else "WARNING")

    try:
        return run(args)
    except (GrammarError, ValueError) as exc:
        logger.debug("failed on %s", args.grammar, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
