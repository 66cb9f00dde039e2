from graphviz import Digraph

from cfg_simplifier.CFG import CFG, is_terminal


def grammar_graph(cfg: CFG, name="grammar"):
    """
    Dependency graph of a grammar: an edge `A -> x` for every symbol x on
    the right side of some production of A.

    Nonterminals are drawn as ellipses, the start symbol as a double
    circle, terminals as boxes. Epsilon productions point to a shared node labelled ε.

    Args:
        cfg (CFG): The grammar to draw.
        name (str): Graph name, also the default file stem for rendering.

    Returns:
        dot (graphviz.Digraph)
    """
    dot = Digraph(name)
    dot.attr(rankdir='LR')

    symbols = set(cfg.variables) | set(cfg.terminals) | {cfg.start}
    for sym in sorted(symbols, key=lambda s: (is_terminal(s), s.symbol)):
        if is_terminal(sym):
            dot.node(_node_id(sym), label=sym.symbol, shape='box')
        elif sym == cfg.start:
            dot.node(_node_id(sym), label=sym.symbol, shape='doublecircle')
        else:
            dot.node(_node_id(sym), label=sym.symbol, shape='ellipse')

    if any(rule.is_epsilon() for rule in cfg.productions):
        dot.node('eps', label='ε', shape='plaintext')

    edges = set()
    for rule in cfg.productions:
        if rule.is_epsilon():
            edges.add((_node_id(rule.left), 'eps'))
        for sym in rule.right:
            edges.add((_node_id(rule.left), _node_id(sym)))
    for tail, head in sorted(edges):
        dot.edge(tail, head)
    return dot


def _node_id(sym):
    # t_/n_ prefixes keep ids ASCII-led for any symbol character
    return ('t_' if is_terminal(sym) else 'n_') + sym.symbol
