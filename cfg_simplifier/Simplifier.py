from cfg_simplifier.CFG import (CFG, Nonterminal, Production, fresh_nonterminal,
                                is_nonterminal)
from cfg_simplifier.utility.logging_config import get_logger

logger = get_logger(__name__)

# # Grammar simplification
#
# Four passes, each taking a CFG value and returning a new one:
#
# 1. `remove_epsilon` drops `A -> ε` rules (keeping one on a fresh start
#    symbol when the language contains the empty string),
# 2. `remove_unit` drops `A -> B` rules,
# 3. `remove_useless` drops nonterminals that never derive a terminal string,
# 4. `remove_unreachable` drops what the start symbol cannot reach.
#
# The order matters: removing epsilon rules creates unit rules, removing
# unit rules can leave nonterminals unreachable, and so on. `simplify()`
# always runs them in this order.
#
# Every analysis below is a plain fixed point: keep sweeping the
# productions until a sweep adds nothing new.


def nullable_symbols(cfg: CFG):
    nullable = set()
    modified = True
    while modified:
        modified = False
        for rule in cfg.productions:
            if rule.left in nullable:
                continue
            # an empty right side trivially satisfies all()
            if all(is_nonterminal(s) and s in nullable for s in rule.right):
                nullable.add(rule.left)
                modified = True
    return nullable


def _deletion_variants(rule, nullable):
    for idx, sym in enumerate(rule.right):
        if sym in nullable:
            yield Production(rule.left, rule.right[:idx] + rule.right[idx + 1:])


def _is_self_loop(rule):
    return rule.is_unit() and rule.right[0] == rule.left


def remove_epsilon(cfg: CFG) -> CFG:
    """
    Remove epsilon productions.

    Every production mentioning a nullable nonterminal gets a variant with
    that one occurrence deleted. Variants are fed back in, so `A -> BCd`
    with nullable B and C ends up with `Cd`, `Bd` and `d` as well. A variant
    is dropped when it is empty or when it reads `A -> A`.

    If the start symbol is nullable and carries an explicit `S -> ε` rule,
    the empty string stays in the language: a fresh start `S'` with
    `S' -> ε | S` is introduced, or, when S never occurs on a right side,
    `S -> ε` is simply kept since S already behaves like such a start.
    Only the explicit rule is looked for: a start symbol that is nullable
    only through other nonterminals gets no new start, and the empty string
    is lost from the language.
    """
    nullable = nullable_symbols(cfg)

    new_rules = {rule for rule in cfg.productions if not rule.is_epsilon()}
    start_has_epsilon = Production(cfg.start, ()) in cfg.productions

    unprocessed = list(new_rules)
    while unprocessed:
        rule, *unprocessed = unprocessed
        for variant in _deletion_variants(rule, nullable):
            if variant.is_epsilon() or _is_self_loop(variant):
                continue
            if variant not in new_rules:
                new_rules.add(variant)
                unprocessed.append(variant)

    start = cfg.start
    start_on_right = any(cfg.start in rule.right for rule in cfg.productions)
    if cfg.start in nullable and start_has_epsilon and not start_on_right:
        new_rules.add(Production(start, ()))
    elif cfg.start in nullable and start_has_epsilon:
        start = fresh_nonterminal(cfg.variables)
        new_rules.add(Production(start, ()))
        new_rules.add(Production(start, (cfg.start,)))
        logger.debug("remove_epsilon: new start symbol %s -> ε | %s", start, cfg.start)

    logger.debug("remove_epsilon: nullable=%s, %d -> %d productions",
                 sorted(s.symbol for s in nullable), len(cfg.productions), len(new_rules))
    return CFG(start, new_rules)


def unit_closure(cfg: CFG, nonterminal: Nonterminal):
    """
    Nonterminals reachable from `nonterminal` through unit productions only.
    The symbol itself is never part of its own closure.
    """
    closure = {nonterminal}
    modified = True
    while modified:
        modified = False
        for rule in cfg.productions:
            if rule.is_unit() and rule.left in closure and rule.right[0] not in closure:
                closure.add(rule.right[0])
                modified = True
    closure.discard(nonterminal)
    return closure


def remove_unit(cfg: CFG) -> CFG:
    """
    Replace every unit production `A -> B` by the non-unit productions of
    `B` and of everything in `B`'s unit closure, re-attached to `A`.
    """
    chains = {k: unit_closure(cfg, k) for k in cfg.variables}

    non_unit = {}
    for rule in cfg.productions:
        if not rule.is_unit():
            non_unit.setdefault(rule.left, []).append(rule.right)

    new_rules = set()
    for rule in cfg.productions:
        if not rule.is_unit():
            new_rules.add(rule)
            continue
        target = rule.right[0]
        if target not in chains[rule.left]:
            # A -> A
            continue
        for source in {target} | chains[target]:
            for right in non_unit.get(source, []):
                new_rules.add(Production(rule.left, right))

    logger.debug("remove_unit: %d -> %d productions", len(cfg.productions), len(new_rules))
    return CFG(cfg.start, new_rules)


def generating_symbols(cfg: CFG):
    generating = set()
    modified = True
    while modified:
        modified = False
        for rule in cfg.productions:
            if rule.left in generating:
                continue
            if rule.nonterminals() <= generating:
                generating.add(rule.left)
                modified = True
    return generating


def remove_useless(cfg: CFG) -> CFG:
    generating = generating_symbols(cfg)
    new_rules = {rule for rule in cfg.productions
                 if rule.left in generating and rule.nonterminals() <= generating}
    logger.debug("remove_useless: dropped %s",
                 sorted(s.symbol for s in cfg.variables - generating))
    return CFG(cfg.start, new_rules)


def reachable_symbols(cfg: CFG):
    reachable = {cfg.start}
    modified = True
    while modified:
        modified = False
        for rule in cfg.productions:
            if rule.left not in reachable:
                continue
            for sym in rule.right:
                if sym not in reachable:
                    reachable.add(sym)
                    modified = True
    return reachable


def remove_unreachable(cfg: CFG) -> CFG:
    reachable = reachable_symbols(cfg)
    new_rules = {rule for rule in cfg.productions
                 if rule.left in reachable and set(rule.right) <= reachable}
    logger.debug("remove_unreachable: dropped %s",
                 sorted(s.symbol for s in cfg.variables - reachable))
    return CFG(cfg.start, new_rules)


# connecting everything together

def simplify(cfg: CFG) -> CFG:
    g1 = remove_epsilon(cfg)
    g2 = remove_unit(g1)
    g3 = remove_useless(g2)
    g4 = remove_unreachable(g3)
    return g4
