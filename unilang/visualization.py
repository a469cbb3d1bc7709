"""
Text reports for normalizations, search history and rule listings.
"""

from .core.state import NormalizationResult, PairNormalizationResult
from .core.tokens import skeleton


def print_normalization(result: NormalizationResult, title: str = "Expression"):
    """Print one side: original, numbered and integer forms, then its operands."""
    print(f"\n{'='*60}")
    print(f"{title}: {result.original_expression}")
    print(f"  skeleton:   {skeleton(result.original_expression)}")
    print(f"  normalized: {result.normalized_expression}")
    print(f"  integer:    {result.integer_expression}")
    print(f"Operands ({len(result.operands)}):")
    for op in result.operands:
        print(f"  #{op.position} {op.original} -> {op.normalized_number}  [{op.type}]")
    print(f"{'='*60}")


def print_pair(pair: PairNormalizationResult):
    print_normalization(pair.left, title="Left")
    print_normalization(pair.right, title="Right")
    shared = sorted({op.original for op in pair.left.operands} &
                    {op.original for op in pair.right.operands})
    if shared:
        print(f"  Shared operands: {', '.join(shared)}")
    print(f"  Canonical: {pair.left.integer_expression} <=> {pair.right.integer_expression}")


def print_history(state):
    """Print the per-batch history of a proof search."""
    print(f"\n{'='*60}")
    print("Search history:")
    print(f"{'='*60}")
    for entry in state.history:
        first, last = entry["rules"]
        outcome = entry["matched"] or "(no match)"
        print(f"  Batch {entry['batch']}: rules {first}-{last}, "
              f"{entry['steps']} steps -> {outcome}")
    if state.halt_reason:
        print(f"  Halted: {state.halt_reason}")


def print_rules(groups: dict, counts: dict):
    """Print rules grouped by category then type, as RuleStore.group() returns."""
    print(f"\n{'='*60}")
    print(f"Rules: {counts['all']} "
          f"(axioms {counts['axiom']}, definitions {counts['definition']}, "
          f"theorems {counts['theorem']})")
    for category, by_type in groups.items():
        print(f"\n[{category}]")
        for rule_type, rules in by_type.items():
            print(f"  {rule_type}:")
            for rule in rules:
                print(f"    {rule.id}: {rule.left_side} <=> {rule.right_side}")
    print(f"{'='*60}")
