"""
Proof result inspection and display.
"""

from .state import ProofResult, ProofStep, LEFT_TO_RIGHT
from ..inference.check import DESCRIPTIONS


def found_match(result: ProofResult) -> bool:
    """Did the search end on a matching step?"""
    return result.is_true is True and result.matched_step is not None


def substitution_context(step: ProofStep):
    """
    (prefix, suffix) of a substitution match, or None.

    These are the M and N of M.A.N -> M.B.N.
    """
    pos = step.match_position
    if pos is None or pos.prefix is None:
        return None
    return pos.prefix, pos.suffix


def describe_step(step: ProofStep) -> str:
    arrow = "L->R" if step.direction == LEFT_TO_RIGHT else "R->L"
    line = f"Step {step.step} [{arrow}] {step.rule.name}: {step.left} <=> {step.right}"
    if step.is_match:
        line += f"  MATCH ({step.inference_rule})"
    return line


def print_proof(result: ProofResult, show_all: bool = False):
    """Pretty-print a proof result. By default only the matching step."""
    print(f"\n{'='*60}")
    print(f"PROOF SEARCH ({result.status}, {len(result.steps)} steps, "
          f"{result.elapsed_ms:.1f} ms)")
    print(f"{'='*60}")

    steps = result.steps if show_all else [s for s in result.steps if s.is_match]
    for step in steps:
        print(f"  {describe_step(step)}")

    step = result.matched_step
    if step is not None:
        rule = step.rule
        print(f"  rule:    {rule.id} ({rule.type}, {rule.category})")
        print(f"  source:  {rule.left_side} <=> {rule.right_side}")
        print(f"  by:      {DESCRIPTIONS[step.inference_rule]}")
        pos = step.match_position
        if pos is not None:
            print(f"  where:   {pos.description} [{pos.side}]")
        context = substitution_context(step)
        if context is not None:
            print(f"  context: M = {context[0]!r}  N = {context[1]!r}")

    print(f"{'='*60}")
    if result.is_true is True:
        print("  TRUE: a matching rule was found.")
    elif result.is_true is False:
        print("  FALSE: no rule in the store matches.")
    elif result.status == "loading":
        print("  Rule store still loading; no search was run.")
    else:
        print("  Cancelled: no verdict.")
