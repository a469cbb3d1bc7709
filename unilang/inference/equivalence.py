"""
Whole-side equivalence rules: exact match, commutativity, transitivity.

All three compare canonical integer forms. Each check takes the target
pair and a rule pair and returns a MatchPosition on success, None
otherwise.
"""

from ..core.state import MatchPosition
from ..core.normalize import canonical_pair


_DIGITS = str.maketrans("", "", "0123456789")


def _same_shape(a, b):
    """Equal once operand numbers are dropped."""
    return a.translate(_DIGITS) == b.translate(_DIGITS)


def exact_match(target_left, target_right, rule_left, rule_right):
    """The target is the rule."""
    if target_left == rule_left and target_right == rule_right:
        return MatchPosition(side="both", description="target equals rule")
    return None


def commutativity(target_left, target_right, rule_left, rule_right):
    """
    A <=> B implies B <=> A.

    The reversed target is renumbered before the second comparison: the
    numbering of a rule depends on which side is read first, so a
    reversed rule only lines up with the rule after renormalization.
    """
    if target_left == rule_right and target_right == rule_left:
        return MatchPosition(side="both", description="target is the rule reversed")
    if (_same_shape(target_right, rule_left) and _same_shape(target_left, rule_right)
            and canonical_pair(target_right, target_left) == (rule_left, rule_right)):
        return MatchPosition(side="both",
                             description="target is the rule reversed, renumbered")
    return None


def transitivity(target_left, target_right, rule_left, rule_right):
    """
    A <=> B and B <=> C implies A <=> C, chained through a common side.

    One full target side must equal one full rule side and the remaining
    sides must agree as well. All four pairings are tried in order.
    """
    pairings = (
        ("left", target_left == rule_left and target_right == rule_right,
         "target left chains through rule left"),
        ("left", target_left == rule_right and target_right == rule_left,
         "target left chains through rule right"),
        ("right", target_right == rule_left and target_left == rule_right,
         "target right chains through rule left"),
        ("right", target_right == rule_right and target_left == rule_left,
         "target right chains through rule right"),
    )
    for side, holds, description in pairings:
        if holds:
            return MatchPosition(side=side, description=description)
    return None
