"""
The inference decision procedure.

Given a canonical target pair and a canonical rule pair, try each
inference rule in fixed priority order and stop at the first match.
Pure: no state, no side effects.
"""

from dataclasses import dataclass
from typing import Optional

from ..core.state import MatchPosition
from .equivalence import exact_match, commutativity, transitivity
from .substitute import substitution


EXACT_MATCH = "Exact Match"
COMMUTATIVITY = "Equivalent Commutativity"
TRANSITIVITY = "Equivalent Transitivity"
SUBSTITUTION = "Equivalent Substitution"

INFERENCE_RULES = (
    (EXACT_MATCH, exact_match),
    (COMMUTATIVITY, commutativity),
    (TRANSITIVITY, transitivity),
    (SUBSTITUTION, substitution),
)

DESCRIPTIONS = {
    EXACT_MATCH:   "Target and rule are identical",
    COMMUTATIVITY: "A <=> B implies B <=> A",
    TRANSITIVITY:  "A <=> B and B <=> C implies A <=> C",
    SUBSTITUTION:  "A <=> B allows replacing A with B in any context M.A.N -> M.B.N",
}


@dataclass
class InferenceResult:
    match: bool
    inference_rule: Optional[str] = None
    position: Optional[MatchPosition] = None


def check_inference(target_left: str, target_right: str,
                    rule_left: str, rule_right: str) -> InferenceResult:
    for name, check in INFERENCE_RULES:
        position = check(target_left, target_right, rule_left, rule_right)
        if position is not None:
            return InferenceResult(match=True, inference_rule=name, position=position)
    return InferenceResult(match=False)
