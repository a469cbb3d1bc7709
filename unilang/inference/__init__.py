from .check import (
    check_inference, InferenceResult, INFERENCE_RULES,
    EXACT_MATCH, COMMUTATIVITY, TRANSITIVITY, SUBSTITUTION,
)
from .equivalence import exact_match, commutativity, transitivity
from .substitute import substitution

__all__ = [
    "check_inference", "InferenceResult", "INFERENCE_RULES",
    "EXACT_MATCH", "COMMUTATIVITY", "TRANSITIVITY", "SUBSTITUTION",
    "exact_match", "commutativity", "transitivity", "substitution",
]
