from .state import (
    Token, NormalizedOperand, NormalizationResult, PairNormalizationResult,
    Rule, RuleFormatError, MatchPosition, ProofStep, ProofResult,
)
from .operands import extract_operands
from .tokens import tokenize, skeleton, operator_kind, OPERATORS
from .normalize import normalize_operands, normalize_rule, canonical_pair
from .rules import RuleStore, RuleCache, load_rules, save_rules, builtin_axioms
from .proof import found_match, print_proof
from .engine import (
    CancelToken, ProofState,
    start_proof, proof_batch, iter_proof, run_proof, prove_rule,
)

__all__ = [
    "Token", "NormalizedOperand", "NormalizationResult", "PairNormalizationResult",
    "Rule", "RuleFormatError", "MatchPosition", "ProofStep", "ProofResult",
    "extract_operands", "tokenize", "skeleton", "operator_kind", "OPERATORS",
    "normalize_operands", "normalize_rule", "canonical_pair",
    "RuleStore", "RuleCache", "load_rules", "save_rules", "builtin_axioms",
    "found_match", "print_proof",
    "CancelToken", "ProofState",
    "start_proof", "proof_batch", "iter_proof", "run_proof", "prove_rule",
]
