"""
Unilang: operand normalization and rule proving for the Universal
Language operator notation.

Expressions are canonicalized by numbering their operands in order of
first appearance. A target equivalence is proved by searching a rule
store for a rule that matches it exactly, reversed, by transitivity, or
by substitution into a context.

Usage:
    python -m unilang normalize ", i \\Pu,"
    python -m unilang prove ", j \\Ps i," ", i \\Ps j,"
    python -m unilang rules --category operators
    python -m unilang extract tex/ theorems.json
"""

from .core.state import (
    Token, NormalizedOperand, NormalizationResult, PairNormalizationResult,
    Rule, RuleFormatError, MatchPosition, ProofStep, ProofResult,
)
from .core.operands import extract_operands
from .core.tokens import tokenize, skeleton
from .core.normalize import normalize_operands, normalize_rule, canonical_pair
from .core.rules import RuleStore, RuleCache, load_rules, save_rules, builtin_axioms
from .core.proof import found_match, print_proof
from .core.engine import (
    CancelToken, ProofState,
    start_proof, proof_batch, iter_proof, run_proof, prove_rule,
)
from .inference import check_inference, InferenceResult
from .theorems import parse_latex, extract_theorems, render_typescript, write_theorems

__all__ = [
    "Token", "NormalizedOperand", "NormalizationResult", "PairNormalizationResult",
    "Rule", "RuleFormatError", "MatchPosition", "ProofStep", "ProofResult",
    "extract_operands", "tokenize", "skeleton",
    "normalize_operands", "normalize_rule", "canonical_pair",
    "RuleStore", "RuleCache", "load_rules", "save_rules", "builtin_axioms",
    "found_match", "print_proof",
    "CancelToken", "ProofState",
    "start_proof", "proof_batch", "iter_proof", "run_proof", "prove_rule",
    "check_inference", "InferenceResult",
    "parse_latex", "extract_theorems", "render_typescript", "write_theorems",
]
