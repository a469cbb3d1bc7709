"""
Core data structures: Token, NormalizedOperand, NormalizationResult,
Rule, MatchPosition, ProofStep, ProofResult.

These are the atoms of the whole system. Nothing in here depends on
inference rules, the rule store, or the search loop.

Expressions are plain strings in the operator notation:
    Operators:  backslash escapes        -- "\\Pu", "\\Od", "\\nPs"
    Branches:   escape + three groups    -- "\\Bb{i \\Oe j}{,}{,}"
    Operands:   variables, calls, ints   -- "i", "c_1", "R(i)", "0"

    Rule sides are comma-delimited lists wrapped in commas:
        ", i \\Pu,"        ", i \\Od m, m \\Os,"
"""

from dataclasses import dataclass, field
from typing import Optional


OPERAND_TYPES = ("variable", "node", "function", "literal")
RULE_TYPES = ("axiom", "definition", "theorem")

LEFT_TO_RIGHT = "left-to-right"
RIGHT_TO_LEFT = "right-to-left"

MATCH = "match"
NO_MATCH = "no-match"
PENDING = "pending"


class RuleFormatError(ValueError):
    """A rule record is missing a field or carries an unknown type."""


@dataclass
class Token:
    """
    One lexical span of an expression.

    index is the offset of the first character in the source string.
    Operand tokens carry one of OPERAND_TYPES; the tokenizer adds
    operator, branch and punctuation types.
    """
    value: str
    index: int
    type: str

    @property
    def end(self):
        return self.index + len(self.value)

    @property
    def is_operand(self):
        return self.type in OPERAND_TYPES

    def __repr__(self):
        return f"Token({self.type}:{self.value!r}@{self.index})"


@dataclass
class NormalizedOperand:
    """One operand occurrence decorated with its canonical number."""
    original: str
    normalized: str
    normalized_number: int
    position: int
    type: str

    def __repr__(self):
        return f"NormalizedOperand({self.original!r} -> {self.normalized_number})"


@dataclass
class NormalizationResult:
    """One side of a normalization: the rewritten forms and its operands."""
    original_expression: str
    normalized_expression: str
    integer_expression: str
    operands: list = field(default_factory=list)
    operand_map: dict = field(default_factory=dict)

    @property
    def is_empty(self):
        """
        True when the canonical form is blank. A lone "," is the empty
        list, which is a real expression (creation rules start from it).
        """
        return not self.integer_expression.strip()


@dataclass
class PairNormalizationResult:
    """Both sides of a rule normalized with one shared numbering."""
    left: NormalizationResult
    right: NormalizationResult
    all_operands: list = field(default_factory=list)

    @property
    def integer_pair(self):
        return self.left.integer_expression, self.right.integer_expression


@dataclass(frozen=True)
class Rule:
    """
    A stored equivalence between two expressions.

    Rules are read-only facts. to_dict/from_dict use the camelCase keys
    of the rule record format (leftSide, rightSide) so that files shared
    with other tools round-trip unchanged.
    """
    id: str
    name: str
    type: str
    category: str
    description: str
    left_side: str
    right_side: str
    section: Optional[str] = None
    subsection: Optional[str] = None

    def to_dict(self):
        d = {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "category": self.category,
            "description": self.description,
            "leftSide": self.left_side,
            "rightSide": self.right_side,
        }
        if self.section:
            d["section"] = self.section
        if self.subsection:
            d["subsection"] = self.subsection
        return d

    @classmethod
    def from_dict(cls, d):
        missing = [k for k in ("id", "name", "type", "category", "description",
                               "leftSide", "rightSide") if k not in d]
        if missing:
            raise RuleFormatError(
                f"rule {d.get('id', '?')!r} is missing {', '.join(missing)}")
        if d["type"] not in RULE_TYPES:
            raise RuleFormatError(
                f"rule {d['id']!r} has unknown type {d['type']!r}")
        return cls(
            id=d["id"], name=d["name"], type=d["type"],
            category=d["category"], description=d["description"],
            left_side=d["leftSide"], right_side=d["rightSide"],
            section=d.get("section") or None,
            subsection=d.get("subsection") or None,
        )

    def __repr__(self):
        return f"Rule({self.id}: {self.left_side} <=> {self.right_side})"


@dataclass
class MatchPosition:
    """
    Where and how a match occurred.

    For a substitution, prefix and suffix are the M and N of M.A.N:
    the matched target side is prefix + A + suffix and the other target
    side is prefix + B + suffix.
    """
    side: str
    description: str
    position: Optional[int] = None
    prefix: Optional[str] = None
    suffix: Optional[str] = None


@dataclass
class ProofStep:
    """One evaluation of one rule, in one direction, against the target."""
    step: int
    rule: Rule
    left: str
    right: str
    direction: str
    result: str = PENDING
    inference_rule: Optional[str] = None
    match_position: Optional[MatchPosition] = None

    @property
    def is_match(self):
        return self.result == MATCH

    @property
    def name(self):
        arrow = "L->R" if self.direction == LEFT_TO_RIGHT else "R->L"
        return f"#{self.step} [{arrow}] {self.rule.name}"

    def __repr__(self):
        return f"ProofStep({self.name}: {self.result})"


@dataclass
class ProofResult:
    """
    Outcome of one proof search run.

    is_true is None when the run was cancelled or the rule store was
    still loading; status says which.
    """
    is_true: Optional[bool]
    steps: list = field(default_factory=list)
    elapsed_ms: float = 0.0
    status: str = "exhausted"

    @property
    def matched_step(self):
        return next((s for s in self.steps if s.is_match), None)
