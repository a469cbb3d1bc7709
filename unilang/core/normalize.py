"""
Operand normalization: canonical numbering for structural comparison.

Operands in a rule behave like universally quantified variables. To
compare two expressions at the level of structure, every operand is
instantiated left to right and numbered in order of first appearance:

    ", i \\Ps j,"   ->   ", 1 \\Ps 2,"
    ", j \\Ps i,"   ->   ", 1 \\Ps 2,"

The integer form is the canonical form. It erases which names were used
while keeping their repetition pattern. Because the integers are
themselves literal operands, normalizing an integer form again gives
the same string back.

normalize_rule() shares one numbering across both sides of a rule,
scanning the left side fully before the right side, so an operand that
occurs on both sides gets one number.
"""

from .state import NormalizedOperand, NormalizationResult, PairNormalizationResult
from .operands import extract_operands


def _instantiate(tokens: list, numbers: dict, start: int = 1) -> list:
    """
    Decorate operand tokens with canonical numbers.

    numbers maps operand value -> number and is extended in place;
    start is the 1-based position of the first token.
    """
    operands = []
    for offset, token in enumerate(tokens):
        if token.value not in numbers:
            numbers[token.value] = len(numbers) + 1
        number = numbers[token.value]
        operands.append(NormalizedOperand(
            original=token.value,
            normalized=f"{token.value}_{number}",
            normalized_number=number,
            position=start + offset,
            type=token.type,
        ))
    return operands


def _rewrite(expression: str, tokens: list, replacement: dict) -> str:
    """Replace each token span, rightmost first so offsets stay valid."""
    out = expression
    for token in sorted(tokens, key=lambda t: t.index, reverse=True):
        out = out[:token.index] + replacement[token.value] + out[token.end:]
    return out


def _result(expression, tokens, operands, numbers, operand_map):
    integers = {value: str(n) for value, n in numbers.items()}
    return NormalizationResult(
        original_expression=expression,
        normalized_expression=_rewrite(expression, tokens, operand_map),
        integer_expression=_rewrite(expression, tokens, integers),
        operands=operands,
        operand_map=operand_map,
    )


def normalize_operands(expression: str) -> NormalizationResult:
    """Normalize a single expression."""
    tokens = extract_operands(expression)
    numbers = {}
    operands = _instantiate(tokens, numbers)
    operand_map = {value: f"{value}_{n}" for value, n in numbers.items()}
    return _result(expression, tokens, operands, numbers, operand_map)


def normalize_rule(left: str, right: str) -> PairNormalizationResult:
    """Normalize both sides of a rule with shared operand numbering."""
    left_tokens = extract_operands(left)
    right_tokens = extract_operands(right)

    numbers = {}
    left_operands = _instantiate(left_tokens, numbers)
    right_operands = _instantiate(right_tokens, numbers, start=len(left_tokens) + 1)
    operand_map = {value: f"{value}_{n}" for value, n in numbers.items()}

    return PairNormalizationResult(
        left=_result(left, left_tokens, left_operands, numbers, operand_map),
        right=_result(right, right_tokens, right_operands, numbers, operand_map),
        all_operands=left_operands + right_operands,
    )


def canonical_pair(left: str, right: str) -> tuple:
    """The (left, right) integer forms of a rule."""
    return normalize_rule(left, right).integer_pair
