"""
Operand extraction: find the data an expression operates on.

Operands are what the operators act upon, as opposed to the operator
escapes themselves:

    function   R(i), Rc(i;j), Rcpo(r;m), Rcpm(r;m), IsCpo(r;m), Cpo(r),
               Del(j), Ins(t;j), if(...)
    variable   i_1, c_12 (subscripted) or a single lowercase letter
    literal    a bare integer

Every pattern proposes candidate spans tagged with a priority. One
interval merge keeps the highest-priority (then longest) non-overlapping
cover and returns it in source order. Call arguments are captured
verbatim, without nested balancing. An unterminated call simply fails
to match and its contents fall through to the other patterns; extraction
never raises.
"""

import re

from .state import Token


FUNCTION = 0
SUBSCRIPTED = 1
LETTER = 2
LITERAL = 3

FUNCTION_PATTERN = re.compile(
    r"Rc?\([^)]*\)"
    r"|Rcpo\([^;)]*;[^)]*\)"
    r"|Rcpm\([^;)]*;[^)]*\)"
    r"|IsCpo\([^;)]*;[^)]*\)"
    r"|Cpo\([^)]*\)"
    r"|Del\([^)]*\)"
    r"|Ins\([^,)]*;[^)]*\)"
    r"|if\([^)]*\)"
)
SUBSCRIPT_PATTERN = re.compile(r"\b[a-z][a-z0-9]*_\d+\b", re.ASCII)
LETTER_PATTERN = re.compile(r"\b[a-z]\b", re.ASCII)
NUMBER_PATTERN = re.compile(r"\b\d+\b", re.ASCII)

# A letter glued to an operator escape is part of the operator name.
OPERATOR_CONTEXT = re.compile(r"\\O[a-z]|\\B[a-z]+")


def _is_operator_letter(expression: str, index: int) -> bool:
    if index > 0 and expression[index - 1] == "\\":
        return True
    context = expression[max(0, index - 3):index + 1]
    return bool(OPERATOR_CONTEXT.search(context))


def candidate_spans(expression: str) -> list:
    """
    Every span any operand pattern proposes, as (priority, Token) pairs.
    Spans may overlap; merge_spans() resolves them.
    """
    spans = []
    for m in FUNCTION_PATTERN.finditer(expression):
        spans.append((FUNCTION, Token(m.group(), m.start(), "function")))
    for m in SUBSCRIPT_PATTERN.finditer(expression):
        spans.append((SUBSCRIPTED, Token(m.group(), m.start(), "variable")))
    for m in LETTER_PATTERN.finditer(expression):
        if _is_operator_letter(expression, m.start()):
            continue
        spans.append((LETTER, Token(m.group(), m.start(), "variable")))
    for m in NUMBER_PATTERN.finditer(expression):
        if expression[max(0, m.start() - 2):m.start()].endswith("_"):
            continue  # digit suffix of a subscripted variable
        spans.append((LITERAL, Token(m.group(), m.start(), "literal")))
    return spans


def merge_spans(spans: list) -> list:
    """
    Interval merge: visit candidates by priority, longer first, then by
    position, and keep each one that overlaps nothing already kept.
    Returns the kept tokens sorted by source position.
    """
    ordered = sorted(spans, key=lambda s: (s[0], -len(s[1].value), s[1].index))
    kept = []
    for _, token in ordered:
        if any(token.index < k.end and k.index < token.end for k in kept):
            continue
        kept.append(token)
    kept.sort(key=lambda t: t.index)
    return kept


def extract_operands(expression: str) -> list:
    """Operand tokens of an expression, left to right, non-overlapping."""
    return merge_spans(candidate_spans(expression))
