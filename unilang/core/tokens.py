"""
Tokenizer for the operator notation.

Splits an expression into operands (via the operand extractor), operator
escapes, branch escapes and punctuation. Whitespace is dropped. Anything
else (words such as "code" after \\Tc, stray symbols) becomes a text
token, so tokenizing never fails.
"""

import re

from .state import Token
from .operands import extract_operands


BINARY = "binary"
UNARY = "unary"
NULLARY = "nullary"
RELATIONSHIP = "relationship"
NEGATED_RELATIONSHIP = "negated relationship"
BRANCH = "branch"

OPERATORS = {
    "\\Oa": BINARY, "\\Ob": BINARY, "\\Oc": BINARY,
    "\\Od": BINARY, "\\Oe": BINARY,
    "\\Og": UNARY, "\\Ot": UNARY, "\\On": UNARY, "\\Op": UNARY,
    "\\Os": UNARY, "\\Tc": UNARY, "\\Tt": UNARY,
    "\\Pu": UNARY, "\\nPu": UNARY,
    "\\Or": NULLARY,
    "\\Pb": RELATIONSHIP, "\\Pc": RELATIONSHIP, "\\Pe": RELATIONSHIP,
    "\\Pn": RELATIONSHIP, "\\Pne": RELATIONSHIP, "\\Pnl": RELATIONSHIP,
    "\\Pnm": RELATIONSHIP, "\\Pp": RELATIONSHIP, "\\Ps": RELATIONSHIP,
    "\\nPb": NEGATED_RELATIONSHIP, "\\nPc": NEGATED_RELATIONSHIP,
    "\\nPe": NEGATED_RELATIONSHIP, "\\nPn": NEGATED_RELATIONSHIP,
    "\\nPne": NEGATED_RELATIONSHIP, "\\nPnl": NEGATED_RELATIONSHIP,
    "\\nPnm": NEGATED_RELATIONSHIP, "\\nPp": NEGATED_RELATIONSHIP,
    "\\nPs": NEGATED_RELATIONSHIP,
    "\\Bb": BRANCH, "\\Blb": BRANCH, "\\Br": BRANCH,
    "\\Bls": BRANCH, "\\Brs": BRANCH,
}

PUNCTUATION = {
    ",": "comma", ";": "semicolon",
    "{": "lbrace", "}": "rbrace",
    "(": "lparen", ")": "rparen",
}

LEXEME = re.compile(r"\s+|\\[A-Za-z]+|[,;{}()]|[^\s\\,;{}()]+|\\")


def operator_kind(name: str):
    """Arity class of an operator escape, or None if it is not catalogued."""
    return OPERATORS.get(name)


def _scan(text: str, offset: int) -> list:
    tokens = []
    for m in LEXEME.finditer(text):
        value = m.group()
        if value.isspace():
            continue
        if value in PUNCTUATION:
            kind = PUNCTUATION[value]
        elif value.startswith("\\") and len(value) > 1:
            kind = "branch" if OPERATORS.get(value) == BRANCH else "operator"
        else:
            kind = "text"
        tokens.append(Token(value, offset + m.start(), kind))
    return tokens


def tokenize(expression: str) -> list:
    """All tokens of an expression in source order."""
    tokens = []
    cursor = 0
    for operand in extract_operands(expression):
        tokens.extend(_scan(expression[cursor:operand.index], cursor))
        tokens.append(operand)
        cursor = operand.end
    tokens.extend(_scan(expression[cursor:], cursor))
    return tokens


def skeleton(expression: str, placeholder: str = "#") -> str:
    """The expression with every operand replaced by placeholder."""
    out = expression
    for operand in reversed(extract_operands(expression)):
        out = out[:operand.index] + placeholder + out[operand.end:]
    return out
