"""
Equivalent substitution: A <=> B allows M.A.N -> M.B.N.

One target side must contain a rule side as a contiguous substring, and
swapping that occurrence for the paired rule side must reproduce the
other target side exactly. Four directions are tried, in order:

    1. target left  contains rule left,  rewritten with rule right
    2. target left  contains rule right, rewritten with rule left
    3. target right contains rule left,  rewritten with rule right
    4. target right contains rule right, rewritten with rule left

Within a direction every occurrence is tried left to right. A rule side
that is an empty list (nothing but commas) occurs everywhere and never
substitutes.
"""

from ..core.state import MatchPosition


def is_blank(side: str) -> bool:
    return not side.replace(",", "").strip()


def occurrences(text: str, part: str):
    """Start offsets of part in text, overlapping ones included."""
    i = text.find(part)
    while i != -1:
        yield i
        i = text.find(part, i + 1)


def substitute_at(container: str, found: str, replacement: str, expected: str):
    """
    First (position, prefix, suffix) where replacing found in container
    with replacement yields expected, or None.
    """
    if is_blank(found):
        return None
    for i in occurrences(container, found):
        prefix = container[:i]
        suffix = container[i + len(found):]
        if prefix + replacement + suffix == expected:
            return i, prefix, suffix
    return None


def substitution(target_left, target_right, rule_left, rule_right):
    directions = (
        ("left", target_left, rule_left, rule_right, target_right,
         "rule left found in target left"),
        ("left", target_left, rule_right, rule_left, target_right,
         "rule right found in target left"),
        ("right", target_right, rule_left, rule_right, target_left,
         "rule left found in target right"),
        ("right", target_right, rule_right, rule_left, target_left,
         "rule right found in target right"),
    )
    for side, container, found, replacement, expected, description in directions:
        hit = substitute_at(container, found, replacement, expected)
        if hit is not None:
            position, prefix, suffix = hit
            return MatchPosition(side=side, description=description,
                                 position=position, prefix=prefix, suffix=suffix)
    return None
