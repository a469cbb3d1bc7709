"""
Unit and property-based tests for canonical numbering.

Core invariants:
    - Normalization is deterministic
    - Consistently renaming operands leaves the integer form unchanged
    - An operand on both sides of a rule gets one number
    - Numbers are 1..K for K distinct operands, in order of first appearance
    - Normalizing an integer form gives it back unchanged
"""

from hypothesis import given
from hypothesis import strategies as st

from unilang.core.normalize import normalize_operands, normalize_rule, canonical_pair


# ── Generators ───────────────────────────────────────────────────────────────

LETTERS = "abcdefghijkmnpqrstuvwxyz"
UNARY = ["\\Pu", "\\Os", "\\Op", "\\On"]
BINARY = ["\\Od", "\\Ps", "\\Pe", "\\Oe"]


@st.composite
def clauses(draw, names=st.sampled_from(LETTERS)):
    """A list of (operator, operands) clauses over single-letter names."""
    n = draw(st.integers(min_value=1, max_value=5))
    out = []
    for _ in range(n):
        if draw(st.booleans()):
            out.append((draw(st.sampled_from(UNARY)), [draw(names)]))
        else:
            out.append((draw(st.sampled_from(BINARY)), [draw(names), draw(names)]))
    return out


def render(structure, rename=None) -> str:
    rename = rename or {}
    parts = []
    for op, args in structure:
        args = [rename.get(a, a) for a in args]
        parts.append(f"{args[0]} {op}" if len(args) == 1 else f"{args[0]} {op} {args[1]}")
    return ", " + ", ".join(parts) + ","


@st.composite
def renamings(draw):
    """An injective renaming of every letter."""
    targets = draw(st.permutations(LETTERS))
    return dict(zip(LETTERS, targets))


# ── Unit tests ───────────────────────────────────────────────────────────────

class TestNormalizeOperands:
    def test_single_operand(self):
        result = normalize_operands(", i \\Pu,")
        assert [(op.original, op.normalized_number) for op in result.operands] == [("i", 1)]
        assert result.integer_expression == ", 1 \\Pu,"
        assert result.normalized_expression == ", i_1 \\Pu,"
        assert result.operand_map == {"i": "i_1"}

    def test_first_occurrence_order(self):
        result = normalize_operands(", j \\Od i, i \\Os,")
        assert result.integer_expression == ", 1 \\Od 2, 2 \\Os,"
        assert [op.position for op in result.operands] == [1, 2, 3]

    def test_function_and_literal(self):
        result = normalize_operands(", R(i) \\Pe 0, i \\Pu,")
        assert result.integer_expression == ", 1 \\Pe 2, 3 \\Pu,"
        assert [op.type for op in result.operands] == ["function", "literal", "variable"]

    def test_no_operands(self):
        result = normalize_operands(", \\Or,")
        assert result.operands == []
        assert result.integer_expression == ", \\Or,"
        assert not result.is_empty

    def test_blank(self):
        assert normalize_operands("").is_empty
        assert normalize_operands("   ").is_empty

    def test_empty_list_is_not_blank(self):
        result = normalize_operands(",")
        assert result.integer_expression == ","
        assert not result.is_empty

    def test_integer_operands_renumbered(self):
        assert normalize_operands(", 2 \\Od 1,").integer_expression == ", 1 \\Od 2,"


class TestNormalizeRule:
    def test_commuted_sides(self):
        pair = normalize_rule(", i \\Ps j,", ", j \\Ps i,")
        assert pair.left.integer_expression == ", 1 \\Ps 2,"
        assert pair.right.integer_expression == ", 2 \\Ps 1,"

    def test_shared_numbering(self):
        pair = normalize_rule(", i \\Pu,", ", i \\Pu, R(i),")
        assert pair.integer_pair == (", 1 \\Pu,", ", 1 \\Pu, 2,")
        assert pair.left.operand_map is pair.right.operand_map
        assert pair.left.operand_map == {"i": "i_1", "R(i)": "R(i)_2"}

    def test_right_only_operands_continue_numbering(self):
        pair = normalize_rule(",", ", i \\Od m,")
        assert pair.integer_pair == (",", ", 1 \\Od 2,")

    def test_positions_continue_into_right(self):
        pair = normalize_rule(", i \\Pu,", ", j \\Od i,")
        assert [op.position for op in pair.all_operands] == [1, 2, 3]
        assert [op.normalized_number for op in pair.all_operands] == [1, 2, 1]

    def test_canonical_pair(self):
        assert canonical_pair(", x \\Od y,", ", y \\Od x,") == (", 1 \\Od 2,", ", 2 \\Od 1,")


# ── Property-based ───────────────────────────────────────────────────────────

class TestProperties:
    @given(clauses())
    def test_deterministic(self, structure):
        expression = render(structure)
        assert normalize_operands(expression) == normalize_operands(expression)

    @given(clauses(), renamings())
    def test_renaming_invariance(self, structure, rename):
        original = normalize_operands(render(structure))
        renamed = normalize_operands(render(structure, rename))
        assert original.integer_expression == renamed.integer_expression

    @given(clauses(), clauses(), renamings())
    def test_pair_renaming_invariance(self, left, right, rename):
        assert (canonical_pair(render(left), render(right)) ==
                canonical_pair(render(left, rename), render(right, rename)))

    @given(clauses())
    def test_numbers_are_one_to_k(self, structure):
        result = normalize_operands(render(structure))
        distinct = {op.original for op in result.operands}
        assert {op.normalized_number for op in result.operands} == set(range(1, len(distinct) + 1))

    @given(clauses())
    def test_first_operand_is_one(self, structure):
        result = normalize_operands(render(structure))
        assert result.operands[0].normalized_number == 1

    @given(clauses(), clauses())
    def test_shared_operand_one_number(self, left, right):
        pair = normalize_rule(render(left), render(right))
        seen = {}
        for op in pair.all_operands:
            assert seen.setdefault(op.original, op.normalized_number) == op.normalized_number

    @given(clauses())
    def test_idempotent(self, structure):
        once = normalize_operands(render(structure)).integer_expression
        assert normalize_operands(once).integer_expression == once
