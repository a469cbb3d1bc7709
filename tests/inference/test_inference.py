"""
Tests for the inference rules and the decision procedure.

Core claims:
    - Rules are tried in priority order and the first match wins
    - Commutativity holds for any rule against its own reversal
    - Substitution reports the M and N of M.A.N -> M.B.N
    - A blank rule side never substitutes
"""

from hypothesis import given
from hypothesis import strategies as st

from unilang.core.normalize import canonical_pair
from unilang.inference import (
    check_inference, exact_match, commutativity, transitivity, substitution,
    EXACT_MATCH, COMMUTATIVITY, SUBSTITUTION,
)
from unilang.inference.substitute import substitute_at, occurrences, is_blank


# ── Generators ───────────────────────────────────────────────────────────────

UNARY = ["\\Pu", "\\Os"]
BINARY = ["\\Od", "\\Ps"]


@st.composite
def expressions(draw):
    names = st.sampled_from("ijkmnrst")
    parts = []
    for _ in range(draw(st.integers(min_value=1, max_value=4))):
        if draw(st.booleans()):
            parts.append(f"{draw(names)} {draw(st.sampled_from(UNARY))}")
        else:
            parts.append(f"{draw(names)} {draw(st.sampled_from(BINARY))} {draw(names)}")
    return ", " + ", ".join(parts) + ","


# ── Whole-side rules ─────────────────────────────────────────────────────────

class TestExactMatch:
    def test_identical(self):
        pos = exact_match(", 1 \\Pu,", ", 1 \\Os,", ", 1 \\Pu,", ", 1 \\Os,")
        assert pos.side == "both"

    def test_one_side_differs(self):
        assert exact_match(", 1 \\Pu,", ", 1 \\Os,", ", 1 \\Pu,", ", 1 \\On,") is None


class TestCommutativity:
    def test_raw_reversal(self):
        pos = commutativity(", 1 \\Os,", ", 1 \\Pu,", ", 1 \\Pu,", ", 1 \\Os,")
        assert pos.description == "target is the rule reversed"

    def test_reversal_after_renumbering(self):
        rule = canonical_pair(", i \\Od j,", ", j \\Pu,")
        target = canonical_pair(", j \\Pu,", ", i \\Od j,")
        assert rule == (", 1 \\Od 2,", ", 2 \\Pu,")
        assert target == (", 1 \\Pu,", ", 2 \\Od 1,")
        pos = commutativity(*target, *rule)
        assert pos.description == "target is the rule reversed, renumbered"

    def test_symmetric_rule_against_itself(self):
        left, right = canonical_pair(", i \\Ps j,", ", j \\Ps i,")
        result = check_inference(left, right, left, right)
        assert result.match
        assert commutativity(left, right, left, right) is not None

    def test_different_shape(self):
        assert commutativity(", 1 \\Os,", ", 1 \\Pu,", ", 1 \\Pu,", ", 1 \\On,") is None

    @given(expressions(), expressions())
    def test_any_rule_commutes(self, a, b):
        rule = canonical_pair(a, b)
        target = canonical_pair(b, a)
        assert commutativity(*target, *rule) is not None


class TestTransitivity:
    def test_left_through_left(self):
        pos = transitivity(", 1 \\Pu,", ", 1 \\Os,", ", 1 \\Pu,", ", 1 \\Os,")
        assert (pos.side, pos.description) == ("left", "target left chains through rule left")

    def test_left_through_right(self):
        pos = transitivity(", 1 \\Os,", ", 1 \\Pu,", ", 1 \\Pu,", ", 1 \\Os,")
        assert (pos.side, pos.description) == ("left", "target left chains through rule right")

    def test_no_chain(self):
        assert transitivity(", 1 \\Os,", ", 1 \\Pu,", ", 1 \\Os,", ", 1 \\On,") is None


# ── Substitution ─────────────────────────────────────────────────────────────

class TestSubstitution:
    def test_whole_prefix(self):
        pos = substitution(", 1 \\Os, 2 \\Op,", ", 1 \\On, 2 \\Op,",
                           ", 1 \\Os,", ", 1 \\On,")
        assert pos.side == "left"
        assert pos.description == "rule left found in target left"
        assert (pos.position, pos.prefix, pos.suffix) == (0, "", " 2 \\Op,")

    def test_in_the_middle(self):
        pos = substitution(", 3 \\Pu, 1 \\Os, 2 \\Op,", ", 3 \\Pu, 1 \\On, 2 \\Op,",
                           ", 1 \\Os,", ", 1 \\On,")
        assert (pos.position, pos.prefix, pos.suffix) == (7, ", 3 \\Pu", " 2 \\Op,")

    def test_rule_right_found(self):
        pos = substitution(", 1 \\On, 2 \\Op,", ", 1 \\Os, 2 \\Op,",
                           ", 1 \\Os,", ", 1 \\On,")
        assert pos.description == "rule right found in target left"

    def test_later_occurrence(self):
        pos = substitution(", 1 \\Os, 1 \\Os,", ", 1 \\Os, 1 \\On,",
                           ", 1 \\Os,", ", 1 \\On,")
        assert (pos.position, pos.prefix, pos.suffix) == (7, ", 1 \\Os", "")

    def test_replacement_must_reproduce_other_side(self):
        assert substitution(", 1 \\Os, 2 \\Op,", ", 1 \\On, 2 \\Pu,",
                            ", 1 \\Os,", ", 1 \\On,") is None

    def test_blank_side_never_substitutes(self):
        assert is_blank(",")
        assert is_blank(", ,")
        assert substitute_at(", 1 \\Pu,", ",", ", 1 \\Os,", ", 1 \\Os, 1 \\Pu,") is None

    @given(expressions(), expressions(),
           st.sampled_from(["", ", 8 \\Pu", ", 8 \\Od 9"]),
           st.sampled_from(["", " 8 \\Os,", " 8 \\Pe 9,"]))
    def test_context_rebuilds_both_sides(self, a, b, m, n):
        target_left, target_right = m + a + n, m + b + n
        pos = substitution(target_left, target_right, a, b)
        assert pos is not None
        container, found, replacement, expected = {
            "rule left found in target left": (target_left, a, b, target_right),
            "rule right found in target left": (target_left, b, a, target_right),
            "rule left found in target right": (target_right, a, b, target_left),
            "rule right found in target right": (target_right, b, a, target_left),
        }[pos.description]
        assert pos.prefix + found + pos.suffix == container
        assert pos.prefix + replacement + pos.suffix == expected
        assert container[:pos.position] == pos.prefix

    def test_overlapping_occurrences(self):
        assert list(occurrences("aaa", "aa")) == [0, 1]
        assert list(occurrences("abc", "x")) == []


# ── Decision procedure ───────────────────────────────────────────────────────

class TestCheckInference:
    def test_exact_wins(self):
        result = check_inference(", 1 \\Pu,", ", 1 \\Os,", ", 1 \\Pu,", ", 1 \\Os,")
        assert result.match
        assert result.inference_rule == EXACT_MATCH

    def test_commutativity_before_transitivity(self):
        result = check_inference(", 1 \\Os,", ", 1 \\Pu,", ", 1 \\Pu,", ", 1 \\Os,")
        assert result.inference_rule == COMMUTATIVITY

    def test_substitution(self):
        result = check_inference(", 1 \\Os, 2 \\Op,", ", 1 \\On, 2 \\Op,",
                                 ", 1 \\Os,", ", 1 \\On,")
        assert result.inference_rule == SUBSTITUTION
        assert result.position.prefix == ""

    def test_no_match(self):
        result = check_inference(", 1 \\Pu,", ", 1 \\Os,", ", 1 \\Od 2,", ", 2 \\Od 1,")
        assert not result.match
        assert result.inference_rule is None
        assert result.position is None
