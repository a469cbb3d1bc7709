"""
Rule store and normalized-rule cache.

The store is an ordered, read-only sequence of rules: the built-in
axioms first, then theorems, which are loaded lazily through a loader
callable. Nothing in the core ever mutates a rule.

Every search needs each rule's canonical forms in both orientations.
RuleCache computes them once per store snapshot. The store owns its
cache and drops it whenever its contents change (theorem load, reload).
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from .state import Rule, PairNormalizationResult
from .normalize import normalize_rule


DATA_DIR = Path(__file__).resolve().parent.parent / "data"
AXIOMS_PATH = DATA_DIR / "axioms.json"

CATEGORIES = {
    "operators":     "Rules governing operator behavior and swapping",
    "relationships": "Node comparison and relationship rules",
    "propositions":  "Logical propositions and branch functions",
    "induction":     "Induction principles for proving properties",
    "arithmetic":    "Number operations and properties",
    "logic":         "Fundamental logical rules and equivalence",
}


def load_rules(path) -> list:
    """Read a JSON list of rule records."""
    with open(path, encoding="utf-8") as f:
        return [Rule.from_dict(d) for d in json.load(f)]


def save_rules(rules, path):
    with open(path, "w", encoding="utf-8") as f:
        json.dump([r.to_dict() for r in rules], f, indent=2, ensure_ascii=False)
        f.write("\n")


def builtin_axioms() -> list:
    """The axiom set shipped with the package."""
    return load_rules(AXIOMS_PATH)


@dataclass(frozen=True)
class NormalizedRule:
    """A rule with its canonical forms in both orientations."""
    index: int
    rule: Rule
    forward: PairNormalizationResult
    reverse: PairNormalizationResult


class RuleCache:
    """Canonical forms of every rule in one store snapshot."""

    def __init__(self, rules):
        self.entries = tuple(
            NormalizedRule(
                index=i,
                rule=rule,
                forward=normalize_rule(rule.left_side, rule.right_side),
                reverse=normalize_rule(rule.right_side, rule.left_side),
            )
            for i, rule in enumerate(rules)
        )

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __getitem__(self, key):
        return self.entries[key]


class RuleStore:
    """
    Ordered rule collection: axioms, then lazily loaded theorems.

    is_loading is True while the theorem loader runs. A search must not
    run against a store in that state. Listing (iteration, search, find)
    covers what is loaded so far; the cache and prove_rule load pending
    theorems first.
    """

    def __init__(self, axioms=(), theorem_loader: Optional[Callable] = None):
        self._axioms = tuple(axioms)
        self._theorems = ()
        self._theorem_loader = theorem_loader
        self._cache = None
        self.is_loading = False
        self.theorems_loaded = theorem_loader is None

    @classmethod
    def from_files(cls, axioms_path=None, theorems_path=None, lazy=True):
        """
        Build a store from JSON rule files. With no axioms_path the
        built-in axioms are used. Theorems load on first demand unless
        lazy is False.
        """
        axioms = load_rules(axioms_path) if axioms_path else builtin_axioms()
        loader = (lambda: load_rules(theorems_path)) if theorems_path else None
        store = cls(axioms, theorem_loader=loader)
        if not lazy:
            store.load_theorems()
        return store

    @property
    def axioms(self):
        return self._axioms

    @property
    def theorems(self):
        return self._theorems

    @property
    def rules(self):
        return self._axioms + self._theorems

    def __len__(self):
        return len(self._axioms) + len(self._theorems)

    def __iter__(self):
        return iter(self.rules)

    def load_theorems(self):
        """Run the theorem loader once. Later calls are no-ops."""
        if self.theorems_loaded or self.is_loading:
            return self._theorems
        self.is_loading = True
        try:
            theorems = tuple(self._theorem_loader())
        finally:
            self.is_loading = False
        self._theorems = theorems
        self.theorems_loaded = True
        self._cache = None
        return self._theorems

    def reload(self, axioms=None):
        """Drop theorems and the cache; optionally replace the axioms."""
        if axioms is not None:
            self._axioms = tuple(axioms)
        self._theorems = ()
        self.theorems_loaded = self._theorem_loader is None
        self._cache = None

    @property
    def cache(self) -> RuleCache:
        """Normalized rules of the full store. Loads pending theorems first."""
        if not self.theorems_loaded and not self.is_loading:
            self.load_theorems()
        if self._cache is None:
            self._cache = RuleCache(self.rules)
        return self._cache

    def find(self, rule_id: str):
        return next((r for r in self.rules if r.id == rule_id), None)

    def search(self, query: str = "", type: Optional[str] = None,
               category: Optional[str] = None) -> list:
        """Case-insensitive text search over names, descriptions and sides."""
        q = query.lower()
        results = []
        for rule in self.rules:
            if type and rule.type != type:
                continue
            if category and rule.category != category:
                continue
            if q and not any(q in text.lower() for text in (
                    rule.name, rule.description, rule.left_side, rule.right_side)):
                continue
            results.append(rule)
        return results

    def group(self, rules=None) -> dict:
        """{category: {type: [rules]}} preserving store order."""
        groups = {}
        for rule in self.rules if rules is None else rules:
            groups.setdefault(rule.category, {}).setdefault(rule.type, []).append(rule)
        return groups

    def counts(self, rules=None) -> dict:
        rules = self.rules if rules is None else rules
        counts = {"all": len(rules), "axiom": 0, "definition": 0, "theorem": 0}
        for rule in rules:
            counts[rule.type] = counts.get(rule.type, 0) + 1
        return counts
