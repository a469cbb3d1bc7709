"""
The proof search loop.

Walk the rule store in fixed-size batches. Every rule is checked twice
against the normalized target: once as written (left-to-right) and once
reversed (right-to-left). The first match, in rule order with the
forward check first, ends the search.

    idle -> running -> matched | exhausted | cancelled

A run is single-threaded and cooperative. iter_proof() is a generator
that hands control back to the caller every few batches and once the
rules run out. Cancellation is checked before each batch and again after
a batch's checks return; a cancelled batch contributes no steps.
Batch checks may be fanned out over an executor. Results are put back
in rule order before step numbers are assigned, so the outcome is the
same either way.
"""

import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from .state import (
    ProofStep, ProofResult,
    LEFT_TO_RIGHT, RIGHT_TO_LEFT, MATCH, NO_MATCH,
)
from .normalize import normalize_rule
from .rules import RuleStore, RuleCache
from ..inference.check import check_inference


BATCH_SIZE = 10
YIELD_EVERY = 5

IDLE = "idle"
RUNNING = "running"
MATCHED = "matched"
EXHAUSTED = "exhausted"
CANCELLED = "cancelled"
LOADING = "loading"
EMPTY = "empty"

TERMINAL = (MATCHED, EXHAUSTED, CANCELLED, LOADING, EMPTY)


@dataclass
class CancelToken:
    """Cooperative cancellation flag shared by a caller and one search."""
    cancelled: bool = False

    def cancel(self):
        self.cancelled = True


@dataclass
class ProofState:
    """
    Full state of one proof search.

    cursor:   index of the next rule to check
    batches:  number of completed batches
    history:  one entry per completed batch
    """
    start: str
    end: str
    target_left: str = ""
    target_right: str = ""
    steps: list = field(default_factory=list)
    cursor: int = 0
    batches: int = 0
    history: list = field(default_factory=list)
    status: str = IDLE
    is_true: Optional[bool] = None
    halt_reason: str = ""
    started_at: float = 0.0
    elapsed_ms: float = 0.0

    @property
    def halted(self):
        return self.status in TERMINAL

    def to_result(self) -> ProofResult:
        return ProofResult(
            is_true=self.is_true,
            steps=list(self.steps),
            elapsed_ms=self.elapsed_ms,
            status=self.status,
        )


def _halt(state: ProofState, status: str, reason: str, is_true=None):
    state.status = status
    state.halt_reason = reason
    state.is_true = is_true
    if state.started_at:
        state.elapsed_ms = (time.perf_counter() - state.started_at) * 1000.0
    return state


def start_proof(start: str, end: str) -> ProofState:
    """
    Normalize the target pair and enter the running state.

    A target side with an empty canonical form is an immediate negative
    result, not an error.
    """
    state = ProofState(start=start, end=end)
    if not start.strip() or not end.strip():
        return _halt(state, EMPTY, "empty expression", is_true=False)

    target = normalize_rule(start, end)
    state.target_left, state.target_right = target.integer_pair
    if target.left.is_empty or target.right.is_empty:
        return _halt(state, EMPTY, "empty canonical form", is_true=False)

    state.started_at = time.perf_counter()
    state.status = RUNNING
    return state


def check_rule(entry, target_left: str, target_right: str):
    """
    Check one cached rule in both orientations.

    Returns (rule index, [forward step, reverse step]); step numbers
    are assigned later, once the batch is back in rule order.
    """
    steps = []
    for direction, pair in ((LEFT_TO_RIGHT, entry.forward), (RIGHT_TO_LEFT, entry.reverse)):
        rule_left, rule_right = pair.integer_pair
        outcome = check_inference(target_left, target_right, rule_left, rule_right)
        steps.append(ProofStep(
            step=0,
            rule=entry.rule,
            left=rule_left,
            right=rule_right,
            direction=direction,
            result=MATCH if outcome.match else NO_MATCH,
            inference_rule=outcome.inference_rule,
            match_position=outcome.position,
        ))
    return entry.index, steps


def proof_batch(
    state: ProofState,
    cache: RuleCache,
    batch_size: int = BATCH_SIZE,
    cancel_token: Optional[CancelToken] = None,
    executor=None,
    verbose: bool = False,
) -> ProofState:
    """
    Check the next batch of rules.

    Args:
        state:        a running ProofState
        cache:        normalized rules of the store snapshot
        batch_size:   rules per batch
        cancel_token: checked before the batch and after its checks return
        executor:     optional concurrent.futures executor to fan the
                      batch out over; None checks rules in turn
        verbose:      print progress
    """
    if state.halted:
        return state

    if cancel_token is not None and cancel_token.cancelled:
        if verbose:
            print(f"  [cancelled] before batch {state.batches + 1}")
        return _halt(state, CANCELLED, "cancelled")

    if state.cursor >= len(cache):
        return _halt(state, EXHAUSTED, "no rule matched", is_true=False)

    batch = cache[state.cursor:state.cursor + batch_size]
    args = (batch, [state.target_left] * len(batch), [state.target_right] * len(batch))
    if executor is not None:
        checked = list(executor.map(check_rule, *args))
    else:
        checked = list(map(check_rule, *args))
    checked.sort(key=lambda pair: pair[0])

    if cancel_token is not None and cancel_token.cancelled:
        if verbose:
            print(f"  [cancelled] during batch {state.batches + 1}")
        return _halt(state, CANCELLED, "cancelled")

    number = state.batches + 1
    first, last = state.cursor + 1, state.cursor + len(batch)
    if verbose:
        print(f"\n--- Batch {number}: rules {first}-{last} of {len(cache)} ---")

    # Steps join the state only once the whole batch is numbered.
    batch_steps = []
    matched = None
    for _, steps in checked:
        for step in steps:
            step.step = len(state.steps) + len(batch_steps) + 1
            batch_steps.append(step)
            if step.is_match:
                matched = step
                break
        if matched:
            break

    state.steps.extend(batch_steps)
    state.batches = number
    state.cursor += len(batch)
    state.history.append({
        "batch": number,
        "rules": (first, last),
        "steps": len(batch_steps),
        "matched": matched.name if matched else None,
    })

    if matched:
        if verbose:
            print(f"  [match] {matched.name} via {matched.inference_rule}")
        return _halt(state, MATCHED, f"matched {matched.rule.id}", is_true=True)

    if state.cursor >= len(cache):
        if verbose:
            print(f"  [exhausted] {len(state.steps)} steps, no match")
        return _halt(state, EXHAUSTED, "no rule matched", is_true=False)

    if verbose:
        print(f"  Steps: {len(state.steps)} | Remaining rules: {len(cache) - state.cursor}")
    return state


def iter_proof(
    state: ProofState,
    cache: RuleCache,
    batch_size: int = BATCH_SIZE,
    yield_every: int = YIELD_EVERY,
    cancel_token: Optional[CancelToken] = None,
    on_progress: Optional[Callable] = None,
    **kwargs,
):
    """
    Run batches until the search halts, yielding the state every
    yield_every batches, when the rules run out, and at the end.

    on_progress(state) is called after every completed batch with the
    steps so far.
    """
    since_yield = 0
    while not state.halted:
        done = state.batches
        proof_batch(state, cache, batch_size=batch_size,
                    cancel_token=cancel_token, **kwargs)
        if state.batches > done:
            since_yield += 1
            if on_progress:
                on_progress(state)
        if state.halted or since_yield >= yield_every or state.cursor >= len(cache):
            since_yield = 0
            yield state


def run_proof(state: ProofState, cache: RuleCache, **kwargs) -> ProofState:
    """Drive iter_proof to a terminal state."""
    for _ in iter_proof(state, cache, **kwargs):
        pass
    return state


def prove_rule(
    start: str,
    end: str,
    store,
    on_progress: Optional[Callable] = None,
    cancel_token: Optional[CancelToken] = None,
    cache: Optional[RuleCache] = None,
    **kwargs,
) -> ProofResult:
    """
    Decide whether start <=> end follows from a rule in the store.

    Args:
        start, end:   target expressions
        store:        a RuleStore, or any sequence of Rule
        on_progress:  on_progress(state) after every batch
        cancel_token: CancelToken; once cancelled the run stops with no verdict
        cache:        a prebuilt RuleCache; defaults to the store's own
        **kwargs:     batch_size, yield_every, executor, verbose

    Theorems not yet loaded are loaded first. A store whose theorems are
    still loading yields status "loading" and no verdict rather than a
    silent search over a partial rule set.
    """
    if not isinstance(store, RuleStore):
        store = RuleStore(store)
    if store.is_loading:
        return ProofResult(is_true=None, steps=[], elapsed_ms=0.0, status=LOADING)
    if not store.theorems_loaded:
        store.load_theorems()

    if cache is None:
        cache = store.cache
    state = start_proof(start, end)
    if not state.halted:
        run_proof(state, cache, on_progress=on_progress,
                  cancel_token=cancel_token, **kwargs)
    return state.to_result()
