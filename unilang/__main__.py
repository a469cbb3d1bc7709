"""
CLI entry point. Run as: python -m unilang <command> ...

    python -m unilang normalize ", i \\Pu,"
    python -m unilang normalize ", i \\Ps j," ", j \\Ps i,"
    python -m unilang prove ", j \\Ps i," ", i \\Ps j,"
    python -m unilang rules --category logic --query Oe
    python -m unilang extract tex/ theorems.json --format json
"""

import argparse
import sys

from .core.normalize import normalize_operands, normalize_rule
from .core.rules import RuleStore, CATEGORIES
from .core.engine import (
    CancelToken, start_proof, run_proof, BATCH_SIZE, YIELD_EVERY,
)
from .core.proof import print_proof
from .theorems import extract_theorems, write_theorems
from .visualization import print_normalization, print_pair, print_history, print_rules


def build_parser():
    parser = argparse.ArgumentParser(
        prog="unilang",
        description="Universal Language expression normalizer and rule prover",
    )
    parser.add_argument("--rules", type=str, default=None,
                        help="JSON rule file to use instead of the built-in axioms")
    parser.add_argument("--theorems", type=str, default=None,
                        help="JSON theorem file appended after the axioms")
    parser.add_argument("--quiet", action="store_true", help="Less output")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("normalize", help="Show canonical forms of one or two expressions")
    p.add_argument("expression")
    p.add_argument("right", nargs="?", default=None,
                   help="Second expression, normalized with shared numbering")

    p = sub.add_parser("prove", help="Search the rule store for START <=> END")
    p.add_argument("start")
    p.add_argument("end")
    p.add_argument("--batch-size", type=int, default=BATCH_SIZE)
    p.add_argument("--yield-every", type=int, default=YIELD_EVERY)
    p.add_argument("--all-steps", action="store_true", help="Print every step checked")

    p = sub.add_parser("rules", help="List and filter the rule store")
    p.add_argument("--query", type=str, default="")
    p.add_argument("--type", choices=["axiom", "definition", "theorem"], default=None)
    p.add_argument("--category", choices=sorted(CATEGORIES), default=None)

    p = sub.add_parser("extract", help="Extract theorems from .tex files")
    p.add_argument("tex_dir")
    p.add_argument("output")
    p.add_argument("--format", choices=["json", "ts"], default="json")
    return parser


def load_store(args) -> RuleStore:
    return RuleStore.from_files(args.rules, args.theorems, lazy=False)


def cmd_normalize(args):
    if args.right is None:
        print_normalization(normalize_operands(args.expression))
    else:
        print_pair(normalize_rule(args.expression, args.right))
    return 0


def cmd_prove(args):
    store = load_store(args)
    verbose = not args.quiet
    if verbose:
        print(f"Rules: {len(store)} | Target: {args.start} <=> {args.end}")

    token = CancelToken()
    state = start_proof(args.start, args.end)
    options = dict(batch_size=args.batch_size, yield_every=args.yield_every,
                   cancel_token=token, verbose=verbose)
    try:
        run_proof(state, store.cache, **options)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        token.cancel()
        run_proof(state, store.cache, **options)

    result = state.to_result()
    if verbose:
        print_history(state)
    print_proof(result, show_all=args.all_steps)
    return 0 if result.is_true else 1


def cmd_rules(args):
    store = load_store(args)
    rules = store.search(args.query, type=args.type, category=args.category)
    print_rules(store.group(rules), store.counts(rules))
    return 0


def cmd_extract(args):
    verbose = not args.quiet
    rules = extract_theorems(args.tex_dir, verbose=verbose)
    write_theorems(rules, args.output, format=args.format, verbose=verbose)
    return 0


COMMANDS = {
    "normalize": cmd_normalize,
    "prove": cmd_prove,
    "rules": cmd_rules,
    "extract": cmd_extract,
}


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        return COMMANDS[args.command](args)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
