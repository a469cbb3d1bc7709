"""
Offline theorem extraction from LaTeX sources.

Each .tex file is scanned line by line. \\chapter, \\section and
\\subsection headers set the context a rule is filed under. A rule is a
single-line display block with \\Rq between its sides:

    \\[, i \\Od m, j \\Od n, \\Rq , j \\Od n, i \\Od m,\\]

\\sim abbreviates a side: "\\Rq \\sim," repeats the right side of the
preceding rule, a left side of just "\\sim" repeats its left side.
Lines inside proof blocks (from "proof:\\" or \\begin{math} up to
\\end{math}) are skipped, and runs of rules with an empty left side are
proof steps, so only the first of a run is kept.

The output is a list of Rule, written as JSON for RuleStore.from_files,
or as the TypeScript data module the web front end imports.
"""

import json
import re
from pathlib import Path

from .core.state import Rule


PROOF_START = ("proof:\\", "\\begin{math}")
PROOF_END = "\\end{math}"

CHAPTER = re.compile(r"\\chapter\{([^}]+)\}")
SECTION = re.compile(r"\\section\{([^}]+)\}")
SUBSECTION = re.compile(r"\\subsection\{([^}]+)\}")

# Tried in order: comma before \Rq, whitespace before it, bare.
RQ_PATTERNS = (
    re.compile(r",\s*\\Rq(\s*\\sim)?\s*,"),
    re.compile(r"\s+\\Rq(\s*\\sim)?\s*,"),
    re.compile(r"\\Rq(\s*\\sim)?\s*,"),
)

EDGE_COMMAS = re.compile(r"^,\s*|,\s*$")
TRAILING_BACKSLASHES = re.compile(r"\\+$")

TS_HEADER = "\n".join([
    "// Auto-generated from LaTeX theorem files",
    "// Run: npm run extract-theorems",
    "",
    "export type RuleType = 'axiom' | 'definition' | 'theorem';",
    "export type RuleCategory = ",
    "  | 'operators' ",
    "  | 'relationships'",
    "  | 'propositions'",
    "  | 'induction'",
    "  | 'arithmetic'",
    "  | 'logic';",
    "",
    "export interface Rule {",
    "  id: string;",
    "  name: string;",
    "  type: RuleType;",
    "  category: RuleCategory;",
    "  description: string;",
    "  leftSide: string;",
    "  rightSide: string;",
    "  section?: string;",
    "  subsection?: string;",
    "}",
    "",
    "export const theorems: Rule[] = [",
    "",
])
TS_FOOTER = "\n];\n"


def _strip_edges(side: str) -> str:
    return EDGE_COMMAS.sub("", side)


def _escape_backslashes(text: str) -> str:
    return text.replace("\\", "\\\\")


def _escape_quotes(text: str) -> str:
    return text.replace("'", "\\'")


def map_to_category(chapter: str, section: str) -> str:
    chapter, section = chapter.lower(), section.lower()
    if "operator" in chapter or "operator" in section:
        return "operators"
    if ("relationship" in chapter or
            any(w in section for w in ("relationship", "comparison", "connectivity",
                                       "subnode", "node"))):
        return "relationships"
    if "proposition" in section or "branch" in section:
        return "propositions"
    if "induction" in section:
        return "induction"
    if any(w in section for w in ("arithmetic", "number", "addition", "multiplication")):
        return "arithmetic"
    if any(w in section for w in ("logic", "paradox", "empty", "branch function")):
        return "logic"
    return "operators"


def determine_rule_type(chapter, section, subsection, filename) -> str:
    texts = [t.lower() for t in (chapter, section, subsection)]
    if any("axiom" in t for t in texts) or "axiom" in filename.lower():
        return "axiom"
    if any("definition" in t for t in texts):
        return "definition"
    return "theorem"


def generate_id(filename: str, index: int, left_side: str, right_side: str) -> str:
    """
    "<file stem>-<index>-<content hash>". The hash is taken over the
    backslash-escaped sides, as they appear in the generated module.
    """
    base = re.sub(r"[^a-z0-9]+", "-", Path(filename).stem.lower()).strip("-")
    content = _escape_backslashes(left_side + right_side)[:20]
    digest = re.sub(r"[^a-z0-9]", "", content)[:8]
    return f"{base}-{index}-{digest}"


def generate_name(left_side: str, right_side: str, section: str, subsection: str) -> str:
    base = subsection or section
    if base and ":" in base:
        base = base.split(":")[0].strip()
    if base:
        return base
    if not left_side.strip() or left_side.strip() == ",":
        return f"Create: {_strip_edges(right_side)[:30]}"
    return f"{_strip_edges(left_side)[:40]} \u27fa {_strip_edges(right_side)[:40]}"


def _proof_lines(lines: list) -> list:
    """Flags for lines inside a proof block, both delimiters included."""
    flags = [False] * len(lines)
    start = None
    for i, line in enumerate(lines):
        if any(marker in line for marker in PROOF_START):
            start = i
        if start is not None and PROOF_END in line:
            for j in range(start, i + 1):
                flags[j] = True
            start = None
        elif start is not None:
            flags[i] = True
    return flags


def _split_rule(line: str):
    """(left, right, has_sim) for a one-line \\[ ... \\Rq ... \\] block, or None."""
    if not ("\\[" in line and "\\Rq" in line and "\\]" in line):
        return None
    start, end = line.find("\\["), line.rfind("\\]")
    if end <= start:
        return None
    content = line[start + 2:end]
    for pattern in RQ_PATTERNS:
        m = pattern.search(content)
        if m:
            break
    else:
        return None
    left = re.sub(r"^,\s*", "", content[:m.start()].strip())
    right = re.sub(r",\s*$", "", content[m.end():].strip())
    return _strip_edges(left).strip(), _strip_edges(right).strip(), m.group(1) is not None


def parse_latex(text: str, filename: str = "theorems.tex") -> list:
    """Extract the rules of one LaTeX source."""
    lines = text.split("\n")
    in_proof = _proof_lines(lines)

    rules = []
    chapter = section = subsection = ""
    last_left = last_right = ""
    empty_left_run = 0
    has_proof = False

    for i, raw in enumerate(lines):
        line = raw.strip()
        if not line or line.startswith("%"):
            continue
        if any(marker in line for marker in PROOF_START):
            has_proof = True
            continue
        if PROOF_END in line:
            has_proof = False
            continue
        if in_proof[i]:
            continue

        m = CHAPTER.search(line)
        if m:
            chapter, section, subsection = m.group(1), "", ""
            last_left = last_right = ""
            empty_left_run = 0
            has_proof = False
        m = SECTION.search(line)
        if m:
            section, subsection = m.group(1), ""
            last_left = last_right = ""
            empty_left_run = 0
            has_proof = False
        m = SUBSECTION.search(line)
        if m:
            subsection = m.group(1)
            last_left = last_right = ""
            empty_left_run = 0
            has_proof = False

        split = _split_rule(line)
        if split is None:
            continue
        original_left, original_right, has_sim = split
        left, right = original_left, original_right

        empty_left = not left or left == ","
        if empty_left:
            empty_left_run += 1
            if empty_left_run > 1:
                continue
        else:
            empty_left_run = 0

        if has_sim and last_right:
            right = last_right
        if left == "\\sim" and last_left:
            left = last_left

        left = TRAILING_BACKSLASHES.sub("", _strip_edges(left)).strip()
        right = TRAILING_BACKSLASHES.sub("", _strip_edges(right)).strip()

        if (not left and not right) or (empty_left and has_proof and empty_left_run == 1):
            continue

        left = f",{left}," if left else ","
        right = f",{right}," if right else ","

        heading = section or chapter
        rules.append(Rule(
            id=generate_id(filename, len(rules), left, right),
            name=generate_name(left, right, heading, subsection),
            type=determine_rule_type(chapter, section, subsection, filename),
            category=map_to_category(chapter, section),
            description=f"{heading} - {subsection}" if subsection else heading,
            left_side=left,
            right_side=right,
            section=section or None,
            subsection=subsection or None,
        ))

        if original_left and original_left != "\\sim":
            last_left = f",{original_left},"
        if not has_sim and original_right:
            last_right = f",{original_right},"

    return rules


def extract_theorems(directory, verbose: bool = True) -> list:
    """Extract rules from every .tex file in directory, in name order."""
    files = sorted(Path(directory).glob("*.tex"))
    if verbose:
        print(f"Found {len(files)} theorem files")
    rules = []
    for path in files:
        if verbose:
            print(f"Processing: {path.name}")
        found = parse_latex(path.read_text(encoding="utf-8"), path.name)
        if verbose:
            print(f"  Extracted {len(found)} rules")
        rules.extend(found)
    if verbose:
        print(f"\nTotal rules extracted: {len(rules)}")
    return rules


def _ts_entry(rule: Rule) -> str:
    lines = [
        "  {",
        f"    id: '{rule.id}',",
        f"    name: '{_escape_quotes(rule.name)}',",
        f"    type: '{rule.type}',",
        f"    category: '{rule.category}',",
        f"    description: '{_escape_quotes(rule.description)}',",
        f"    leftSide: '{_escape_backslashes(rule.left_side)}',",
        f"    rightSide: '{_escape_backslashes(rule.right_side)}',",
    ]
    if rule.section:
        lines.append(f"    section: '{_escape_quotes(rule.section)}',")
    if rule.subsection:
        lines.append(f"    subsection: '{_escape_quotes(rule.subsection)}',")
    lines.append("  },")
    return "\n".join(lines)


def render_typescript(rules) -> str:
    """The generated TypeScript data module for the web front end."""
    return TS_HEADER + "\n".join(_ts_entry(r) for r in rules) + TS_FOOTER


def write_theorems(rules, path, format: str = "json", verbose: bool = True):
    """Write extracted rules as JSON (default) or as a TypeScript module."""
    if format == "ts":
        text = render_typescript(rules)
    elif format == "json":
        text = json.dumps([r.to_dict() for r in rules], indent=2, ensure_ascii=False) + "\n"
    else:
        raise ValueError(f"unknown output format {format!r}")
    Path(path).write_text(text, encoding="utf-8")
    if verbose:
        print(f"\nOutput written to: {path}")
