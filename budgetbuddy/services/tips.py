"""Prompt building and response parsing for savings tips.

Providers are asked for ``{"tips": [...]}`` but do not always comply, so
parsing happens in two stages: a strict JSON parse (after stripping Markdown
code fences) and, failing that, a line-based heuristic. The result records
which stage produced it.
"""
import json
import re
from dataclasses import dataclass, field
from typing import List

MAX_EXPENSES = 10
TIP_COUNT = 2
MAX_HEURISTIC_LINE = 100

SYSTEM_PROMPT = (
    "You are a financial advisor AI. Analyze expense data and provide "
    "practical, actionable saving tips in JSON format."
)

FALLBACK_TIPS = [
    "Try tracking your expenses for a week to identify spending patterns.",
    "Consider setting a monthly budget for each category to better control your finances.",
]

_FENCE_RE = re.compile(r"^\s*```[a-zA-Z]*\s*\n?|\n?\s*```\s*$")
_FENCED_BLOCK_RE = re.compile(r"```(?:\w+)?[ \t]*\n(.*?)```", re.S)


@dataclass
class ParsedTips:
    method: str  # "json", "heuristic" or "none"
    tips: List[str] = field(default_factory=list)

    @property
    def ok(self):
        return self.method != "none"


def expense_payload(expense) -> dict:
    """Reduce an expense (dict from a client, or a record) to prompt fields."""
    if not isinstance(expense, dict):
        expense = expense.to_dict()
    return {
        "amount": expense.get("amount"),
        "category": expense.get("category"),
        "date": expense.get("date"),
        "note": expense.get("note") or "",
    }


def build_prompt(expenses) -> str:
    data = [expense_payload(e) for e in list(expenses)[:MAX_EXPENSES]]
    return (
        f"Based on these recent expenses, provide {TIP_COUNT} short saving tips "
        "in under 40 words each:\n\n"
        f"{json.dumps(data, indent=2, default=str)}\n\n"
        "Please respond in JSON format with an array of tips:\n"
        '{\n  "tips": ["tip1", "tip2"]\n}\n'
    )


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text).strip()


def _load_tips(candidate: str):
    try:
        data = json.loads(candidate)
    except ValueError:
        return None
    if not isinstance(data, dict) or not isinstance(data.get("tips"), list):
        return None
    return [str(t).strip() for t in data["tips"] if str(t).strip()][:TIP_COUNT]


def parse_json_tips(text: str):
    """Strict stage. Returns a list of tips, or None if the text is not the expected shape.

    A fenced block anywhere in the reply is tried first, so prose around
    the JSON does not defeat the parse.
    """
    for block in _FENCED_BLOCK_RE.findall(text):
        tips = _load_tips(block.strip())
        if tips is not None:
            return tips
    return _load_tips(strip_code_fences(text))


def extract_tip_lines(text: str) -> List[str]:
    """Heuristic stage: short, brace-free, non-empty lines that are not fence markers."""
    lines = []
    for line in text.splitlines():
        line = line.strip()
        if not line or len(line) >= MAX_HEURISTIC_LINE:
            continue
        if "{" in line or "}" in line or line.startswith("```"):
            continue
        lines.append(line)
        if len(lines) == TIP_COUNT:
            break
    return lines


def parse_tips(text: str) -> ParsedTips:
    if not isinstance(text, str):
        text = ""
    tips = parse_json_tips(text)
    if tips is not None:
        return ParsedTips("json", tips)
    lines = extract_tip_lines(text)
    if lines:
        return ParsedTips("heuristic", lines)
    return ParsedTips("none")
