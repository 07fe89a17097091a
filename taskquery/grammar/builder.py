# taskquery/grammar/builder.py
from __future__ import annotations
import os
import re
import logging
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from lark import Lark

from .locales import DateVocabulary, get_vocabulary

logger = logging.getLogger(__name__)

# ---------------------------------------------------------
# Load base grammar (relative file)
# ---------------------------------------------------------
GRAMMAR_PATH = os.path.join(os.path.dirname(__file__), "query.lark")
if not os.path.exists(GRAMMAR_PATH):
    raise FileNotFoundError(f"Query grammar not found at {GRAMMAR_PATH}")
with open(GRAMMAR_PATH, "r", encoding="utf-8") as _f:
    BASE_GRAMMAR = _f.read()

# A vocabulary word must start the text or follow whitespace, and be followed
# by whitespace, punctuation or the end of the text.
_BOUNDARY_BEFORE = r"(?<!\S)"
_BOUNDARY_AFTER = r"(?![^\s,.;:!?)])"

# Plain text is cut into runs, and a run ends wherever a marker or date
# phrase may start: after whitespace in spaced scripts, and before anything
# but a Latin letter in scripts written without spaces.
_SPACED_TEXT = r"\S+\s*|\s+"
_UNSPACED_TEXT = r"[A-Za-z]+\s*|\s+|\S\s*"

# terminal name -> vocabulary field
_PHRASE_TERMINALS = (
    ("RELATIVE_DAY", "relative_days"),
    ("WEEKDAY", "weekdays"),
    ("MONTH", "months"),
    ("UNIT", "units"),
    ("PERIOD_WORD", "period_words"),
    ("NEXT", "next"),
    ("NEXT_AFTER", "next_after"),
    ("EVERY", "every"),
    ("AT", "at"),
    ("IN", "in_"),
    ("LATER", "later"),
    ("OF", "of"),
    ("TIME_WORD", "time_words"),
)

_REGEX_TERMINALS = (
    ("CLOCK", "clock"),
    ("HOUR", "hour"),
    ("DAY_OF_MONTH", "day_of_month"),
    ("NUMERIC_DATE", "numeric_date"),
    ("YEAR", "year"),
    ("NUMBER", "number"),
)

# `_` stands for the separator between two parts of a phrase.
_ = "_"

_DATE_RULES: Tuple[Tuple[str, Tuple[Tuple[str, ...], ...]], ...] = (
    ("date", (
        ("moment",),
        ("recurrence",),
        ("offset",),
    )),
    ("moment", (
        ("day",),
        ("time",),
        ("day", _, "time"),
        ("time", _, "day"),
        ("day", _, "TIME_WORD"),
    )),
    ("day", (
        ("RELATIVE_DAY",),
        ("WEEKDAY",),
        ("calendar",),
        ("NEXT", _, "WEEKDAY"),
        ("NEXT", _, "UNIT"),
        ("WEEKDAY", _, "NEXT_AFTER"),
        ("UNIT", _, "NEXT_AFTER"),
    )),
    ("calendar", (
        ("MONTH", _, "DAY_OF_MONTH"),
        ("DAY_OF_MONTH", _, "MONTH"),
        ("DAY_OF_MONTH", _, "OF", _, "MONTH"),
        ("MONTH", _, "DAY_OF_MONTH", _, "YEAR"),
        ("DAY_OF_MONTH", _, "MONTH", _, "YEAR"),
        ("NUMERIC_DATE",),
    )),
    ("time", (
        ("CLOCK",),
        ("AT", _, "CLOCK"),
        ("AT", _, "HOUR"),
        ("AT", _, "TIME_WORD"),
    )),
    ("recurrence", (
        ("EVERY", _, "period"),
        ("EVERY", _, "period", _, "time"),
    )),
    ("period", (
        ("UNIT",),
        ("WEEKDAY",),
        ("PERIOD_WORD",),
        ("DAY_OF_MONTH",),
        ("calendar",),
        ("NUMBER", _, "UNIT"),
        # "every week on monday" as one phrase (毎週月曜日, 매주 월요일)
        ("UNIT", _, "WEEKDAY"),
    )),
    ("offset", (
        ("IN", _, "NUMBER", _, "UNIT"),
        ("NUMBER", _, "UNIT", _, "LATER"),
    )),
)


# ---------------------------------------------------------
# Terminal helpers
# ---------------------------------------------------------
def _lark_regex(pattern: str, flags: str = "") -> str:
    return "/" + pattern.replace("/", "\\/") + "/" + flags


def _bounded(pattern: str, spaced: bool) -> str:
    if not spaced:
        return f"(?:{pattern})"
    return f"{_BOUNDARY_BEFORE}(?:{pattern}){_BOUNDARY_AFTER}"


def _phrase_regex(phrases: Iterable[str], spaced: bool) -> Optional[str]:
    """
    Alternation of the given phrases, longest first so that "every other"
    wins over "every" at the same position.
    """
    unique = sorted({p.strip().lower() for p in phrases if p and p.strip()}, key=lambda p: (-len(p), p))
    if not unique:
        return None
    alternatives = [re.escape(p).replace("\\ ", r"\s+") for p in unique]
    return _lark_regex(_bounded("|".join(alternatives), spaced), "i")


def _terminal_definitions(vocab: DateVocabulary) -> Dict[str, str]:
    terminals: Dict[str, str] = {}
    for name, attr in _PHRASE_TERMINALS:
        regex = _phrase_regex(getattr(vocab, attr), vocab.spaced)
        if regex:
            terminals[name] = regex
    for name, attr in _REGEX_TERMINALS:
        pattern = getattr(vocab, attr)
        if pattern:
            terminals[name] = _lark_regex(_bounded(pattern, vocab.spaced), "i")
    return terminals


# ---------------------------------------------------------
# Rule helpers
# ---------------------------------------------------------
def _live_rules(terminals: Dict[str, str]) -> Dict[str, List[Tuple[str, ...]]]:
    """
    Keep only the alternatives whose terminals exist for this locale, then
    repeatedly drop rules left without alternatives (and the alternatives
    that point at them) until nothing changes.
    """
    rules = {
        name: [alt for alt in alts if all(s == _ or s.islower() or s in terminals for s in alt)]
        for name, alts in _DATE_RULES
    }
    while True:
        dead = {name for name, alts in rules.items() if not alts}
        pruned = {
            name: [alt for alt in alts if not any(s in dead for s in alt)]
            for name, alts in rules.items() if name not in dead
        }
        if pruned == rules:
            return rules
        rules = pruned


def _render_rules(rules: Dict[str, List[Tuple[str, ...]]], spaced: bool) -> List[str]:
    sep = "WS" if spaced else "WS?"
    lines = []
    for name, _alts in _DATE_RULES:
        if name not in rules:
            continue
        rendered: List[str] = []
        for alt in rules[name]:
            text = " ".join(sep if s == _ else s for s in alt)
            if text not in rendered:
                rendered.append(text)
        lines.append(f"{name}: " + "\n    | ".join(rendered))
    return lines


def _referenced_terminals(rules: Dict[str, List[Tuple[str, ...]]]) -> Sequence[str]:
    used = {s for alts in rules.values() for alt in alts for s in alt if s != _ and s.isupper()}
    return [name for name, _attr in _PHRASE_TERMINALS + _REGEX_TERMINALS if name in used]


# ---------------------------------------------------------
# Public API
# ---------------------------------------------------------
def build_date_grammar(vocab: DateVocabulary) -> str:
    terminals = _terminal_definitions(vocab)
    rules = _live_rules(terminals)
    if "date" not in rules:
        raise ValueError(f"Locale {vocab.code!r} defines no usable date phrase")

    parts = [f"// date phrases ({vocab.code})"]
    parts.extend(_render_rules(rules, vocab.spaced))
    parts.extend(f"{name}: {terminals[name]}" for name in _referenced_terminals(rules))
    return "\n".join(parts) + "\n"


def build_grammar(locale: str) -> str:
    """Full grammar text for one locale: the base rules, its date phrases and text runs."""
    vocab = get_vocabulary(locale)
    text = _lark_regex(_SPACED_TEXT if vocab.spaced else _UNSPACED_TEXT)
    return BASE_GRAMMAR.rstrip("\n") + "\n\n" + build_date_grammar(vocab) + f"TEXT: {text}\n"


@lru_cache(maxsize=None)
def load_parser(locale: str) -> Lark:
    """
    Compiled parser for a locale. Built once per locale and shared; a Lark
    instance is never mutated by parsing, so callers may use it concurrently.
    """
    grammar = build_grammar(locale)
    try:
        parser = Lark(
            grammar,
            parser="earley",
            lexer="dynamic",
            ambiguity="explicit",
            ordered_sets=True,
            start="start",
        )
    except Exception:
        logger.exception("Failed to construct query parser for locale %s", locale)
        raise
    logger.debug("Built query parser for locale %s", locale)
    return parser
