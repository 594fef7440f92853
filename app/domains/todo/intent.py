"""Natural-language intent parsing for the smart todo endpoint.

``parse_intent`` maps a line of free text plus the open todos to exactly one
action: create, complete, update or unclear. The parser is pure: it reads no
storage and applies nothing, the caller does that with the returned intent.

Matching is regex driven. Completion templates are tried first and, once one
of them matches, the outcome is either ``complete`` or ``unclear`` (never a
create). Update templates come next and fall through to create when no open
todo matches the search term. Anything else is a create.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum


class IntentAction(str, Enum):
    CREATE = "create"
    COMPLETE = "complete"
    UPDATE = "update"
    UNCLEAR = "unclear"


@dataclass(frozen=True)
class TodoRef:
    """The part of an open todo the parser needs."""

    id: str
    title: str


@dataclass(frozen=True)
class ParsedIntent:
    action: IntentAction
    original_text: str
    title: str | None = None
    assignee: str | None = None
    due_date: date | None = None
    match_todo_id: str | None = None


WEEKDAYS = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")
MONTHS = ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec")

_IN_DAYS_RE = re.compile(r"in (\d+) days?")
_MONTH_DAY_RES = [(i + 1, re.compile(rf"{m}\w*\s+(\d{{1,2}})")) for i, m in enumerate(MONTHS)]


def _relative(offset: int) -> Callable[[str, date], date]:
    return lambda _text, today: today + timedelta(days=offset)


def _in_n_days(text: str, today: date) -> date | None:
    match = _IN_DAYS_RE.search(text)
    return today + timedelta(days=int(match.group(1))) if match else None


def _next_weekday(text: str, today: date) -> date | None:
    # Sunday-first numbering; a bare weekday never resolves to today.
    current = (today.weekday() + 1) % 7
    for index, name in enumerate(WEEKDAYS):
        if name in text:
            delta = index - current
            if delta <= 0:
                delta += 7
            return today + timedelta(days=delta)
    return None


def _month_day(text: str, today: date) -> date | None:
    for month, pattern in _MONTH_DAY_RES:
        match = pattern.search(text)
        if not match:
            continue
        try:
            candidate = date(today.year, month, int(match.group(1)))
        except ValueError:
            continue  # "feb 31" and friends
        if candidate < today:
            candidate = candidate.replace(year=today.year + 1)
        return candidate
    return None


# (keyword guard, resolver) pairs, first hit wins.
_DATE_RULES: list[tuple[str | None, Callable[[str, date], date | None]]] = [
    ("today", _relative(0)),
    ("tomorrow", _relative(1)),
    ("next week", _relative(7)),
    (None, _in_n_days),
    (None, _next_weekday),
    (None, _month_day),
]


def parse_date(text: str, today: date | None = None) -> date | None:
    """Resolve a date phrase ("tomorrow", "in 3 days", "friday", "feb 15")."""
    lower = text.lower()
    today = today or date.today()
    for keyword, resolve in _DATE_RULES:
        if keyword is not None and keyword not in lower:
            continue
        resolved = resolve(lower, today)
        if resolved is not None:
            return resolved
    return None


def parse_assignee(text: str) -> str:
    lower = text.lower()

    if lower.startswith("coby") or " coby " in lower or "for coby" in lower:
        return "coby"
    if (
        lower.startswith(("rodion", "i need", "remind me", "i should"))
        or " rodion " in lower
        or "for rodion" in lower
        or "remind me" in lower
    ):
        return "rodion"

    # errands read as personal reminders
    if any(verb in lower for verb in ("call ", "email ", "buy ", "pick up", "schedule ")):
        return "rodion"

    return "coby"


COMPLETION_PATTERNS = [
    re.compile(
        r"^(?:done|finished|completed|complete|did|checked off?)\s+(?:with\s+)?(?:the\s+)?(.+)",
        re.IGNORECASE,
    ),
    re.compile(
        r"^(?:mark|check)\s+(?:off\s+)?(?:the\s+)?(.+?)(?:\s+(?:as\s+)?(?:done|complete|finished))?$",
        re.IGNORECASE,
    ),
    re.compile(r"^(.+?)\s+(?:is\s+)?(?:done|complete|finished)$", re.IGNORECASE),
]

UPDATE_PATTERNS = [
    re.compile(
        r"^(?:push|move|reschedule|delay)\s+(?:the\s+)?(.+?)\s+(?:to|until|by)\s+(.+)$",
        re.IGNORECASE,
    ),
    re.compile(
        r"^(?:change|update)\s+(?:the\s+)?(.+?)\s+(?:due\s+)?(?:date\s+)?(?:to|until|by)\s+(.+)$",
        re.IGNORECASE,
    ),
]

_ASSIGNEE_PREFIX_RE = re.compile(r"^(?:coby|rodion)[,:]?\s*", re.IGNORECASE)
_ASSIGNEE_SUFFIX_RE = re.compile(r"\s+for\s+(?:coby|rodion)\s*$", re.IGNORECASE)
_DATE_PHRASE_RES = [
    re.compile(
        r"\s+(?:by|on|due|before)\s+(?:today|tomorrow|next week|"
        r"monday|tuesday|wednesday|thursday|friday|saturday|sunday)",
        re.IGNORECASE,
    ),
    re.compile(r"\s+(?:by|on|due|before)\s+(?:" + "|".join(MONTHS) + r")\w*\s+\d{1,2}", re.IGNORECASE),
    re.compile(r"\s+in\s+\d+\s+days?", re.IGNORECASE),
    re.compile(r"\s+tomorrow$", re.IGNORECASE),
    re.compile(r"\s+today$", re.IGNORECASE),
]
_IMPERATIVE_PREFIX_RE = re.compile(
    r"^(?:remind\s+me\s+to|i\s+need\s+to|i\s+should|need\s+to)\s*", re.IGNORECASE
)


def _completion_matches(term: str, todo: TodoRef) -> bool:
    term = term.lower()
    title = todo.title.lower()
    return term in title or title.split(" ")[0] in term


def _update_matches(term: str, todo: TodoRef) -> bool:
    return term.lower() in todo.title.lower()


def _first_match(term: str, todos: Iterable[TodoRef], matches: Callable[[str, TodoRef], bool]):
    return next((todo for todo in todos if matches(term, todo)), None)


def _clean_title(text: str, due_date: date | None) -> str:
    title = _ASSIGNEE_PREFIX_RE.sub("", text, count=1)
    title = _ASSIGNEE_SUFFIX_RE.sub("", title, count=1)
    if due_date is not None:
        for pattern in _DATE_PHRASE_RES:
            title = pattern.sub("", title)
    title = _IMPERATIVE_PREFIX_RE.sub("", title, count=1)
    return (title[:1].upper() + title[1:]).strip()


def parse_intent(
    text: str, open_todos: Sequence[TodoRef], today: date | None = None
) -> ParsedIntent:
    """Classify ``text`` against the open todos.

    Args:
        text: Raw user input.
        open_todos: Open todos in the order they should be considered.
        today: Reference date for relative phrases, defaults to the local date.

    Returns:
        ParsedIntent: The single action to apply.
    """
    text = text.strip()

    for pattern in COMPLETION_PATTERNS:
        match = pattern.match(text)
        if not match:
            continue
        todo = _first_match(match.group(1).strip(), open_todos, _completion_matches)
        if todo is None:
            return ParsedIntent(IntentAction.UNCLEAR, original_text=text)
        return ParsedIntent(IntentAction.COMPLETE, original_text=text, match_todo_id=todo.id)

    for pattern in UPDATE_PATTERNS:
        match = pattern.match(text)
        if not match:
            continue
        todo = _first_match(match.group(1).strip(), open_todos, _update_matches)
        if todo is not None:
            return ParsedIntent(
                IntentAction.UPDATE,
                original_text=text,
                match_todo_id=todo.id,
                due_date=parse_date(match.group(2).strip(), today),
            )

    due_date = parse_date(text, today)
    return ParsedIntent(
        IntentAction.CREATE,
        original_text=text,
        title=_clean_title(text, due_date) or text,
        assignee=parse_assignee(text),
        due_date=due_date,
    )
