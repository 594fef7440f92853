"""JSON-file backed "now" snapshot and quotes list."""

import json
import logging
import random
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from app.schemas.now import NowResponse, NowSnapshot, NowUpdate, Quote, QuoteCreate
from models.base import generate_id

logger = logging.getLogger(__name__)

DEFAULT_QUOTES = [
    Quote(text="The best way to predict the future is to invent it.", author="Alan Kay", tags=["tech", "innovation"]),
    Quote(text="Simplicity is the ultimate sophistication.", author="Leonardo da Vinci", tags=["design"]),
    Quote(text="The only way to do great work is to love what you do.", author="Steve Jobs", tags=["work", "passion"]),
    Quote(text="Code is like humor. When you have to explain it, it's bad.", author="Cory House", tags=["programming"]),
    Quote(text="First, solve the problem. Then, write the code.", author="John Johnson", tags=["programming"]),
    Quote(
        text="Any fool can write code that a computer can understand. "
        "Good programmers write code that humans can understand.",
        author="Martin Fowler",
        tags=["programming"],
    ),
    Quote(text="The best error message is the one that never shows up.", author="Thomas Fuchs", tags=["ux", "programming"]),
    Quote(text="In the middle of difficulty lies opportunity.", author="Albert Einstein", tags=["motivation"]),
    Quote(text="Stay hungry, stay foolish.", author="Stewart Brand", tags=["motivation", "tech"]),
    Quote(
        text="Move fast and break things. Unless you're breaking stuff, you're not moving fast enough.",
        author="Mark Zuckerberg",
        tags=["tech", "startups"],
    ),
    Quote(text="The computer was born to solve problems that did not exist before.", author="Bill Gates", tags=["tech", "humor"]),
    Quote(text="It's not a bug, it's a feature.", author="Anonymous", tags=["programming", "humor"]),
    Quote(
        text="There are only two hard things in Computer Science: cache invalidation and naming things.",
        author="Phil Karlton",
        tags=["programming", "humor"],
    ),
    Quote(
        text="Programming today is a race between software engineers striving to build bigger and "
        "better idiot-proof programs, and the Universe trying to produce bigger and better idiots.",
        author="Rick Cook",
        tags=["programming", "humor"],
    ),
    Quote(text="Weeks of coding can save you hours of planning.", author="Anonymous", tags=["programming", "humor"]),
]


def _read_json(path: Path) -> Any:
    """Parsed file content, or None when the file is missing or not valid JSON."""
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable JSON file %s: %s", path, e)
        return None


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


class QuoteService:
    def __init__(self, quotes_file: Path):
        self.quotes_file = quotes_file

    def list_quotes(self, tag: str | None = None) -> list[Quote]:
        quotes = self._load()
        if tag:
            quotes = [q for q in quotes if tag in q.tags]
        return quotes

    def add_quote(self, quote_data: QuoteCreate) -> Quote:
        quotes = self._load()
        quote = Quote(
            id=generate_id(),
            created_at=datetime.now(UTC),
            **quote_data.model_dump(),
        )
        quotes.append(quote)
        _write_json(self.quotes_file, [q.model_dump(mode="json") for q in quotes])
        return quote

    def random_quote(self) -> Quote:
        """A random stored quote, falling back to the built-in list."""
        return random.choice(self._load() or DEFAULT_QUOTES)

    def _load(self) -> list[Quote]:
        raw = _read_json(self.quotes_file)
        if not isinstance(raw, list):
            return []
        quotes = []
        for entry in raw:
            try:
                quotes.append(Quote.model_validate(entry))
            except PydanticValidationError:
                logger.warning("Skipping malformed quote in %s", self.quotes_file)
        return quotes


class NowService:
    """Weather and image snapshot pushed by agents, plus a quote of the moment."""

    def __init__(self, now_file: Path, quotes: QuoteService):
        self.now_file = now_file
        self.quotes = quotes

    def get_now(self) -> NowResponse:
        snapshot = self._load()
        return NowResponse(
            weather=snapshot.weather,
            image=snapshot.image,
            quote=self.quotes.random_quote(),
        )

    def update_now(self, update: NowUpdate) -> NowSnapshot:
        """Replace the weather and/or image present in ``update``, stamping them."""
        snapshot = self._load()
        stamp = datetime.now(UTC)

        if update.weather is not None:
            snapshot.weather = update.weather.model_copy(update={"updated_at": stamp})
        if update.image is not None:
            snapshot.image = update.image.model_copy(update={"updated_at": stamp})

        _write_json(self.now_file, snapshot.model_dump(mode="json"))
        return snapshot

    def _load(self) -> NowSnapshot:
        raw = _read_json(self.now_file)
        if not isinstance(raw, dict):
            return NowSnapshot()
        try:
            return NowSnapshot.model_validate(raw)
        except PydanticValidationError:
            logger.warning("Ignoring malformed snapshot in %s", self.now_file)
            return NowSnapshot()
