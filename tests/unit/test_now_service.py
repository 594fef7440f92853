"""
Unit tests for the JSON-file backed now snapshot and quotes.
"""

import json

import pytest

from app.domains.now.service import DEFAULT_QUOTES, NowService, QuoteService
from app.schemas.now import NowImage, NowUpdate, QuoteCreate, Weather


@pytest.fixture
def quotes_file(tmp_path):
    return tmp_path / "quotes.json"


@pytest.fixture
def now_file(tmp_path):
    return tmp_path / "now.json"


class TestQuoteService:
    def test_empty_store_falls_back_to_defaults(self, quotes_file):
        service = QuoteService(quotes_file)

        assert service.list_quotes() == []
        assert service.random_quote() in DEFAULT_QUOTES

    def test_add_quote_persists(self, quotes_file):
        service = QuoteService(quotes_file)

        quote = service.add_quote(QuoteCreate(text="Ship it.", author="Someone", tags=["work"]))

        assert quote.id
        assert quote.created_at is not None
        stored = json.loads(quotes_file.read_text())
        assert stored[0]["text"] == "Ship it."
        assert stored[0]["id"] == quote.id
        assert service.random_quote() == quote

    def test_list_by_tag(self, quotes_file):
        service = QuoteService(quotes_file)
        service.add_quote(QuoteCreate(text="a", author="x", tags=["humor"]))
        service.add_quote(QuoteCreate(text="b", author="y", tags=["work"]))

        assert [q.text for q in service.list_quotes(tag="humor")] == ["a"]
        assert len(service.list_quotes()) == 2

    def test_reads_camel_case_and_skips_malformed(self, quotes_file):
        quotes_file.write_text(
            json.dumps(
                [
                    {"id": "q1", "text": "ok", "author": "a", "createdAt": "2025-01-01T00:00:00Z"},
                    {"text": "missing author"},
                ]
            )
        )

        quotes = QuoteService(quotes_file).list_quotes()

        assert [q.id for q in quotes] == ["q1"]
        assert quotes[0].created_at.year == 2025

    def test_corrupt_file_reads_as_empty(self, quotes_file):
        quotes_file.write_text("{not json")

        assert QuoteService(quotes_file).list_quotes() == []


class TestNowService:
    def test_empty_snapshot(self, now_file, quotes_file):
        result = NowService(now_file, QuoteService(quotes_file)).get_now()

        assert result.weather is None
        assert result.image is None
        assert result.quote in DEFAULT_QUOTES

    def test_update_weather_keeps_image(self, now_file, quotes_file):
        service = NowService(now_file, QuoteService(quotes_file))
        service.update_now(NowUpdate(image=NowImage(url="/img.png", description="sunset")))

        snapshot = service.update_now(
            NowUpdate(weather=Weather(temp=18, condition="cloudy", location="Oslo", wind="5 m/s"))
        )

        assert snapshot.image.url == "/img.png"
        assert snapshot.weather.condition == "cloudy"
        assert snapshot.weather.updated_at is not None
        stored = json.loads(now_file.read_text())
        assert stored["weather"]["wind"] == "5 m/s"
        assert stored["image"]["description"] == "sunset"

    def test_get_now_reads_stored_snapshot(self, now_file, quotes_file):
        now_file.write_text(
            json.dumps(
                {
                    "weather": {
                        "temp": "72°F",
                        "condition": "sunny",
                        "location": "Austin",
                        "updatedAt": "2026-10-19T07:00:00Z",
                    }
                }
            )
        )

        result = NowService(now_file, QuoteService(quotes_file)).get_now()

        assert result.weather.temp == "72°F"
        assert result.weather.updated_at is not None
        assert result.image is None

    def test_malformed_snapshot_reads_as_empty(self, now_file, quotes_file):
        now_file.write_text(json.dumps({"weather": {"temp": 1}}))

        result = NowService(now_file, QuoteService(quotes_file)).get_now()

        assert result.weather is None
