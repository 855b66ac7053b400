"""Tests for query and body encoding."""

import json
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Annotated, Any, ClassVar

import pytest
from pydantic import BaseModel, Field

from helix_sdk._internal.query import (
    build_uri,
    encode_body,
    encode_query,
    query_pairs,
    render_value,
)
from helix_sdk.endpoints.games import Game, GetGamesRequest, GetTopGamesRequest
from helix_sdk.endpoints.subscriptions import CheckUserSubscriptionRequest
from helix_sdk.exceptions import EncodingError
from helix_sdk.request import Absentable, Body, HelixRequest, Repeated, Scalar

BASE_URL = "https://api.twitch.tv/helix/"


class Period(str, Enum):
    DAY = "day"
    WEEK = "week"


class Mixed(HelixRequest):
    PATH: ClassVar[str] = "mixed"
    RESPONSE: ClassVar[type[BaseModel]] = Game

    broadcaster_id: Annotated[str, Scalar]
    period: Annotated[Period | None, Absentable] = None
    started_at: Annotated[datetime | None, Absentable] = None
    type_: Annotated[str | None, Absentable.named("type")] = None
    user_id: Annotated[list[str], Repeated] = Field(default_factory=list)
    first: Annotated[int | None, Absentable] = None


class Posting(HelixRequest):
    PATH: ClassVar[str] = "channels/commercial"
    METHOD: ClassVar[str] = "POST"
    RESPONSE: ClassVar[type[BaseModel]] = Game

    broadcaster_id: Annotated[str, Body]
    length: Annotated[int, Body]
    title: Annotated[str | None, Body] = None


class Loose(HelixRequest):
    PATH: ClassVar[str] = "loose"
    RESPONSE: ClassVar[type[BaseModel]] = Game

    value: Annotated[Any, Absentable] = None


class TestRenderValue:
    """Tests for render_value."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("abc", "abc"),
            (True, "true"),
            (False, "false"),
            (20, "20"),
            (Period.WEEK, "week"),
            (datetime(2021, 1, 2, 3, 4, 5, tzinfo=timezone.utc), "2021-01-02T03:04:05Z"),
        ],
    )
    def test_scalars(self, value, expected):
        """Should render supported scalars."""
        assert render_value(value) == expected

    def test_datetime_converted_to_utc(self):
        """Should convert aware datetimes to UTC."""
        value = datetime(2021, 1, 2, 5, 0, 0, tzinfo=timezone(timedelta(hours=2)))
        assert render_value(value) == "2021-01-02T03:00:00Z"

    @pytest.mark.parametrize("value", [{"a": 1}, [1, 2], object(), float("nan")])
    def test_unrepresentable_values_raise(self, value):
        """Should raise EncodingError for values with no query form."""
        with pytest.raises(EncodingError):
            render_value(value)

    def test_lone_surrogate_raises(self):
        """Strings that are not valid UTF-8 should raise EncodingError."""
        with pytest.raises(EncodingError):
            render_value("\ud800")


class TestEncodeQuery:
    """Tests for encode_query and build_uri."""

    def test_single_repeated_value(self):
        """Scenario: id=[493057] against games."""
        request = GetGamesRequest(id=["493057"])
        assert build_uri(BASE_URL, request) == "https://api.twitch.tv/helix/games?id=493057"

    def test_all_defaults_renders_bare_question_mark(self):
        """A request with only absent fields ends in a bare '?'."""
        assert build_uri(BASE_URL, GetTopGamesRequest()) == "https://api.twitch.tv/helix/games/top?"
        assert build_uri(BASE_URL, GetGamesRequest()) == "https://api.twitch.tv/helix/games?"

    def test_repeated_values_each_get_their_key(self):
        """Repeated fields render key=a&key=b, in order."""
        request = GetGamesRequest(id=["a", "b"])
        assert encode_query(request) == "id=a&id=b"

    def test_declaration_order(self):
        """Parameters render in field declaration order."""
        request = GetGamesRequest(name=["Fortnite"], id=["1", "2"])
        assert encode_query(request) == "id=1&id=2&name=Fortnite"

    def test_absent_fields_omitted(self):
        """Absent optionals contribute nothing."""
        request = GetTopGamesRequest(first=100)
        assert encode_query(request) == "first=100"

    def test_mixed_request(self):
        """Enums, datetimes, renamed keys and repeated values render together."""
        request = Mixed(
            broadcaster_id="1234",
            period=Period.DAY,
            started_at=datetime(2021, 1, 1, tzinfo=timezone.utc),
            type_="live",
            user_id=["1", "2"],
        )
        assert query_pairs(request) == [
            ("broadcaster_id", "1234"),
            ("period", "day"),
            ("started_at", "2021-01-01T00:00:00Z"),
            ("type", "live"),
            ("user_id", "1"),
            ("user_id", "2"),
        ]

    def test_values_are_percent_encoded(self):
        """Each value is encoded independently."""
        request = GetGamesRequest(name=["Pokémon Red", "a&b=c"])
        assert encode_query(request) == "name=Pok%C3%A9mon+Red&name=a%26b%3Dc"

    def test_scalar_with_repeated_field(self):
        """A required scalar renders before its repeated sibling."""
        request = CheckUserSubscriptionRequest(broadcaster_id="1234", user_id=["5678"])
        assert build_uri(BASE_URL, request) == (
            "https://api.twitch.tv/helix/subscriptions/user?broadcaster_id=1234&user_id=5678"
        )

    def test_base_url_without_trailing_slash(self):
        """Should join base URL and path with exactly one slash."""
        uri = build_uri("http://localhost:8080/helix", GetGamesRequest(id=["1"]))
        assert uri == "http://localhost:8080/helix/games?id=1"

    def test_unencodable_value_raises(self):
        """Malformed values surface as EncodingError."""
        with pytest.raises(EncodingError):
            encode_query(Loose(value={"nested": True}))

    def test_null_in_repeated_field_raises(self):
        """None inside a repeated field is not encodable."""
        request = GetGamesRequest.model_construct(id=["1", None], name=[])
        with pytest.raises(EncodingError):
            encode_query(request)

    def test_body_fields_are_not_in_query(self):
        """Body fields are excluded from the query string."""
        request = Posting(broadcaster_id="1234", length=30)
        assert encode_query(request) == ""


class TestEncodeBody:
    """Tests for encode_body."""

    def test_no_body_fields(self):
        """Requests without body fields have no body."""
        assert encode_body(GetGamesRequest(id=["1"])) is None

    def test_body_fields_serialized(self):
        """Body fields serialize to a JSON object, omitting None."""
        body = encode_body(Posting(broadcaster_id="1234", length=30))
        assert body is not None
        assert json.loads(body) == {"broadcaster_id": "1234", "length": 30}
