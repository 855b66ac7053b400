"""Endpoints regarding games.

- ``GetGamesRequest``: `get-games <https://dev.twitch.tv/docs/api/reference#get-games>`_
- ``GetTopGamesRequest``: `get-top-games <https://dev.twitch.tv/docs/api/reference#get-top-games>`_
"""

from typing import Annotated, ClassVar

from pydantic import BaseModel, Field

from helix_sdk.request import Absentable, Cursor, HelixRequest, Repeated


class Game(BaseModel):
    """A game or category on Twitch."""

    id: str
    name: str
    box_art_url: str


class GetGamesRequest(HelixRequest):
    """Gets game information by game ID or name.

    At most 100 values of each of ``id`` and ``name`` may be given. Names
    must match exactly.
    """

    PATH: ClassVar[str] = "games"
    RESPONSE: ClassVar[type[BaseModel]] = Game

    id: Annotated[list[str], Repeated] = Field(default_factory=list)
    name: Annotated[list[str], Repeated] = Field(default_factory=list)


class GetTopGamesRequest(HelixRequest):
    """Gets games sorted by number of current viewers, most popular first."""

    PATH: ClassVar[str] = "games/top"
    RESPONSE: ClassVar[type[BaseModel]] = Game

    after: Annotated[Cursor | None, Absentable] = None
    before: Annotated[Cursor | None, Absentable] = None
    # Maximum: 100. Default: 20.
    first: Annotated[int | None, Absentable] = Field(default=None, ge=1, le=100)

    def set_pagination(self, cursor: Cursor | None) -> None:
        self.after = cursor
