"""Immutable configuration handed to each CPU script host."""

from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_ENTRY_POINT = "make_move"
FIELD_OUT = "#"
FIELD_PAD = "-"


class HostConfig(BaseModel):
    """Values exposed read-only to a CPU script.

    The model is frozen; the host re-publishes these values into the script
    environment after every load so a script cannot change them for later calls.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    player_id: int = Field(..., ge=0, le=255)
    board_width: int = Field(..., ge=1)
    board_height: int = Field(..., ge=1)
    height_to_win: int = Field(..., ge=1)
    out_marker: str = FIELD_OUT
    pad_marker: str = FIELD_PAD
    num_players: int = Field(default=2, ge=1)
    towers_to_win: int = Field(default=1, ge=1)
    entry_point: str = Field(default=DEFAULT_ENTRY_POINT, min_length=1)

    def environment(self) -> Dict[str, object]:
        """Return the script-visible globals derived from this config."""

        return {
            "player_id": self.player_id,
            "board_width": self.board_width,
            "board_height": self.board_height,
            "height_to_win": self.height_to_win,
            "out_marker": self.out_marker,
            "pad_marker": self.pad_marker,
            "num_players": self.num_players,
            "towers_to_win": self.towers_to_win,
        }


class OpponentSetup(BaseModel):
    """CPU opponents of one match: player id to script path."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    board_width: int = Field(..., ge=1)
    board_height: int = Field(..., ge=1)
    height_to_win: int = Field(..., ge=1)
    out_marker: str = FIELD_OUT
    pad_marker: str = FIELD_PAD
    num_players: int = Field(default=2, ge=1)
    towers_to_win: int = Field(default=1, ge=1)
    scripts: Dict[int, str] = Field(default_factory=dict)

    def host_config(self, player_id: int) -> HostConfig:
        return HostConfig(
            player_id=player_id,
            board_width=self.board_width,
            board_height=self.board_height,
            height_to_win=self.height_to_win,
            out_marker=self.out_marker,
            pad_marker=self.pad_marker,
            num_players=self.num_players,
            towers_to_win=self.towers_to_win,
        )
