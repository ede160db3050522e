"""Pydantic schemas for JSON data validation."""

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .constants import FORMAT_NASSAU, FORMATS, TEAM_MODE_SIZES, TEAMS


class HoleRecord(BaseModel):
    """One hole of the course."""

    number: int = Field(..., ge=1, le=18)
    par: int = Field(..., ge=3, le=5)
    stroke_index: int = Field(..., ge=1, le=18)
    yardage: int | None = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = 'forbid'


class CourseRecord(BaseModel):
    """Course block of a match snapshot."""

    id: str | None = None
    name: str | None = None
    holes: list[HoleRecord]

    class Config:
        extra = 'forbid'


class PlayerRecord(BaseModel):
    """Player entered in a match."""

    id: str = Field(..., min_length=1, validation_alias=AliasChoices('id', 'userId', 'user_id'))
    display_name: str | None = Field(
        None,
        validation_alias=AliasChoices(
            'displayName', 'display_name', 'fullName', 'full_name', 'guestName', 'guest_name'
        ),
    )
    handicap_index: float | None = Field(
        None,
        validation_alias=AliasChoices(
            'handicapIndex', 'handicap_index', 'initialHandicap', 'initial_handicap', 'handicap'
        ),
    )
    team: str
    is_guest: bool = Field(False, validation_alias=AliasChoices('isGuest', 'is_guest'))
    avatar_url: str | None = Field(None, validation_alias=AliasChoices('avatarUrl', 'avatar_url'))

    @field_validator('team')
    @classmethod
    def validate_team(cls, v):
        """Ensure the team is A or B."""
        if v not in TEAMS:
            raise ValueError(f'Invalid team: {v}')
        return v

    class Config:
        extra = 'forbid'


class ScoreRecord(BaseModel):
    """
    One recorded hole score.

    Gross and tags are checked by the engine row by row, so a bad value
    here rejects the row rather than the whole file.
    """

    player_id: str = Field(..., validation_alias=AliasChoices('playerId', 'player_id'))
    hole_number: int = Field(..., validation_alias=AliasChoices('holeNumber', 'hole_number'))
    gross: int | float | None = None
    net: int | float | None = None
    tags: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices('tags', 'trashDots', 'trash_dots'),
    )
    match_id: str | None = Field(None, validation_alias=AliasChoices('matchId', 'match_id'))

    class Config:
        extra = 'forbid'


class PressRecord(BaseModel):
    """Manually called press."""

    start_hole: int = Field(..., ge=1, le=18)
    pressed_by_team: str
    id: str | None = None
    match_id: str | None = None
    status: str | None = Field(None, pattern=r'^(active|completed)$')

    @field_validator('pressed_by_team')
    @classmethod
    def validate_team(cls, v):
        """Ensure the pressing team is A or B."""
        if v not in TEAMS:
            raise ValueError(f'Invalid team: {v}')
        return v

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = 'forbid'


class SideBetsRecord(BaseModel):
    """Side-bet switches. Unset pots and values fall back to the settlement config."""

    greenies: bool = False
    sandies: bool = False
    snake: bool = False
    auto_press: bool = False
    auto_press_deficit: int | None = Field(None, ge=1)
    birdies_double: bool = False
    trash_value: int | float | None = None
    starting_hole: int | None = Field(None, ge=1, le=18)
    par3_contest: bool = False
    par3_pot: int | None = Field(None, ge=0)
    par5_contest: bool = False
    par5_pot: int | None = Field(None, ge=0)
    bonus_skins: bool = False
    team_skins: bool = False
    pot_mode: bool = False

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = 'forbid'


class WagerRecord(BaseModel):
    """
    Wager setup of a match.

    The app's combined format values '1v1' and '2v2' are read as a Nassau
    match in that team mode.
    """

    format: str
    wager_amount: int | float
    team_mode: str | None = None
    wager_type: str | None = Field(None, pattern=r'^(PER_HOLE|NASSAU)$')
    side_bets: SideBetsRecord = Field(default_factory=SideBetsRecord)

    @model_validator(mode='before')
    @classmethod
    def split_combined_format(cls, data):
        """Map '1v1'/'2v2' formats onto nassau plus a team mode."""
        if isinstance(data, dict) and data.get('format') in TEAM_MODE_SIZES:
            data = dict(data)
            mode = data['format']
            data['format'] = FORMAT_NASSAU
            if 'teamMode' not in data and 'team_mode' not in data:
                data['teamMode'] = mode
        return data

    @field_validator('format')
    @classmethod
    def validate_format(cls, v):
        """Ensure the format is known."""
        if v not in FORMATS:
            raise ValueError(f'Invalid format: {v}')
        return v

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = 'forbid'


class MatchSnapshotFile(BaseModel):
    """Complete match snapshot JSON file structure."""

    match_id: str = Field(..., min_length=1, validation_alias=AliasChoices('matchId', 'match_id', 'id'))
    course: CourseRecord
    players: list[PlayerRecord]
    scores: list[ScoreRecord] = Field(default_factory=list)
    wager: WagerRecord
    presses: list[PressRecord] = Field(default_factory=list)

    class Config:
        extra = 'forbid'


class SettlementConfig(BaseModel):
    """Engine defaults and logging settings."""

    default_trash_value: int = Field(..., ge=0)
    default_par3_pot: int = Field(..., ge=0)
    default_par5_pot: int = Field(..., ge=0)
    auto_press_deficit: int = Field(..., ge=1, le=9)
    log_dir: str = 'logs'
    log_level: str = Field('INFO', pattern=r'^(DEBUG|INFO|WARNING|ERROR)$')

    class Config:
        extra = 'forbid'
