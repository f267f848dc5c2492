"""Pydantic schemas for the character roster."""

from pydantic import BaseModel, ConfigDict, Field

NAME_MIN_LEN = 6
NAME_MAX_LEN = 255


class CharacterCreate(BaseModel):
    """Body for creating a character. JSON uses camelCase lastName."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    last_name: str = Field(
        ..., alias="lastName", min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN
    )


class CharacterUpdate(BaseModel):
    """Partial update; omitted fields keep their current value."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    last_name: str | None = Field(
        default=None, alias="lastName", min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN
    )


class Character(BaseModel):
    """Stored character."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    name: str
    last_name: str = Field(..., alias="lastName")
