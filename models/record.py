from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

class ServerRecord(BaseModel):
    """Standard SA:MP query fields for one server.

    The json keys are short to cut down on network traffic; python code uses
    the long field names.
    """

    model_config = ConfigDict(populate_by_name=True, strict=True, frozen=True)

    address: str = Field("", alias="ip")
    hostname: str = Field("", alias="hn")
    players: int = Field(0, alias="pc")
    max_players: int = Field(0, alias="pm")
    gamemode: str = Field("", alias="gm")
    language: str = Field("", alias="la")
    password: bool = Field(False, alias="pa")
    rules: dict[str, str] = Field(default_factory=dict, alias="ru")
    player_list: list[str] = Field(default_factory=list, alias="pl")

    @model_validator(mode="before")
    @classmethod
    def nulls_to_defaults(cls, data: Any) -> Any:
        # a null field decodes to its empty value, validation then reports it
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data
