from pydantic import BaseModel, ConfigDict, Field

from src.events_api.schemas.fields import NonEmptyStr


class SendMessageRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # "from" is a keyword, so the attribute is from_
    from_: NonEmptyStr = Field(alias="from", max_length=32)
    to: NonEmptyStr = Field(max_length=32)
    message: NonEmptyStr = Field(max_length=1600)
