"""Image upload/delete response schemas."""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UploadResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str
    file_paths: list[str]
    type: str
    count: int


class MessageResponse(BaseModel):
    message: str
