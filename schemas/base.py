"""
RecipeBox Schema Base
Shared pydantic configuration: camelCase JSON, ORM attribute loading
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exposing snake_case fields as camelCase JSON keys"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    message: str


class SuccessResponse(CamelModel):
    success: bool = True
    message: str
