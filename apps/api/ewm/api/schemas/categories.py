from pydantic import Field

from ewm.api.schemas.common import NonBlankStr, SchemaBase


class NewCategoryDto(SchemaBase):
    name: NonBlankStr = Field(min_length=1, max_length=50)


class CategoryDto(SchemaBase):
    id: int
    name: str
