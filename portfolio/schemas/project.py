# === portfolio/schemas/project.py ===
from datetime import datetime
from typing import Annotated, List, Optional
from uuid import UUID

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    StrictBool,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

_http_url = TypeAdapter(HttpUrl)

def not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    return value

def valid_url(value: str) -> str:
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError("must be a valid URL")
    return value

Title = Annotated[StrictStr, Field(min_length=1, max_length=200), AfterValidator(not_blank)]
Description = Annotated[StrictStr, Field(min_length=1), AfterValidator(not_blank)]
Url = Annotated[StrictStr, Field(max_length=500), AfterValidator(valid_url)]
# sort_order is an INT4 column
SortOrder = Annotated[StrictInt, Field(ge=-2**31, le=2**31 - 1)]


class ProjectBase(BaseModel):
    # JSON uses camelCase keys only, anything else in the body is dropped
    model_config = ConfigDict(alias_generator=to_camel, extra="ignore")


class ProjectCreate(ProjectBase):
    title: Title
    description: Description
    image_url: Optional[Url] = None
    project_url: Optional[Url] = None
    github_url: Optional[Url] = None
    technologies: Optional[List[StrictStr]] = None
    is_active: StrictBool = True
    sort_order: SortOrder = 0


class ProjectUpdate(ProjectBase):
    title: Optional[Title] = None
    description: Optional[Description] = None
    image_url: Optional[Url] = None
    project_url: Optional[Url] = None
    github_url: Optional[Url] = None
    technologies: Optional[List[StrictStr]] = None
    is_active: Optional[StrictBool] = None
    sort_order: Optional[SortOrder] = None

    @field_validator("title", "description", "is_active", "sort_order")
    @classmethod
    def not_null(cls, value):
        # only runs for supplied fields
        if value is None:
            raise ValueError("must not be null")
        return value

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class ProjectResponse(ProjectBase):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: UUID
    title: str
    description: str
    image_url: Optional[str] = None
    project_url: Optional[str] = None
    github_url: Optional[str] = None
    technologies: Optional[List[str]] = None
    is_active: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime
