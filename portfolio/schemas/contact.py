# === portfolio/schemas/contact.py ===
from typing import Annotated
from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, StrictStr

from portfolio.schemas.project import not_blank

class ContactSubmission(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Annotated[StrictStr, Field(min_length=1, max_length=100), AfterValidator(not_blank)]
    email: EmailStr
    subject: Annotated[StrictStr, Field(min_length=1, max_length=200), AfterValidator(not_blank)]
    message: Annotated[StrictStr, Field(min_length=10, max_length=5000)]

class ContactResponse(BaseModel):
    success: bool
    message: str
