# === portfolio/schemas/metrics.py ===
from typing import Literal, Optional
from pydantic import BaseModel, Field

HttpMethod = Literal["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

class PageViewRequest(BaseModel):
    page: str = Field(..., min_length=1, max_length=200)
    method: Optional[HttpMethod] = "GET"
