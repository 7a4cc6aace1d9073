# === portfolio/api/endpoints/contact.py ===
from typing import Any
from fastapi import APIRouter, Body, Depends

from portfolio.api.deps import get_contact_service
from portfolio.api.routing import InstrumentedRoute
from portfolio.schemas.contact import ContactResponse
from portfolio.services.contact import ContactService
from portfolio.services.validation import validate_contact

router = APIRouter(route_class=InstrumentedRoute)

@router.post("", response_model=ContactResponse)
async def submit_contact_form(
    payload: Any = Body(...),
    service: ContactService = Depends(get_contact_service),
):
    submission = validate_contact(payload).unwrap()
    await service.send(submission)
    return ContactResponse(
        success=True,
        message="Thank you for your message. I will get back to you soon!",
    )
