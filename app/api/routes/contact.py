from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.api.deps import get_contact_pipeline
from app.schemas.contact import ContactReply
from app.services.contact_service import ContactPipeline

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post("", response_model=ContactReply, responses={400: {"model": ContactReply}, 500: {"model": ContactReply}})
async def create_contact(request: Request, pipeline: ContactPipeline = Depends(get_contact_pipeline)):
    """
    Submit a contact message (Public).

    Always 200 for a well-formed submission, with wording that discloses any
    storage or email trouble; 400 with every field violation otherwise.
    """
    try:
        payload = await request.json()
    except ValueError:
        # unparseable body is reported as three missing fields
        payload = {}

    reply = await pipeline.submit(payload)
    return JSONResponse(status_code=reply.status_code, content=reply.body)
