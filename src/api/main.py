"""
FastAPI backend: REST API over the contact directory.
Run with uvicorn: uvicorn api.main:app --reload
"""

import io
import logging
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root) or the working directory
for path in (
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
):
    if path.exists():
        load_dotenv(path)
        break

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from callbook.application import (
    CallPlaced,
    ContactAdded,
    ContactForm,
    ContactNotFound,
    ContactService,
    ContactSummary,
    ContactUpdated,
    Rejected,
    RejectReason,
)
from callbook.infrastructure import build_contact_service

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

EXPORT_FILENAME = "contacts_export.json"

# Validation problems are the client's input; the rest conflict with stored state.
_REJECT_STATUS = {
    RejectReason.EMPTY_NICKNAME: 400,
    RejectReason.EMPTY_PHONE_NUMBER: 400,
    RejectReason.CAPACITY_EXCEEDED: 409,
    RejectReason.DUPLICATE_NICKNAME: 409,
    RejectReason.PRIORITY_FULL: 409,
}


def get_service(app: FastAPI) -> ContactService:
    if getattr(app.state, "service", None) is None:
        app.state.service = build_contact_service()
    return app.state.service


@asynccontextmanager
async def lifespan(app: FastAPI):
    service = get_service(app)
    logger.info(
        "Contact directory ready: %d of %d contacts",
        service.directory.count(),
        service.directory.max_contacts,
    )
    yield


app = FastAPI(title="CallBook API", lifespan=lifespan)


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


# --- REST: contacts ---


class ContactBody(BaseModel):
    nickname: str
    phone_number: str
    image_uri: str | None = None
    is_priority: bool = False


class ContactItem(BaseModel):
    id: int
    nickname: str
    phone_number: str
    image_uri: str | None = None
    is_priority: bool = False
    created_at: str


def _item(s: ContactSummary) -> ContactItem:
    return ContactItem(
        id=s.contact_id,
        nickname=s.nickname,
        phone_number=s.phone_number,
        image_uri=s.image_uri,
        is_priority=s.is_priority,
        created_at=s.created_at.isoformat(),
    )


def _form(body: ContactBody) -> ContactForm:
    return ContactForm(
        nickname=body.nickname,
        phone_number=body.phone_number,
        image_uri=body.image_uri,
        is_priority=body.is_priority,
    )


def _raise_rejected(result: Rejected) -> None:
    raise HTTPException(
        status_code=_REJECT_STATUS.get(result.reason, 400),
        detail=result.reason.value,
    )


@app.get("/contacts")
def list_contacts(request: Request):
    service = get_service(request.app)
    return [_item(s) for s in service.list_contacts()]


@app.get("/contacts/{contact_id}")
def get_contact(contact_id: int, request: Request):
    service = get_service(request.app)
    summary = service.get_contact(contact_id)
    if summary is None:
        raise HTTPException(status_code=404, detail="Contact not found")
    return _item(summary)


@app.post("/contacts")
def create_contact(body: ContactBody, request: Request):
    service = get_service(request.app)
    result = service.add_contact(_form(body))
    if isinstance(result, Rejected):
        _raise_rejected(result)
    if not isinstance(result, ContactAdded):
        raise HTTPException(status_code=400, detail="Failed to add contact")
    summary = service.get_contact(result.contact.id)
    return JSONResponse(content=_item(summary).model_dump(), status_code=201)


@app.put("/contacts/{contact_id}")
def update_contact(contact_id: int, body: ContactBody, request: Request):
    service = get_service(request.app)
    result = service.update_contact(contact_id, _form(body))
    if isinstance(result, ContactNotFound):
        raise HTTPException(status_code=404, detail="Contact not found")
    if isinstance(result, Rejected):
        _raise_rejected(result)
    if not isinstance(result, ContactUpdated):
        raise HTTPException(status_code=400, detail="Failed to update contact")
    return _item(service.get_contact(contact_id))


@app.delete("/contacts/{contact_id}", status_code=204)
def delete_contact(contact_id: int, request: Request):
    service = get_service(request.app)
    if not service.delete_contact(contact_id):
        raise HTTPException(status_code=404, detail="Contact not found")
    return Response(status_code=204)


@app.post("/contacts/{contact_id}/call")
def call_contact(contact_id: int, request: Request):
    service = get_service(request.app)
    result = service.call(contact_id)
    if isinstance(result, ContactNotFound):
        raise HTTPException(status_code=404, detail="Contact not found")
    return {"placed": isinstance(result, CallPlaced), "phone_number": result.phone_number}


# --- REST: export / import ---


@app.get("/export")
def export_contacts(request: Request):
    service = get_service(request.app)
    buffer = io.BytesIO()
    if not service.export_contacts(buffer):
        raise HTTPException(status_code=500, detail="Export failed")
    return Response(
        content=buffer.getvalue(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


@app.post("/import")
async def import_contacts(request: Request):
    service = get_service(request.app)
    body = await request.body()
    # Parsing and the backend writes block; keep them off the event loop.
    if not await run_in_threadpool(service.import_contacts, io.BytesIO(body)):
        raise HTTPException(status_code=400, detail="Invalid or empty contact list")
    return {"count": service.directory.count()}
