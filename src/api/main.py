"""
FastAPI backend: REST API for contacts.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root or from Docker)
for path in (
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
):
    if path.exists():
        load_dotenv(path)
        break

from contextlib import asynccontextmanager

from fastapi import Body, Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from neo4j import GraphDatabase
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from contactbook.application import (
    ContactService,
    DuplicateEmail,
    Invalid,
    NotFound,
    StorageFailure,
)
from contactbook.domain import Contact
from contactbook.infrastructure import Neo4jContactRepository, ensure_contact_constraints

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=os.environ.get("LOG_LEVEL", "INFO").strip().upper(),
)
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "PUT, GET, POST, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": (
        "accept, content-type, x-parse-application-id, "
        "x-parse-rest-api-key, x-parse-session-token"
    ),
}


def _get_driver():
    uri = os.environ.get("NEO4J_URI", "bolt://localhost:7687").strip()
    user = os.environ.get("NEO4J_USER", "neo4j").strip()
    password = os.environ.get("NEO4J_PASSWORD", "password").strip()
    return GraphDatabase.driver(uri, auth=(user, password))


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.driver = None
    try:
        app.state.driver = _get_driver()
        ensure_contact_constraints(app.state.driver)
        app.state.service = ContactService(Neo4jContactRepository(app.state.driver))
        logger.info("Contact store ready")
        yield
    finally:
        if getattr(app.state, "driver", None) is not None:
            app.state.driver.close()


app = FastAPI(title="Contactbook API", lifespan=lifespan)


def get_service(request: Request) -> ContactService:
    """The one ContactService built at startup. Tests override this dependency."""
    return request.app.state.service


@app.middleware("http")
async def allow_cross_origin(request: Request, call_next):
    # Pre-flight requests are answered here without reaching a route.
    if request.method == "OPTIONS":
        response = Response(status_code=200)
    else:
        response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": "Invalid request body."})


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


# --- REST: contacts ---


class ContactOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None
    contact_type: str | None = None
    created_at: int

    @classmethod
    def from_contact(cls, contact: Contact) -> "ContactOut":
        return cls(
            id=contact.id,
            first_name=contact.first_name,
            last_name=contact.last_name,
            email=contact.email,
            phone=contact.phone,
            contact_type=contact.contact_type,
            created_at=contact.created_at,
        )


def _to_response(result) -> ContactOut:
    """Map a service result to a ContactOut or raise the matching HTTPException."""
    if isinstance(result, NotFound):
        raise HTTPException(status_code=404, detail="Contact not found")
    if isinstance(result, Invalid):
        raise HTTPException(status_code=400, detail=result.reason)
    if isinstance(result, DuplicateEmail):
        raise HTTPException(status_code=400, detail="A contact with this email already exists")
    if isinstance(result, StorageFailure):
        raise HTTPException(status_code=400, detail="Storage error")
    return ContactOut.from_contact(result)


@app.post("/contacts", response_model=ContactOut)
def create_contact(
    payload: Any = Body(None),
    service: ContactService = Depends(get_service),
):
    return _to_response(service.create_contact(payload))


@app.get("/contacts", response_model=list[ContactOut])
def list_contacts(service: ContactService = Depends(get_service)):
    result = service.list_contacts()
    if isinstance(result, StorageFailure):
        raise HTTPException(status_code=400, detail="Storage error")
    return [ContactOut.from_contact(c) for c in result]


@app.get("/contacts/{contact_id}", response_model=ContactOut)
def get_contact(contact_id: str, service: ContactService = Depends(get_service)):
    return _to_response(service.get_contact(contact_id))


@app.delete("/contacts/{contact_id}", response_model=ContactOut)
def delete_contact(contact_id: str, service: ContactService = Depends(get_service)):
    return _to_response(service.delete_contact(contact_id))


@app.patch("/contacts/{contact_id}", response_model=ContactOut)
def update_contact(
    contact_id: str,
    payload: Any = Body(None),
    service: ContactService = Depends(get_service),
):
    return _to_response(service.update_contact(contact_id, payload))


def run() -> None:
    """Console entry point: serve the app with uvicorn on HOST:PORT."""
    import uvicorn

    host = os.environ.get("HOST", "0.0.0.0").strip()
    port = int(os.environ.get("PORT", "3000"))
    logger.info("Starting on %s:%s", host, port)
    uvicorn.run("api.main:app", host=host, port=port)
