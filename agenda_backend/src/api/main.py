from datetime import datetime, timedelta
from typing import List

from fastapi import FastAPI, Depends, Request, status, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from src.api.auth import create_access_token, get_current_email
from src.api.config import ACCESS_TOKEN_EXPIRE_MINUTES, FRONTEND_ORIGIN, LOG_FILE, LOG_LEVEL
from src.api.database import get_db, init_db
from src.api.errors import ErrorKind, LogicError
from src.api.logging_config import setup_logging
from src.api.repository import SqlAlchemyRepository
from src.api.schemas import (
    TokenResponse,
    StatusResponse,
    UserCreateRequest,
    PasswordUpdateRequest,
    UnregisterRequest,
    NoteCreateRequest,
    NoteUpdateRequest,
    NoteResponse,
    ContactCreateRequest,
    ContactResponse,
)
from src.api.service import AgendaService

setup_logging(LOG_LEVEL, LOG_FILE)

app = FastAPI(
    title="Agenda API",
    description="Personal agenda backend: accounts, dated notes and contacts.",
    version="1.0.0",
    openapi_tags=[
        {"name": "Health", "description": "Service health and status."},
        {"name": "Auth", "description": "User registration and authentication."},
        {"name": "Users", "description": "Account management for the current user."},
        {"name": "Notes", "description": "Dated notes of the current user."},
        {"name": "Contacts", "description": "Address book of the current user."},
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[FRONTEND_ORIGIN],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ERROR_STATUS = {
    ErrorKind.INVALID_FIELD: status.HTTP_400_BAD_REQUEST,
    ErrorKind.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.NOTE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.WRONG_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.SAME_PASSWORD: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_OWNER: status.HTTP_403_FORBIDDEN,
}


@app.exception_handler(LogicError)
async def logic_error_handler(request: Request, exc: LogicError):
    return JSONResponse(
        status_code=ERROR_STATUS[exc.kind],
        content={"detail": exc.message, "kind": exc.kind.value},
    )


def get_service(db: Session = Depends(get_db)) -> AgendaService:
    """Dependency that binds the agenda service to the request session."""
    return AgendaService(SqlAlchemyRepository(db))


# PUBLIC_INTERFACE
@app.get("/", tags=["Health"], summary="Health Check")
def health_check():
    """
    Health check endpoint.

    Returns:
        JSON object indicating service status.
    """
    return {"message": "Healthy"}


# -------- Auth Routes --------

# PUBLIC_INTERFACE
@app.post(
    "/auth/register",
    response_model=StatusResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Auth"],
    summary="Register a new user",
)
def register_user(payload: UserCreateRequest, service: AgendaService = Depends(get_service)):
    """
    Register a new user.

    Body:
        email: valid email address
        password: plaintext password

    Raises:
        400 on invalid fields, 409 if email already in use.
    """
    return StatusResponse(ok=service.register(payload.email, payload.password))


# PUBLIC_INTERFACE
@app.post(
    "/auth/login",
    response_model=TokenResponse,
    tags=["Auth"],
    summary="Login and obtain JWT access token",
)
def login(form_data: OAuth2PasswordRequestForm = Depends(), service: AgendaService = Depends(get_service)):
    """
    Login endpoint using OAuth2PasswordRequestForm fields.

    Form fields:
        username: email of the user
        password: plaintext password

    Raises:
        404 for unknown users, 401 on wrong password.
    """
    service.authenticate(form_data.username, form_data.password)
    token = create_access_token(
        form_data.username, expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    return TokenResponse(access_token=token, token_type="bearer")


# -------- User Routes --------

# PUBLIC_INTERFACE
@app.patch(
    "/users/me/password",
    response_model=StatusResponse,
    tags=["Users"],
    summary="Change the password of the current user",
)
def update_password(
    payload: PasswordUpdateRequest,
    email: str = Depends(get_current_email),
    service: AgendaService = Depends(get_service),
):
    """
    Replace the password. The new one must differ from the current one.
    """
    return StatusResponse(ok=service.update_password(email, payload.password, payload.new_password))


# PUBLIC_INTERFACE
@app.delete(
    "/users/me",
    response_model=StatusResponse,
    tags=["Users"],
    summary="Unregister the current user",
)
def unregister_user(
    payload: UnregisterRequest,
    email: str = Depends(get_current_email),
    service: AgendaService = Depends(get_service),
):
    """
    Delete the account and its contacts. Notes are kept.
    """
    return StatusResponse(ok=service.unregister_user(email, payload.password))


# -------- Notes Routes --------

# PUBLIC_INTERFACE
@app.post(
    "/notes",
    response_model=StatusResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Notes"],
    summary="Create a new note",
)
def create_note(
    payload: NoteCreateRequest,
    email: str = Depends(get_current_email),
    service: AgendaService = Depends(get_service),
):
    """
    Create a dated note for the authenticated user.
    """
    return StatusResponse(ok=service.add_note(email, payload.date, payload.text))


# PUBLIC_INTERFACE
@app.get(
    "/notes",
    response_model=List[NoteResponse],
    tags=["Notes"],
    summary="List the notes of one day",
)
def list_notes(
    date: datetime = Query(..., description="Any instant of the requested day"),
    email: str = Depends(get_current_email),
    service: AgendaService = Depends(get_service),
):
    """
    List notes of the current user dated on the same day as ``date``.
    """
    return [NoteResponse(**note) for note in service.list_notes(email, date)]


# PUBLIC_INTERFACE
@app.patch(
    "/notes/{note_id}",
    response_model=StatusResponse,
    tags=["Notes"],
    summary="Update the text of a note",
)
def update_note(
    note_id: str,
    payload: NoteUpdateRequest,
    email: str = Depends(get_current_email),
    service: AgendaService = Depends(get_service),
):
    """
    Update a note. Only the owner can modify it.
    """
    return StatusResponse(ok=service.update_note(email, note_id, payload.text))


# PUBLIC_INTERFACE
@app.delete(
    "/notes/{note_id}",
    response_model=StatusResponse,
    tags=["Notes"],
    summary="Delete a note by ID",
)
def delete_note(
    note_id: str,
    email: str = Depends(get_current_email),
    service: AgendaService = Depends(get_service),
):
    """
    Delete a note. Only the owner can delete it.
    """
    return StatusResponse(ok=service.remove_note(email, note_id))


# -------- Contacts Routes --------

# PUBLIC_INTERFACE
@app.post(
    "/contacts",
    response_model=StatusResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Contacts"],
    summary="Add a contact",
)
def create_contact(
    payload: ContactCreateRequest,
    email: str = Depends(get_current_email),
    service: AgendaService = Depends(get_service),
):
    """
    Append a contact to the current user's address book.
    """
    ok = service.add_contact(email, payload.name, payload.surname, payload.phone, payload.email)
    return StatusResponse(ok=ok)


# PUBLIC_INTERFACE
@app.get(
    "/contacts",
    response_model=List[ContactResponse],
    tags=["Contacts"],
    summary="List contacts by first letter",
)
def list_contacts(
    starts_with: str = Query(..., description="First character of the contact name"),
    email: str = Depends(get_current_email),
    service: AgendaService = Depends(get_service),
):
    """
    List contacts whose name begins with ``starts_with``.
    """
    return [ContactResponse(**contact) for contact in service.list_contacts(email, starts_with)]


@app.on_event("startup")
def on_startup():
    init_db()
