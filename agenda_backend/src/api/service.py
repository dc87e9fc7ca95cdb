"""
Account, note and contact operations.

Each operation validates its arguments, looks the user up through the
repository, applies the business rule and returns ``True`` or a list of
shaped records. Failures are raised as ``LogicError`` subclasses; store
errors propagate untouched.
"""

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, List, Optional

from src.api.errors import AlreadyExists, NotFound, NoteNotFound, NotOwner, SamePassword, WrongCredentials
from src.api.models import Contact, Note, User
from src.api.security import get_password_hash, verify_password
from src.api.validators import validate_date, validate_email, validate_non_empty_string

logger = logging.getLogger(__name__)


def _as_datetime(value: date) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def to_utc_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC. Naive values are taken as UTC."""
    if value.utcoffset() is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def utc_offset_seconds(value: datetime) -> Optional[int]:
    offset = value.utcoffset()
    return None if offset is None else int(offset.total_seconds())


def day_range(value: date):
    """Return the first and last instant, as naive UTC, of the day ``value``
    falls on in its own timezone."""
    moment = _as_datetime(value)
    start = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    end = moment.replace(hour=23, minute=59, second=59, microsecond=999999)
    return to_utc_naive(start), to_utc_naive(end)


def shape_note(note: Note) -> Dict:
    moment = note.date
    if note.utc_offset is not None:
        zone = timezone(timedelta(seconds=note.utc_offset))
        moment = moment.replace(tzinfo=timezone.utc).astimezone(zone)
    return {"id": str(note.id), "date": moment, "text": note.text}


def shape_contact(contact: Contact) -> Dict:
    return {
        "id": str(contact.id),
        "name": contact.name,
        "surname": contact.surname,
        "phone": contact.phone,
        "email": contact.email,
    }


class AgendaService:
    """Business rules for users, their notes and their contacts.

    The repository is injected so tests and the HTTP layer can supply their
    own session-bound store.
    """

    def __init__(self, repository):
        self.repository = repository

    def _get_user(self, email: str) -> User:
        user = self.repository.find_user_by_email(email)
        if user is None:
            logger.debug("User lookup failed for %s", email)
            raise NotFound(email)
        return user

    def _get_authenticated_user(self, email: str, password: str) -> User:
        user = self._get_user(email)
        if not verify_password(password, user.password_hash):
            raise WrongCredentials()
        return user

    # -------- Accounts --------

    def register(self, email, password) -> bool:
        validate_email(email)
        validate_non_empty_string("password", password)

        if self.repository.find_user_by_email(email) is not None:
            raise AlreadyExists(email)

        self.repository.create_user(email, get_password_hash(password))
        logger.info("Registered user %s", email)
        return True

    def authenticate(self, email, password) -> bool:
        validate_email(email)
        validate_non_empty_string("password", password)

        self._get_authenticated_user(email, password)
        return True

    def update_password(self, email, password, new_password) -> bool:
        validate_email(email)
        validate_non_empty_string("password", password)
        validate_non_empty_string("new password", new_password)

        if password == new_password:
            raise SamePassword()

        user = self._get_authenticated_user(email, password)
        user.password_hash = get_password_hash(new_password)
        self.repository.save_user(user)
        logger.info("Updated password for user %s", email)
        return True

    def unregister_user(self, email, password) -> bool:
        validate_email(email)
        validate_non_empty_string("password", password)

        user = self._get_authenticated_user(email, password)
        # notes are left in place
        self.repository.delete_user(user)
        logger.info("Unregistered user %s", email)
        return True

    # -------- Notes --------

    def add_note(self, email, date, text) -> bool:
        validate_email(email)
        validate_date("date", date)
        validate_non_empty_string("text", text)

        user = self._get_user(email)
        moment = _as_datetime(date)
        self.repository.create_note(user, to_utc_naive(moment), text, utc_offset_seconds(moment))
        return True

    def list_notes(self, email, date) -> List[Dict]:
        validate_email(email)
        validate_date("date", date)

        user = self._get_user(email)
        start, end = day_range(date)
        notes = self.repository.find_notes_between(user, start, end)
        return [shape_note(note) for note in notes]

    def _get_owned_note(self, user: User, note_id) -> Note:
        note = self.repository.find_note_by_id(note_id)
        if note is None:
            raise NoteNotFound(note_id)
        if not self.repository.note_belongs_to(note, user):
            raise NotOwner()
        return note

    def update_note(self, email, note_id, text) -> bool:
        validate_email(email)
        validate_non_empty_string("text", text)

        user = self._get_user(email)
        note = self._get_owned_note(user, note_id)
        note.text = text
        self.repository.save_note(note)
        return True

    def remove_note(self, email, note_id) -> bool:
        validate_email(email)

        user = self._get_user(email)
        note = self._get_owned_note(user, note_id)
        self.repository.delete_note(note)
        return True

    # -------- Contacts --------

    def add_contact(self, email, name, surname, phone, contact_email) -> bool:
        validate_email(email)
        validate_email(contact_email)
        validate_non_empty_string("name", name)
        validate_non_empty_string("surname", surname)

        user = self._get_user(email)
        self.repository.add_contact(user, name, surname, phone, contact_email)
        return True

    def list_contacts(self, email, starts_with) -> List[Dict]:
        validate_email(email)
        validate_non_empty_string("starts with", starts_with)

        user = self._get_user(email)
        contacts = self.repository.find_contacts_starting_with(user, starts_with)
        return [shape_contact(contact) for contact in contacts]
