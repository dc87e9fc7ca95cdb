"""
Store access for the agenda service.

``SqlAlchemyRepository`` wraps a request-scoped ``Session`` and exposes the
lookups and mutations the service needs, so the business rules never build
queries themselves. Every mutation commits immediately.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from src.api.models import Contact, Note, User

# Largest value a signed 64-bit INTEGER column holds
MAX_NOTE_ID = 2 ** 63 - 1


class SqlAlchemyRepository:
    """Users, notes and embedded contacts backed by SQLAlchemy."""

    def __init__(self, db: Session):
        self.db = db

    # -------- Users --------

    def find_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def create_user(self, email: str, password_hash: str) -> User:
        user = User(email=email, password_hash=password_hash)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def save_user(self, user: User) -> User:
        # Touch the row so the version check runs even when only contacts changed
        user.updated_at = datetime.utcnow()
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def delete_user(self, user: User) -> None:
        self.db.delete(user)
        self.db.commit()

    # -------- Notes --------

    def create_note(self, user: User, date: datetime, text: str, utc_offset: Optional[int] = None) -> Note:
        note = Note(user_id=user.id, date=date, utc_offset=utc_offset, text=text)
        self.db.add(note)
        self.db.commit()
        self.db.refresh(note)
        return note

    def find_note_by_id(self, note_id) -> Optional[Note]:
        """Return the note or None. Only ints and digit strings inside the
        INTEGER key range can match."""
        if isinstance(note_id, str) and note_id.isascii() and note_id.isdigit():
            key = int(note_id)
        elif isinstance(note_id, int) and not isinstance(note_id, bool):
            key = note_id
        else:
            return None
        if not 0 < key <= MAX_NOTE_ID:
            return None
        return self.db.get(Note, key)

    @staticmethod
    def note_belongs_to(note: Note, user: User) -> bool:
        return note.user_id == user.id

    def find_notes_between(self, user: User, start: datetime, end: datetime) -> List[Note]:
        return (
            self.db.query(Note)
            .filter(Note.user_id == user.id, Note.date >= start, Note.date <= end)
            .order_by(Note.id)
            .all()
        )

    def save_note(self, note: Note) -> Note:
        self.db.add(note)
        self.db.commit()
        self.db.refresh(note)
        return note

    def delete_note(self, note: Note) -> None:
        self.db.delete(note)
        self.db.commit()

    # -------- Contacts --------

    def add_contact(self, user: User, name: str, surname: str, phone, email: str) -> Contact:
        contact = Contact(name=name, surname=surname, phone=phone, email=email)
        user.contacts.append(contact)
        self.save_user(user)
        return contact

    def find_contacts_starting_with(self, user: User, first_letter: str) -> List[Contact]:
        return (
            self.db.query(Contact)
            .filter(
                Contact.user_id == user.id,
                func.substr(Contact.name, 1, 1) == first_letter,
            )
            .order_by(Contact.id)
            .all()
        )
