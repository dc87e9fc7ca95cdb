from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, Index
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class User(Base):
    """
    Account identified by a unique email. Owns an embedded address book.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    version_id = Column(Integer, nullable=False)

    contacts = relationship(
        "Contact",
        back_populates="owner",
        cascade="all, delete-orphan",
        order_by="Contact.id",
    )

    # UPDATE/DELETE of a row changed since it was read raises StaleDataError
    __mapper_args__ = {"version_id_col": version_id}


class Note(Base):
    """
    Dated text memo. ``user_id`` is a bare owner reference: notes are kept
    when their owner unregisters.

    ``date`` is naive UTC. ``utc_offset`` holds the caller's offset in
    seconds, or NULL when the note was written with a naive datetime.
    """
    __tablename__ = "notes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False)
    date = Column(DateTime, nullable=False)
    utc_offset = Column(Integer, nullable=True)
    text = Column(Text, nullable=False)

    __table_args__ = (
        Index("ix_notes_user_date", "user_id", "date"),
    )


class Contact(Base):
    """
    Address book entry, stored and deleted together with its user.
    """
    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    surname = Column(String(255), nullable=False)
    phone = Column(String(64), nullable=True)
    email = Column(String(255), nullable=False)

    owner = relationship("User", back_populates="contacts")
