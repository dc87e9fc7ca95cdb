from datetime import datetime

import pytest
from sqlalchemy.orm.exc import StaleDataError

from src.api.repository import SqlAlchemyRepository
from src.api.security import get_password_hash


def test_find_user_by_email(repository):
    created = repository.create_user("a@mail.com", get_password_hash("pw"))

    assert repository.find_user_by_email("a@mail.com").id == created.id
    assert repository.find_user_by_email("b@mail.com") is None


def test_note_belongs_to(repository):
    owner = repository.create_user("a@mail.com", "hash")
    other = repository.create_user("b@mail.com", "hash")
    note = repository.create_note(owner, datetime(2026, 1, 1), "text")

    assert repository.note_belongs_to(note, owner)
    assert not repository.note_belongs_to(note, other)


@pytest.mark.parametrize(
    "note_id",
    [None, "", "abc", 1.5j, True, 1.9, 1.0, "1.0", "-1", "+1", " 1", "\uff11", 0, -1, 2 ** 63, "9" * 30],
)
def test_find_note_by_id_ignores_malformed_ids(repository, note_id):
    owner = repository.create_user("a@mail.com", "hash")
    note = repository.create_note(owner, datetime(2026, 1, 1), "text")
    assert note.id == 1

    assert repository.find_note_by_id(note_id) is None


def test_find_note_by_id_accepts_int_and_digit_string(repository):
    owner = repository.create_user("a@mail.com", "hash")
    note = repository.create_note(owner, datetime(2026, 1, 1), "text")

    assert repository.find_note_by_id(note.id) is note
    assert repository.find_note_by_id(str(note.id)) is note
    assert repository.find_note_by_id(2 ** 63 - 1) is None


def test_save_user_bumps_version(repository):
    user = repository.create_user("a@mail.com", "hash")
    version = user.version_id

    repository.add_contact(user, "John", "Doe", None, "john@mail.com")

    assert user.version_id == version + 1


def test_stale_user_update_is_rejected(session_factory):
    first = SqlAlchemyRepository(session_factory())
    second = SqlAlchemyRepository(session_factory())
    first.create_user("a@mail.com", "hash")

    stale = first.find_user_by_email("a@mail.com")
    fresh = second.find_user_by_email("a@mail.com")
    fresh.password_hash = "changed"
    second.save_user(fresh)

    stale.password_hash = "lost update"
    with pytest.raises(StaleDataError):
        first.save_user(stale)

    first.db.close()
    second.db.close()
