from enum import Enum


class ErrorKind(str, Enum):
    """Tag carried by every LogicError."""
    INVALID_FIELD = "invalid_field"
    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"
    NOTE_NOT_FOUND = "note_not_found"
    WRONG_CREDENTIALS = "wrong_credentials"
    SAME_PASSWORD = "same_password"
    NOT_OWNER = "not_owner"


class LogicError(Exception):
    """Business rule or validation failure raised by the agenda service."""
    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidField(LogicError):
    kind = ErrorKind.INVALID_FIELD

    def __init__(self, label: str):
        super().__init__(f"invalid {label}")
        self.label = label


class AlreadyExists(LogicError):
    kind = ErrorKind.ALREADY_EXISTS

    def __init__(self, email: str):
        super().__init__(f"user with {email} email already exist")


class NotFound(LogicError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, email: str):
        super().__init__(f"user with {email} email does not exist")


class NoteNotFound(NotFound):
    kind = ErrorKind.NOTE_NOT_FOUND

    def __init__(self, note_id):
        LogicError.__init__(self, f"note with id {note_id} does not exist")


class WrongCredentials(LogicError):
    kind = ErrorKind.WRONG_CREDENTIALS

    def __init__(self):
        super().__init__("wrong password")


class SamePassword(LogicError):
    kind = ErrorKind.SAME_PASSWORD

    def __init__(self):
        super().__init__("new password must be different to old password")


class NotOwner(LogicError):
    kind = ErrorKind.NOT_OWNER

    def __init__(self):
        super().__init__("note does not belong to user")
