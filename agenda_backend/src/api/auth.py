from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError

from src.api.config import ALGORITHM, SECRET_KEY

# OAuth2 bearer scheme - tokenUrl must match login path
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def create_access_token(email: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed JWT access token whose subject is the user email."""
    expire = datetime.now(tz=timezone.utc) + (expires_delta or timedelta(minutes=60))
    return jwt.encode({"sub": email, "exp": expire}, SECRET_KEY, algorithm=ALGORITHM)


# PUBLIC_INTERFACE
def get_current_email(token: str = Depends(oauth2_scheme)) -> str:
    """
    Dependency that returns the email carried by the bearer token.

    Whether the user still exists is left to the service, which answers
    with a not-found error.

    Raises:
        401 if the token is invalid or expired.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise credentials_exception
    subject = payload.get("sub")
    if not subject:
        raise credentials_exception
    return subject
