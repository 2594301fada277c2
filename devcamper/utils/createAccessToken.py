from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt

from devcamper.config import ALGORITHM, JWT_EXPIRE_MINUTES, SECRET_KEY
from devcamper.models import User


def create_access_token(user: User, expires_delta: Optional[timedelta] = None):
    data_to_encode = {"sub": str(user.id)}
    expires = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=JWT_EXPIRE_MINUTES)
    )
    data_to_encode.update({"exp": expires})
    return jwt.encode(data_to_encode, SECRET_KEY, algorithm=ALGORITHM)
