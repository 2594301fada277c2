from jose import jwt, JWTError

from devcamper.config import ALGORITHM, SECRET_KEY
from devcamper.utils.errorResponse import Unauthenticated


def decode_token(token: str) -> int:
    """Return the user id carried by a signed token.

    Bad signatures, expired tokens and malformed payloads all raise
    ``Unauthenticated``.
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        user_id = payload.get("sub")

        if user_id is None:
            raise Unauthenticated()

        return int(user_id)
    except (JWTError, ValueError):
        raise Unauthenticated()
