from passlib.context import CryptContext
from sqlalchemy.orm import Session

from devcamper.models import User

bcrypt_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return bcrypt_context.hash(password)


def verify_password(user: User, password: str) -> bool:
    return bcrypt_context.verify(password, user.hashed_password)


def authenticate_user(email: str, password: str, db: Session):
    """Return the user for a matching email/password pair, else ``False``.

    An unknown email and a wrong password are indistinguishable to the caller.
    """
    user = db.query(User).filter(User.email == email.lower()).first()

    if user is None or not verify_password(user, password):
        return False
    return user
