from devcamper.utils.authenticateUser import (
    authenticate_user,
    hash_password,
    verify_password,
)
from devcamper.utils.createAccessToken import create_access_token
from devcamper.utils.decodeAccessToken import decode_token
