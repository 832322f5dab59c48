import logging
import uuid
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.hash import pbkdf2_sha256

from . import config
from .errors import AuthError, ValidationError
from .user_store import UserStore

logger = logging.getLogger(__name__)

# verified against when the email is unknown so both login failures cost one pbkdf2 run
_DUMMY_HASH = pbkdf2_sha256.hash("not-a-real-password")


def hash_password(password: str) -> str:
    # salted per call, so two users with the same password get different hashes
    return pbkdf2_sha256.hash(password)

def verify_password(password: str, password_hash: str) -> bool:
    try:
        return pbkdf2_sha256.verify(password, password_hash)
    except ValueError:
        logger.warning("stored password hash is not a valid pbkdf2_sha256 hash")
        return False


def create_session_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    issued_at = datetime.now(timezone.utc)
    expire = issued_at + (expires_delta or timedelta(minutes=config.TOKEN_EXPIRE_MINUTES))
    claims = {"sub": user_id, "iat": issued_at, "exp": expire}
    return jwt.encode(claims, config.SECRET_KEY, algorithm=config.ALGORITHM)

def decode_session_token(token: str) -> dict:
    """Check signature and expiry of a session token and return its claims.

    Nothing is looked up server-side: a token is valid for as long as its
    signature holds and ``exp`` is in the future.
    """
    try:
        claims = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except ExpiredSignatureError:
        raise AuthError("Session token has expired")
    except JWTError:
        raise AuthError("Invalid session token")
    if not claims.get("sub"):
        raise AuthError("Invalid session token")
    return claims


def public_user(user: dict) -> dict:
    return {"id": user["user_id"], "username": user["username"], "email": user["email"]}

def _normalize_email(email: str) -> str:
    return email.strip().lower()

def _require(**fields):
    missing = [name for name, value in fields.items() if not value or not str(value).strip()]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def register(store: UserStore, username: str, email: str, password: str) -> dict:
    _require(username=username, email=email, password=password)

    user = {
        "user_id": str(uuid.uuid4()),
        "username": username.strip(),
        "email": _normalize_email(email),
        "password_hash": hash_password(password),
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    store.insert_user(user)
    logger.info("registered user %s", user["user_id"])
    return public_user(user)

def login(store: UserStore, email: str, password: str) -> dict:
    _require(email=email, password=password)

    user = store.get_by_email(_normalize_email(email))
    if not user:
        verify_password(password, _DUMMY_HASH)
        raise AuthError()
    if not verify_password(password, user["password_hash"]):
        raise AuthError()

    token = create_session_token(user["user_id"])
    logger.info("issued session token for user %s", user["user_id"])
    return {"token": token, "user": public_user(user)}

def current_user(store: UserStore, token: str) -> dict:
    claims = decode_session_token(token)
    user = store.get_by_id(claims["sub"])
    if not user:
        raise AuthError("Invalid session token")
    return public_user(user)
