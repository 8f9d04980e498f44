"""Security helpers for hashing and token generation."""

from datetime import datetime, timedelta, timezone
from hashlib import sha256
import secrets

from jose import JWTError, jwt
from passlib.context import CryptContext

from coretrack.config import get_settings

# Raise the rounds when the CPU budget allows it.
pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
)

ALGORITHM = "HS256"
PURPOSE_ACCESS = "access"
PURPOSE_PASSWORD_RESET = "password_reset"
PURPOSE_EMAIL_VERIFICATION = "email_verification"

PASSWORD_RESET_EXPIRE_MINUTES = 60
EMAIL_VERIFICATION_EXPIRE_HOURS = 48


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def needs_rehash(hashed_password: str) -> bool:
    return pwd_context.needs_update(hashed_password)


def build_password_signature(
    password_hash: str, *, is_active: bool, token_version: int
) -> str:
    """Fingerprint of the credentials a token was issued against.

    Changing the password, deactivating the user or bumping ``token_version``
    changes the signature and therefore invalidates every issued token.
    """

    return sha256(
        f"{password_hash}:{int(is_active)}:{token_version}".encode()
    ).hexdigest()


# ---- JWT ----
settings = get_settings()


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    claims = {"purpose": PURPOSE_ACCESS, **data, "exp": expire}
    return jwt.encode(claims, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str, *, purpose: str = PURPOSE_ACCESS) -> dict:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc
    if payload.get("purpose", PURPOSE_ACCESS) != purpose:
        raise ValueError("Could not validate credentials")
    return payload


def refresh_access_token(token: str) -> str:
    """Reissue ``token`` with a fresh expiration and the same claims."""

    payload = decode_access_token(token)
    payload.pop("exp", None)
    return create_access_token(payload)


def create_purpose_token(
    *, subject: str, purpose: str, password_signature: str, expires_delta: timedelta
) -> str:
    """Create a single-purpose token (password reset, email verification)."""

    return create_access_token(
        {"sub": subject, "purpose": purpose, "pwd_sig": password_signature},
        expires_delta=expires_delta,
    )


def generate_token(nbytes: int = 32) -> str:
    """Return a URL-safe random token used for invitation links."""

    return secrets.token_urlsafe(nbytes)


__all__ = [
    "ALGORITHM",
    "EMAIL_VERIFICATION_EXPIRE_HOURS",
    "PASSWORD_RESET_EXPIRE_MINUTES",
    "PURPOSE_ACCESS",
    "PURPOSE_EMAIL_VERIFICATION",
    "PURPOSE_PASSWORD_RESET",
    "build_password_signature",
    "create_access_token",
    "create_purpose_token",
    "decode_access_token",
    "generate_token",
    "get_password_hash",
    "needs_rehash",
    "refresh_access_token",
    "verify_password",
]
