from datetime import datetime, timedelta, timezone

import jwt
from passlib.context import CryptContext

from sitecms.core.config import Settings

pwd = CryptContext(schemes=["bcrypt"], deprecated="auto")


def _clip(p: str) -> str:
    # bcrypt only looks at the first 72 bytes
    b = p.encode("utf-8")
    if len(b) > 72:
        p = b[:72].decode("utf-8", errors="ignore")
    return p


def hash_password(p: str) -> str:
    if p is None:
        raise ValueError("password is required")
    return pwd.hash(_clip(str(p)))


def verify_password(p: str, hashed: str) -> bool:
    if p is None or hashed is None:
        return False
    try:
        return pwd.verify(_clip(str(p)), hashed)
    except ValueError:
        # unrecognised or corrupt hash in the users table
        return False


def create_access_token(cfg: Settings, user_id: int, username: str) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "username": username,
        "iat": int(now.timestamp()),
    }
    if cfg.jwt_expires_min:
        payload["exp"] = int((now + timedelta(minutes=cfg.jwt_expires_min)).timestamp())
    return jwt.encode(payload, cfg.jwt_secret, algorithm=cfg.jwt_alg)


def decode_token(cfg: Settings, token: str) -> dict:
    """Verify signature (and ``exp`` when present) and return the claims.

    Raises ``jwt.PyJWTError`` for anything that is not a token we signed.
    """
    return jwt.decode(
        token,
        cfg.jwt_secret,
        algorithms=[cfg.jwt_alg],
        options={"require": ["sub", "username"]},
    )
