import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from fastapi.security.utils import get_authorization_scheme_param
from sqlalchemy.orm import Session

from sitecms.core.config import Settings
from sitecms.core.errors import Forbidden, Unauthenticated
from sitecms.core.security import decode_token
from sitecms.schemas.auth import Identity
from sitecms.services.store import SiteStore, SqlSiteStore
from sitecms.services.uploads import MediaStorage

bearer = HTTPBearer(auto_error=False)

# largest id SQLite / BIGINT columns can hold
MAX_ID = 2**63 - 1

def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def db(request: Request):
    s = request.app.state.session_factory()
    try:
        yield s
    finally:
        s.close()

def store(s: Session = Depends(db)) -> SiteStore:
    return SqlSiteStore(s)

def media_storage(request: Request) -> MediaStorage:
    return request.app.state.media_storage

def identity_from_token(cfg: Settings, token: str | None) -> Identity:
    if not token:
        raise Unauthenticated()
    try:
        claims = decode_token(cfg, token)
        return Identity(user_id=int(claims["sub"]), username=claims["username"])
    except (jwt.PyJWTError, KeyError, ValueError, TypeError):
        raise Forbidden()

def identity_from_header(cfg: Settings, authorization: str | None) -> Identity:
    """Same checks as ``current_user`` for code running outside the router."""
    scheme, token = get_authorization_scheme_param(authorization)
    if scheme.lower() != "bearer":
        raise Unauthenticated()
    return identity_from_token(cfg, token)

def current_user(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    cfg: Settings = Depends(get_settings),
) -> Identity:
    return identity_from_token(cfg, creds.credentials if creds else None)
