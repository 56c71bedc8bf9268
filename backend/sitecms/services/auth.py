import logging

from sitecms.core.config import Settings
from sitecms.core.errors import AuthenticationError
from sitecms.core.security import create_access_token, verify_password
from sitecms.services.store import SiteStore

logger = logging.getLogger(__name__)


def authenticate(store: SiteStore, cfg: Settings, username: str, password: str) -> str:
    u = store.find_user(username)
    # same error either way so the response can't be used to probe usernames
    if not u or not verify_password(password, u.password_hash):
        logger.info("failed login for %r", username)
        raise AuthenticationError()
    return create_access_token(cfg, user_id=u.id, username=u.username)
