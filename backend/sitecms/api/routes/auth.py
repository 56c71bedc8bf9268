from fastapi import APIRouter, Depends
from sitecms.api.deps import get_settings, store
from sitecms.core.config import Settings
from sitecms.schemas.auth import LoginIn, TokenOut
from sitecms.services.auth import authenticate
from sitecms.services.store import SiteStore

router = APIRouter(tags=["auth"])

@router.post("/login", response_model=TokenOut)
def login(body: LoginIn, st: SiteStore = Depends(store), cfg: Settings = Depends(get_settings)):
    return {"token": authenticate(st, cfg, body.username, body.password)}
