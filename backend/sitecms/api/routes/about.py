import logging

from fastapi import APIRouter, Depends
from sitecms.api.deps import current_user, store
from sitecms.schemas.about import AboutOut, AboutUpdate
from sitecms.schemas.common import SuccessOut
from sitecms.services.store import SiteStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/about", tags=["about"])

@router.get("", response_model=AboutOut)
def get_about(st: SiteStore = Depends(store)):
    return {"text": st.get_about_text() or ""}

@router.put("", response_model=SuccessOut)
def update_about(body: AboutUpdate, st: SiteStore = Depends(store), u=Depends(current_user)):
    if not st.set_about_text(body.text):
        # nothing to update until the about row has been seeded
        logger.warning("about row missing; update by %s ignored", u.username)
    return {"success": True}
