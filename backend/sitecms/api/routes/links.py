from fastapi import APIRouter, Depends, Path
from sitecms.api.deps import MAX_ID, current_user, store
from sitecms.core.errors import NotFound
from sitecms.schemas.common import CreatedOut, SuccessOut
from sitecms.schemas.link import LinkCreate, LinkOut
from sitecms.services.store import SiteStore

router = APIRouter(prefix="/links", tags=["links"])

@router.get("", response_model=list[LinkOut])
def list_links(st: SiteStore = Depends(store)):
    return st.list_links()

@router.post("", response_model=CreatedOut)
def create_link(body: LinkCreate, st: SiteStore = Depends(store), u=Depends(current_user)):
    ln = st.add_link(
        title=body.title,
        description=body.description,
        url=body.url,
        icon=body.icon,
        sort_order=body.sort_order,
    )
    return {"id": ln.id, "success": True}

@router.delete("/{link_id}", response_model=SuccessOut)
def delete_link(link_id: int = Path(ge=1, le=MAX_ID), st: SiteStore = Depends(store), u=Depends(current_user)):
    if not st.delete_link(link_id):
        raise NotFound("Link not found")
    return {"success": True}
