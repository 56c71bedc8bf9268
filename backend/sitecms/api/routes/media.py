import logging

from fastapi import APIRouter, Depends, File, Form, Path, UploadFile
from sitecms.api.deps import MAX_ID, current_user, media_storage, store
from sitecms.core.errors import NotFound, StorageError, ValidationError
from sitecms.schemas.common import CreatedOut, SuccessOut
from sitecms.schemas.media import MediaOut
from sitecms.services.store import SiteStore
from sitecms.services.uploads import MediaStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/media", tags=["media"])


def _blank_to_none(v: str | None) -> str | None:
    v = (v or "").strip()
    return v or None


@router.get("", response_model=list[MediaOut])
def list_media(st: SiteStore = Depends(store)):
    return st.list_media()


@router.post("", response_model=CreatedOut)
def upload_media(
    file: UploadFile | None = File(None),
    title: str | None = Form(None),
    description: str | None = Form(None),
    date: str | None = Form(None),
    st: SiteStore = Depends(store),
    storage: MediaStorage = Depends(media_storage),
    u=Depends(current_user),
):
    title = (title or "").strip()
    if not title:
        raise ValidationError("Title is required")

    filename = storage.save(file)
    try:
        m = st.add_media(
            title=title,
            description=_blank_to_none(description),
            filename=filename,
            date=_blank_to_none(date),
        )
    except Exception:
        # keep the media directory free of files no record points at
        logger.error("media insert failed; removing stored file %s", filename)
        try:
            storage.delete(filename)
        except StorageError:
            logger.exception("could not remove orphaned media file %s", filename)
        raise
    logger.info("media %s uploaded by %s as %s", m.id, u.username, filename)
    return {"id": m.id, "success": True}


@router.delete("/{media_id}", response_model=SuccessOut)
def delete_media(
    media_id: int = Path(ge=1, le=MAX_ID),
    st: SiteStore = Depends(store),
    storage: MediaStorage = Depends(media_storage),
    u=Depends(current_user),
):
    m = st.get_media(media_id)
    if m is None:
        raise NotFound("Media not found")
    filename = m.filename

    if not storage.delete(filename):
        logger.warning("media %s: file %s was already missing", media_id, filename)

    try:
        deleted = st.delete_media(media_id)
    except Exception:
        logger.error("media %s: file %s removed but the record could not be deleted", media_id, filename)
        raise
    if not deleted:
        # removed by a concurrent request between lookup and delete
        raise NotFound("Media not found")
    return {"success": True}
