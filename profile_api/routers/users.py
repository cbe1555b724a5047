import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from profile_api.core.config import get_settings
from profile_api.core.errors import InvalidExtensionError, PersistenceError, StorageIOError
from profile_api.core.storage import ImageStorage
from profile_api.models.database import get_db
from profile_api.services.upload_handler import UploadHandler
from profile_api.services.user_repository import UserRepository

router = APIRouter(prefix="/api/user", tags=["Users"])

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "User Added Successfully"


# --- collaborators, built per request ---
def get_image_storage() -> ImageStorage:
    return ImageStorage(get_settings().images_dir)


def get_upload_handler(
    storage: ImageStorage = Depends(get_image_storage),
    db: Session = Depends(get_db),
) -> UploadHandler:
    return UploadHandler(storage, UserRepository(db))


# --- add a user with an optional profile image ---
@router.post("/image")
async def upload_user_image(
    image: Optional[UploadFile] = File(None),
    handler: UploadHandler = Depends(get_upload_handler),
):
    content = None
    filename = None
    if image is not None:
        content = await image.read()
        filename = image.filename

    try:
        # disk write and commit block, keep them off the event loop
        await run_in_threadpool(handler.handle, content, filename)
    except InvalidExtensionError as e:
        logger.info(f"Rejected upload {e.filename!r}: invalid extension")
        return JSONResponse(status_code=400, content={"message": e.message})
    except StorageIOError:
        raise HTTPException(status_code=500, detail="Failed to store image")
    except PersistenceError:
        raise HTTPException(status_code=500, detail="Failed to save user")

    return {"message": SUCCESS_MESSAGE}
