from fastapi import APIRouter, UploadFile

from outletdesk.auth import load_session
from outletdesk.models.uploads import UploadedImage
from outletdesk.services import uploads as uploads_service

router = APIRouter(prefix="/api/uploads", tags=["uploads"])


@router.post("/images")
def upload_image(file: UploadFile, folder: str | None = None, account: str = "default") -> UploadedImage:
    return uploads_service.upload_image(
        file.file.read(),
        file.filename or "upload",
        load_session(account),
        folder=folder,
        content_type=file.content_type,
    )
