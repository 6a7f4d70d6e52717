"""Signed two-step image upload.

Step one asks the backend for signed parameters, step two posts the file
straight to the asset host. Either step failing aborts the upload with a
single UploadError; nothing is resumed or retried.
"""

import logging

import requests
from pydantic import ValidationError

from outletdesk.auth import backend_for
from outletdesk.backend import unwrap
from outletdesk.config import get_settings
from outletdesk.exceptions import IntegrationError, UploadError
from outletdesk.http_client import get_session
from outletdesk.models.auth import Session
from outletdesk.models.uploads import UploadedImage, UploadSignature

logger = logging.getLogger(__name__)


def get_upload_signature(session: Session, folder: str | None = None) -> UploadSignature:
    params = {"folder": folder} if folder else None
    return UploadSignature.model_validate(unwrap(backend_for(session).get("/upload/signature", params=params)))


def _error_message(resp: requests.Response) -> str:
    try:
        message = (resp.json().get("error") or {}).get("message")
    except (ValueError, AttributeError):
        message = None
    return message or resp.reason or "Upload failed"


def upload_image(
    content: bytes,
    filename: str,
    session: Session,
    folder: str | None = None,
    content_type: str | None = None,
) -> UploadedImage:
    """Upload one image and return its hosted URL."""
    try:
        signature = get_upload_signature(session, folder)
    except (IntegrationError, ValidationError) as e:
        raise UploadError(f"Could not obtain an upload signature: {e}") from e

    url = get_settings().cloudinary_upload_url.format(cloud_name=signature.cloud_name)
    form = {
        "api_key": signature.api_key,
        "timestamp": str(signature.timestamp),
        "signature": signature.signature,
        "folder": signature.folder,
    }
    try:
        resp = get_session().post(url, data=form, files={"file": (filename, content, content_type)})
    except requests.RequestException as e:
        raise UploadError(f"Upload to asset host failed: {e}") from e
    if not resp.ok:
        raise UploadError(f"Upload to asset host failed: {_error_message(resp)}")
    try:
        data = resp.json()
        image = UploadedImage(secure_url=data["secure_url"], public_id=data["public_id"])
    except (ValueError, KeyError, TypeError) as e:
        raise UploadError(f"Asset host returned an unexpected reply: {e!r}") from e
    logger.info("Uploaded %s to %s", filename, signature.folder)
    return image
