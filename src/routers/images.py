import logging
import os

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from core.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/images", tags=["images"])

CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
}


def relative_image_path(requested_path: str) -> str:
    """
    Strip the storage prefix from a filename as stored in the database.

    The database keeps absolute paths such as
    /mnt/GreenhouseData/imgs/2023/04/23/img_1682303523_19_32_03.jpg;
    everything after "imgs/" is relative to the configured image directory.
    """
    requested_path = requested_path.lstrip("/")
    marker = requested_path.find("/imgs/")
    if marker != -1:
        return requested_path[marker + len("/imgs/"):]
    if requested_path.startswith("imgs/"):
        return requested_path[len("imgs/"):]
    return requested_path


@router.get("/{file_path:path}", response_class=FileResponse, responses={
    403: {
        "description": "Path resolves outside the image directory.",
        "content": {
            "application/json": {
                "example": {"detail": "Access denied"}
            }
        }
    },
    404: {
        "description": "Image file does not exist.",
        "content": {
            "application/json": {
                "example": {"detail": "Image not found"}
            }
        }
    }
})
def get_image(file_path: str) -> FileResponse:
    """
    Serve a captured greenhouse image by the filename stored with its sample.
    """
    base = os.path.realpath(settings.image_base_dir)
    resolved = os.path.realpath(os.path.join(base, relative_image_path(file_path)))

    if os.path.commonpath([base, resolved]) != base:
        logger.warning(f"Rejected image path outside base directory: {file_path}")
        raise HTTPException(status_code=403, detail="Access denied")

    if not os.path.isfile(resolved):
        raise HTTPException(status_code=404, detail="Image not found")

    extension = os.path.splitext(resolved)[1].lower()
    return FileResponse(resolved, media_type=CONTENT_TYPES.get(extension, "image/jpeg"))
