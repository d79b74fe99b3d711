from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from storefront.domain.errors import UploadError
from storefront.domain.schemas import UploadOut
from storefront.services.upload_client import CloudinaryClient

router = APIRouter(prefix="/upload", tags=["upload"])


def get_upload_client() -> CloudinaryClient:
    return CloudinaryClient()


@router.post("", response_model=UploadOut)
def upload_image(
    image: UploadFile | None = File(None),
    client: CloudinaryClient = Depends(get_upload_client),
):
    if image is None:
        raise HTTPException(status_code=400, detail="No file Uploaded")

    content = image.file.read()
    if not content:
        raise HTTPException(status_code=400, detail="No file Uploaded")

    try:
        url = client.upload_image(content, filename=image.filename or "upload")
    except UploadError:
        raise HTTPException(status_code=500, detail="Server Error")

    return UploadOut(image_url=url)
