# storefront/services/upload_client.py
import io

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from storefront.domain.errors import UploadError
from storefront.utils.settings import (
    CLOUDINARY_CLOUD_NAME,
    CLOUDINARY_API_KEY,
    CLOUDINARY_API_SECRET,
    CLOUDINARY_TIMEOUT,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def upload_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception_type(CloudinaryError),
    )


class CloudinaryClient:
    """
    Przekazuje obrazek do Cloudinary przez SDK i zwraca secure_url.
    Jedno blokujace wywolanie: url albo UploadError.
    """

    def __init__(
        self,
        cloud_name: str | None = None,
        api_key: str | None = None,
        api_secret: str | None = None,
        timeout: int | None = None,
    ):
        self.cloud_name = cloud_name or CLOUDINARY_CLOUD_NAME
        self.api_key = api_key or CLOUDINARY_API_KEY
        self.api_secret = api_secret or CLOUDINARY_API_SECRET
        self.timeout = timeout or CLOUDINARY_TIMEOUT

        if self.configured:
            cloudinary.config(
                cloud_name=self.cloud_name,
                api_key=self.api_key,
                api_secret=self.api_secret,
                secure=True,
            )

    @property
    def configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    @upload_retry()
    def _upload(self, content: bytes, filename: str) -> dict:
        logger.info(f"Cloudinary upload of {filename} ({len(content)} bytes)")

        stream = io.BytesIO(content)
        stream.name = filename
        return cloudinary.uploader.upload(stream, resource_type="image", timeout=self.timeout)

    def upload_image(self, content: bytes, filename: str = "upload") -> str:
        if not self.configured:
            raise UploadError("Image storage is not configured")

        try:
            result = self._upload(content, filename)
        except CloudinaryError as e:
            logger.error(f"Cloudinary upload failed: {e}")
            raise UploadError("Image upload failed") from e

        secure_url = result.get("secure_url")
        if not secure_url:
            raise UploadError("Image upload failed")

        return secure_url
