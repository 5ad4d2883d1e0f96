"""Cloudinary upload client that implements the AssetUploader interface.

Posts images as unsigned multipart uploads
(``{base_url}/{cloud_name}/image/upload`` with ``file`` and
``upload_preset``) and returns the hosted ``secure_url``.
"""

import logging

import httpx

from catalog_admin.application.interfaces import AssetUploader
from catalog_admin.domain.exceptions import InvalidAssetError, UploadRejectedError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.cloudinary.com/v1_1"
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class CloudinaryAssetUploader(AssetUploader):
    """Infrastructure adapter for the Cloudinary upload API.

    The upload preset is unsigned, so ``api_key`` is accepted for
    configuration parity but never sent.
    """

    def __init__(
        self,
        cloud_name: str,
        upload_preset: str,
        api_key: str = "",
        base_url: str = DEFAULT_BASE_URL,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        timeout: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._cloud_name = cloud_name
        self._upload_preset = upload_preset
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._max_upload_bytes = max_upload_bytes
        self._timeout = timeout
        self._http_client = http_client

    @property
    def upload_url(self) -> str:
        return f"{self._base_url}/{self._cloud_name}/image/upload"

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    def _check_asset(self, content: bytes, mime_type: str) -> None:
        if not mime_type or not mime_type.lower().startswith("image/"):
            raise InvalidAssetError(f"expected an image, got '{mime_type or 'unknown'}'")
        if not content:
            raise InvalidAssetError("the file is empty")
        if len(content) > self._max_upload_bytes:
            limit_mb = self._max_upload_bytes / (1024 * 1024)
            raise InvalidAssetError(f"the file exceeds the {limit_mb:g} MB limit")

    async def upload(self, content: bytes, mime_type: str, filename: str = "upload") -> str:
        self._check_asset(content, mime_type)
        if not self._cloud_name or not self._upload_preset:
            raise UploadRejectedError(None, "Cloudinary is not configured")

        client = await self._get_client()
        should_close = self._http_client is None

        try:
            response = await client.post(
                self.upload_url,
                files={"file": (filename, content, mime_type)},
                data={"upload_preset": self._upload_preset},
            )
        except httpx.HTTPError as exc:
            logger.error("Cloudinary request failed: %s", exc)
            raise UploadRejectedError(None, str(exc) or type(exc).__name__) from exc
        finally:
            if should_close:
                await client.aclose()

        if not response.is_success:
            self._raise_upload_error(response)

        try:
            secure_url = response.json().get("secure_url")
        except (ValueError, AttributeError):
            secure_url = None
        if not secure_url:
            raise UploadRejectedError(response.status_code, "response carried no secure_url")

        logger.info("Uploaded %s (%d bytes) to Cloudinary", filename, len(content))
        return secure_url

    @staticmethod
    def _raise_upload_error(response: httpx.Response) -> None:
        """Raise UploadRejectedError carrying Cloudinary's own message."""
        try:
            data = response.json()
            message = data.get("error", {}).get("message", response.text)
        except (ValueError, AttributeError):
            message = response.text

        raise UploadRejectedError(status_code=response.status_code, message=message)
