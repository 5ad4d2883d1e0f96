"""Abstract interface (port) for the image hosting service."""

from abc import ABC, abstractmethod


class AssetUploader(ABC):
    """Uploads a binary image and returns a publicly retrievable URL."""

    @abstractmethod
    async def upload(self, content: bytes, mime_type: str, filename: str = "upload") -> str:
        """Upload an image.

        Raises:
            InvalidAssetError: the input is not an image (or is empty/too large).
            UploadRejectedError: the hosting service did not accept the upload.
        """
        ...
