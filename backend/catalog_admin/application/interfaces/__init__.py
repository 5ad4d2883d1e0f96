from .document_store import DocumentStore
from .asset_uploader import AssetUploader

__all__ = [
    "DocumentStore",
    "AssetUploader",
]
