"""Cloudinary infrastructure package."""

from .cloudinary_uploader import CloudinaryAssetUploader

__all__ = ["CloudinaryAssetUploader"]
