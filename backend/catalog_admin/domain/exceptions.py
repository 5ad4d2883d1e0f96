"""Domain-specific exceptions, framework-independent."""


class CatalogAdminError(Exception):
    """Base class for every error the console surfaces to the operator."""


class EntityNotFoundError(CatalogAdminError):
    """Raised when a requested record does not exist (or vanished mid-operation)."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class FormValidationError(CatalogAdminError):
    """Raised locally, before any network call, when a form cannot be submitted.

    ``fields`` maps each offending field to a short reason; ``kinds`` maps the
    same fields to their field class (text, number, image) so the message can
    name what is missing instead of falling back to a generic text.
    """

    MISSING = "required"

    def __init__(self, fields: dict[str, str], kinds: dict[str, str] | None = None):
        self.fields = fields
        self.kinds = kinds or {}
        described = ", ".join(
            f"{name} ({self.kinds[name]})" if name in self.kinds else name
            for name in fields
        )
        if all(reason == self.MISSING for reason in fields.values()):
            super().__init__(f"Please fill in all required fields: {described}")
        else:
            super().__init__(f"Please correct the following fields: {described}")


class AssetUploadError(CatalogAdminError):
    """Base class for failures of the asset upload step."""


class InvalidAssetError(AssetUploadError):
    """Raised when the selected file is not an uploadable image."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid image: {reason}")


class UploadRejectedError(AssetUploadError):
    """Raised when the image hosting service refuses (or never answers) an upload."""

    def __init__(self, status_code: int | None, message: str):
        self.status_code = status_code
        self.message = message
        prefix = f"{status_code}: " if status_code is not None else ""
        super().__init__(f"Image upload failed: {prefix}{message}")


class StoreError(CatalogAdminError):
    """Base class for document store failures."""


class PermissionDeniedError(StoreError):
    """Raised when the document store refuses the operation."""

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__("Permission denied. Please check the document store access rules.")


class StoreUnavailableError(StoreError):
    """Raised when the document store cannot be reached."""

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__("Document store unavailable. Please check your connection.")


class StoreRejectedError(StoreError):
    """Raised when the document store refuses a write or query for any other reason."""

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__("The document store rejected the operation. Please try again.")


class ConfirmationRequiredError(CatalogAdminError):
    """Raised when a destructive or takeover action is attempted without confirmation."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Confirmation required to {action}")


class SubmissionInProgressError(CatalogAdminError):
    """Raised when a second submit arrives while the first is still in flight."""

    def __init__(self) -> None:
        super().__init__("A submission is already in progress for this form")


class FormNotOpenError(CatalogAdminError):
    """Raised when a form operation is attempted with no form open."""

    def __init__(self) -> None:
        super().__init__("No form is open on this screen")


class FeaturedLimitError(CatalogAdminError):
    """Raised when enabling a capped featured flag would exceed its limit."""

    def __init__(self, flag: str, limit: int):
        self.flag = flag
        self.limit = limit
        super().__init__(f"You can only have {limit} items marked as {flag}")


class FeatureNotSupportedError(CatalogAdminError):
    """Raised when an operation is requested on a collection that does not offer it."""

    def __init__(self, collection: str, feature: str):
        self.collection = collection
        self.feature = feature
        super().__init__(f"'{collection}' does not support {feature}")
