"""Unit tests for application settings configuration."""

from pathlib import Path

from catalog_admin.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_cloudinary_and_limits_come_from_environment(monkeypatch):
    monkeypatch.setenv("CLOUDINARY_CLOUD_NAME", "demo")
    monkeypatch.setenv("CLOUDINARY_UPLOAD_PRESET", "console_unsigned")
    monkeypatch.setenv("MAX_UPLOAD_SIZE_MB", "2")
    monkeypatch.setenv("BEST_SELLER_LIMIT", "6")

    settings = Settings(_env_file=None)

    assert settings.cloudinary_cloud_name == "demo"
    assert settings.cloudinary_upload_preset == "console_unsigned"
    assert settings.max_upload_bytes == 2 * 1024 * 1024
    assert settings.best_seller_limit == 6


def test_defaults_without_environment(monkeypatch):
    for name in ("CLOUDINARY_BASE_URL", "BEST_SELLER_LIMIT", "LOG_LEVEL_WORKFLOW"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.cloudinary_base_url == "https://api.cloudinary.com/v1_1"
    assert settings.best_seller_limit == 4
    assert settings.log_level_workflow == "INFO"
