"""Tests for application settings."""
import pytest
from pydantic import ValidationError


class TestSettings:
    """Tests for Settings loading."""

    def test_jwt_secret_is_required(self, monkeypatch):
        from workhours.config import Settings

        monkeypatch.delenv("JWT_SECRET", raising=False)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_reads_environment(self, monkeypatch):
        from workhours.config import Settings

        monkeypatch.setenv("JWT_SECRET", "from-env")
        monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")

        settings = Settings(_env_file=None)

        assert settings.jwt_secret == "from-env"
        assert settings.mongodb_db_name == "workhours"
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]
