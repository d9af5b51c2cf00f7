from pathlib import Path

import pytest
from pydantic import ValidationError

from legal_ai.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_db_port(self) -> None:
        s = Settings()
        assert s.db_port == 5432

    def test_default_pdf_engine(self) -> None:
        s = Settings()
        assert s.pdf_engine == "pdfplumber"

    def test_default_llm_provider(self) -> None:
        s = Settings()
        assert s.llm_provider == "openai"

    def test_default_content_limits(self) -> None:
        s = Settings()
        assert s.max_content_chars == 8000
        assert s.chunk_size_chars == 12000

    def test_default_timeouts(self) -> None:
        s = Settings()
        assert s.storage_timeout_seconds == 30
        assert s.llm_timeout_seconds == 60

    def test_retry_disabled_by_default(self) -> None:
        s = Settings()
        assert s.llm_retry_max_attempts == 1

    def test_default_pool_sizes(self) -> None:
        s = Settings()
        assert (s.db_pool_min_size, s.db_pool_max_size) == (1, 10)
        assert s.db_pool_timeout_seconds == 30


class TestSettingsFromEnv:
    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_llm_model_name(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LLM_MODEL_NAME", "gpt-4o")
        s = Settings()
        assert s.llm_model_name == "gpt-4o"

    def test_loads_files_root(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FILES_ROOT", "/srv/uploads")
        s = Settings()
        assert s.files_root == Path("/srv/uploads")

    def test_loads_max_content_chars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_CONTENT_CHARS", "4000")
        s = Settings()
        assert s.max_content_chars == 4000


class TestSettingsValidation:
    def test_invalid_db_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_chunk_size_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CHUNK_SIZE_CHARS", "abc")
        with pytest.raises(ValidationError):
            Settings()
