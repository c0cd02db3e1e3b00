import pytest
from pydantic import ValidationError

from atscore.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_upload_ceiling_is_ten_mebibytes(self) -> None:
        s = Settings()
        assert s.max_upload_bytes == 10 * 1024 * 1024

    def test_default_pdf_engine(self) -> None:
        s = Settings()
        assert s.pdf_engine == "pdfplumber"

    def test_default_min_native_text_length(self) -> None:
        s = Settings()
        assert s.min_native_text_length == 50

    def test_default_ocr_engine(self) -> None:
        s = Settings()
        assert s.ocr_engine == "tesseract"
        assert s.ocr_dpi == 300

    def test_default_evaluation_provider(self) -> None:
        s = Settings()
        assert s.evaluation_provider == "rules"

    def test_default_evaluation_timeout(self) -> None:
        s = Settings()
        assert s.evaluation_timeout_seconds == 30

    def test_default_status_thresholds(self) -> None:
        s = Settings()
        assert (s.status_excellent_min, s.status_good_min, s.status_fair_min) == (85, 70, 50)


class TestSettingsFromEnv:
    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_evaluation_provider(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EVALUATION_PROVIDER", "gemini")
        s = Settings()
        assert s.evaluation_provider == "gemini"

    def test_loads_max_upload_bytes(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_UPLOAD_BYTES", "2048")
        s = Settings()
        assert s.max_upload_bytes == 2048

    def test_loads_evaluation_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EVALUATION_TIMEOUT_SECONDS", "2.5")
        s = Settings()
        assert s.evaluation_timeout_seconds == 2.5


class TestSettingsValidation:
    def test_invalid_upload_ceiling_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_UPLOAD_BYTES", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_non_positive_timeout_raises(self) -> None:
        with pytest.raises(ValidationError):
            Settings(evaluation_timeout_seconds=0)

    def test_zero_min_native_text_length_raises(self) -> None:
        with pytest.raises(ValidationError):
            Settings(min_native_text_length=0)

    def test_unordered_thresholds_raise(self) -> None:
        with pytest.raises(ValidationError, match="status thresholds"):
            Settings(status_excellent_min=60, status_good_min=70)

    def test_temperature_above_two_raises(self) -> None:
        with pytest.raises(ValidationError):
            Settings(evaluation_temperature=2.5)

    def test_negative_temperature_raises(self) -> None:
        with pytest.raises(ValidationError):
            Settings(evaluation_temperature=-0.1)

    def test_temperature_within_range_is_accepted(self) -> None:
        assert Settings(evaluation_temperature=1.5).evaluation_temperature == 1.5
