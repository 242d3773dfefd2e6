import json
import logging

import httpx
import pytest

from clients.lms_admin_sdk.config import SDKConfig, parse_bool
from clients.lms_admin_sdk.errors import ApiError

from lms_admin_console.app.config import AppConfig
from lms_admin_console.app.infrastructure.errors.error_mapper import ErrorMapper
from lms_admin_console.app.infrastructure.logging.logger import log_action
from lms_admin_console.app.ui.components.error_banner import ErrorBanner

ENV_KEYS = (
    "LMS_ADMIN_BASE_URL",
    "LMS_ADMIN_TIMEOUT_SECONDS",
    "LMS_ADMIN_VERIFY_SSL",
    "LMS_ADMIN_TOKEN",
    "LMS_ADMIN_AUTO_REFRESH_SECONDS",
    "LMS_ADMIN_SEARCH_DEBOUNCE_MS",
    "LMS_ADMIN_EXPORT_DIR",
)


@pytest.fixture
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        # registered so values loaded from a dotenv file are undone after the test
        monkeypatch.setenv(key, "placeholder")
        monkeypatch.delenv(key)
    return monkeypatch


def test_sdk_config_defaults(clean_env, tmp_path) -> None:
    config = SDKConfig.from_env(str(tmp_path / "missing.env"))

    assert config.base_url == "http://localhost:5000/api/"
    assert config.timeout_seconds == 30
    assert config.verify_ssl is True
    assert config.access_token is None


def test_sdk_config_reads_dotenv_without_overriding_environment(clean_env, tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# local\nLMS_ADMIN_BASE_URL=https://lms.example.com/api\nLMS_ADMIN_TOKEN=from-file\nLMS_ADMIN_VERIFY_SSL=no\n",
        encoding="utf-8",
    )
    clean_env.setenv("LMS_ADMIN_TOKEN", "from-env")

    config = SDKConfig.from_env(str(env_file))

    assert config.base_url == "https://lms.example.com/api/"
    assert config.access_token == "from-env"
    assert config.verify_ssl is False


def test_app_config_validation(clean_env, tmp_path) -> None:
    clean_env.setenv("LMS_ADMIN_AUTO_REFRESH_SECONDS", "0")

    with pytest.raises(ValueError, match="AUTO_REFRESH"):
        AppConfig.from_env(str(tmp_path / "missing.env"))


def test_app_config_defaults(clean_env, tmp_path) -> None:
    config = AppConfig.from_env(str(tmp_path / "missing.env"))

    assert config.auto_refresh_seconds == 300
    assert config.search_debounce_ms == 350
    assert config.export_dir == "out/exports"


def test_parse_bool() -> None:
    assert parse_bool("Yes") is True
    assert parse_bool("off") is False
    assert parse_bool("maybe", default=False) is False
    assert parse_bool(None) is True


def test_api_error_from_json_response_keeps_message() -> None:
    response = httpx.Response(
        404,
        json={"success": False, "message": "Usuario no encontrado"},
        headers={"X-Request-ID": "req-9"},
    )

    error = ApiError.from_http_response(response)

    assert error.code == "NOT_FOUND"
    assert error.message == "Usuario no encontrado"
    assert error.trace_id == "req-9"
    assert error.status_code == 404


def test_api_error_from_text_response() -> None:
    error = ApiError.from_http_response(httpx.Response(502, text="Bad gateway"))

    assert error.code == "HTTP_ERROR"
    assert error.message == "Bad gateway"


def test_error_mapper_buckets_and_suggestions() -> None:
    payload = ErrorMapper.to_payload(ApiError(code="X", message="Servidor caído", trace_id="t-1", status_code=503))

    assert payload["code"] == "INTERNAL_ERROR"
    assert payload["message"] == "Servidor caído"
    assert payload["trace_id"] == "t-1"
    assert payload["suggestion"]

    timeout = ErrorMapper.to_payload(ApiError(code="TIMEOUT_ERROR", message="timed out"))
    assert timeout["code"] == "TIMEOUT_ERROR"

    generic = ErrorMapper.to_payload(RuntimeError("boom"))
    assert generic["code"] == "INTERNAL_ERROR"
    assert generic["message"] == "boom"


def test_error_banner_render_and_dismiss(capsys) -> None:
    banner = ErrorBanner()
    assert banner.render() is None

    banner.set({"code": "NOT_FOUND", "message": "gone", "trace_id": "t-2", "suggestion": "Refresh"})
    assert banner.render() == "[ERROR] code=NOT_FOUND message=gone trace_id=t-2 suggestion=Refresh"

    banner.dismiss()
    assert not banner.visible

    ErrorBanner.show("Select a row first")
    assert capsys.readouterr().out.strip() == "[ERROR] code=UI_VALIDATION message=Select a row first trace_id=n/a"


def test_sdk_config_dotenv_accepts_export_prefix_and_quotes(clean_env, tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "export LMS_ADMIN_BASE_URL='https://lms.example.com/api/'\nLMS_ADMIN_VERIFY_SSL=\"off\"\nnot a pair\n",
        encoding="utf-8",
    )

    config = SDKConfig.from_env(str(env_file))

    assert config.base_url == "https://lms.example.com/api/"
    assert config.verify_ssl is False


def test_log_action_writes_one_json_line() -> None:
    records: list[logging.LogRecord] = []

    class _Collect(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            records.append(record)

    logger = logging.getLogger("tests.log_action")
    logger.addHandler(_Collect())
    logger.setLevel(logging.INFO)
    logger.propagate = False

    log_action(logger, "users", "delete_user", "rejected", request_id=4, trace_id="tr-3", detail="NOT_FOUND")

    assert records[0].levelno == logging.WARNING
    line = json.loads(records[0].getMessage())
    assert line["module"] == "users"
    assert line["outcome"] == "rejected"
    assert line["level"] == "WARNING"
    assert line["trace_id"] == "tr-3"
    assert line["request_id"] == 4
