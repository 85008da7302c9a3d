"""应用工厂与统一错误处理的单元测试."""

import pytest

from crudkit import create_app
from crudkit.core.exceptions import ActionNotMappedError, ValidationError
from crudkit.settings import Settings


@pytest.fixture
def app():
    app = create_app(settings=Settings.load())

    @app.route("/validation-error")
    def _validation_error():
        raise ValidationError("标题不能为空", extra={"field": "title"})

    @app.route("/configuration-error")
    def _configuration_error():
        raise ActionNotMappedError(extra={"action": "publish"})

    return app


@pytest.mark.unit
def test_create_app_applies_settings(app) -> None:
    assert app.config["SQLALCHEMY_DATABASE_URI"] == "sqlite:///:memory:"
    assert app.config["CRUD_PAGE_SIZE"] == 20
    assert "sqlalchemy" in app.extensions


@pytest.mark.unit
def test_recoverable_app_error_returns_400(app) -> None:
    response = app.test_client().get("/validation-error")

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] is True
    assert payload["message"] == "标题不能为空"
    assert payload["message_key"] == "VALIDATION_ERROR"
    assert payload["category"] == "validation"
    assert payload["severity"] == "low"
    assert payload["field"] == "title"


@pytest.mark.unit
def test_unrecoverable_app_error_returns_500(app) -> None:
    response = app.test_client().get("/configuration-error")

    assert response.status_code == 500
    payload = response.get_json()
    assert payload["message_key"] == "ACTION_NOT_MAPPED"
    assert payload["category"] == "configuration"
    assert payload["severity"] == "high"
    assert "action" not in payload


@pytest.mark.unit
def test_request_id_header_is_bound_for_logging(app) -> None:
    import structlog

    seen = {}

    @app.route("/request-id")
    def _request_id():
        seen.update(structlog.contextvars.get_contextvars())
        return "ok"

    app.test_client().get("/request-id", headers={"X-Request-ID": "req-123"})

    assert seen["request_id"] == "req-123"
