"""로깅 컨텍스트 및 마스킹 테스트"""

from unittest.mock import patch

from structlog.contextvars import get_contextvars

from app.core.config import settings
from app.core.context import bind_request, bind_user, clear_context
from app.core.logging import MASK, mask_text, redact_processor


class TestRequestContext:
    """요청 컨텍스트 바인딩"""

    def teardown_method(self):
        clear_context()

    def test_generates_request_id(self):
        request_id = bind_request()

        assert len(request_id) == 8
        assert get_contextvars().get("request_id") == request_id

    def test_keeps_given_request_id(self):
        assert bind_request("abc-123") == "abc-123"
        assert get_contextvars().get("request_id") == "abc-123"

    def test_bind_request_drops_previous_user(self):
        bind_request()
        bind_user("user-1")
        assert get_contextvars().get("user_id") == "user-1"

        bind_request()
        assert get_contextvars().get("user_id") is None

    def test_clear_context(self):
        bind_request()
        bind_user("user-1")
        clear_context()

        assert get_contextvars().get("request_id") is None
        assert get_contextvars().get("user_id") is None


class TestMaskText:
    """문자열 마스킹"""

    def test_bearer_token(self):
        assert mask_text("Authorization: Bearer abc.def.ghi") == f"Authorization: Bearer {MASK}"

    def test_database_password(self):
        masked = mask_text("postgresql+psycopg://app:hunter2@db:5432/resumes")

        assert "hunter2" not in masked
        assert masked.startswith("postgresql+psycopg://app:")

    def test_email_keeps_domain(self):
        assert mask_text("jane@example.com") == f"j{MASK}@example.com"

    def test_plain_text_unchanged(self):
        assert mask_text("PDF 생성 요청") == "PDF 생성 요청"


class TestRedactProcessor:
    """프로덕션 로그 마스킹"""

    def test_development_passthrough(self):
        event = {"event": "요청", "email": "jane@example.com"}

        with patch.object(settings, "environment", "development"):
            assert redact_processor(None, "info", event) is event

    def test_production_redacts_keys(self):
        event = {
            "event": "이력서 생성",
            "resume_id": 3,
            "data": {"personalInfo": {"email": "jane@example.com"}},
            "headers": {"authorization": "Bearer x"},
        }

        with patch.object(settings, "environment", "production"):
            result = redact_processor(None, "info", event)

        assert result["event"] == "이력서 생성"
        assert result["resume_id"] == 3
        assert result["data"] == MASK
        assert result["headers"] == {"authorization": MASK}

    def test_production_masks_nested_strings(self):
        event = {"event": "요청 실패", "errors": ["token=abc123", "ok"]}

        with patch.object(settings, "environment", "production"):
            result = redact_processor(None, "error", event)

        assert result["errors"] == [f"token={MASK}", "ok"]
