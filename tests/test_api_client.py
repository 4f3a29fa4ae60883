"""이력서 API 클라이언트 및 초안 동기화 테스트"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.domain.resume.store import ResumeStore
from app.infra.api.client import ApiClientError, ResumeApiClient
from app.infra.storage.draft_storage import InMemoryDraftStorage
from app.main import app


@pytest.fixture
def make_client(override_db):
    """앱에 직접 연결된 클라이언트 생성"""

    def _make(token: str | None = None) -> ResumeApiClient:
        http_client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        return ResumeApiClient(token=token, client=http_client)

    return _make


class TestResumeApiClient:
    @pytest.mark.asyncio
    async def test_crud_round(self, make_client, sample_resume_data):
        client = make_client()

        created = await client.create_resume("Backend", sample_resume_data, template_id="minimal")
        fetched = await client.get_resume(created["id"])
        updated = await client.update_resume(created["id"], title="Backend v2", version=created["version"])
        copy = await client.duplicate_resume(created["id"])
        listing = await client.list_resumes()

        assert fetched["title"] == "Backend"
        assert updated["title"] == "Backend v2"
        assert copy["title"] == "Backend v2 (Copy)"
        assert {r["id"] for r in listing} == {created["id"], copy["id"]}

        await client.delete_resume(copy["id"])
        assert len(await client.list_resumes()) == 1
        await client._client.aclose()

    @pytest.mark.asyncio
    async def test_templates_and_stats(self, make_client):
        client = make_client()

        templates = await client.list_templates()
        stats = await client.get_stats()

        assert templates[0]["id"] == "modern"
        assert stats["totalResumes"] == 0
        await client._client.aclose()

    @pytest.mark.asyncio
    async def test_generate_pdf(self, make_client, sample_resume_data):
        client = make_client()
        pdf = await client.generate_pdf(sample_resume_data, template_id="classic")

        assert pdf.startswith(b"%PDF")
        await client._client.aclose()

    @pytest.mark.asyncio
    async def test_error_carries_status_and_body(self, make_client):
        """오류 응답은 ApiClientError로 변환"""
        client = make_client()

        with pytest.raises(ApiClientError) as exc_info:
            await client.get_resume(999)

        assert exc_info.value.status_code == 404
        assert exc_info.value.body == {"success": False, "error": "Resume not found"}
        assert exc_info.value.details is None
        await client._client.aclose()

    @pytest.mark.asyncio
    async def test_validation_error_details(self, make_client, sample_resume_data):
        client = make_client()
        sample_resume_data["personalInfo"]["email"] = "nope"

        with pytest.raises(ApiClientError) as exc_info:
            await client.create_resume("Bad", sample_resume_data)

        assert exc_info.value.status_code == 400
        assert exc_info.value.details[0]["field"] == "data.personalInfo.email"
        await client._client.aclose()

    @pytest.mark.asyncio
    async def test_injected_client_not_closed(self, make_client):
        """주입받은 httpx 클라이언트는 닫지 않음"""
        client = make_client()
        async with client:
            pass

        assert not client._client.is_closed
        await client._client.aclose()


class TestStoreSync:
    """초안 스토어 서버 동기화 테스트"""

    @pytest.mark.asyncio
    async def test_sync_creates_then_updates(self, make_client, sample_resume_data, auth_headers):
        token = auth_headers["Authorization"].removeprefix("Bearer ")
        client = make_client(token)
        store = ResumeStore(InMemoryDraftStorage(sample_resume_data))
        store.select_template("creative")

        created = await store.sync(client, title="Synced")
        assert created["userId"] == "user-1"
        assert created["templateId"] == "creative"

        store.update_summary("Updated summary")
        updated = await store.sync(client, resume_id=created["id"], version=created["version"])

        assert updated["data"]["summary"] == "Updated summary"
        assert updated["version"] == 2

        with pytest.raises(ApiClientError) as exc_info:
            await store.sync(client, resume_id=created["id"], version=1)
        assert exc_info.value.status_code == 409
        await client._client.aclose()

    @pytest.mark.asyncio
    async def test_sync_incomplete_draft_rejected(self, make_client):
        """엄격 검증을 통과하지 못한 초안은 서버에서 거부"""
        client = make_client()
        store = ResumeStore(InMemoryDraftStorage())

        with pytest.raises(ApiClientError) as exc_info:
            await store.sync(client)

        assert exc_info.value.status_code == 400
        await client._client.aclose()
