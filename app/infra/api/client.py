"""이력서 API 클라이언트 (초안 서버 동기화용)"""

from typing import Any

import httpx

from app.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30.0
RESUMES_PATH = "/api/resumes"


class ApiClientError(Exception):
    """API 호출 실패

    Attributes:
        status_code: HTTP 상태 코드
        body: 에러 응답 본문 ({"success": false, "error": ..., "details"?})
    """

    def __init__(self, status_code: int, body: Any):
        self.status_code = status_code
        self.body = body
        message = body.get("error") if isinstance(body, dict) else str(body)
        super().__init__(f"{status_code}: {message}")

    @property
    def details(self) -> Any:
        return self.body.get("details") if isinstance(self.body, dict) else None


class ResumeApiClient:
    """이력서 API 비동기 클라이언트

    Args:
        base_url: 서버 주소 (예: http://localhost:3000)
        token: Bearer 토큰, 없으면 익명 요청
        client: 주입할 httpx.AsyncClient (테스트에서 ASGITransport 사용)
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        token: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self._token = token

    async def __aenter__(self) -> "ResumeApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        response = await self._client.request(method, path, headers=self._headers(), **kwargs)
        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            logger.warning("API 요청 실패", method=method, path=path, status=response.status_code)
            raise ApiClientError(response.status_code, body)
        return response

    async def _json(self, method: str, path: str, **kwargs) -> dict:
        response = await self._request(method, path, **kwargs)
        return response.json()

    async def list_resumes(self) -> list[dict]:
        body = await self._json("GET", f"{RESUMES_PATH}/user/all")
        return body["data"]["resumes"]

    async def get_resume(self, resume_id: int) -> dict:
        body = await self._json("GET", f"{RESUMES_PATH}/{resume_id}")
        return body["data"]["resume"]

    async def create_resume(
        self,
        title: str,
        data: dict,
        template_id: str = "modern",
        is_public: bool = False,
    ) -> dict:
        payload = {"title": title, "data": data, "templateId": template_id, "isPublic": is_public}
        body = await self._json("POST", RESUMES_PATH, json=payload)
        logger.info("이력서 생성 완료", resume_id=body["data"]["resume"]["id"])
        return body["data"]["resume"]

    async def update_resume(
        self,
        resume_id: int,
        *,
        title: str | None = None,
        data: dict | None = None,
        template_id: str | None = None,
        is_public: bool | None = None,
        version: int | None = None,
    ) -> dict:
        """변경할 필드만 전송, version을 주면 충돌 시 409"""
        fields = {
            "title": title,
            "data": data,
            "templateId": template_id,
            "isPublic": is_public,
            "version": version,
        }
        payload = {key: value for key, value in fields.items() if value is not None}
        body = await self._json("PUT", f"{RESUMES_PATH}/{resume_id}", json=payload)
        return body["data"]["resume"]

    async def delete_resume(self, resume_id: int) -> None:
        await self._request("DELETE", f"{RESUMES_PATH}/{resume_id}")

    async def duplicate_resume(self, resume_id: int) -> dict:
        body = await self._json("POST", f"{RESUMES_PATH}/{resume_id}/duplicate")
        return body["data"]["resume"]

    async def list_templates(self) -> list[dict]:
        body = await self._json("GET", f"{RESUMES_PATH}/templates")
        return body["data"]["templates"]

    async def get_stats(self) -> dict:
        body = await self._json("GET", f"{RESUMES_PATH}/stats")
        return body["data"]["stats"]

    async def generate_pdf(self, data: dict, template_id: str = "modern") -> bytes:
        response = await self._request(
            "POST",
            f"{RESUMES_PATH}/generate-pdf",
            json={"data": data, "templateId": template_id},
        )
        return response.content
