"""초안 저장소 포트

브라우저 localStorage 한 키에 JSON 하나를 저장하던 방식과 같은 계약:
load() -> dict | None, save(dict), clear()
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Protocol

from app.core.logging import get_logger
from app.domain.resume.constants import DRAFT_STORAGE_KEY

logger = get_logger(__name__)


class DraftStorage(Protocol):
    def load(self) -> dict | None: ...

    def save(self, data: dict) -> None: ...

    def clear(self) -> None: ...


class InMemoryDraftStorage:
    """프로세스 메모리 저장소 (테스트, 임시 세션용)"""

    def __init__(self, initial: dict | None = None):
        self._blob: str | None = json.dumps(initial) if initial is not None else None
        self.save_count = 0

    def load(self) -> dict | None:
        if self._blob is None:
            return None
        return json.loads(self._blob)

    def save(self, data: dict) -> None:
        self._blob = json.dumps(data)
        self.save_count += 1

    def clear(self) -> None:
        self._blob = None


class JsonFileDraftStorage:
    """JSON 파일 저장소

    파일 내용은 {"resumeData": {...}} 형태. 저장은 임시 파일 작성 후 교체.
    """

    def __init__(self, path: str | Path, key: str = DRAFT_STORAGE_KEY):
        self.path = Path(path)
        self.key = key

    def load(self) -> dict | None:
        """저장된 초안 반환, 없으면 None

        Raises:
            ValueError: 파일 내용이 JSON 객체가 아닌 경우
        """
        if not self.path.exists():
            return None

        content = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(content, dict):
            raise ValueError(f"초안 파일 형식 오류: {self.path}")

        data = content.get(self.key)
        if data is not None and not isinstance(data, dict):
            raise ValueError(f"초안 데이터 형식 오류: key={self.key}")
        return data

    def save(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

        content = {}
        if self.path.exists():
            try:
                existing = json.loads(self.path.read_text(encoding="utf-8"))
                if isinstance(existing, dict):
                    content = existing
            except ValueError:
                logger.warning("기존 초안 파일 손상, 덮어씀", path=str(self.path))
        content[self.key] = data

        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".draft-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(content, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def clear(self) -> None:
        if not self.path.exists():
            return
        try:
            content = json.loads(self.path.read_text(encoding="utf-8"))
        except ValueError:
            self.path.unlink()
            return

        if not isinstance(content, dict):
            self.path.unlink()
            return

        content.pop(self.key, None)
        if content:
            self.path.write_text(json.dumps(content, ensure_ascii=False, indent=2), encoding="utf-8")
        else:
            self.path.unlink()
