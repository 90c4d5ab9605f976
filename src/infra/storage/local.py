import asyncio
import logging
from pathlib import Path

from src.infra.storage.keys import InvalidKeyError, build_upload_key
from src.schemas.file import FileDescriptor

logger = logging.getLogger(__name__)


class LocalStorage:
    """로컬 파일 시스템 저장소 구현체 (개발용). GCSStorage와 같은 키 규칙 사용."""

    def __init__(
        self, base_dir: Path, base_url: str = "/static", log: logging.Logger | None = None
    ):
        self.base_dir = base_dir
        self.base_url = base_url
        self._log = log or logger

    async def upload(self, file: FileDescriptor) -> None:
        key = build_upload_key(file)
        save_path = self._resolve(key)

        if save_path.exists():
            self._log.info(f"이미 존재하는 파일 삭제: {key}")
            save_path.unlink()

        save_path.parent.mkdir(parents=True, exist_ok=True)
        await asyncio.to_thread(save_path.write_bytes, file.buffer)

        file.url = self.get_url(key)
        self._log.debug(f"업로드 완료: {file.url}")

    async def delete(self, file: FileDescriptor) -> None:
        key = build_upload_key(file)
        file_path = self._resolve(key)

        if not file_path.exists():
            self._log.warning(f"파일을 찾을 수 없음: {key}")
            return

        file_path.unlink()
        self._log.debug(f"삭제 완료: {key}")

    def _resolve(self, key: str) -> Path:
        """base_dir 밖을 가리키는 키(심볼릭 링크 포함)는 거부"""
        path = (self.base_dir / key).resolve()
        if not path.is_relative_to(self.base_dir.resolve()):
            raise InvalidKeyError(f"저장소 밖 경로: {key!r}")
        return path

    def get_url(self, relative_path: str) -> str:
        return f"{self.base_url}/{relative_path}"

    def exists(self, relative_path: str) -> bool:
        return (self.base_dir / relative_path).exists()
