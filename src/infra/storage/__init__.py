"""Storage 모듈

사용법:
    from src.infra.storage import get_storage

    storage = get_storage()
    await storage.upload(file)  # file.url 기록
    await storage.delete(file)

백엔드 선택 (.env STORAGE_PROVIDER):
    - "gcs": Google Cloud Storage (기본값)
    - "local": 로컬 파일 시스템 (개발용)
"""

from pathlib import Path

from src.config import get_settings
from src.infra.storage import provider
from src.infra.storage.base import (
    BucketError,
    ConfigError,
    StorageBackend,
    StorageError,
    StorageWriteError,
)
from src.infra.storage.gcs import GCSStorage
from src.infra.storage.local import LocalStorage

__all__ = [
    "StorageBackend",
    "StorageError",
    "ConfigError",
    "BucketError",
    "StorageWriteError",
    "GCSStorage",
    "LocalStorage",
    "get_storage",
    "set_storage",
]


def _find_project_root() -> Path:
    """pyproject.toml 위치를 프로젝트 루트로 탐색"""
    current = Path(__file__).resolve().parent
    while current != current.parent:
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent
    raise RuntimeError("프로젝트 루트를 찾을 수 없음")


class _StorageHolder:
    instance: StorageBackend | None = None


def get_storage() -> StorageBackend:
    """설정에 따라 storage 백엔드 반환

    Raises:
        ConfigError: GCS 설정이 유효하지 않은 경우
        ValueError: 알 수 없는 provider
    """
    if _StorageHolder.instance is None:
        settings = get_settings()
        if settings.storage_provider == "gcs":
            _StorageHolder.instance = provider.init(settings.gcs_provider_config())
        elif settings.storage_provider == "local":
            upload_dir = (
                Path(settings.local_upload_dir)
                if settings.local_upload_dir
                else _find_project_root() / "uploads"
            )
            _StorageHolder.instance = LocalStorage(
                base_dir=upload_dir, base_url=f"{settings.base_url}/static"
            )
        else:
            raise ValueError(f"Unknown storage provider: {settings.storage_provider!r}")
    return _StorageHolder.instance


def set_storage(storage: StorageBackend | None) -> None:
    """storage 백엔드 설정 (테스트용)"""
    _StorageHolder.instance = storage
