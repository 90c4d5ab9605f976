"""Storage Protocol

교체 가능한 파일 저장소 구현을 위한 인터페이스와 에러 정의.
"""

from typing import Protocol

from src.schemas.file import FileDescriptor


class StorageError(Exception):
    pass


class ConfigError(StorageError):
    """서비스 계정/버킷 설정 오류. 초기화 시점에 발생하며 네트워크 호출 전에 실패한다."""


class BucketError(StorageError):
    def __init__(self, bucket_name: str) -> None:
        self.bucket_name = bucket_name
        super().__init__(
            f'버킷 "{bucket_name}" 생성 실패. Google Cloud Platform에서 직접 다시 시도해 주세요.'
        )


class StorageWriteError(StorageError):
    def __init__(self, key: str, cause: Exception) -> None:
        self.key = key
        super().__init__(f"객체 업로드 실패: {key} - {cause}")


class StorageBackend(Protocol):
    """파일 저장소 인터페이스

    구현체:
    - GCSStorage: Google Cloud Storage 버킷
    - LocalStorage: 로컬 파일 시스템 (개발용)
    """

    async def upload(self, file: FileDescriptor) -> None:
        """파일 저장 후 file.url 기록

        Raises:
            BucketError: 버킷 생성 실패 시
            StorageWriteError: 객체 쓰기 실패 시 (file.url은 변경되지 않음)
        """
        ...

    async def delete(self, file: FileDescriptor) -> None:
        """파일 삭제. 원격 파일이 없으면 경고만 남기고 성공 처리."""
        ...
