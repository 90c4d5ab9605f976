"""Google Cloud Storage 구현체

google-cloud-storage 클라이언트는 동기 API이므로 모든 네트워크 호출은
asyncio.to_thread로 실행한다. 재시도 없음: 원격 호출은 최대 1회.
"""

# pyright: reportMissingTypeStubs=false

import asyncio
import logging

from google.api_core.exceptions import GoogleAPICallError, NotFound
from google.auth.exceptions import TransportError
from google.cloud import storage
from google.oauth2 import service_account
from requests.exceptions import RequestException

from src.constants import BUCKET_NAME_PLACEHOLDER, Acl, StorageClass
from src.infra.storage.base import BucketError, ConfigError, StorageWriteError
from src.infra.storage.credentials import AdapterConfig, Credentials
from src.infra.storage.keys import build_delete_key, build_upload_key
from src.schemas.file import FileDescriptor

logger = logging.getLogger(__name__)

# SDK가 감싸지 않는 전송 계층 에러 포함
REMOTE_ERRORS = (GoogleAPICallError, RequestException, TransportError)


def create_client(credentials: Credentials) -> storage.Client:
    """서비스 계정 정보로 GCS 클라이언트 생성 (네트워크 호출 없음)

    Raises:
        ConfigError: private_key 등 서비스 계정 정보를 해석할 수 없는 경우
    """
    try:
        gcp_credentials = service_account.Credentials.from_service_account_info(
            credentials.to_service_account_info()
        )
    except ValueError as e:
        raise ConfigError(f"\"Service Account JSON\" 자격 증명 해석 실패: {e}") from e
    return storage.Client(project=credentials.project_id, credentials=gcp_credentials)


def content_disposition(name: str) -> str:
    """`inline; filename="<name>"` 헤더 값. 따옴표/역슬래시는 이스케이프, 개행은 제거"""
    safe = name.replace("\r", "").replace("\n", "")
    safe = safe.replace("\\", "\\\\").replace('"', '\\"')
    return f'inline; filename="{safe}"'


async def ensure_bucket(
    client: storage.Client,
    bucket_name: str,
    location: str,
    log: logging.Logger = logger,
) -> None:
    """버킷이 없으면 multi-regional 버킷 생성 (멱등)

    Raises:
        BucketError: 버킷 생성 실패 시. 존재 확인 실패는 그대로 전파
    """
    bucket = client.bucket(bucket_name)
    if await asyncio.to_thread(bucket.exists):
        return

    bucket.storage_class = StorageClass.MULTI_REGIONAL
    try:
        await asyncio.to_thread(client.create_bucket, bucket, location=location)
    except REMOTE_ERRORS as e:
        raise BucketError(bucket_name) from e
    log.debug(f"버킷 생성 완료: {bucket_name} ({location})")


class GCSStorage:
    """Google Cloud Storage 버킷에 파일 저장 (public-read)

    Note: 같은 키에 대한 동시 업로드는 조율하지 않는다 (확인-삭제-쓰기 순서가 섞일 수 있음).
    """

    def __init__(
        self,
        config: AdapterConfig,
        client: storage.Client,
        log: logging.Logger | None = None,
    ) -> None:
        self.config = config
        self._client = client
        self._log = log or logger

    def public_url(self, key: str) -> str:
        base = self.config.base_url.replace(BUCKET_NAME_PLACEHOLDER, self.config.bucket_name, 1)
        return f"{base}/{key}"

    async def upload(self, file: FileDescriptor) -> None:
        """버킷 확인 → 기존 객체 삭제 → 쓰기 → file.url 기록

        Raises:
            BucketError: 버킷 생성 실패 시
            StorageWriteError: 객체 쓰기 실패 시
        """
        key = build_upload_key(file)
        await ensure_bucket(
            self._client, self.config.bucket_name, self.config.bucket_location, self._log
        )

        blob = self._client.bucket(self.config.bucket_name).blob(key)
        await self._remove_existing(blob, key)
        await self._write(blob, key, file)

        file.url = self.public_url(key)
        self._log.debug(f"업로드 완료: {file.url}")

    async def delete(self, file: FileDescriptor) -> None:
        """원격 객체 삭제. 404는 경고 후 성공 처리, 그 외 에러는 그대로 전파"""
        key = build_delete_key(
            file, same_as_upload=self.config.delete_folder_rule == "same_as_upload"
        )
        blob = self._client.bucket(self.config.bucket_name).blob(key)

        try:
            await asyncio.to_thread(blob.delete)
        except NotFound:
            self._log.warning(f"원격 파일을 찾을 수 없음. 수동 삭제가 필요할 수 있음: {key}")
            return

        self._log.debug(f"삭제 완료: {key}")

    async def _remove_existing(self, blob: storage.Blob, key: str) -> None:
        """같은 키의 기존 객체 삭제 (best-effort: 실패해도 업로드는 계속)"""
        if not await asyncio.to_thread(blob.exists):
            return

        self._log.info(f"이미 존재하는 파일 삭제 시도: {key}")
        try:
            await asyncio.to_thread(blob.delete)
        except NotFound:
            self._log.warning(f"원격 파일을 찾을 수 없음. 수동 삭제가 필요할 수 있음: {key}")
        except REMOTE_ERRORS as e:
            self._log.error(f"기존 파일 삭제 실패: {key} - {e}")
        else:
            self._log.info(f"기존 파일 삭제 완료: {key}")

    async def _write(self, blob: storage.Blob, key: str, file: FileDescriptor) -> None:
        blob.content_disposition = content_disposition(file.name)
        try:
            await asyncio.to_thread(
                blob.upload_from_string,
                file.buffer,
                content_type=file.mime,
                predefined_acl=Acl.PUBLIC_READ,
            )
        except REMOTE_ERRORS as e:
            raise StorageWriteError(key, e) from e
