"""Google Cloud Storage 업로드 프로바이더

호스트(CMS)가 관리 화면 설정 폼을 그릴 때 쓰는 메타데이터와
설정 매핑으로 어댑터를 만드는 init()을 제공한다.

사용법:
    from src.infra.storage import provider

    storage = provider.init({
        "serviceAccount": "<service account json>",
        "bucketName": "my-bucket",
        "bucketLocation": "eu",
        "baseUrl": "https://storage.googleapis.com/{bucket-name}",
    })
    await storage.upload(file)
"""

import logging
from collections.abc import Mapping
from typing import Any, Literal, get_args

from google.cloud import storage
from pydantic import BaseModel

from src.infra.storage.credentials import (
    BaseUrlTemplate,
    BucketLocation,
    build_adapter_config,
    check_service_account,
)
from src.infra.storage.gcs import GCSStorage, create_client

PROVIDER_ID = "google-cloud-storage"
PROVIDER_NAME = "Google Cloud Storage"


class AuthField(BaseModel):
    label: str
    type: Literal["text", "textarea", "enum"]
    values: list[str] | None = None


AUTH_FIELDS: dict[str, AuthField] = {
    "serviceAccount": AuthField(label="Service Account JSON", type="textarea"),
    "bucketName": AuthField(label="Multi-Regional Bucket Name", type="text"),
    "bucketLocation": AuthField(
        label="Multi-Regional location",
        type="enum",
        values=list(get_args(BucketLocation)),
    ),
    "baseUrl": AuthField(
        label=(
            "Use bucket name as base URL "
            "(https://cloud.google.com/storage/docs/domain-name-verification)"
        ),
        type="enum",
        values=list(get_args(BaseUrlTemplate)),
    ),
}


def init(
    config: Mapping[str, Any],
    client: storage.Client | None = None,
    log: logging.Logger | None = None,
) -> GCSStorage:
    """설정 검증 후 GCSStorage 생성

    Args:
        config: 호스트 설정 (serviceAccount, bucketName, bucketLocation, baseUrl)
        client: 주입할 GCS 클라이언트 (없으면 서비스 계정으로 생성)
        log: 어댑터가 사용할 로거

    Raises:
        ConfigError: 설정이 유효하지 않은 경우 (네트워크 호출 전)
    """
    credentials = check_service_account(config)
    adapter_config = build_adapter_config(config, credentials)
    if client is None:
        client = create_client(credentials)
    return GCSStorage(adapter_config, client, log)
