"""서비스 계정 및 어댑터 설정 검증

호스트가 넘긴 설정(camelCase 키 매핑)을 검증한다. 네트워크 호출 없음.
"""

import json
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, ValidationError

from src.constants import DEFAULT_TOKEN_URI
from src.infra.storage.base import ConfigError

BucketLocation = Literal["asia", "eu", "us"]
BaseUrlTemplate = Literal[
    "https://storage.googleapis.com/{bucket-name}",
    "https://{bucket-name}",
    "http://{bucket-name}",
]
DeleteFolderRule = Literal["path_or_hash", "same_as_upload"]

REQUIRED_FIELDS = ("project_id", "client_email", "private_key")


class Credentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    project_id: str
    client_email: str
    private_key: str
    token_uri: str = DEFAULT_TOKEN_URI

    def to_service_account_info(self) -> dict[str, str]:
        """google.oauth2.service_account 에 넘길 dict"""
        return self.model_dump()


class AdapterConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    credentials: Credentials
    bucket_name: str
    bucket_location: BucketLocation = "us"
    base_url: BaseUrlTemplate = "https://storage.googleapis.com/{bucket-name}"
    delete_folder_rule: DeleteFolderRule = "path_or_hash"


def check_service_account(config: Mapping[str, Any]) -> Credentials:
    """서비스 계정 JSON과 버킷 이름 검증

    Raises:
        ConfigError: serviceAccount/bucketName 누락, JSON 파싱 실패, 필수 필드 누락 시
    """
    if not config.get("serviceAccount"):
        raise ConfigError('"Service Account JSON"은 필수입니다')
    if not config.get("bucketName"):
        raise ConfigError('"Multi-Regional Bucket name"은 필수입니다')

    try:
        data = json.loads(config["serviceAccount"])
    except (TypeError, json.JSONDecodeError) as e:
        raise ConfigError(
            '"Service Account JSON" 파싱 실패. JSON 파일 전체를 복사해 붙여넣었는지 확인하세요.'
        ) from e

    if not isinstance(data, dict):
        raise ConfigError(f'"Service Account JSON"이 객체가 아님: {type(data).__name__}')

    for field in REQUIRED_FIELDS:
        if not data.get(field):
            raise ConfigError(f'"Service Account JSON"에 "{field}" 필드가 없습니다')

    return Credentials(
        project_id=data["project_id"],
        client_email=data["client_email"],
        private_key=data["private_key"],
        token_uri=data.get("token_uri") or DEFAULT_TOKEN_URI,
    )


def build_adapter_config(config: Mapping[str, Any], credentials: Credentials) -> AdapterConfig:
    """나머지 설정(위치, base URL, 삭제 키 규칙)을 검증해 불변 설정 생성

    빈 값은 기본값으로 대체한다.

    Raises:
        ConfigError: 허용되지 않은 bucketLocation/baseUrl/deleteFolderRule
    """
    optional = {
        "bucket_location": config.get("bucketLocation"),
        "base_url": config.get("baseUrl"),
        "delete_folder_rule": config.get("deleteFolderRule"),
    }
    try:
        return AdapterConfig(
            credentials=credentials,
            bucket_name=config["bucketName"],
            **{k: v for k, v in optional.items() if v},
        )
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors())
        raise ConfigError(f"허용되지 않은 설정 값: {fields}") from e
