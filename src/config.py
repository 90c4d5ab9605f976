from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # App
    base_url: str = "http://localhost:8000"
    log_level: str = "INFO"
    max_upload_size: int = 50 * 1024 * 1024  # 50MB

    # CORS
    cors_origins: list[str] = ["http://localhost:1337"]

    # Storage
    storage_provider: str = "gcs"  # "gcs" | "local"
    local_upload_dir: str = ""

    # Google Cloud Storage
    gcs_service_account: str = ""  # 서비스 계정 JSON 원문
    gcs_bucket_name: str = ""
    gcs_bucket_location: str = "us"  # "asia" | "eu" | "us"
    gcs_base_url: str = "https://storage.googleapis.com/{bucket-name}"
    gcs_delete_folder_rule: str = "path_or_hash"  # "path_or_hash" | "same_as_upload"

    def gcs_provider_config(self) -> dict[str, str]:
        """provider.init()에 넘기는 호스트 설정 형태 (camelCase 키)"""
        return {
            "serviceAccount": self.gcs_service_account,
            "bucketName": self.gcs_bucket_name,
            "bucketLocation": self.gcs_bucket_location,
            "baseUrl": self.gcs_base_url,
            "deleteFolderRule": self.gcs_delete_folder_rule,
        }


@lru_cache
def get_settings() -> Settings:
    return Settings()
