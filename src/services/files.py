import logging
import uuid
from pathlib import Path
from typing import Self

from fastapi import HTTPException, UploadFile
from pydantic import model_validator

from src.config import get_settings
from src.constants import Limits
from src.infra.storage import get_storage
from src.schemas.base import BaseSchema
from src.schemas.file import FileDescriptor, RelatedRef

logger = logging.getLogger(__name__)


class FileResponse(BaseSchema):
    name: str
    ext: str
    mime: str
    size: int
    hash: str | None
    path: str | None
    url: str


class DeleteFileRequest(BaseSchema):
    name: str
    ext: str
    path: str | None = None
    hash: str | None = None
    related: list[RelatedRef] = []

    @model_validator(mode="after")
    def require_folder(self) -> Self:
        """객체 폴더를 정할 수 있는 path/hash/related 중 하나는 필요"""
        if not (self.path or self.hash or self.related):
            raise ValueError("path, hash, related 중 하나는 필요합니다")
        return self


def _generate_hash() -> str:
    return uuid.uuid4().hex


async def create_file(upload: UploadFile, path: str | None = None) -> FileResponse:
    """
    Raises:
        HTTPException(400): 빈 파일, 크기 초과 시
        BucketError, StorageWriteError: 저장소 오류 시
    """
    storage = get_storage()
    content = await _read_with_size_limit(upload, get_settings().max_upload_size)
    if not content:
        raise HTTPException(
            status_code=400,
            detail={"code": "INVALID_FILE", "message": "빈 파일은 업로드할 수 없습니다"},
        )

    name = upload.filename or "unknown"
    file = FileDescriptor(
        name=name,
        ext=Path(name).suffix,
        mime=upload.content_type or "application/octet-stream",
        buffer=content,
        path=path or None,
        hash=_generate_hash(),
    )

    await storage.upload(file)
    logger.info(f"파일 저장 완료: {name} ({len(content)} bytes)")

    return FileResponse(
        name=file.name,
        ext=file.ext,
        mime=file.mime,
        size=len(content),
        hash=file.hash,
        path=file.path,
        url=file.url or "",
    )


async def remove_file(request: DeleteFileRequest) -> None:
    storage = get_storage()
    file = FileDescriptor(
        name=request.name,
        ext=request.ext,
        path=request.path,
        hash=request.hash,
        related=request.related,
    )
    await storage.delete(file)


async def _read_with_size_limit(upload: UploadFile, max_size: int) -> bytes:
    chunks: list[bytes] = []
    total_size = 0

    while chunk := await upload.read(Limits.CHUNK_SIZE):
        total_size += len(chunk)
        if total_size > max_size:
            raise HTTPException(
                status_code=400,
                detail={
                    "code": "FILE_TOO_LARGE",
                    "message": f"파일 크기 초과: {total_size}+ bytes (최대 {max_size} bytes)",
                },
            )
        chunks.append(chunk)

    return b"".join(chunks)
