"""Files API 라우트

호스트 쪽 업로드/삭제 엔드포인트. 저장 자체는 storage 백엔드에 위임한다.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, File, Form, HTTPException, Response, UploadFile, status

from src.infra.storage import provider
from src.infra.storage.base import BucketError, StorageWriteError
from src.infra.storage.keys import InvalidKeyError
from src.services import files as files_service

router = APIRouter(prefix="/files", tags=["files"])
logger = logging.getLogger(__name__)


def _invalid_path(e: InvalidKeyError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"code": "INVALID_PATH", "message": str(e)},
    )


@router.post("", response_model=files_service.FileResponse, status_code=status.HTTP_201_CREATED)
async def create_file(
    file: Annotated[UploadFile, File()],
    path: Annotated[str | None, Form()] = None,
) -> files_service.FileResponse:
    try:
        return await files_service.create_file(file, path)
    except InvalidKeyError as e:
        raise _invalid_path(e) from None
    except BucketError as e:
        logger.error(f"버킷 준비 실패: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"code": "BUCKET_UNAVAILABLE", "message": str(e)},
        ) from None
    except StorageWriteError as e:
        logger.error(f"파일 저장 실패: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"code": "STORAGE_WRITE_FAILED", "message": f"파일 저장 실패: {e.key}"},
        ) from None


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_file(request: files_service.DeleteFileRequest) -> Response:
    try:
        await files_service.remove_file(request)
    except InvalidKeyError as e:
        raise _invalid_path(e) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/provider")
def read_provider() -> dict[str, Any]:
    """관리 화면 설정 폼용 프로바이더 정보"""
    return {
        "provider": provider.PROVIDER_ID,
        "name": provider.PROVIDER_NAME,
        "auth": {
            key: field.model_dump(exclude_none=True)
            for key, field in provider.AUTH_FIELDS.items()
        },
    }
