"""파일 스키마

호스트(CMS)가 소유하는 파일 정보. 스토리지 백엔드는 입력 필드만 읽고 `url`만 기록한다.
"""

from src.schemas.base import BaseSchema


class RelatedRef(BaseSchema):
    """파일을 소유한 엔트리 참조 (예: ref="article", ref_id="42")"""

    ref: str
    ref_id: str | int  # 호스트는 보통 숫자 id를 보냄


class FileDescriptor(BaseSchema):
    name: str
    ext: str
    mime: str = "application/octet-stream"
    buffer: bytes = b""
    path: str | None = None
    hash: str | None = None
    related: list[RelatedRef] = []
    url: str | None = None  # 업로드 성공 시 백엔드가 기록
