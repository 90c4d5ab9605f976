"""원격 객체 키 생성

키 형식: `<folder>/<slug(basename)><ext 소문자>`

folder 규칙:
- 업로드: path → related[0] (`<ref>/<ref_id>`) → hash
- 삭제 (path_or_hash): path → hash. related 폴더는 고려하지 않음
"""

from pathlib import PurePosixPath

from slugify import slugify

from src.schemas.file import FileDescriptor


class InvalidKeyError(ValueError):
    """객체 키를 만들 수 없는 파일 정보 (폴더 없음, 상위 경로 포함 등)"""


def build_file_name(file: FileDescriptor) -> str:
    """파일명 slug + 소문자 확장자 (예: "Photo.JPG", ".jpg" → "photo.jpg")"""
    basename = PurePosixPath(file.name).name
    if file.ext and basename.lower().endswith(file.ext.lower()):
        basename = basename[: -len(file.ext)]
    return slugify(basename) + file.ext.lower()


def upload_folder(file: FileDescriptor) -> str:
    if file.path:
        return _require_folder(file.path.strip("/"), file)
    if file.related and file.related[0].ref:
        ref = file.related[0]
        return _require_folder(f"{ref.ref}/{ref.ref_id}", file)
    return _require_folder(file.hash, file)


def delete_folder(file: FileDescriptor) -> str:
    if file.path:
        return _require_folder(file.path.strip("/"), file)
    return _require_folder(file.hash, file)


def build_upload_key(file: FileDescriptor) -> str:
    return _check_key(f"{upload_folder(file)}/{build_file_name(file)}")


def build_delete_key(file: FileDescriptor, same_as_upload: bool = False) -> str:
    if same_as_upload:
        return build_upload_key(file)
    return _check_key(f"{delete_folder(file)}/{build_file_name(file)}")


def _require_folder(folder: str | None, file: FileDescriptor) -> str:
    if not folder:
        raise InvalidKeyError(f"객체 폴더를 결정할 수 없음 (path/hash 없음): {file.name!r}")
    return folder


def _check_key(key: str) -> str:
    """빈 세그먼트, 상위 경로(`..`)가 섞인 키는 거부"""
    if any(segment in ("", ".", "..") for segment in key.split("/")):
        raise InvalidKeyError(f"허용되지 않은 객체 경로: {key!r}")
    return key
