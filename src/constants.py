BUCKET_NAME_PLACEHOLDER = "{bucket-name}"
DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"


class StorageClass:
    MULTI_REGIONAL = "MULTI_REGIONAL"


class Acl:
    PUBLIC_READ = "publicRead"


class Limits:
    CHUNK_SIZE = 1024 * 1024  # 1MB
