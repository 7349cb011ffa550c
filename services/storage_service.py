"""
S3 storage service with an in-memory cache of file contents.

Files are fetched once per key and kept for the lifetime of the process.
Loading never raises: missing files and failures both come back as an empty
string from ``load_file``; ``fetch_file`` tells them apart.
"""
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union, TYPE_CHECKING
from botocore.exceptions import ClientError
from logger_config import get_logger

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client
else:
    S3Client = Any

logger = get_logger(__name__)

NOT_FOUND_CODES = {'NoSuchKey', 'NotFound', '404'}


@dataclass(frozen=True)
class FileHit:
    key: str
    content: str


@dataclass(frozen=True)
class FileNotFound:
    key: str

    @property
    def content(self) -> str:
        return ''


@dataclass(frozen=True)
class FileLoadFailed:
    key: str
    reason: str

    @property
    def content(self) -> str:
        return ''


LoadResult = Union[FileHit, FileNotFound, FileLoadFailed]


def _is_not_found(error: ClientError) -> bool:
    code = error.response.get('Error', {}).get('Code', '')
    status = error.response.get('ResponseMetadata', {}).get('HTTPStatusCode')
    return code in NOT_FOUND_CODES or status == 404


class StorageService:
    """Loads text files from one S3 bucket and caches them by key."""

    def __init__(self, s3_client: S3Client, bucket_name: str):
        """
        Initialize storage service.

        Args:
            s3_client: S3 client owned by this service
            bucket_name: Name of the S3 bucket
        """
        self.bucket_name = bucket_name
        self._s3_client: Optional[S3Client] = s3_client
        self._files: Dict[str, str] = {}
        self._lock = threading.Lock()
        self._closed = False

    def fetch_file(self, key: str) -> LoadResult:
        """
        Load a file, reporting how the lookup went.

        Args:
            key: S3 object key

        Returns:
            FileHit, FileNotFound or FileLoadFailed
        """
        cached = self._files.get(key)
        if cached is not None:
            return FileHit(key, cached)

        try:
            if not key:
                raise ValueError('S3 key must not be empty')
            if self._closed:
                raise RuntimeError('Storage service is closed')

            response = self._s3_client.get_object(Bucket=self.bucket_name, Key=key)
            body = response['Body']
            try:
                content = body.read().decode('utf-8')
            finally:
                body.close()
        except ClientError as e:
            if _is_not_found(e):
                logger.warning(f'S3 file not found: {key}')
                return FileNotFound(key)
            logger.error(f'Error retrieving S3 file {key}: {str(e)}')
            return FileLoadFailed(key, str(e))
        except Exception as e:
            logger.error(f'Error retrieving S3 file {key}: {str(e)}')
            return FileLoadFailed(key, str(e))

        # First writer wins; concurrent loads of the same key are tolerated
        with self._lock:
            content = self._files.setdefault(key, content)
        return FileHit(key, content)

    def load_file(self, key: str) -> str:
        """
        Load a file's text, from cache when possible.

        Returns:
            The file content, or an empty string if it could not be loaded
        """
        return self.fetch_file(key).content

    def close(self) -> None:
        """Release the S3 client. Safe to call more than once."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            client, self._s3_client = self._s3_client, None
        if client is not None:
            client.close()

    def __enter__(self) -> "StorageService":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
