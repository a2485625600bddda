"""
檔案儲存

所有上傳檔案都透過 Django storage API 存取，
要換成其他儲存後端只需要調整 DEFAULT_FILE_STORAGE / STORAGES。
"""

import logging
import re

from django.core.files.base import ContentFile
from django.core.files.storage import default_storage

from originality.exceptions import DownloadError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r'[^a-zA-Z0-9._-]')


def build_key(project_id, chapter, version, file_name) -> str:
    """
    projects/{project_id}/chapters/{chapter}/v{version}/{safe_name}

    檔名中的路徑分隔符號與特殊字元都會換成底線。
    """
    safe_name = _UNSAFE_CHARS.sub('_', file_name)
    return f"projects/{project_id}/chapters/{chapter or 0}/v{version}/{safe_name}"


def upload(key: str, data: bytes) -> str:
    """寫入檔案，回傳實際存放的 key"""
    saved_key = default_storage.save(key, ContentFile(data))
    return saved_key.replace('\\', '/')


def download(key: str) -> bytes:
    """
    讀取檔案內容

    Raises:
        DownloadError: 檔案不存在或無法讀取
    """
    try:
        with default_storage.open(key, 'rb') as f:
            return f.read()
    except (FileNotFoundError, OSError) as e:
        logger.error(f"[Storage] Download failed for {key}: {e}")
        raise DownloadError(f"Unable to download {key}: {e}") from e
