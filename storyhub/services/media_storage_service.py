"""
媒体存储服务

把上传的文件写入本地目录，并返回可访问的URL
"""

import os
import re
import uuid
from typing import Dict, List, Optional, Sequence, Set, Tuple
from loguru import logger

from storyhub.config.settings import settings
from storyhub.exceptions import ValidationError
from storyhub.models.scene import MediaType

# 每种媒体类型允许的扩展名
ALLOWED_EXTENSIONS: Dict[MediaType, Set[str]] = {
    MediaType.IMAGE: {"jpg", "jpeg", "png", "gif", "webp"},
    MediaType.VIDEO: {"mp4", "webm", "ogg"},
    MediaType.AUDIO: {"mp3", "wav", "ogg", "m4a"},
}

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def parse_media_type(value: Optional[str]) -> MediaType:
    """解析媒体类型（不区分大小写）"""
    try:
        return MediaType((value or "").strip().upper())
    except ValueError:
        raise ValidationError(
            f"Invalid media type: {value}. Must be IMAGE, VIDEO or AUDIO",
            code="INVALID_MEDIA_TYPE"
        )


def sanitize_filename(filename: Optional[str]) -> str:
    """只保留字母、数字、点、下划线和连字符"""
    name = os.path.basename(filename or "")
    name = _UNSAFE_CHARS.sub("_", name)
    return name or "file"


class MediaStorageService:
    """本地磁盘媒体存储"""

    def __init__(self, upload_dir: Optional[str] = None, url_prefix: Optional[str] = None):
        self._upload_dir = upload_dir
        self._url_prefix = url_prefix

    @property
    def upload_dir(self) -> str:
        return self._upload_dir or settings.MEDIA_UPLOAD_DIR

    @property
    def url_prefix(self) -> str:
        return (self._url_prefix or settings.MEDIA_URL_PREFIX).rstrip("/")

    def _store(self, files: Sequence[Tuple[str, bytes]], subdir: str, allowed: Set[str]) -> List[str]:
        # 先校验全部文件，避免部分写入
        accepted = []
        for filename, data in files:
            if not data:
                continue
            extension = os.path.splitext(filename or "")[1].lstrip(".").lower()
            if extension not in allowed:
                raise ValidationError(
                    f"File type not allowed: {filename}",
                    code="INVALID_FILE_TYPE"
                )
            accepted.append((filename, data))

        target_dir = os.path.join(self.upload_dir, *subdir.split("/"))
        os.makedirs(target_dir, exist_ok=True)

        urls = []
        for filename, data in accepted:
            stored_name = f"{uuid.uuid4().hex}_{sanitize_filename(filename)}"
            with open(os.path.join(target_dir, stored_name), "wb") as f:
                f.write(data)
            urls.append(f"{self.url_prefix}/{subdir}/{stored_name}")

        if urls:
            logger.info(f"💾 Stored {len(urls)} file(s) under {subdir}")
        return urls

    def store_scene_media(self, files: Sequence[Tuple[str, bytes]], media_type: MediaType) -> List[str]:
        """
        保存场景媒体

        Args:
            files: (文件名, 内容) 列表，空文件会被跳过
            media_type: 媒体类型

        Returns:
            保存后的URL列表

        Raises:
            ValidationError: 扩展名不符合媒体类型
        """
        return self._store(files, f"scenes/{media_type.value.lower()}", ALLOWED_EXTENSIONS[media_type])

    def store_story_images(self, files: Sequence[Tuple[str, bytes]]) -> List[str]:
        """保存故事图片，返回URL列表"""
        return self._store(files, "stories", ALLOWED_EXTENSIONS[MediaType.IMAGE])

    def discard(self, urls: Sequence[str]) -> int:
        """
        删除已保存的文件（数据库写入失败时清理）

        Args:
            urls: 由本服务返回的URL列表，其他前缀的URL会被忽略

        Returns:
            实际删除的文件数
        """
        prefix = f"{self.url_prefix}/"
        removed = 0
        for url in urls:
            if not url.startswith(prefix):
                continue
            path = os.path.join(self.upload_dir, *url[len(prefix):].split("/"))
            if os.path.isfile(path):
                os.remove(path)
                removed += 1

        if removed:
            logger.warning(f"🧹 Discarded {removed} stored file(s)")
        return removed


# 全局媒体存储实例
media_storage_service = MediaStorageService()
