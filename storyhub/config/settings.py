"""
应用全局配置

从 config.yaml 加载配置，支持环境变量覆盖
"""

import yaml
from pathlib import Path
from typing import Optional, List
import os


class Settings:
    """应用全局配置（从 config.yaml 加载）"""

    def __init__(self, config_path: Optional[str] = None):
        # 加载 config.yaml（可通过 STORYHUB_CONFIG 指定路径）
        path = config_path or os.getenv("STORYHUB_CONFIG")
        if path:
            config_file = Path(path)
        else:
            config_file = Path(__file__).parent.parent.parent / "config.yaml"
        with open(config_file, 'r', encoding='utf-8') as f:
            self._config = yaml.safe_load(f)

    # ==================== 应用基础配置 ====================
    @property
    def APP_NAME(self) -> str:
        return os.getenv("APP_NAME", self._config["app"]["name"])

    @property
    def APP_VERSION(self) -> str:
        return os.getenv("APP_VERSION", self._config["app"]["version"])

    @property
    def API_V1_PREFIX(self) -> str:
        return os.getenv("API_V1_PREFIX", self._config["app"]["api_prefix"])

    @property
    def DEBUG(self) -> bool:
        debug_str = os.getenv("DEBUG", str(self._config["app"]["debug"]))
        return debug_str.lower() in ("true", "1", "yes")

    # ==================== 数据库配置 ====================
    @property
    def DATABASE_ENABLED(self) -> bool:
        enabled_str = os.getenv("DATABASE_ENABLED", str(self._config["database"]["enabled"]))
        return enabled_str.lower() in ("true", "1", "yes")

    @property
    def DATABASE_URL(self) -> Optional[str]:
        if not self.DATABASE_ENABLED:
            return None
        return os.getenv("DATABASE_URL", self._config["database"]["url"])

    @property
    def DATABASE_POOL_SIZE(self) -> int:
        return int(os.getenv("DATABASE_POOL_SIZE", self._config["database"]["pool_size"]))

    @property
    def DATABASE_MAX_OVERFLOW(self) -> int:
        return int(os.getenv("DATABASE_MAX_OVERFLOW", self._config["database"]["max_overflow"]))

    # ==================== JWT 认证配置 ====================
    @property
    def JWT_SECRET_KEY(self) -> str:
        return os.getenv("JWT_SECRET_KEY", self._config["jwt"]["secret_key"])

    @property
    def JWT_ALGORITHM(self) -> str:
        return os.getenv("JWT_ALGORITHM", self._config["jwt"]["algorithm"])

    @property
    def JWT_EXPIRE_MINUTES(self) -> int:
        return int(os.getenv("JWT_EXPIRE_MINUTES", self._config["jwt"]["expire_minutes"]))

    # ==================== CORS 配置 ====================
    @property
    def CORS_ORIGINS(self) -> List[str]:
        env_origins = os.getenv("CORS_ORIGINS")
        if env_origins:
            return [origin.strip() for origin in env_origins.split(",")]
        return self._config["cors"]["origins"]

    # ==================== 媒体存储配置 ====================
    @property
    def MEDIA_UPLOAD_DIR(self) -> str:
        return os.getenv("MEDIA_UPLOAD_DIR", self._config["media"]["upload_dir"])

    @property
    def MEDIA_URL_PREFIX(self) -> str:
        return os.getenv("MEDIA_URL_PREFIX", self._config["media"]["url_prefix"])

    # ==================== 业务规则配置 ====================
    @property
    def COMMENT_MAX_LENGTH(self) -> int:
        return int(os.getenv("COMMENT_MAX_LENGTH", self._config["business"]["comment_max_length"]))

    # ==================== 日志配置 ====================
    @property
    def LOG_DIR(self) -> str:
        return os.getenv("LOG_DIR", self._config["logging"]["dir"])

    @property
    def LOG_LEVEL(self) -> str:
        return os.getenv("LOG_LEVEL", self._config["logging"]["level"])

    @property
    def LOG_ROTATION(self) -> str:
        return os.getenv("LOG_ROTATION", self._config["logging"]["rotation"])

    @property
    def LOG_RETENTION(self) -> str:
        return os.getenv("LOG_RETENTION", self._config["logging"]["retention"])


# 全局配置实例
settings = Settings()
