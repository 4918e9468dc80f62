"""
应用配置管理模块
统一管理对象存储相关的配置信息，支持环境变量和.env文件
"""

from typing import Optional

from pydantic import ConfigDict, field_validator
from pydantic_settings import BaseSettings

from objstore.utils.config_utils import get_config_path


class Settings(BaseSettings):
    """应用配置类 - 统一管理所有配置信息"""

    # ==================== 基础配置 ====================
    app_name: str = "objstore"
    app_debug: bool = False
    app_env: str = "development"

    # ==================== 日志配置 ====================
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # ==================== COS存储配置 ====================
    cos_secret_id: str = ""
    cos_secret_key: str = ""
    cos_bucket: str = ""
    cos_endpoint: str = ""
    cos_region: str = ""

    cos_timeout: int = 30

    # 预签名URL默认有效期：7天
    cos_url_expires: int = 7 * 24 * 60 * 60

    # ==================== 列举配置 ====================
    cos_list_page_size: int = 100
    cos_list_max_objects: int = 10000
    cos_fanout_concurrency: int = 5

    # ==================== 验证器 ====================
    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """统一日志级别为大写"""
        return value.strip().upper()

    @field_validator("cos_list_page_size", "cos_list_max_objects", "cos_fanout_concurrency")
    @classmethod
    def check_positive(cls, value: int) -> int:
        """列举相关配置必须为正数"""
        if value <= 0:
            raise ValueError("必须为正整数")
        return value

    # ==================== 计算属性 ====================
    @property
    def cos_enabled(self) -> bool:
        """检查COS是否启用"""
        return bool(self.cos_secret_id and self.cos_secret_key and self.cos_bucket)

    model_config = ConfigDict(
        env_file=get_config_path(".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True
    )


def get_settings() -> Settings:
    """获取应用配置实例"""
    return Settings()


# 全局配置实例
settings = get_settings()
