"""
腾讯云COS配置模块
从全局配置中提取COS相关配置，并提供完整性校验
"""

from typing import Optional

from pydantic import BaseModel, Field

from objstore.core.config.config import Settings, settings as global_settings


class COSConfig(BaseModel):
    """COS配置数据类"""

    secret_id: str = Field(default="", description="腾讯云COS SecretId")
    secret_key: str = Field(default="", description="腾讯云COS SecretKey")
    bucket: str = Field(default="", description="COS存储桶名称")
    endpoint: str = Field(default="", description="COS服务端点，可带或不带协议头")
    region: str = Field(default="", description="COS地域，端点为空时用于拼接默认端点")

    timeout: int = Field(default=30, description="请求超时时间（秒）")
    url_expires: int = Field(default=7 * 24 * 60 * 60, description="预签名URL默认过期时间（秒）")

    list_page_size: int = Field(default=100, gt=0, description="全量列举时的单页大小")
    list_max_objects: int = Field(default=10000, gt=0, description="全量列举的对象数量上限")
    fanout_concurrency: int = Field(default=5, gt=0, description="列举结果补全时的最大并发数")


def get_cos_config(settings: Optional[Settings] = None) -> COSConfig:
    """从全局配置获取COS配置"""
    settings = settings or global_settings
    return COSConfig(
        secret_id=settings.cos_secret_id,
        secret_key=settings.cos_secret_key,
        bucket=settings.cos_bucket,
        endpoint=settings.cos_endpoint,
        region=settings.cos_region,
        timeout=settings.cos_timeout,
        url_expires=settings.cos_url_expires,
        list_page_size=settings.cos_list_page_size,
        list_max_objects=settings.cos_list_max_objects,
        fanout_concurrency=settings.cos_fanout_concurrency,
    )


def validate_cos_config(config: Optional[COSConfig]) -> bool:
    """验证COS配置完整性"""
    if config is None:
        return False

    required_fields = ["secret_id", "secret_key", "bucket"]
    for field in required_fields:
        if not getattr(config, field):
            return False

    # 端点和地域至少需要一个
    return bool(config.endpoint or config.region)
