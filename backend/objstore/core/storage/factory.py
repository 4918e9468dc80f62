"""
存储适配器工厂
提供适配器注册和创建功能
"""

from typing import Dict, Optional, Type

from objstore.core.config.cos_config import COSConfig
from objstore.core.log_messages import LogMessages
from objstore.core.log_utils import get_logger
from objstore.core.storage.base_storage import BaseStorage
from objstore.core.storage.exceptions import ConfigurationError, StorageError

logger = get_logger(__name__)

# 适配器注册表
_adapter_registry: Dict[str, Type[BaseStorage]] = {}


def register_adapter(name: str, adapter_class: Type[BaseStorage]) -> None:
    """
    注册存储适配器

    Args:
        name: 适配器名称（如 'tencent_cos'）
        adapter_class: 适配器类，需提供异步的 create(config) 构造方法

    Example:
        >>> register_adapter('tencent_cos', TencentCosAdapter)
    """
    _adapter_registry[name] = adapter_class
    logger.info(LogMessages.ADAPTER_REGISTERED, adapter=name)


def get_adapter_class(name: str) -> Type[BaseStorage]:
    """
    获取适配器类

    Raises:
        ConfigurationError: 适配器不存在时抛出
    """
    adapter_class = _adapter_registry.get(name)
    if not adapter_class:
        available = ', '.join(_adapter_registry.keys())
        raise ConfigurationError(
            "存储适配器 '{}' 不存在，可用适配器: {}".format(name, available)
        )
    return adapter_class


async def create_adapter(name: str, config: Optional[COSConfig] = None) -> BaseStorage:
    """
    创建适配器实例，创建过程中会完成存储桶检查

    Args:
        name: 适配器名称
        config: 适配器配置，不指定时由适配器从全局配置读取

    Returns:
        BaseStorage: 适配器实例

    Raises:
        ConfigurationError: 适配器不存在或配置不合法时抛出
        RemoteError: 存储桶检查或创建失败时抛出
    """
    adapter_class = get_adapter_class(name)
    try:
        return await adapter_class.create(config)
    except StorageError as e:
        logger.error(LogMessages.ADAPTER_CREATE_FAILED, exception=e, adapter=name)
        raise


def list_available_adapters() -> list[str]:
    """列出所有已注册的适配器"""
    return list(_adapter_registry.keys())


__all__ = [
    'register_adapter',
    'get_adapter_class',
    'create_adapter',
    'list_available_adapters',
]
