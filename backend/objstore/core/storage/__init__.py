"""
存储服务模块
提供统一的存储服务访问接口，支持多种存储适配器
"""

from typing import Optional

from objstore.core.config.cos_config import get_cos_config, validate_cos_config
from objstore.core.storage.adapters.tencent_cos import TencentCosAdapter
from objstore.core.storage.base_storage import BaseStorage, ImageXStorage
from objstore.core.storage.endpoint import resolve_endpoint
from objstore.core.storage.exceptions import *
from objstore.core.storage.factory import (
    create_adapter,
    list_available_adapters,
    register_adapter,
)
from objstore.core.storage.models import *

# 自动注册腾讯云COS适配器
register_adapter(TencentCosAdapter.ADAPTER_NAME, TencentCosAdapter)


async def get_storage_service(adapter_name: Optional[str] = None) -> BaseStorage:
    """
    获取存储服务实例

    Args:
        adapter_name: 适配器名称（如 'tencent_cos'），不指定则自动检测

    Returns:
        BaseStorage: 存储服务实例

    Raises:
        ConfigurationError: 当没有可用的存储服务时抛出

    Example:
        >>> storage = await get_storage_service()
        >>> storage = await get_storage_service('tencent_cos')
    """
    if adapter_name is None:
        if not validate_cos_config(get_cos_config()):
            raise ConfigurationError("没有可用的存储服务。请配置腾讯云COS存储")
        adapter_name = TencentCosAdapter.ADAPTER_NAME

    return await create_adapter(adapter_name)


__all__ = [
    # 工厂函数
    'get_storage_service',
    'create_adapter',
    'list_available_adapters',
    'register_adapter',
    # 抽象接口
    'BaseStorage',
    'ImageXStorage',
    # 适配器类
    'TencentCosAdapter',
    # 工具函数
    'resolve_endpoint',
    # 异常
    'StorageError',
    'ConfigurationError',
    'InvalidArgumentError',
    'ObjectNotFoundError',
    'RemoteError',
    'UnsupportedCapabilityError',
    # 数据模型
    'Credential',
    'Endpoint',
    'FileInfo',
    'PutOption',
    'GetOption',
    'ListObjectsPaginatedInput',
    'ListObjectsPaginatedOutput',
    'ResourceURL',
]
