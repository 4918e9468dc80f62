"""
存储适配器模块
提供各种对象存储服务的适配器实现
"""

from objstore.core.storage.adapters.tencent_cos import TencentCosAdapter

__all__ = [
    'TencentCosAdapter',
]
