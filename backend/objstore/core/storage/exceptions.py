"""
存储服务异常定义
定义存储模块中使用的所有异常类型
"""

from typing import Any, Dict, Optional


class StorageError(Exception):
    """
    存储操作基础异常

    所有存储相关异常的基类。

    Attributes:
        message: 错误消息
        code: 错误码
        details: 错误详情
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ConfigurationError(StorageError):
    """存储配置错误：存储桶为空、端点与地域均缺失、端点无法解析等"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="CONFIG_ERROR", details=details)


class InvalidArgumentError(StorageError):
    """调用参数错误"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="INVALID_ARGUMENT", details=details)


class ObjectNotFoundError(StorageError):
    """对象不存在"""

    def __init__(self, key: str, details: Optional[Dict[str, Any]] = None) -> None:
        details = {'key': key, **(details or {})}
        super().__init__("对象不存在: {}".format(key), code="OBJECT_NOT_FOUND", details=details)
        self.key = key


class RemoteError(StorageError):
    """远端存储服务或SDK调用失败"""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        details = {'operation': operation, **(details or {})}
        super().__init__("{} failed: {}".format(operation, message), code="REMOTE_ERROR", details=details)
        self.operation = operation


class UnsupportedCapabilityError(StorageError):
    """当前存储后端不支持的能力"""

    def __init__(self, capability: str, backend: str) -> None:
        super().__init__(
            "{} 不支持 {}".format(backend, capability),
            code="UNSUPPORTED",
            details={'capability': capability, 'backend': backend}
        )
        self.capability = capability


__all__ = [
    'StorageError',
    'ConfigurationError',
    'InvalidArgumentError',
    'ObjectNotFoundError',
    'RemoteError',
    'UnsupportedCapabilityError',
]
