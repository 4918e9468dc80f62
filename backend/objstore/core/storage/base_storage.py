"""
存储抽象基类
定义统一的存储接口和ImageX兼容接口，两者由同一个后端实现，
调用方可以只依赖其中一种能力
"""

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import BinaryIO, List, Optional

from objstore.core.storage.models import (
    FileInfo,
    GetOption,
    ListObjectsPaginatedInput,
    ListObjectsPaginatedOutput,
    PutOption,
    ResourceURL,
)


class BaseStorage(ABC):
    """存储抽象基类"""

    @abstractmethod
    async def put(self, key: str, content: bytes, option: Optional[PutOption] = None) -> None:
        """
        上传对象

        Args:
            key: 对象键
            content: 对象内容
            option: 上传选项，未指定object_size时按内容长度计算

        Raises:
            RemoteError: 上传失败时抛出
        """

    @abstractmethod
    async def put_with_reader(self, key: str, stream: BinaryIO, option: Optional[PutOption] = None) -> None:
        """
        以流的方式上传对象

        Raises:
            RemoteError: 上传失败时抛出
        """

    @abstractmethod
    async def get(self, key: str) -> bytes:
        """
        下载对象内容

        Raises:
            RemoteError: 下载失败（包括对象不存在）时抛出
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """
        删除对象，对象不存在不视为错误

        Raises:
            RemoteError: 删除失败时抛出
        """

    @abstractmethod
    async def get_url(self, key: str, option: Optional[GetOption] = None) -> str:
        """
        生成预签名下载URL

        Raises:
            RemoteError: 签名失败时抛出
        """

    @abstractmethod
    async def list_paginated(
        self,
        input: Optional[ListObjectsPaginatedInput],
        option: Optional[GetOption] = None
    ) -> ListObjectsPaginatedOutput:
        """
        分页列举对象

        Raises:
            InvalidArgumentError: 输入为空或page_size不为正数时抛出
            RemoteError: 列举或补全失败时抛出
        """

    @abstractmethod
    async def list_all(self, prefix: str = "", option: Optional[GetOption] = None) -> List[FileInfo]:
        """
        列举前缀下的全部对象，数量超过上限时返回已获取的部分

        Raises:
            RemoteError: 列举或补全失败时抛出
        """

    @abstractmethod
    async def head(self, key: str, option: Optional[GetOption] = None) -> FileInfo:
        """
        获取对象元数据

        Raises:
            ObjectNotFoundError: 对象不存在时抛出
            RemoteError: 其他失败时抛出
        """


class ImageXStorage(ABC):
    """ImageX兼容接口"""

    @abstractmethod
    def get_upload_host(self, current_host: Optional[str] = None) -> str:
        """获取上传入口地址"""

    @abstractmethod
    def get_server_id(self) -> str:
        """获取服务ID"""

    @abstractmethod
    async def get_upload_auth(self) -> None:
        """获取上传临时凭证"""

    @abstractmethod
    async def get_upload_auth_with_expire(self, expire: timedelta) -> None:
        """获取指定有效期的上传临时凭证"""

    @abstractmethod
    async def get_resource_url(self, uri: str) -> ResourceURL:
        """获取资源访问地址"""

    @abstractmethod
    async def upload(self, data: bytes) -> None:
        """直传数据"""


__all__ = ['BaseStorage', 'ImageXStorage']
