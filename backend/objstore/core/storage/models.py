"""
存储服务数据模型
定义存储操作中使用的所有数据结构
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from objstore.utils.datetime_utils import ZERO_TIME


@dataclass(frozen=True)
class Credential:
    """
    固定的访问凭证

    Attributes:
        secret_id: SecretId
        secret_key: SecretKey
    """
    secret_id: str
    secret_key: str

    def __repr__(self) -> str:
        return "Credential(secret_id={!r}, secret_key='***')".format(self.secret_id)


@dataclass(frozen=True)
class Endpoint:
    """
    解析后的服务端点

    Attributes:
        scheme: 协议，默认https
        service_host: 服务域名，如 cos.ap-beijing.myqcloud.com
        bucket_host: 存储桶域名，最左侧标签始终为存储桶名称
    """
    scheme: str
    service_host: str
    bucket_host: str

    @property
    def service_url(self) -> str:
        return "{}://{}".format(self.scheme, self.service_host)

    @property
    def bucket_url(self) -> str:
        return "{}://{}".format(self.scheme, self.bucket_host)


@dataclass(frozen=True)
class FileInfo:
    """
    对象信息

    Attributes:
        key: 对象键
        size: 对象大小（字节）
        last_modified: 最后修改时间，ZERO_TIME 表示未知
        etag: 去掉引号的ETag
        tagging: 对象标签，未请求或无标签时为None
        url: 预签名访问URL，未请求时为None
    """
    key: str
    size: int = 0
    last_modified: datetime = ZERO_TIME
    etag: str = ""
    tagging: Optional[Dict[str, str]] = None
    url: Optional[str] = None


@dataclass
class PutOption:
    """
    上传选项

    所有字段默认为None，None表示不向远端发送该字段（与空字符串不同）。
    """
    content_type: Optional[str] = None
    content_encoding: Optional[str] = None
    content_disposition: Optional[str] = None
    content_language: Optional[str] = None
    expires: Optional[datetime] = None
    object_size: Optional[int] = None
    tagging: Optional[Dict[str, str]] = None


@dataclass
class GetOption:
    """
    读取/列举选项

    Attributes:
        with_tagging: 是否附带对象标签
        with_url: 是否附带预签名URL
        expire: 预签名URL有效期（秒），None或非正数时使用默认值
    """
    with_tagging: bool = False
    with_url: bool = False
    expire: Optional[int] = None


@dataclass
class ListObjectsPaginatedInput:
    """分页列举的输入参数"""
    page_size: int
    prefix: str = ""
    cursor: str = ""


@dataclass
class ListObjectsPaginatedOutput:
    """
    分页列举的单页结果

    is_truncated 为False或 cursor 为空都表示没有更多数据。
    """
    files: List[FileInfo] = field(default_factory=list)
    cursor: str = ""
    is_truncated: bool = False

    @property
    def has_more(self) -> bool:
        return self.is_truncated and bool(self.cursor)


@dataclass(frozen=True)
class ResourceURL:
    """资源访问地址"""
    url: str


__all__ = [
    'Credential',
    'Endpoint',
    'FileInfo',
    'PutOption',
    'GetOption',
    'ListObjectsPaginatedInput',
    'ListObjectsPaginatedOutput',
    'ResourceURL',
]
