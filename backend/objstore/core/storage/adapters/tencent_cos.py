"""
腾讯云COS存储适配器
实现BaseStorage和ImageXStorage接口，提供统一的腾讯云COS存储服务
"""

import asyncio
from dataclasses import replace
from functools import partial
from io import BytesIO
from typing import Any, BinaryIO, Callable, Dict, List, Mapping, Optional, TypeVar
from urllib.parse import urlencode

from qcloud_cos import CosConfig, CosS3Client, CosServiceError

from objstore.core.config.cos_config import COSConfig, get_cos_config
from objstore.core.log_messages import LogMessages
from objstore.core.log_utils import get_logger
from objstore.core.storage.base_storage import BaseStorage, ImageXStorage
from objstore.core.storage.endpoint import resolve_endpoint
from objstore.core.storage.enrichment import enrich_files, tags_to_dict
from objstore.core.storage.exceptions import (
    ConfigurationError,
    InvalidArgumentError,
    ObjectNotFoundError,
    RemoteError,
    StorageError,
    UnsupportedCapabilityError,
)
from objstore.core.storage.models import (
    Credential,
    FileInfo,
    GetOption,
    ListObjectsPaginatedInput,
    ListObjectsPaginatedOutput,
    PutOption,
    ResourceURL,
)
from objstore.utils.datetime_utils import format_http_time, parse_cos_time, parse_http_time

logger = get_logger(__name__)

T = TypeVar('T')

APPLY_UPLOAD_ACTION_URI = "/api/common/upload/apply_upload_action"


def _header(headers: Mapping[str, Any], name: str) -> str:
    """大小写不敏感地读取响应头"""
    lowered = name.lower()
    for header_name, value in headers.items():
        if header_name.lower() == lowered:
            return value or ""
    return ""


def _to_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def _is_not_found(exc: Exception) -> bool:
    return isinstance(exc, CosServiceError) and exc.get_status_code() == 404


class TencentCosAdapter(BaseStorage, ImageXStorage):
    """
    腾讯云COS存储适配器

    使用腾讯云COS SDK提供对象存储服务，支持：
    - 对象上传/下载/删除/元数据查询
    - 预签名URL生成
    - 分页列举与全量列举，可选并发补全标签和URL

    SDK客户端线程安全，所有同步调用都在线程池中执行。
    """

    # 适配器名称，用于工厂模式注册
    ADAPTER_NAME: str = "tencent_cos"

    def __init__(self, config: Optional[COSConfig] = None, client: Any = None) -> None:
        """
        初始化COS存储客户端

        Args:
            config: COS配置，不指定时从全局配置读取
            client: 已构建的SDK客户端，不指定时根据配置创建

        Raises:
            ConfigurationError: 配置不合法时抛出
        """
        self.config = config or get_cos_config()
        self.endpoint = resolve_endpoint(self.config.bucket, self.config.endpoint, self.config.region)
        self.credential = Credential(
            secret_id=self.config.secret_id,
            secret_key=self.config.secret_key
        )
        self._client = client if client is not None else self._create_client()

    @classmethod
    async def create(cls, config: Optional[COSConfig] = None, client: Any = None) -> "TencentCosAdapter":
        """
        创建适配器并确保存储桶存在

        Raises:
            ConfigurationError: 配置不合法时抛出
            RemoteError: 检查或创建存储桶失败时抛出
        """
        adapter = cls(config, client=client)
        await adapter.check_and_create_bucket()
        return adapter

    @property
    def bucket(self) -> str:
        return self.config.bucket

    def _create_client(self) -> CosS3Client:
        """
        创建COS客户端

        存储桶域名和服务域名都由端点解析结果决定，避免SDK重复拼接存储桶前缀
        """
        try:
            cos_config = CosConfig(
                Region=self.config.region or None,
                SecretId=self.credential.secret_id,
                SecretKey=self.credential.secret_key,
                Scheme=self.endpoint.scheme,
                Timeout=self.config.timeout,
                Domain=self.endpoint.bucket_host,
                ServiceDomain=self.endpoint.service_host,
            )
            return CosS3Client(cos_config)
        except Exception as e:
            raise ConfigurationError(
                "创建COS客户端失败: {}".format(e),
                details={'bucket': self.bucket}
            ) from e

    async def _run_in_executor(self, func: Callable[..., T], **kwargs) -> T:
        """
        在线程池中运行同步函数

        Args:
            func: 同步函数
            **kwargs: 函数关键字参数

        Returns:
            函数执行结果
        """
        loop = asyncio.get_event_loop()
        bound_func = partial(func, **kwargs)
        return await loop.run_in_executor(None, bound_func)

    # ==================== 存储桶 ====================

    async def check_and_create_bucket(self) -> None:
        """检查存储桶是否存在，不存在时尝试创建一次"""
        try:
            exists = await self._run_in_executor(self._client.bucket_exists, Bucket=self.bucket)
        except Exception as e:
            logger.error(LogMessages.BUCKET_CHECK_FAILED, exception=e, bucket=self.bucket)
            raise RemoteError("check bucket", str(e)) from e

        if exists:
            return

        logger.info(LogMessages.BUCKET_CREATE_START, bucket=self.bucket)
        try:
            await self._run_in_executor(self._client.create_bucket, Bucket=self.bucket, ACL="private")
        except Exception as e:
            logger.error(LogMessages.BUCKET_CREATE_FAILED, exception=e, bucket=self.bucket)
            raise RemoteError("create bucket", str(e)) from e
        logger.info(LogMessages.BUCKET_CREATE_SUCCESS, bucket=self.bucket)

    # ==================== 对象操作 ====================

    async def put(self, key: str, content: bytes, option: Optional[PutOption] = None) -> None:
        """上传对象，未指定object_size时使用内容长度"""
        option = option or PutOption()
        if option.object_size is None:
            option = replace(option, object_size=len(content))
        await self.put_with_reader(key, BytesIO(content), option)

    def _build_put_params(self, key: str, stream: BinaryIO, option: PutOption) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            'Bucket': self.bucket,
            'Key': key,
            'Body': stream,
        }

        if option.content_type is not None:
            params['ContentType'] = option.content_type
        if option.content_encoding is not None:
            params['ContentEncoding'] = option.content_encoding
        if option.content_disposition is not None:
            params['ContentDisposition'] = option.content_disposition
        if option.content_language is not None:
            params['ContentLanguage'] = option.content_language
        if option.expires is not None:
            params['Expires'] = format_http_time(option.expires)
        if option.object_size is not None and option.object_size > 0:
            params['ContentLength'] = str(option.object_size)
        if option.tagging:
            # x-cos-tagging: k1=v1&k2=v2
            params['Tagging'] = urlencode(sorted(option.tagging.items()))

        return params

    async def put_with_reader(self, key: str, stream: BinaryIO, option: Optional[PutOption] = None) -> None:
        """
        以流的方式上传对象

        Args:
            key: 对象键
            stream: 可读的二进制流
            option: 上传选项，值为None的字段不会发送

        Raises:
            RemoteError: 上传失败时抛出
        """
        params = self._build_put_params(key, stream, option or PutOption())
        try:
            await self._run_in_executor(self._client.put_object, **params)
        except Exception as e:
            logger.error(LogMessages.OBJECT_PUT_FAILED, exception=e, key=key)
            raise RemoteError("put object", str(e), details={'key': key}) from e

    def _read_object(self, key: str) -> bytes:
        response = self._client.get_object(Bucket=self.bucket, Key=key)
        return response['Body'].get_raw_stream().read()

    async def get(self, key: str) -> bytes:
        """
        下载对象内容

        Raises:
            RemoteError: 下载失败（包括对象不存在）时抛出
        """
        try:
            return await self._run_in_executor(self._read_object, key=key)
        except Exception as e:
            logger.error(LogMessages.OBJECT_GET_FAILED, exception=e, key=key)
            raise RemoteError("get object", str(e), details={'key': key}) from e

    async def delete(self, key: str) -> None:
        """删除对象，COS对不存在的对象同样返回成功"""
        try:
            await self._run_in_executor(self._client.delete_object, Bucket=self.bucket, Key=key)
        except Exception as e:
            logger.error(LogMessages.OBJECT_DELETE_FAILED, exception=e, key=key)
            raise RemoteError("delete object", str(e), details={'key': key}) from e
        logger.info(LogMessages.OBJECT_DELETE_SUCCESS, key=key)

    async def get_url(self, key: str, option: Optional[GetOption] = None) -> str:
        """
        生成预签名下载URL

        Args:
            key: 对象键
            option: expire为正数时作为有效期（秒），否则使用默认的7天

        Returns:
            str: 预签名URL

        Raises:
            RemoteError: 签名失败时抛出
        """
        expire = self.config.url_expires
        if option is not None and option.expire is not None and option.expire > 0:
            expire = option.expire

        try:
            return await self._run_in_executor(
                self._client.get_presigned_url,
                Bucket=self.bucket,
                Key=key,
                Method='GET',
                Expired=expire
            )
        except Exception as e:
            logger.error(LogMessages.PRESIGN_URL_FAILED, exception=e, key=key, expire=expire)
            raise RemoteError("presign url", str(e), details={'key': key}) from e

    async def _presign(self, key: str, expire: Optional[int]) -> str:
        return await self.get_url(key, GetOption(expire=expire))

    async def _fetch_tagging(self, key: str) -> Optional[Dict[str, str]]:
        try:
            response = await self._run_in_executor(
                self._client.get_object_tagging,
                Bucket=self.bucket,
                Key=key
            )
        except Exception as e:
            logger.error(LogMessages.OBJECT_TAGGING_FAILED, exception=e, key=key)
            raise RemoteError("get object tagging", str(e), details={'key': key}) from e
        return tags_to_dict((response or {}).get('TagSet'))

    async def head(self, key: str, option: Optional[GetOption] = None) -> FileInfo:
        """
        获取对象元数据

        Args:
            key: 对象键
            option: with_tagging 时额外获取一次标签，with_url 时生成预签名URL

        Returns:
            FileInfo: 对象信息

        Raises:
            ObjectNotFoundError: 对象不存在时抛出
            RemoteError: 其他失败时抛出
        """
        option = option or GetOption()
        try:
            headers = await self._run_in_executor(self._client.head_object, Bucket=self.bucket, Key=key)
        except Exception as e:
            if _is_not_found(e):
                raise ObjectNotFoundError(key) from e
            logger.error(LogMessages.OBJECT_HEAD_FAILED, exception=e, key=key)
            raise RemoteError("head object", str(e), details={'key': key}) from e

        headers = headers or {}
        tagging = await self._fetch_tagging(key) if option.with_tagging else None
        url = await self.get_url(key, option) if option.with_url else None

        return FileInfo(
            key=key,
            size=_to_int(_header(headers, 'Content-Length')),
            last_modified=parse_http_time(_header(headers, 'Last-Modified')),
            etag=_header(headers, 'ETag').strip('"'),
            tagging=tagging,
            url=url,
        )

    async def exists(self, key: str) -> bool:
        """检查对象是否存在，非"不存在"类错误会继续抛出"""
        try:
            await self.head(key)
        except ObjectNotFoundError:
            return False
        return True

    # ==================== 列举 ====================

    async def list_paginated(
        self,
        input: Optional[ListObjectsPaginatedInput],
        option: Optional[GetOption] = None
    ) -> ListObjectsPaginatedOutput:
        """
        分页列举对象

        目录占位对象（大小为0且以/结尾）会被过滤；按选项补全标签和URL时，
        任一对象失败则整页失败。

        Raises:
            InvalidArgumentError: 输入为空或page_size不为正数时抛出
            RemoteError: 列举或补全失败时抛出
        """
        if input is None:
            raise InvalidArgumentError("input cannot be nil")
        if input.page_size <= 0:
            raise InvalidArgumentError("page size must be positive", details={'page_size': input.page_size})

        option = option or GetOption()
        try:
            result = await self._run_in_executor(
                self._client.list_objects,
                Bucket=self.bucket,
                Prefix=input.prefix,
                Marker=input.cursor,
                MaxKeys=input.page_size
            )
        except Exception as e:
            logger.error(LogMessages.LIST_OBJECTS_FAILED, exception=e, prefix=input.prefix)
            raise RemoteError("list objects", str(e), details={'prefix': input.prefix}) from e

        result = result or {}
        contents = result.get('Contents') or []
        if isinstance(contents, dict):
            contents = [contents]

        files: List[FileInfo] = []
        for obj in contents:
            key = obj.get('Key', '')
            size = _to_int(obj.get('Size'))
            if size == 0 and key.endswith('/'):
                logger.debug(LogMessages.LIST_SKIP_DIR, key=key)
                continue

            files.append(FileInfo(
                key=key,
                size=size,
                last_modified=parse_cos_time(obj.get('LastModified')),
                etag=(obj.get('ETag') or '').strip('"'),
            ))

        try:
            files = await enrich_files(
                files,
                option,
                fetch_tagging=self._fetch_tagging,
                presign=self._presign,
                concurrency=self.config.fanout_concurrency
            )
        except StorageError as e:
            logger.error(LogMessages.LIST_ENRICH_FAILED, exception=e, prefix=input.prefix)
            raise

        return ListObjectsPaginatedOutput(
            files=files,
            cursor=result.get('NextMarker') or '',
            is_truncated=_to_bool(result.get('IsTruncated', False)),
        )

    async def list_all(self, prefix: str = "", option: Optional[GetOption] = None) -> List[FileInfo]:
        """
        列举前缀下的全部对象

        达到数量上限时记录告警并返回上限以内的已获取结果，不视为错误。

        Raises:
            RemoteError: 列举或补全失败时抛出
        """
        page_size = self.config.list_page_size
        max_objects = self.config.list_max_objects

        files: List[FileInfo] = []
        cursor = ""
        while True:
            output = await self.list_paginated(
                ListObjectsPaginatedInput(prefix=prefix, page_size=page_size, cursor=cursor),
                option
            )
            files.extend(output.files)

            if len(files) >= max_objects:
                logger.warning(LogMessages.LIST_MAX_OBJECTS_REACHED, total=len(files), prefix=prefix)
                return files[:max_objects]

            if not output.is_truncated or not output.cursor:
                return files

            cursor = output.cursor

    # ==================== ImageX兼容接口 ====================

    def get_upload_host(self, current_host: Optional[str] = None) -> str:
        if not current_host:
            return ""
        return current_host + APPLY_UPLOAD_ACTION_URI

    def get_server_id(self) -> str:
        return ""

    async def get_upload_auth(self) -> None:
        raise UnsupportedCapabilityError("get_upload_auth", self.ADAPTER_NAME)

    async def get_upload_auth_with_expire(self, expire) -> None:
        raise UnsupportedCapabilityError("get_upload_auth_with_expire", self.ADAPTER_NAME)

    async def get_resource_url(self, uri: str) -> ResourceURL:
        return ResourceURL(url=await self.get_url(uri))

    async def upload(self, data: bytes) -> None:
        raise UnsupportedCapabilityError("upload", self.ADAPTER_NAME)


__all__ = ['TencentCosAdapter', 'APPLY_UPLOAD_ACTION_URI']
