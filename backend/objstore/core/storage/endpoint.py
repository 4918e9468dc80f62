"""
COS端点解析
根据 (存储桶, 端点, 地域) 计算服务域名与存储桶域名
"""

import ipaddress
import re
from urllib.parse import urlsplit

from objstore.core.storage.exceptions import ConfigurationError
from objstore.core.storage.models import Endpoint

DEFAULT_ENDPOINT_TEMPLATE = "https://cos.{region}.myqcloud.com"

_HOST_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")


def _is_valid_host(netloc_host: str, hostname: str) -> bool:
    """域名只允许字母、数字、-、.、_，IPv6地址需带方括号"""
    if netloc_host.startswith("["):
        try:
            ipaddress.IPv6Address(hostname.split("%", 1)[0])
        except ValueError:
            return False
        return True
    return bool(_HOST_PATTERN.match(hostname))


def resolve_endpoint(bucket_name: str, endpoint: str = "", region: str = "") -> Endpoint:
    """
    解析COS端点

    支持以下几种输入形式：
    - 完整端点：https://cos.ap-beijing.myqcloud.com
    - 不带协议头的端点：cos.ap-beijing.myqcloud.com（默认https）
    - 已带存储桶前缀的端点：demo-1250000000.cos.ap-beijing.myqcloud.com
    - 端点为空，仅提供地域：ap-beijing

    Args:
        bucket_name: 存储桶名称
        endpoint: 服务端点
        region: 地域

    Returns:
        Endpoint: 解析结果，路径、查询参数和片段均被丢弃

    Raises:
        ConfigurationError: 存储桶为空、端点与地域均为空或端点无法解析时抛出
    """
    if not bucket_name:
        raise ConfigurationError("cos bucket name is empty")

    endpoint = (endpoint or "").strip()
    if not endpoint:
        if not region:
            raise ConfigurationError("cos endpoint is empty and region is missing")
        endpoint = DEFAULT_ENDPOINT_TEMPLATE.format(region=region)

    if not endpoint.startswith(("http://", "https://")):
        endpoint = "https://" + endpoint

    try:
        parsed = urlsplit(endpoint)
        # 访问port会校验端口合法性
        parsed.port
    except ValueError as e:
        raise ConfigurationError(
            "parse cos endpoint failed: {}".format(e),
            details={'endpoint': endpoint}
        ) from e

    service_host = parsed.netloc.rsplit("@", 1)[-1]
    if not service_host or not parsed.hostname:
        raise ConfigurationError(
            "parse cos endpoint failed: missing host",
            details={'endpoint': endpoint}
        )
    if not _is_valid_host(service_host, parsed.hostname):
        raise ConfigurationError(
            "parse cos endpoint failed: invalid character in host name {!r}".format(parsed.hostname),
            details={'endpoint': endpoint}
        )

    bucket_host = service_host
    if not bucket_host.startswith(bucket_name + "."):
        bucket_host = "{}.{}".format(bucket_name, bucket_host)

    return Endpoint(
        scheme=parsed.scheme,
        service_host=service_host,
        bucket_host=bucket_host,
    )


__all__ = ['resolve_endpoint', 'DEFAULT_ENDPOINT_TEMPLATE']
