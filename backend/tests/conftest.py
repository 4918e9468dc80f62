"""
测试配置和fixtures
为所有单元测试提供共享的COS配置、mock客户端和数据构造工具

单元测试不依赖真实的COS服务，SDK客户端统一使用MagicMock替换
"""

from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from objstore.core.config.cos_config import COSConfig
from objstore.core.storage import TencentCosAdapter


def build_listing(
    contents: List[Dict[str, Any]],
    is_truncated: bool = False,
    next_marker: Optional[str] = None
) -> Dict[str, Any]:
    """按SDK list_objects 的返回格式构造响应"""
    response: Dict[str, Any] = {
        'Name': 'demo-bucket-1250000000',
        'MaxKeys': '100',
        'IsTruncated': 'true' if is_truncated else 'false',
    }
    if contents:
        response['Contents'] = contents
    if next_marker is not None:
        response['NextMarker'] = next_marker
    return response


def build_object(key: str, size: int = 10) -> Dict[str, Any]:
    """按SDK list_objects 中 Contents 的格式构造单个对象"""
    return {
        'Key': key,
        'Size': str(size),
        'LastModified': '2025-01-02T03:04:05.000Z',
        'ETag': '"etag-{}"'.format(key),
        'StorageClass': 'STANDARD',
    }


@pytest.fixture
def make_listing():
    """list_objects 响应构造函数"""
    return build_listing


@pytest.fixture
def make_object():
    """Contents 单个对象构造函数"""
    return build_object


@pytest.fixture
def mock_cos_config():
    """创建测试用COS配置"""
    return COSConfig(
        secret_id="test-secret-id",
        secret_key="test-secret-key",
        bucket="demo-bucket-1250000000",
        region="ap-beijing",
    )


@pytest.fixture
def mock_client():
    """创建mock COS客户端，默认行为均为成功"""
    client = MagicMock()
    client.bucket_exists.return_value = True
    client.put_object.return_value = {'ETag': '"test-etag-123"'}
    client.delete_object.return_value = None
    client.get_presigned_url.side_effect = (
        lambda Bucket, Key, Method, Expired: "https://presigned.example.com/{}?expired={}".format(Key, Expired)
    )
    client.get_object_tagging.side_effect = (
        lambda Bucket, Key: {'TagSet': {'Tag': [{'Key': 'owner', 'Value': Key}]}}
    )
    client.list_objects.return_value = build_listing([])
    return client


@pytest.fixture
def storage(mock_cos_config, mock_client):
    """使用mock客户端的COS适配器"""
    return TencentCosAdapter(mock_cos_config, client=mock_client)


# 测试标记配置
def pytest_configure(config):
    """配置pytest标记"""
    config.addinivalue_line("markers", "unit: 单元测试")
    config.addinivalue_line("markers", "cos_service: COS存储服务测试")
    config.addinivalue_line("markers", "endpoint: 端点解析测试")
    config.addinivalue_line("markers", "pagination: 分页列举测试")
    config.addinivalue_line("markers", "enrichment: 列举结果补全测试")
    config.addinivalue_line("markers", "logging: 日志系统测试")
    config.addinivalue_line("markers", "imports: 模块导入测试")
