"""
分页列举单元测试
测试分页游标、目录占位过滤、全量列举上限和列举结果补全
"""

import pytest

from objstore.core.config.cos_config import COSConfig
from objstore.core.storage import (
    GetOption,
    InvalidArgumentError,
    ListObjectsPaginatedInput,
    RemoteError,
    TencentCosAdapter,
)
from objstore.utils.datetime_utils import is_zero_time


@pytest.mark.unit
@pytest.mark.pagination
class TestListPaginated:
    """分页列举测试类"""

    @pytest.mark.asyncio
    async def test_page_size_zero(self, storage, mock_client):
        """测试page_size为0时参数错误"""
        with pytest.raises(InvalidArgumentError):
            await storage.list_paginated(ListObjectsPaginatedInput(page_size=0))
        mock_client.list_objects.assert_not_called()

    @pytest.mark.asyncio
    async def test_negative_page_size(self, storage):
        """测试page_size为负数时参数错误"""
        with pytest.raises(InvalidArgumentError, match="page size must be positive"):
            await storage.list_paginated(ListObjectsPaginatedInput(page_size=-1))

    @pytest.mark.asyncio
    async def test_none_input(self, storage):
        """测试输入为空时参数错误"""
        with pytest.raises(InvalidArgumentError):
            await storage.list_paginated(None)

    @pytest.mark.asyncio
    async def test_passes_cursor_as_marker(self, storage, mock_client, make_listing):
        """测试游标作为Marker传给SDK"""
        mock_client.list_objects.return_value = make_listing([])

        await storage.list_paginated(ListObjectsPaginatedInput(page_size=20, prefix="images/", cursor="images/b.jpg"))

        mock_client.list_objects.assert_called_once_with(
            Bucket="demo-bucket-1250000000",
            Prefix="images/",
            Marker="images/b.jpg",
            MaxKeys=20
        )

    @pytest.mark.asyncio
    async def test_filters_directory_markers(self, storage, mock_client, make_listing, make_object):
        """测试过滤大小为0且以/结尾的目录占位对象"""
        mock_client.list_objects.return_value = make_listing([
            make_object("folder/", size=0),
            make_object("a.txt", size=10),
        ])

        output = await storage.list_paginated(ListObjectsPaginatedInput(page_size=10))

        assert [f.key for f in output.files] == ["a.txt"]

    @pytest.mark.asyncio
    async def test_keeps_non_empty_slash_keys_and_empty_files(self, storage, mock_client, make_listing, make_object):
        """测试只有同时满足两个条件才会被过滤"""
        mock_client.list_objects.return_value = make_listing([
            make_object("weird/", size=3),
            make_object("empty.txt", size=0),
        ])

        output = await storage.list_paginated(ListObjectsPaginatedInput(page_size=10))

        assert [f.key for f in output.files] == ["weird/", "empty.txt"]

    @pytest.mark.asyncio
    async def test_file_info_fields(self, storage, mock_client, make_listing, make_object):
        """测试对象信息字段解析"""
        mock_client.list_objects.return_value = make_listing(
            [make_object("a.txt", size=10)],
            is_truncated=True,
            next_marker="a.txt"
        )

        output = await storage.list_paginated(ListObjectsPaginatedInput(page_size=1))

        info = output.files[0]
        assert info.size == 10
        assert info.etag == "etag-a.txt"
        assert info.last_modified.year == 2025
        assert info.tagging is None
        assert info.url is None
        assert output.cursor == "a.txt"
        assert output.is_truncated is True
        assert output.has_more is True

    @pytest.mark.asyncio
    async def test_single_content_as_dict(self, storage, mock_client, make_object):
        """测试Contents为单个字典时也能解析"""
        mock_client.list_objects.return_value = {
            'IsTruncated': 'false',
            'Contents': dict(make_object("a.txt"), LastModified="bad-time"),
        }

        output = await storage.list_paginated(ListObjectsPaginatedInput(page_size=10))

        assert [f.key for f in output.files] == ["a.txt"]
        assert is_zero_time(output.files[0].last_modified)
        assert output.cursor == ""
        assert output.is_truncated is False

    @pytest.mark.asyncio
    async def test_list_error(self, storage, mock_client):
        """测试列举失败"""
        mock_client.list_objects.side_effect = Exception("list failed")

        with pytest.raises(RemoteError, match="list objects"):
            await storage.list_paginated(ListObjectsPaginatedInput(page_size=10))

    @pytest.mark.asyncio
    async def test_with_tagging_and_url(self, storage, mock_client, make_listing, make_object):
        """测试列举时补全标签和URL"""
        mock_client.list_objects.return_value = make_listing([
            make_object("a.txt"),
            make_object("b.txt"),
        ])

        output = await storage.list_paginated(
            ListObjectsPaginatedInput(page_size=10),
            GetOption(with_tagging=True, with_url=True, expire=120)
        )

        assert [f.tagging for f in output.files] == [{'owner': 'a.txt'}, {'owner': 'b.txt'}]
        assert [f.url for f in output.files] == [
            "https://presigned.example.com/a.txt?expired=120",
            "https://presigned.example.com/b.txt?expired=120",
        ]
        assert mock_client.get_object_tagging.call_count == 2

    @pytest.mark.asyncio
    async def test_tagging_failure_fails_page(self, storage, mock_client, make_listing, make_object):
        """测试任一对象获取标签失败时整页失败"""
        mock_client.list_objects.return_value = make_listing([make_object("k{}".format(i)) for i in range(8)])

        def get_tagging(Bucket, Key):
            if Key == "k3":
                raise Exception("tagging failed")
            return {'TagSet': {'Tag': [{'Key': 'owner', 'Value': Key}]}}

        mock_client.get_object_tagging.side_effect = get_tagging

        with pytest.raises(RemoteError, match="tagging failed"):
            await storage.list_paginated(ListObjectsPaginatedInput(page_size=10), GetOption(with_tagging=True))

    @pytest.mark.asyncio
    async def test_presign_failure_fails_page(self, storage, mock_client, make_listing, make_object):
        """测试任一对象生成URL失败时整页失败"""
        mock_client.list_objects.return_value = make_listing([make_object("k{}".format(i)) for i in range(8)])

        def presign(Bucket, Key, Method, Expired):
            if Key == "k2":
                raise Exception("sign failed")
            return "https://presigned.example.com/{}".format(Key)

        mock_client.get_presigned_url.side_effect = presign

        with pytest.raises(RemoteError, match="presign url") as exc_info:
            await storage.list_paginated(ListObjectsPaginatedInput(page_size=10), GetOption(with_url=True))

        assert exc_info.value.details['key'] == "k2"
        mock_client.get_object_tagging.assert_not_called()


@pytest.mark.unit
@pytest.mark.pagination
class TestListAll:
    """全量列举测试类"""

    @pytest.mark.asyncio
    async def test_drains_all_pages(self, storage, mock_client, make_listing, make_object):
        """测试按游标遍历所有分页"""
        mock_client.list_objects.side_effect = [
            make_listing([make_object("a"), make_object("dir/", size=0)], is_truncated=True, next_marker="dir/"),
            make_listing([make_object("b")], is_truncated=True, next_marker="b"),
            make_listing([make_object("c")], is_truncated=False),
        ]

        files = await storage.list_all("")

        assert [f.key for f in files] == ["a", "b", "c"]
        markers = [call.kwargs['Marker'] for call in mock_client.list_objects.call_args_list]
        assert markers == ["", "dir/", "b"]
        assert all(call.kwargs['MaxKeys'] == 100 for call in mock_client.list_objects.call_args_list)

    @pytest.mark.asyncio
    async def test_stops_on_empty_cursor(self, storage, mock_client, make_listing, make_object):
        """测试is_truncated为真但游标为空时结束"""
        mock_client.list_objects.side_effect = [
            make_listing([make_object("a")], is_truncated=True),
        ]

        files = await storage.list_all("")

        assert [f.key for f in files] == ["a"]
        assert mock_client.list_objects.call_count == 1

    @pytest.mark.asyncio
    async def test_stops_when_not_truncated(self, storage, mock_client, make_listing, make_object):
        """测试is_truncated为假但有游标时结束"""
        mock_client.list_objects.side_effect = [
            make_listing([make_object("a")], is_truncated=False, next_marker="a"),
        ]

        files = await storage.list_all("")

        assert [f.key for f in files] == ["a"]
        assert mock_client.list_objects.call_count == 1

    @pytest.mark.asyncio
    async def test_caps_at_max_objects(self, storage, mock_client, make_listing, make_object):
        """测试远端一直返回截断时，最多返回10000个对象"""
        page = make_listing([make_object("k{}".format(i)) for i in range(100)], is_truncated=True, next_marker="next")
        mock_client.list_objects.return_value = page

        files = await storage.list_all("")

        assert len(files) == 10000
        assert mock_client.list_objects.call_count == 100

    @pytest.mark.asyncio
    async def test_cap_trims_partial_page(self, mock_client, make_listing, make_object):
        """测试上限不是页大小整数倍时结果被截断到上限"""
        config = COSConfig(
            secret_id="id",
            secret_key="key",
            bucket="demo-bucket",
            region="ap-beijing",
            list_page_size=30,
            list_max_objects=100,
        )
        storage = TencentCosAdapter(config, client=mock_client)
        mock_client.list_objects.return_value = make_listing(
            [make_object("k{}".format(i)) for i in range(30)], is_truncated=True, next_marker="next"
        )

        files = await storage.list_all("")

        assert len(files) == 100
        assert mock_client.list_objects.call_count == 4

    @pytest.mark.asyncio
    async def test_error_aborts(self, storage, mock_client, make_listing, make_object):
        """测试中途失败时返回错误而不是部分结果"""
        mock_client.list_objects.side_effect = [
            make_listing([make_object("a")], is_truncated=True, next_marker="a"),
            Exception("list failed"),
        ]

        with pytest.raises(RemoteError):
            await storage.list_all("")
