"""
列举结果补全
并发地为一页对象补充标签和预签名URL，任一失败则整页失败
"""

from dataclasses import replace
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from objstore.core.storage.models import FileInfo, GetOption
from objstore.utils.task_group import BoundedTaskGroup

DEFAULT_CONCURRENCY = 5

FetchTagging = Callable[[str], Awaitable[Optional[Dict[str, str]]]]
Presign = Callable[[str, Optional[int]], Awaitable[str]]


def tags_to_dict(tag_set: Any) -> Optional[Dict[str, str]]:
    """
    将SDK返回的TagSet转换为字典

    Args:
        tag_set: 形如 {'Tag': [{'Key': 'k', 'Value': 'v'}]} 的结构，
            单个标签时 'Tag' 可能是字典而不是列表

    Returns:
        Optional[Dict[str, str]]: 无标签时返回None
    """
    if not tag_set:
        return None

    tags = tag_set.get('Tag') if isinstance(tag_set, dict) else tag_set
    if isinstance(tags, dict):
        tags = [tags]
    if not tags:
        return None

    return {tag['Key']: tag.get('Value', '') for tag in tags}


async def _run_all(
    keys: Sequence[str],
    worker: Callable[[str], Awaitable[Any]],
    concurrency: int
) -> List[Any]:
    group = BoundedTaskGroup(concurrency)
    for key in keys:
        group.go(lambda key=key: worker(key))
    return await group.wait()


async def enrich_files(
    files: Sequence[FileInfo],
    option: GetOption,
    fetch_tagging: FetchTagging,
    presign: Presign,
    concurrency: int = DEFAULT_CONCURRENCY
) -> List[FileInfo]:
    """
    按选项为对象列表补全标签和URL

    Args:
        files: 待补全的对象列表，不会被修改
        option: 读取选项，决定是否补全标签/URL
        fetch_tagging: 获取单个对象标签的协程函数
        presign: 生成单个对象预签名URL的协程函数
        concurrency: 最大并发请求数

    Returns:
        List[FileInfo]: 与输入顺序一致的新对象列表

    Raises:
        Exception: 任一子请求失败时抛出首个异常，不返回部分结果
    """
    if not files or not (option.with_tagging or option.with_url):
        return list(files)

    keys = [f.key for f in files]

    taggings: List[Optional[Dict[str, str]]] = [f.tagging for f in files]
    if option.with_tagging:
        taggings = await _run_all(keys, fetch_tagging, concurrency)

    urls: List[Optional[str]] = [f.url for f in files]
    if option.with_url:
        urls = await _run_all(keys, lambda key: presign(key, option.expire), concurrency)

    return [
        replace(f, tagging=tagging, url=url)
        for f, tagging, url in zip(files, taggings, urls)
    ]


__all__ = ['enrich_files', 'tags_to_dict', 'DEFAULT_CONCURRENCY']
