"""
有界并发任务组
限制同时执行的协程数量，任一任务失败时取消其余任务并抛出首个异常
"""

import asyncio
from typing import Any, Awaitable, Callable, List, Optional, TypeVar

T = TypeVar('T')


class BoundedTaskGroup:
    """
    有界并发任务组

    每个任务在执行前需获取一个许可，许可总数即最大并发数。
    wait() 按提交顺序返回结果；首个失败会取消仍在等待或执行中的任务，
    并在所有任务结束后把该异常抛给调用方。

    使用方式：
        group = BoundedTaskGroup(5)
        for key in keys:
            group.go(lambda key=key: fetch(key))
        results = await group.wait()

    或：
        async with BoundedTaskGroup(5) as group:
            group.go(...)
    """

    def __init__(self, limit: int):
        if limit <= 0:
            raise ValueError("limit must be positive")
        self._limit = limit
        self._semaphore: Optional[asyncio.Semaphore] = None
        self._tasks: List[asyncio.Task] = []

    @property
    def limit(self) -> int:
        return self._limit

    def go(self, func: Callable[[], Awaitable[T]]) -> "asyncio.Task[T]":
        """提交一个任务，需在事件循环中调用"""
        if self._semaphore is None:
            self._semaphore = asyncio.Semaphore(self._limit)
        task = asyncio.ensure_future(self._run(func))
        self._tasks.append(task)
        return task

    async def _run(self, func: Callable[[], Awaitable[T]]) -> T:
        async with self._semaphore:
            return await func()

    async def wait(self) -> List[Any]:
        """
        等待所有任务完成

        Returns:
            List[Any]: 与提交顺序一致的任务结果

        Raises:
            Exception: 第一个失败任务抛出的异常
        """
        tasks = list(self._tasks)
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            await self._cancel(tasks)
            raise

    @staticmethod
    async def _cancel(tasks: List[asyncio.Task]) -> None:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def __aenter__(self) -> "BoundedTaskGroup":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is not None:
            await self._cancel(list(self._tasks))
            return False
        await self.wait()
        return False
