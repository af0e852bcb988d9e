"""Tests for Task, the deferred computation."""

import asyncio

import pytest
from lazy_result import Task, defer, invoke


class Counter:
    """Async callable counting how often it was started."""

    def __init__(self, value=42):
        self.calls = 0
        self.value = value

    async def __call__(self):
        self.calls += 1
        await asyncio.sleep(0)
        return self.value


class TestLaziness:
    """A Task never starts work on construction."""

    def test_construction_does_no_work(self):
        counter = Counter()
        defer(counter)
        Task(counter)
        assert counter.calls == 0

    def test_derived_tasks_do_no_work(self):
        counter = Counter()
        task = defer(counter).map(lambda x: x + 1).and_then(lambda x: Task.of(x * 2))
        assert counter.calls == 0
        assert isinstance(task, Task)

    @pytest.mark.asyncio
    async def test_invoke_runs_once_per_call(self):
        counter = Counter()
        task = defer(counter)

        assert await invoke(task) == 42
        assert counter.calls == 1
        assert await task() == 42
        assert await task.invoke() == 42
        assert await task == 42
        assert counter.calls == 4

    @pytest.mark.asyncio
    async def test_no_memoization(self):
        values = iter([1, 2, 3])

        async def next_value():
            return next(values)

        task = defer(next_value)
        assert [await task, await task, await task] == [1, 2, 3]


class TestFailures:
    """Failures propagate untranslated."""

    @pytest.mark.asyncio
    async def test_async_raise_propagates(self):
        async def broken():
            await asyncio.sleep(0)
            raise ConnectionError('refused')

        with pytest.raises(ConnectionError, match='refused'):
            await defer(broken)

    @pytest.mark.asyncio
    async def test_sync_raise_propagates_on_invoke_not_construction(self):
        def broken():
            raise ValueError('sync')

        task = defer(broken)
        with pytest.raises(ValueError, match='sync'):
            await task


class TestComposition:
    """map / and_then / of on plain tasks."""

    @pytest.mark.asyncio
    async def test_of(self):
        assert await Task.of('x') == 'x'

    @pytest.mark.asyncio
    async def test_map(self):
        assert await Task.of(2).map(lambda x: x * 21) == 42

    @pytest.mark.asyncio
    async def test_and_then_runs_in_order(self):
        order = []

        async def first():
            order.append('first')
            return 1

        def second(x):
            async def _second():
                order.append('second')
                return x + 1

            return Task(_second)

        assert await defer(first).and_then(second) == 2
        assert order == ['first', 'second']

    def test_repr(self):
        assert repr(Task.of(1)).startswith('Task(')
