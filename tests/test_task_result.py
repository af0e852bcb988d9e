"""Tests for TaskResult: construction, lifting, transformations, elimination."""

import asyncio

import pytest
from lazy_result import Err, Ok, Task, TaskResult, fail, from_throwing, pure, try_catch


class Transport:
    """Fake transport counting calls; raises when given an exception."""

    def __init__(self, outcome):
        self.outcome = outcome
        self.calls = 0

    async def get(self):
        self.calls += 1
        await asyncio.sleep(0)
        if isinstance(self.outcome, BaseException):
            raise self.outcome
        return self.outcome


class TestConstruction:
    """Constructors and laziness."""

    @pytest.mark.asyncio
    async def test_from_ok(self):
        assert await TaskResult.from_ok(42) == Ok(42)
        assert await pure(42) == Ok(42)

    @pytest.mark.asyncio
    async def test_from_err(self):
        assert await TaskResult.from_err('error') == Err('error')
        assert await fail('error') == Err('error')

    @pytest.mark.asyncio
    async def test_from_result(self):
        assert await TaskResult.from_result(Ok(1)) == Ok(1)
        assert await TaskResult.from_result(Err('e')) == Err('e')

    @pytest.mark.asyncio
    async def test_from_task(self):
        assert await TaskResult.from_task(Task.of('v')) == Ok('v')

    def test_try_catch_construction_does_no_work(self):
        transport = Transport({'recordId': '9'})
        try_catch(transport.get, repr)
        assert transport.calls == 0

    def test_transformations_do_no_work(self):
        transport = Transport(1)
        t = (
            try_catch(transport.get, repr)
            .map(lambda x: x + 1)
            .map_err(str)
            .bimap(str, str)
            .and_then(pure)
            .and_then_result(Ok)
            .or_else(fail)
            .ensure(bool, str)
            .tap(print)
            .tap_err(print)
        )
        t.match(str, str)
        t.get_or_else(lambda: 'x')
        assert transport.calls == 0

    @pytest.mark.asyncio
    async def test_every_invocation_reruns(self):
        transport = Transport('payload')
        t = try_catch(transport.get, repr).map(str.upper)

        assert await t == Ok('PAYLOAD')
        assert await t() == Ok('PAYLOAD')
        assert await t.invoke() == Ok('PAYLOAD')
        assert transport.calls == 3

    def test_repr(self):
        assert repr(pure(1)).startswith('TaskResult(')


class TestTryCatch:
    """try_catch never raises for Exception subclasses."""

    @pytest.mark.asyncio
    async def test_resolved_value_is_ok(self):
        t = try_catch(Transport({'recordId': '9'}).get, lambda e: ('transport', e))
        assert await t == Ok({'recordId': '9'})

    @pytest.mark.asyncio
    async def test_async_raise_is_err(self):
        exc = ConnectionError('reset by peer')
        t = try_catch(Transport(exc).get, lambda e: ('transport', e))
        assert await t == Err(('transport', exc))

    @pytest.mark.asyncio
    async def test_sync_raise_is_err(self):
        exc = ValueError('bad url')

        def op():
            raise exc

        t = try_catch(op, lambda e: ('transport', e))
        assert await t == Err(('transport', exc))

    @pytest.mark.asyncio
    async def test_plain_return_value_is_ok(self):
        assert await try_catch(lambda: 7, repr) == Ok(7)

    @pytest.mark.asyncio
    async def test_from_throwing_alias(self):
        assert from_throwing is try_catch

    @pytest.mark.asyncio
    async def test_invocation_never_raises(self):
        async def rejecting():
            raise RuntimeError('rejected')

        def throwing():
            raise RuntimeError('thrown')

        async def resolving():
            return 'ok'

        for op in (rejecting, throwing, resolving):
            result = await try_catch(op, str)
            assert isinstance(result, Ok | Err)

    @pytest.mark.asyncio
    async def test_base_exception_propagates(self):
        class Stop(BaseException):
            pass

        async def op():
            raise Stop

        with pytest.raises(Stop):
            await try_catch(op, repr)


class TestTransformations:
    """Fluent methods on TaskResult."""

    @pytest.mark.asyncio
    async def test_map(self):
        assert await pure(5).map(lambda x: x * 2) == Ok(10)
        assert await fail('error').map(lambda x: x * 2) == Err('error')

    @pytest.mark.asyncio
    async def test_map_err(self):
        assert await fail('error').map_err(str.upper) == Err('ERROR')
        assert await pure(42).map_err(str.upper) == Ok(42)

    @pytest.mark.asyncio
    async def test_bimap(self):
        assert await pure(1).bimap(str.upper, lambda x: x + 1) == Ok(2)
        assert await fail('e').bimap(str.upper, lambda x: x + 1) == Err('E')

    @pytest.mark.asyncio
    async def test_and_then_ok(self):
        assert await pure(5).and_then(lambda x: pure(f'item-{x}')) == Ok('item-5')

    @pytest.mark.asyncio
    async def test_and_then_propagates_new_err(self):
        assert await pure(5).and_then(lambda x: fail('validation failed')) == Err('validation failed')

    @pytest.mark.asyncio
    async def test_and_then_short_circuits(self):
        """The continuation is never called after Err."""
        calls = 0

        def step(x):
            nonlocal calls
            calls += 1
            return pure(x + 1)

        assert await fail('boom').and_then(step) == Err('boom')
        assert calls == 0

    @pytest.mark.asyncio
    async def test_and_then_steps_never_overlap(self):
        events = []

        async def first():
            events.append('first:start')
            await asyncio.sleep(0.01)
            events.append('first:end')
            return Ok(1)

        def second(x):
            async def _second():
                events.append('second:start')
                return Ok(x + 1)

            return TaskResult(_second)

        assert await TaskResult(first).and_then(second) == Ok(2)
        assert events == ['first:start', 'first:end', 'second:start']

    @pytest.mark.asyncio
    async def test_and_then_result(self):
        def validate(x):
            return Ok(x) if x > 0 else Err('not positive')

        assert await pure(5).and_then_result(validate) == Ok(5)
        assert await pure(-5).and_then_result(validate) == Err('not positive')
        assert await fail('original').and_then_result(validate) == Err('original')

    @pytest.mark.asyncio
    async def test_or_else(self):
        assert await fail('error').or_else(lambda e: pure(0)) == Ok(0)
        assert await pure(42).or_else(lambda e: pure(0)) == Ok(42)

    @pytest.mark.asyncio
    async def test_ensure(self):
        adult = lambda t: t.ensure(lambda age: age >= 18, lambda age: f'{age} is too young')  # noqa: E731
        assert await adult(pure(30)) == Ok(30)
        assert await adult(pure(12)) == Err('12 is too young')
        assert await adult(fail('missing')) == Err('missing')

    @pytest.mark.asyncio
    async def test_tap_and_tap_err(self):
        seen = []
        assert await pure(1).tap(seen.append).tap_err(seen.append) == Ok(1)
        assert await fail('e').tap(seen.append).tap_err(seen.append) == Err('e')
        assert seen == [1, 'e']


class TestElimination:
    """match and get_or_else return Tasks and stay lazy."""

    @pytest.mark.asyncio
    async def test_match(self):
        on_err = lambda e: f'failed: {e}'  # noqa: E731
        on_ok = lambda v: f'got {v}'  # noqa: E731
        assert await pure(1).match(on_err, on_ok) == 'got 1'
        assert await fail('x').match(on_err, on_ok) == 'failed: x'

    @pytest.mark.asyncio
    async def test_match_returns_task(self):
        assert isinstance(pure(1).match(str, str), Task)

    @pytest.mark.asyncio
    async def test_get_or_else_success(self):
        assert await pure('FOO').get_or_else(lambda: 'error') == 'FOO'

    @pytest.mark.asyncio
    async def test_get_or_else_failure(self):
        assert await fail(Exception('x')).get_or_else(lambda: 'error') == 'error'

    @pytest.mark.asyncio
    async def test_get_or_else_fallback_not_called_on_ok(self):
        def fallback():
            raise AssertionError('fallback must not run')

        assert await pure(5).get_or_else(fallback) == 5

    @pytest.mark.asyncio
    async def test_get_or_else_fallback_only_at_invocation(self):
        calls = 0

        def fallback():
            nonlocal calls
            calls += 1
            return 'default'

        task = fail('e').get_or_else(fallback)
        assert calls == 0
        assert await task == 'default'
        assert await task == 'default'
        assert calls == 2
