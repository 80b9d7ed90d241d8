"""Tests for AsyncDeferred."""

import asyncio

import pytest

from lazyfx import AsyncDeferred, Mappable, SyncDeferred


def counting(value, calls):
    """Async thunk recording each invocation in `calls`."""

    async def _thunk():
        calls.append(value)
        return value

    return _thunk


class TestAsyncDeferredLaziness:
    """Construction, composition and run() do not execute anything by themselves."""

    async def test_construction_does_not_run(self):
        calls = []
        AsyncDeferred(counting(1, calls))
        assert calls == []

    async def test_composition_does_not_run(self):
        calls = []
        AsyncDeferred(counting(1, calls)).transform(lambda x: x).bind(AsyncDeferred.pure)
        assert calls == []

    async def test_run_does_not_block_caller(self):
        """run() hands back an awaitable; the thunk runs when it is driven."""
        calls = []
        pending = AsyncDeferred(counting(1, calls)).run()
        assert asyncio.iscoroutine(pending)
        assert calls == []
        assert await pending == 1
        assert calls == [1]

    def test_satisfies_mappable(self):
        assert isinstance(AsyncDeferred.pure(1), Mappable)


class TestAsyncDeferredRun:
    """Tests for run(), transform(), bind() and friends."""

    async def test_pure(self):
        assert await AsyncDeferred.pure(42).run() == 42

    async def test_run_is_not_cached(self):
        """Two runs invoke the captured thunk twice."""
        calls = []
        deferred = AsyncDeferred(counting('x', calls))
        await deferred.run()
        await deferred.run()
        assert calls == ['x', 'x']

    async def test_each_run_is_a_fresh_coroutine(self):
        deferred = AsyncDeferred.pure(1)
        first = deferred.run()
        second = deferred.run()
        assert first is not second
        assert await first == await second == 1

    async def test_transform(self):
        assert await AsyncDeferred.pure(5).transform(lambda x: x * 2).run() == 10

    async def test_bind_sequences(self):
        order = []

        async def first():
            order.append('first')
            return 3

        def next_step(x):
            async def second():
                order.append('second')
                return x + 1

            return AsyncDeferred(second)

        assert await AsyncDeferred(first).bind(next_step).run() == 4
        assert order == ['first', 'second']

    async def test_from_sync_defers_thunk(self, spy):
        thunk = spy(lambda: 7)
        lifted = AsyncDeferred.from_sync(SyncDeferred(thunk))
        assert thunk.count == 0
        assert await lifted.run() == 7
        assert thunk.count == 1

    async def test_accepts_non_coroutine_awaitables(self):
        async def make_future():
            future = asyncio.get_running_loop().create_future()
            future.set_result('done')
            return await future

        assert await AsyncDeferred(make_future).run() == 'done'


class TestAsyncDeferredFaults:
    """Faults propagate as failed awaitables; nothing in the chain catches them."""

    async def test_thunk_fault_surfaces_on_await(self):
        async def boom():
            raise ValueError('boom')

        pending = AsyncDeferred(boom).run()
        with pytest.raises(ValueError, match='boom'):
            await pending

    async def test_sync_raising_thunk_surfaces_on_await(self):
        def boom():
            raise KeyError('sync')

        pending = AsyncDeferred(boom).run()
        with pytest.raises(KeyError):
            await pending

    async def test_downstream_fault_skips_later_steps(self, spy):
        later = spy(lambda x: x)

        def explode(x):
            raise RuntimeError('step')

        chain = AsyncDeferred.pure(1).transform(explode).transform(later)
        with pytest.raises(RuntimeError, match='step'):
            await chain.run()
        assert later.count == 0


class TestAsyncDeferredJoin:
    """Tests for join()."""

    async def test_join_equals_manual_run(self):
        calls = []
        outer = AsyncDeferred.pure(AsyncDeferred(counting('inner', calls)))

        manual = await (await outer.run()).run()
        joined = await AsyncDeferred.join(outer).run()

        assert joined == manual == 'inner'
        assert calls == ['inner', 'inner']

    async def test_join_collapses_one_level(self):
        outer = AsyncDeferred.pure(AsyncDeferred.pure(AsyncDeferred.pure(1)))
        once = await AsyncDeferred.join(outer).run()
        assert isinstance(once, AsyncDeferred)
        assert await once.run() == 1


class TestAsyncDeferredConcurrency:
    """Tests for zip() and run_sync()."""

    async def test_zip_pairs_in_composition_order(self):
        async def slow():
            await asyncio.sleep(0.01)
            return 'slow'

        async def fast():
            return 'fast'

        assert await AsyncDeferred(slow).zip(AsyncDeferred(fast)).run() == ('slow', 'fast')

    async def test_zip_runs_concurrently(self):
        started = []
        release = asyncio.Event()

        async def waiter():
            started.append('waiter')
            await release.wait()
            return 1

        async def releaser():
            started.append('releaser')
            release.set()
            return 2

        assert await AsyncDeferred(waiter).zip(AsyncDeferred(releaser)).run() == (1, 2)
        assert sorted(started) == ['releaser', 'waiter']

    async def test_zip_fault_propagates(self):
        async def boom():
            raise ValueError('zip')

        with pytest.raises(ExceptionGroup) as exc_info:
            await AsyncDeferred.pure(1).zip(AsyncDeferred(boom)).run()
        assert exc_info.group_contains(ValueError, match='zip')

    def test_run_sync(self):
        calls = []
        assert AsyncDeferred(counting(3, calls)).transform(lambda x: x + 1).run_sync() == 4
        assert calls == [3]
