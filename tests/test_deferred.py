"""Tests for SyncDeferred."""

import pytest
from hypothesis import given

from lazyfx import Mappable, Present, SyncDeferred
from tests.strategies import int_functions, integers


class TestSyncDeferredLaziness:
    """Construction and composition never execute the thunk."""

    def test_construction_does_not_run(self, spy):
        thunk = spy(lambda: 1)
        SyncDeferred(thunk)
        assert thunk.count == 0

    def test_transform_does_not_run(self, spy):
        thunk = spy(lambda: 1)
        f = spy(lambda x: x + 1)
        SyncDeferred(thunk).transform(f)
        assert thunk.count == 0
        assert f.count == 0

    def test_bind_does_not_run(self, spy):
        thunk = spy(lambda: 1)
        SyncDeferred(thunk).bind(lambda x: SyncDeferred(lambda: x))
        assert thunk.count == 0

    def test_satisfies_mappable(self):
        assert isinstance(SyncDeferred(lambda: 1), Mappable)


class TestSyncDeferredRun:
    """Tests for run(), transform() and bind()."""

    def test_run_returns_value(self):
        assert SyncDeferred(lambda: 42).run() == 42

    def test_pure(self):
        assert SyncDeferred.pure('x').run() == 'x'

    def test_run_is_not_cached(self, spy):
        """Two runs invoke the captured thunk twice."""
        thunk = spy(lambda: 1)
        deferred = SyncDeferred(thunk)
        deferred.run()
        deferred.run()
        assert thunk.count == 2

    def test_composed_run_reruns_whole_chain(self, spy):
        thunk = spy(lambda: 2)
        f = spy(lambda x: x * 10)
        chain = SyncDeferred(thunk).transform(f)
        assert chain.run() == 20
        assert chain.run() == 20
        assert thunk.count == 2
        assert f.count == 2

    def test_transform(self):
        assert SyncDeferred(lambda: 3).transform(str).run() == '3'

    def test_bind_flattens(self):
        """bind yields a plain value, not a nested deferred."""
        chained = SyncDeferred(lambda: 3).bind(lambda x: SyncDeferred(lambda: x + 4))
        assert chained.run() == 7

    def test_steps_run_in_composition_order(self):
        order = []

        def step(name):
            def _step(x):
                order.append(name)
                return x

            return _step

        SyncDeferred(lambda: order.append('thunk')).transform(step('a')).transform(step('b')).run()
        assert order == ['thunk', 'a', 'b']

    def test_fault_propagates_from_run(self):
        def boom():
            raise ValueError('boom')

        deferred = SyncDeferred(boom).transform(lambda x: x)
        with pytest.raises(ValueError, match='boom'):
            deferred.run()

    def test_deferred_of_container(self):
        """A deferred can carry a container; short-circuiting stays inside it."""
        deferred = SyncDeferred(lambda: Present(2)).transform(lambda c: c.transform(lambda x: x + 1))
        assert deferred.run() == Present(3)


class TestSyncDeferredJoin:
    """Tests for join()."""

    def test_join_equals_manual_run(self, spy):
        inner_thunk = spy(lambda: 'inner')
        outer = SyncDeferred(lambda: SyncDeferred(inner_thunk))

        manual = outer.run().run()
        joined = SyncDeferred.join(outer).run()

        assert joined == manual == 'inner'
        assert inner_thunk.count == 2

    def test_join_collapses_one_level(self):
        outer = SyncDeferred(lambda: SyncDeferred(lambda: SyncDeferred(lambda: 1)))
        once = SyncDeferred.join(outer).run()
        assert isinstance(once, SyncDeferred)
        assert once.run() == 1

    @pytest.mark.hypothesis_property
    @given(integers, int_functions, int_functions)
    def test_composition_law(self, value, f, g):
        d = SyncDeferred.pure(value)
        assert d.transform(f).transform(g).run() == d.transform(lambda x: g(f(x))).run()

    @pytest.mark.hypothesis_property
    @given(integers)
    def test_identity_law(self, value):
        d = SyncDeferred.pure(value)
        assert d.transform(lambda x: x).run() == d.run()
