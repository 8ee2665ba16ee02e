import itertools

import pytest

from lico.cursor import (
    Cursor,
    EmptyCursor,
    FilterCursor,
    ProjectCursor,
    IntersectCursor,
    open_cursor,
    empty,
    repeat,
    chain,
    intersect,
)

class Reviving:
    """ Itérateur qui reprend après avoir signalé la fin """
    def __init__(self):
        self.calls = 0

    def __iter__(self):
        return self

    def __next__(self):
        self.calls += 1
        if self.calls == 2:
            raise StopIteration
        return self.calls

def test_cursor_never_revives():
    cursor = Cursor(Reviving())
    assert next(cursor) == 1
    with pytest.raises(StopIteration):
        next(cursor)
    assert cursor.exhausted
    with pytest.raises(StopIteration):
        next(cursor)
    assert cursor.source.calls == 2

def test_open_cursor():
    cursor = Cursor([1])
    assert open_cursor(cursor) is cursor
    assert isinstance(open_cursor(None), EmptyCursor)
    assert open_cursor([1, 2]).to_list() == [1, 2]

def test_empty():
    cursor = empty()
    assert cursor.to_list() == []
    assert cursor.exhausted
    assert cursor.single_or(42) == 42

def test_where_ints():
    source = [1, 2, 3, 4]
    assert open_cursor(source).where(lambda x: x > 2).to_list() == [3, 4]
    assert source == [1, 2, 3, 4]

def test_where_strings():
    source = ["red", "green", "blue", "white", "yellow"]
    result = open_cursor(source).where(lambda x: "w" in x).to_list()
    assert result == ["white", "yellow"]

def test_where_with_index():
    source = ["red", "green", "blue", "white", "yellow"]
    result = FilterCursor(lambda idx, x: idx == 0 or "w" in x, source, indexed=True).to_list()
    assert result == ["red", "white", "yellow"]

def test_select():
    result = open_cursor([10, 20, 30, 40]).select(lambda x: f"Hello {x}").to_list()
    assert result == ["Hello 10", "Hello 20", "Hello 30", "Hello 40"]

    lengths = open_cursor(["red", "green", "blue", "white", "yellow"]).select(len).to_list()
    assert lengths == [3, 5, 4, 5, 6]

def test_select_with_index():
    result = ProjectCursor(lambda idx, x: f"Hello {idx * x}", [10, 20, 30, 40], indexed=True).to_list()
    assert result == ["Hello 0", "Hello 20", "Hello 60", "Hello 120"]

def test_adapters_are_lazy():
    seen = []

    def selector(x):
        seen.append(x)
        return x * 2

    cursor = open_cursor([1, 2, 3]).select(selector)
    assert seen == []
    assert next(cursor) == 2
    assert seen == [1]

def test_chain():
    assert chain([10, 20], [30, 40]).to_list() == [10, 20, 30, 40]
    assert open_cursor([1]).chain([2], iter([3])).to_list() == [1, 2, 3]

def test_repeat():
    cursor = repeat(4, times=2)
    assert next(cursor) == 4
    assert next(cursor) == 4
    with pytest.raises(StopIteration):
        next(cursor)

    assert repeat("hello", times=2).to_list() == ["hello", "hello"]
    assert repeat(1, times=0).to_list() == []

def test_repeat_forever():
    assert list(itertools.islice(repeat(7), 5)) == [7] * 5

def test_repeat_rejects_negative_count():
    with pytest.raises(ValueError):
        repeat(1, times=-1)

def test_intersect_keeps_left_order_without_duplicates():
    result = intersect([5, 1, 3, 1, 5, 2], [1, 2, 5, 9]).to_list()
    assert result == [5, 1, 2]

def test_intersect_with_empty_side():
    assert intersect([], [1, 2]).to_list() == []
    assert intersect([1, 2], []).to_list() == []

def test_intersect_materializes_other_lazily():
    other = iter([1, 2])
    cursor = IntersectCursor(cursor=[2, 3], other=other)
    assert list(other) == [1, 2]
    # L'autre côté a été consommé avant le premier appel.
    assert cursor.to_list() == []

def test_intersect_requires_hashable_items():
    with pytest.raises(TypeError):
        intersect([[1]], [[1]]).to_list()

def test_scalar_methods():
    assert open_cursor([]).single_or(42) == 42
    assert open_cursor([12]).single() == 12
    assert open_cursor([0, 1]).single_or_default(int) == 0
    assert open_cursor([0, 1]).single_or_else(lambda: 9) == 9
    assert open_cursor([]).first_or_default(int) == 0
    assert open_cursor([1, 2, 3]).first_or_default(int) == 1
    assert open_cursor([1, 2, 3]).first() == 1
    assert open_cursor([]).first_or(3) == 3
    assert open_cursor([]).first_or_else(lambda: 4) == 4
    assert open_cursor([1, 2, 3]).last() == 3
    assert open_cursor([]).last_or(5) == 5
    assert open_cursor([]).last_or_else(lambda: 6) == 6
    assert open_cursor([]).last_or_default(str) == ""
    assert open_cursor([10, 20, 30, 40]).where(lambda x: x > 20).count() == 2
    assert open_cursor([10, 20]).any(lambda x: x > 10)
    assert open_cursor([10, 20]).all(lambda x: x > 0)

def test_partial_consumption_is_visible():
    cursor = open_cursor([1, 2, 3])
    assert cursor.first() == 1
    assert cursor.to_list() == [2, 3]
    assert cursor.first_or(0) == 0

def test_repr():
    cursor = open_cursor([])
    assert repr(cursor) == "Cursor(actif)"
    cursor.to_list()
    assert repr(cursor) == "Cursor(épuisé)"

def test_intersect_reads_other_on_first_advance():
    other = iter([3, 1])
    cursor = IntersectCursor(cursor=[1, 2, 3], other=other)
    assert next(cursor) == 1
    assert list(other) == []
    assert cursor.to_list() == [3]

def test_intersect_with_duplicates_in_other():
    assert intersect([1, 2, 3, 1], [1, 1, 3, 3]).to_list() == [1, 3]

def test_intersect_with_none_elements():
    assert intersect([None, 1, None, 2], [2, None]).to_list() == [None, 2]

def test_stop_iteration_from_selector_propagates():
    cursor = open_cursor([1, 2, 3]).select(lambda x: next(iter([])) if x == 2 else x)
    assert next(cursor) == 1
    with pytest.raises(RuntimeError) as info:
        next(cursor)
    assert isinstance(info.value.__cause__, StopIteration)
    assert not cursor.exhausted

def test_stop_iteration_from_predicate_propagates():
    def predicate(x):
        if x == 2:
            raise StopIteration
        return True

    cursor = open_cursor([1, 2, 3]).where(predicate)
    with pytest.raises(RuntimeError):
        cursor.to_list()
    assert not cursor.exhausted

def test_stop_iteration_from_indexed_callables_propagates():
    def stop(idx, x):
        raise StopIteration

    with pytest.raises(RuntimeError):
        FilterCursor(stop, [1], indexed=True).to_list()
    with pytest.raises(RuntimeError):
        ProjectCursor(stop, [1], indexed=True).to_list()
