from row_sequencer.tables import find_row_by_id

from tests.fakes import make_frame_store


def test_binary_search_over_sorted_ids():
    store = make_frame_store(list(range(1, 101)))
    assert find_row_by_id(store, 1) == 2
    assert find_row_by_id(store, 57) == 58
    assert find_row_by_id(store, 100) == 101
    assert find_row_by_id(store, 101) is None

def test_non_contiguous_ids():
    store = make_frame_store([10, 20, 30])
    assert find_row_by_id(store, 20) == 3
    assert find_row_by_id(store, 25) is None

def test_unparseable_cell_falls_back_to_scan():
    store = make_frame_store([1, "x", 3, 2])
    assert find_row_by_id(store, 2) == 5

def test_invalid_target_and_empty_store(frame_store):
    assert find_row_by_id(frame_store, 1) is None
    store = make_frame_store([1])
    assert find_row_by_id(store, "abc") is None
