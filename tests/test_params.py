import pytest

from j2v.params import DictParameterSource, get_collection, lookup, resolve_path

from conftest import FailingParameterSource


def test_resolve_nested_and_flat_paths():
    nested = {"scenes": {"sceneValues": [1, 2]}}
    flat = {"scenes.sceneValues": [3], "scenes": {"sceneValues": [4]}}
    assert resolve_path(nested, "scenes.sceneValues") == [1, 2]
    assert resolve_path(flat, "scenes.sceneValues") == [3]
    assert resolve_path(nested, "missing.path", None) is None
    with pytest.raises(KeyError):
        resolve_path(nested, "scenes.other")


def test_dict_source_returns_fallback_for_unknown_names():
    source = DictParameterSource.single({"framerate": 30})
    assert source.get("framerate", 0, 25) == 30
    assert source.get("output_width", 0, 1024) == 1024
    assert len(source) == 1


def test_dict_source_rejects_bad_item_index():
    source = DictParameterSource([{"a": 1}])
    with pytest.raises(IndexError):
        source.get("a", 1)


def test_lookup_captures_source_errors():
    source = FailingParameterSource(DictParameterSource.single({"a": 1}), ["b"])
    ok = lookup(source, "a", 0, None)
    failed = lookup(source, "b", 0, "default")
    assert ok.ok and ok.value == 1
    assert not failed.ok
    assert isinstance(failed.error, RuntimeError)
    assert failed.value_or("fallback") == "fallback"


def test_get_collection_treats_failures_and_non_lists_as_empty():
    inner = DictParameterSource.single({"good": [1, 2], "scalar": "x"})
    source = FailingParameterSource(inner, ["bad"])
    assert get_collection(source, "good") == [1, 2]
    assert get_collection(source, "scalar") == []
    assert get_collection(source, "bad") == []
    assert get_collection(source, "absent") == []
