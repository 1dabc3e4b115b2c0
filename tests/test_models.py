import json

import pytest

from j2v.models import ParameterFile, RequestBody, Scene, Transition, ValidationResult


def test_scene_serializes_with_api_names():
    scene = Scene(
        elements=[{"type": "text", "text": "Hi"}],
        background_color="#112233",
        transition=Transition(style="fade"),
    )
    assert scene.to_dict() == {
        "elements": [{"type": "text", "text": "Hi"}],
        "background-color": "#112233",
        "transition": {"style": "fade"},
    }


def test_request_body_omits_unset_fields():
    body = RequestBody(scenes=[Scene()], client_data={"a": 1})
    assert body.to_dict() == {
        "fps": 25,
        "width": 1024,
        "height": 768,
        "client-data": {"a": 1},
        "scenes": [{"elements": []}],
    }


def test_validation_result_combine_and_prefix():
    combined = ValidationResult.combine([
        ValidationResult(warnings=["w"]),
        ValidationResult.failure("e").with_prefix("Element 1: "),
    ])
    assert not combined.is_valid
    assert combined.errors == ["Element 1: e"]
    assert combined.warnings == ["w"]
    assert ValidationResult.combine([]).is_valid


def test_parameter_file_with_items(tmp_path):
    path = tmp_path / "params.yaml"
    path.write_text(
        "operation: mergeVideos\n"
        "items:\n"
        "  - recordId: first\n"
        "  - recordId: second\n"
    )
    parameters = ParameterFile.from_yaml(path)
    assert parameters.operation == "mergeVideos"
    source = parameters.to_source()
    assert len(source) == 2
    assert source.get("recordId", 1) == "second"


def test_parameter_file_single_tree_json(tmp_path):
    path = tmp_path / "params.json"
    path.write_text(json.dumps({
        "operation": "createMovie",
        "scenes": {"sceneValues": [{"elements": {"elementValues": []}}]},
    }))
    parameters = ParameterFile.from_yaml(path)
    assert parameters.operation == "createMovie"
    assert parameters.items == [{"scenes": {"sceneValues": [{"elements": {"elementValues": []}}]}}]


def test_parameter_file_rejects_non_mapping(tmp_path):
    path = tmp_path / "params.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ValueError):
        ParameterFile.from_yaml(path)


def test_parameter_file_round_trip(tmp_path):
    path = tmp_path / "params.yaml"
    ParameterFile(operation="mergeVideoAudio", items=[{"recordId": "x"}]).to_yaml(path)
    assert ParameterFile.from_yaml(path).items == [{"recordId": "x"}]
