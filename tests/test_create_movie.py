import logging

import pytest

from j2v.compiler import ElementValidationError, build_create_movie_request_body
from j2v.compiler.validators import SCENE_SUBTITLE_ERROR
from j2v.params import DictParameterSource

from conftest import FailingParameterSource


def scene(*elements, **extra):
    return {"elements": {"elementValues": list(elements)}, **extra}


def test_defaults(make_params):
    body = build_create_movie_request_body(make_params())
    assert body == {"fps": 25, "width": 1024, "height": 768, "scenes": [{"elements": []}]}


def test_canvas_parameters(make_params):
    body = build_create_movie_request_body(make_params(framerate=30, output_width=1920, output_height=1080))
    assert (body["fps"], body["width"], body["height"]) == (30, 1920, 1080)


def test_record_id_is_trimmed(make_params):
    assert build_create_movie_request_body(make_params(recordId="  abc  "))["id"] == "abc"
    assert "id" not in build_create_movie_request_body(make_params(recordId="   "))


def test_webhook_export(make_params):
    body = build_create_movie_request_body(make_params(webhookUrl=" https://hooks.example.com/x "))
    assert body["exports"] == [
        {"destinations": [{"type": "webhook", "endpoint": "https://hooks.example.com/x"}]}
    ]
    assert "exports" not in build_create_movie_request_body(make_params(webhookUrl="  "))


@pytest.mark.parametrize("raw, expected", [
    ("{}", None),
    ('{"a":1}', {"a": 1}),
    ("{bad json}", None),
    ("[1, 2]", None),
])
def test_client_data(make_params, raw, expected):
    body = build_create_movie_request_body(make_params({"client-data": raw}))
    assert body.get("client-data") == expected


def test_optional_operation_parameters(make_params):
    body = build_create_movie_request_body(make_params(
        quality="high", cache=False, draft=True, comment="  first cut  ",
    ))
    assert body["quality"] == "high"
    assert body["cache"] is False
    assert body["draft"] is True
    assert body["comment"] == "first cut"


def test_scenes_and_elements_round_trip(make_params):
    scenes = [
        scene(
            {"type": "video", "src": f"https://example.com/{index}.mp4"},
            {"type": "text", "text": f"Caption {index}"},
            {"type": "audio", "src": f"https://example.com/{index}.mp3"},
        )
        for index in range(3)
    ]
    body = build_create_movie_request_body(make_params({"scenes": {"sceneValues": scenes}}))
    assert len(body["scenes"]) == 3
    for index, compiled in enumerate(body["scenes"]):
        assert len(compiled["elements"]) == 3
        assert compiled["elements"][0] == {"type": "video", "src": f"https://example.com/{index}.mp4"}


def test_scene_text_elements_follow_traditional_elements(make_params):
    raw = scene(
        {"type": "image", "src": "a.png"},
        textElements={"textDetails": [{"text": "Title", "fontColor": "#FFFFFF"}]},
    )
    body = build_create_movie_request_body(make_params({"scenes": {"sceneValues": [raw]}}))
    assert body["scenes"][0]["elements"] == [
        {"type": "image", "src": "a.png"},
        {"type": "text", "text": "Title", "settings": {"font-color": "#FFFFFF"}},
    ]


def test_empty_scene_list_yields_one_empty_scene(make_params):
    body = build_create_movie_request_body(make_params({"scenes": {"sceneValues": []}}))
    assert body["scenes"] == [{"elements": []}]


def test_scene_access_failure_yields_one_empty_scene(make_params, caplog):
    source = FailingParameterSource(make_params(), ["scenes.sceneValues"])
    with caplog.at_level(logging.WARNING):
        body = build_create_movie_request_body(source)
    assert body["scenes"] == [{"elements": []}]
    assert "Could not read scenes" in caplog.text


@pytest.mark.parametrize("duration", [0, -1, "invalid"])
def test_non_positive_scene_duration_is_dropped(make_params, duration):
    body = build_create_movie_request_body(make_params({"scenes": {"sceneValues": [scene(duration=duration)]}}))
    assert "duration" not in body["scenes"][0]


def test_scene_metadata(make_params):
    scenes = [
        scene(duration=5, transition_style="fade", transition_duration=1),
        scene(**{
            "duration": "2.5",
            "background-color": "#ff0000",
            "comment": "  outro  ",
            "transition_style": "slideLeft",
            "transition_duration": 0,
        }),
        scene(**{"background-color": "#000000", "comment": "   ", "transition_style": "none"}),
    ]
    body = build_create_movie_request_body(make_params({"scenes": {"sceneValues": scenes}}))
    first, second, third = body["scenes"]
    assert first == {"elements": [], "duration": 5}
    assert second == {
        "elements": [],
        "duration": 2.5,
        "background-color": "#ff0000",
        "comment": "outro",
        "transition": {"style": "slideLeft"},
    }
    assert third == {"elements": []}


def test_scene_transition_duration(make_params):
    scenes = [scene(), scene(transition_style="fade", transition_duration=1.5)]
    body = build_create_movie_request_body(make_params({"scenes": {"sceneValues": scenes}}))
    assert body["scenes"][1]["transition"] == {"style": "fade", "duration": 1.5}


def test_invalid_movie_text_element_aborts(make_params):
    params = make_params({"movieTextElements": {"textDetails": [{"text": "", "style": "001"}]}})
    with pytest.raises(ElementValidationError) as exc:
        build_create_movie_request_body(params)
    assert str(exc.value).startswith("Movie text element validation errors:\nMovie text element 1:")


def test_invalid_movie_element_aborts(make_params):
    params = make_params({"movieElements": {"elementValues": [{"type": "audio"}]}})
    with pytest.raises(ElementValidationError, match=r"^Movie element validation errors:\nMovie element 1: "):
        build_create_movie_request_body(params)


def test_scene_subtitles_are_rejected(make_params):
    raw = scene({"type": "subtitles", "captions": "Hello"})
    with pytest.raises(ElementValidationError) as exc:
        build_create_movie_request_body(make_params({"scenes": {"sceneValues": [raw]}}))
    assert str(exc.value) == (
        "Scene element validation errors:\n"
        f"Scene element 1: {SCENE_SUBTITLE_ERROR}"
    )


def test_invalid_scene_text_element_aborts(make_params):
    raw = scene(textElements={"textDetails": [{"text": "ok"}, {"text": "  "}]})
    with pytest.raises(ElementValidationError) as exc:
        build_create_movie_request_body(make_params({"scenes": {"sceneValues": [raw]}}))
    assert str(exc.value) == (
        "Scene text element validation errors:\n"
        "Scene text element 2: Text element must have a text property"
    )


def test_movie_elements_include_subtitles_and_text(make_params):
    params = make_params({
        "movieTextElements": {"textDetails": [{"text": "Watermark"}]},
        "movieElements": {"elementValues": [
            {"type": "audio", "src": "music.mp3"},
            {"type": "subtitles", "captions": "https://example.com/a.srt"},
        ]},
    })
    body = build_create_movie_request_body(params)
    assert body["elements"] == [
        {"type": "text", "text": "Watermark"},
        {"type": "audio", "src": "music.mp3"},
        {"type": "subtitles", "src": "https://example.com/a.srt", "language": "en", "model": "default"},
    ]


def test_movie_element_processing_failure_is_logged(make_params, monkeypatch, caplog):
    from j2v.compiler import shared

    real = shared.process_element

    def flaky(element, width, height):
        if element.get("src") == "broken.mp3":
            raise RuntimeError("boom")
        return real(element, width, height)

    monkeypatch.setattr(shared, "process_element", flaky)
    params = make_params({"movieElements": {"elementValues": [
        {"type": "audio", "src": "broken.mp3"},
        {"type": "audio", "src": "fine.mp3"},
    ]}})
    with caplog.at_level(logging.WARNING):
        body = build_create_movie_request_body(params)
    assert body["elements"] == [{"type": "audio", "src": "fine.mp3"}]
    assert "Failed to process movie element: boom" in caplog.text


def test_scene_element_processing_failure_drops_only_that_element(make_params, monkeypatch, caplog):
    from j2v.compiler import scenes

    real = scenes.process_element

    def flaky(element, width, height):
        if element.get("src") == "broken.png":
            raise RuntimeError("bad image")
        return real(element, width, height)

    monkeypatch.setattr(scenes, "process_element", flaky)
    raw = scene({"type": "image", "src": "broken.png"}, {"type": "image", "src": "ok.png"})
    with caplog.at_level(logging.WARNING):
        body = build_create_movie_request_body(make_params({"scenes": {"sceneValues": [raw]}}))
    assert body["scenes"][0]["elements"] == [{"type": "image", "src": "ok.png"}]
    assert "Failed to process scene element: bad image" in caplog.text


def test_elements_key_is_omitted_without_movie_elements(make_params):
    body = build_create_movie_request_body(make_params({"movieElements": {"elementValues": []}}))
    assert "elements" not in body


def test_output_and_export_settings(make_params):
    params = make_params({
        "webhookUrl": "https://hooks.example.com/a",
        "outputSettings": {"outputDetails": {"width": "1280", "height": 720, "fps": "abc", "quality": "low"}},
        "exportSettings": {"exportValues": [
            {"exportType": "ftp", "ftpHost": "ftp.example.com", "ftpUsername": "u",
             "ftpPassword": "p", "ftpPort": 2121, "ftpPath": "/renders", "ftpSecure": True},
            {"exportType": "email", "emailTo": "me@example.com", "emailSubject": "Your video is ready"},
            {"exportType": "webhook", "webhookUrl": "  "},
        ]},
    })
    body = build_create_movie_request_body(params)
    assert (body["width"], body["height"], body["fps"]) == (1280, 720, 25)
    assert body["quality"] == "low"
    assert body["exports"] == [
        {"destinations": [{"type": "webhook", "endpoint": "https://hooks.example.com/a"}]},
        {"destinations": [
            {"type": "ftp", "host": "ftp.example.com", "username": "u", "password": "p",
             "port": 2121, "remote-path": "/renders", "secure": True},
            {"type": "email", "to": "me@example.com"},
        ]},
    ]


def test_item_index_selects_item():
    source = DictParameterSource([{"recordId": "first"}, {"recordId": "second"}])
    assert build_create_movie_request_body(source, 1)["id"] == "second"


def test_missing_parameters_are_not_warnings(make_params, caplog):
    with caplog.at_level(logging.WARNING):
        build_create_movie_request_body(make_params())
    assert [record for record in caplog.records if record.levelno >= logging.WARNING] == []


def test_one_line_per_invalid_element(make_params):
    params = make_params({"movieTextElements": {"textDetails": [{"text": "", "fontColor": "red"}]}})
    with pytest.raises(ElementValidationError) as exc:
        build_create_movie_request_body(params)
    assert str(exc.value) == (
        "Movie text element validation errors:\n"
        "Movie text element 1: Text element must have a text property, "
        "Text fontColor must be a valid hex color (e.g., #FFFFFF)"
    )
