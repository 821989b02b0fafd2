from dreamclient.core.types import ErrorKind
from dreamclient.image.service import build_image_payload, extract_image_urls, format_prompt


def test_prompt_up_to_400_chars_is_unchanged():
    assert format_prompt("a" * 399) == "a" * 399
    assert format_prompt("b" * 400) == "b" * 400
    assert format_prompt("") == ""


def test_prompt_over_400_chars_keeps_first_399():
    prompt = "".join(chr(ord("a") + i % 26) for i in range(401))

    assert format_prompt(prompt) == prompt[:399]
    assert len(format_prompt("x" * 5000)) == 399


def test_build_image_payload():
    payload = build_image_payload("a red fox", 1024, 768, 2)

    assert payload == {"prompt": "a red fox", "n": 2, "size": "1024x768"}


def test_extract_single_url(image_body):
    result = extract_image_urls(image_body(1), 1)

    assert result.value == "https://images.example/0.png"


def test_extract_multiple_urls_keeps_response_order():
    data = {"data": [{"url": "u3"}, {"url": "u1"}, {"url": "u2"}]}

    result = extract_image_urls(data, 3)

    assert result.value == ["u3", "u1", "u2"]


def test_extract_list_length_follows_response_not_request():
    data = {"data": [{"url": "u1"}, {"url": "u2"}]}

    result = extract_image_urls(data, 5)

    assert result.value == ["u1", "u2"]


def test_extract_reports_missing_data():
    for data in ({}, {"data": []}, {"data": None}, {"data": [{"b64_json": "..."}]}, {"error": {"message": "bad"}}):
        result = extract_image_urls(data, 1)
        assert not result.ok
        assert result.error.kind is ErrorKind.RESPONSE_SHAPE


def test_extract_empty_list_for_multiple_images():
    result = extract_image_urls({"data": []}, 3)

    assert result.ok
    assert result.value == []


def test_extract_missing_data_for_multiple_images_is_a_failure():
    result = extract_image_urls({"error": {"message": "bad"}}, 3)

    assert result.error.kind is ErrorKind.RESPONSE_SHAPE
