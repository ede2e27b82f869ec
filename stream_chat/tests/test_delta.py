from stream_chat.streaming.delta import extract_delta


def test_delta_sentinel():
    assert extract_delta("[DONE]").kind == "sentinel"
    assert extract_delta("  [DONE] \r").kind == "sentinel"


def test_delta_fragment_kept_verbatim():
    event = extract_delta('{"choices": [{"index": 0, "delta": {"content": "  hi\\n"}}]}')
    assert event.kind == "fragment"
    assert event.text == "  hi\n"


def test_delta_empty_string_is_a_fragment():
    event = extract_delta('{"choices": [{"delta": {"content": ""}}]}')
    assert event.kind == "fragment"
    assert event.text == ""


def test_delta_role_announcement_is_empty():
    assert extract_delta('{"choices": [{"delta": {"role": "assistant"}}]}').kind == "empty"


def test_delta_missing_or_mismatched_path_is_empty():
    assert extract_delta('{"choices": []}').kind == "empty"
    assert extract_delta('{"object": "chat.completion.chunk"}').kind == "empty"
    assert extract_delta('{"choices": [{"delta": {"content": null}, "finish_reason": "stop"}]}').kind == "empty"
    assert extract_delta('{"choices": [{"delta": {"content": 42}}]}').kind == "empty"
    assert extract_delta('{"choices": {"delta": {"content": "x"}}}').kind == "empty"
    assert extract_delta("[1, 2, 3]").kind == "empty"


def test_delta_only_first_choice_is_used():
    event = extract_delta('{"choices": [{"delta": {}}, {"delta": {"content": "second"}}]}')
    assert event.kind == "empty"


def test_delta_malformed_json_is_a_warning():
    event = extract_delta('{"choices": [')
    assert event.kind == "parse_warning"
    assert event.error


def test_delta_deeply_nested_payload_is_a_warning():
    event = extract_delta("[" * 100000)
    assert event.kind == "parse_warning"


def test_delta_lone_surrogate_content_is_a_warning():
    event = extract_delta('{"choices":[{"delta":{"content":"\\ud83d"}}]}')
    assert event.kind == "parse_warning"
    assert "surrogate" in event.error


def test_delta_escaped_surrogate_pair_is_a_fragment():
    event = extract_delta('{"choices":[{"delta":{"content":"\\ud83d\\ude00"}}]}')
    assert event.kind == "fragment"
    assert event.text == "\U0001F600"
