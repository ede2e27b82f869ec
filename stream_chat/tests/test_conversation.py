import pytest

from conftest import FakeImageEncoder, FakeTransport, sse
from stream_chat.agents.conversation import ChatConversation, ConversationOptions
from stream_chat.config.settings import settings
from stream_chat.domain.exceptions import ImageEncodingError, NetworkError, ServerRejectedError


ENDPOINT = "http://127.0.0.1:9999/v1/chat/completions"


def _texts(request):
    return [part.text for part in request.messages[0].content if part.type == "text"]


def _images(request):
    return [part.url for part in request.messages[0].content if part.type == "image_url"]


def test_conversation_single_turn_without_review(console):
    transport = FakeTransport([sse("Paris")])
    outcome = ChatConversation(transport, FakeImageEncoder(), console).run(
        ConversationOptions(prompt="Capital of France?", endpoint=ENDPOINT)
    )
    assert outcome.initial.captured is None
    assert outcome.review is None
    assert not outcome.review_skipped
    assert len(transport.requests) == 1
    endpoint, request = transport.requests[0]
    assert endpoint == ENDPOINT
    assert _texts(request) == ["Capital of France?"]
    assert _images(request) == []


def test_conversation_review_embeds_prompt_and_first_answer(console):
    transport = FakeTransport([sse("Par", "is")], [sse("Paris is correct.")])
    outcome = ChatConversation(transport, FakeImageEncoder(), console).run(
        ConversationOptions(prompt="Capital of France?", review=True, endpoint=ENDPOINT)
    )

    assert outcome.initial.captured == "Paris"
    assert outcome.review.captured is None
    assert len(transport.requests) == 2
    review_text = _texts(transport.requests[1][1])[0]
    assert "Capital of France?" in review_text
    assert "Paris" in review_text

    out = console.out.getvalue()
    assert out.index("--- LLM Response ---") < out.index("Paris") < out.index("--- Review Response ---")
    assert out.endswith("Paris is correct.\n[stream closed]\n")


def test_conversation_review_reattaches_same_image(console):
    encoder = FakeImageEncoder(url="data:image/jpeg;base64,/9j/")
    transport = FakeTransport([sse("a cat")], [sse("a cat, indeed")])
    ChatConversation(transport, encoder, console).run(
        ConversationOptions(prompt="What is this?", image_path="cat.jpg", review=True, endpoint=ENDPOINT)
    )
    assert encoder.calls == ["cat.jpg"]
    assert _images(transport.requests[0][1]) == ["data:image/jpeg;base64,/9j/"]
    assert _images(transport.requests[1][1]) == ["data:image/jpeg;base64,/9j/"]


def test_conversation_review_skipped_when_nothing_captured(console):
    transport = FakeTransport([b'data: {"choices":[{"delta":{"role":"assistant"}}]}\n\ndata: [DONE]\n\n'])
    outcome = ChatConversation(transport, FakeImageEncoder(), console).run(
        ConversationOptions(prompt="hi", review=True, endpoint=ENDPOINT)
    )
    assert outcome.review_skipped
    assert outcome.review is None
    assert len(transport.requests) == 1
    assert "Review step requested, but failed to capture the initial response." in console.err.getvalue()


def test_conversation_phase_one_failure_skips_review(console):
    transport = FakeTransport(NetworkError(code="NETWORK_ERROR", message="connection refused"), [sse("unused")])
    with pytest.raises(NetworkError):
        ChatConversation(transport, FakeImageEncoder(), console).run(
            ConversationOptions(prompt="hi", review=True, endpoint=ENDPOINT)
        )
    assert len(transport.requests) == 1


def test_conversation_phase_two_failure_propagates(console):
    transport = FakeTransport([sse("first")], ServerRejectedError(500, "boom"))
    with pytest.raises(ServerRejectedError):
        ChatConversation(transport, FakeImageEncoder(), console).run(
            ConversationOptions(prompt="hi", review=True, endpoint=ENDPOINT)
        )
    assert len(transport.requests) == 2


def test_conversation_image_failure_happens_before_any_request(console):
    transport = FakeTransport([sse("unused")])
    encoder = FakeImageEncoder(error=ImageEncodingError(code="IMAGE_READ_ERROR", message="nope"))
    with pytest.raises(ImageEncodingError):
        ChatConversation(transport, encoder, console).run(
            ConversationOptions(prompt="hi", image_path="missing.png", endpoint=ENDPOINT)
        )
    assert transport.requests == []
    assert console.out.getvalue() == ""


def test_conversation_defaults_to_configured_endpoint(console, monkeypatch):
    monkeypatch.setattr(settings, "endpoint", "http://example.test/v1/chat/completions")
    transport = FakeTransport([sse("x")])
    ChatConversation(transport, FakeImageEncoder(), console).run(ConversationOptions(prompt="hi"))
    assert transport.requests[0][0] == "http://example.test/v1/chat/completions"
