import json

from approveflow.core.config import settings
from approveflow.schemas.assist import EmailPurpose
from approveflow.services.assistant import (
    EMAIL_ERROR_TEXT,
    EMPTY_EMAIL_TEXT,
    MetadataAssistant,
    build_email_prompt,
)
from conftest import FakeClient


def _assistant(reply=None, exc=None):
    client = FakeClient(reply=reply, exc=exc)
    return MetadataAssistant(client=client, text_model="text-m", vision_model="vision-m"), client


def test_describe_image_parses_reply():
    assistant, client = _assistant(reply=json.dumps({"title": "Neon Logo", "summary": "A neon logo."}))
    res = assistant.describe_image(b"\x89PNG", "image/png")
    assert not res.fallback
    assert res.value.title == "Neon Logo"
    assert res.value.summary == "A neon logo."

    call = client.calls[0]
    assert call["model"] == "vision-m"
    assert call["response_format"] == {"type": "json_object"}
    image_part = call["messages"][0]["content"][0]
    assert image_part["image_url"]["url"].startswith("data:image/png;base64,")


def test_describe_image_transport_failure_falls_back():
    assistant, _ = _assistant(exc=ConnectionError("network down"))
    res = assistant.describe_image(b"img", "image/jpeg")
    assert res.fallback
    assert res.value.model_dump() == {"title": "New Project", "summary": "Asset uploaded for review."}
    assert "network down" in res.error


def test_describe_image_unparseable_reply_falls_back():
    for reply in ["not json at all", "", json.dumps({"summary": "no title"})]:
        assistant, _ = _assistant(reply=reply)
        res = assistant.describe_image(b"img", "image/jpeg")
        assert res.fallback
        assert res.value.title == "New Project"


def test_draft_email_returns_text():
    assistant, client = _assistant(reply="  Hi Acme, please review.  ")
    res = assistant.draft_email("Acme", "Logo", EmailPurpose.initial)
    assert not res.fallback
    assert res.value == "Hi Acme, please review."
    assert client.calls[0]["model"] == "text-m"
    assert "Acme" in client.calls[0]["messages"][0]["content"]


def test_draft_email_error_and_empty_are_marked():
    assistant, _ = _assistant(exc=RuntimeError("quota"))
    res = assistant.draft_email("Acme", "Logo", "followup")
    assert res.fallback and res.value == EMAIL_ERROR_TEXT

    assistant, _ = _assistant(reply=None)
    res = assistant.draft_email("Acme", "Logo", "approval_thanks")
    assert res.fallback and res.value == EMPTY_EMAIL_TEXT


def test_email_prompts_carry_word_limits():
    assert "under 100 words" in build_email_prompt("Acme", "Logo", EmailPurpose.initial)
    assert "under 80 words" in build_email_prompt("Acme", "Logo", EmailPurpose.followup)
    thanks = build_email_prompt("Acme", "Logo", EmailPurpose.approval_thanks)
    assert "under 50 words" in thanks
    assert '"Acme"' in thanks and '"Logo"' in thanks


def test_assistant_without_api_key_degrades(monkeypatch):
    monkeypatch.setattr(settings, "GENAI_API_KEY", "")
    # nothing listens on the discard port, so the request fails immediately
    monkeypatch.setattr(settings, "GENAI_BASE_URL", "http://127.0.0.1:9/v1/")
    assistant = MetadataAssistant()

    res = assistant.describe_image(b"img", "image/png")
    assert res.fallback
    assert res.value.model_dump() == {"title": "New Project", "summary": "Asset uploaded for review."}

    res = assistant.draft_email("Acme", "Logo", EmailPurpose.initial)
    assert res.fallback
    assert res.value == EMAIL_ERROR_TEXT
