import base64
import json
from types import SimpleNamespace

import pytest

from civicfeed.services.classifier import (
    FALLBACK_REASONING,
    Classifier,
    fallback_analysis,
    parse_data_url,
)

GEMINI_REPLY = {
    "domain": "Electrical",
    "category": "Exposed Wiring",
    "urgency": "IMMEDIATE",
    "priority": "CRITICAL",
    "severity": "CRITICAL",
    "confidence": 0.93,
    "reasoning": "Bare conductors visible at hand height.",
    "estimatedCost": "$150-300",
    "timeToResolve": "1-3 hours",
    "riskLevel": "CRITICAL",
}


class FakeModels:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error:
            raise self.error
        return SimpleNamespace(text=self.text)


def fake_client(**kwargs):
    return SimpleNamespace(models=FakeModels(**kwargs))


def test_fallback_plumbing_emergency():
    result = fallback_analysis("Major water leak in hallway, urgent")
    assert result.domain == "Plumbing"
    assert result.category == "Water System Issue"
    assert result.urgency == "URGENT"
    assert result.severity == result.priority == result.risk_level == "HIGH"
    assert result.confidence == 0.6
    assert result.reasoning == FALLBACK_REASONING


def test_fallback_default_branch():
    result = fallback_analysis("Squeaky door hinge on the third floor")
    assert result.domain == "General Maintenance"
    assert result.category == "General Issue"
    assert result.urgency == "STANDARD"
    assert result.severity == "MEDIUM"
    assert result.estimated_cost == "$100-500"


def test_fallback_routine_branch():
    result = fallback_analysis("Minor scuff marks, cosmetic only")
    assert result.domain == "General Maintenance"
    assert result.category == "Cosmetic Issue"
    assert result.urgency == "ROUTINE"
    assert result.severity == "LOW"


def test_fallback_first_domain_rule_wins():
    result = fallback_analysis("Light fixture dripping water")
    assert result.domain == "Plumbing"


def test_no_key_uses_fallback():
    classifier = Classifier(api_key=None)
    assert not classifier.enabled
    assert classifier.analyze("Exposed wires near the outlet").domain == "Electrical"


def test_gemini_reply_is_parsed():
    client = fake_client(text=json.dumps(GEMINI_REPLY))
    result = Classifier(client=client, model="test-model").analyze("Sparks from the panel")

    assert result.model_dump(by_alias=True) == GEMINI_REPLY
    call = client.models.calls[0]
    assert call["model"] == "test-model"
    assert call["config"].response_mime_type == "application/json"
    assert len(call["contents"]) == 1


def test_fenced_reply_is_parsed():
    client = fake_client(text="```json\n" + json.dumps(GEMINI_REPLY) + "\n```")
    assert Classifier(client=client).analyze("Sparks").category == "Exposed Wiring"


def test_image_adds_inline_part():
    client = fake_client(text=json.dumps(GEMINI_REPLY))
    image = "data:image/png;base64," + base64.b64encode(b"\x89PNG fake").decode()
    Classifier(client=client).analyze("Sparks", image)

    contents = client.models.calls[0]["contents"]
    assert len(contents) == 2
    assert contents[0].inline_data.mime_type == "image/png"
    assert contents[0].inline_data.data == b"\x89PNG fake"


@pytest.mark.parametrize("client", [
    fake_client(text="The wiring looks dangerous."),
    fake_client(text=""),
    fake_client(text=json.dumps({"domain": "Electrical"})),
    fake_client(text=json.dumps([GEMINI_REPLY])),
    fake_client(text=json.dumps({**GEMINI_REPLY, "confidence": 4})),
    fake_client(error=TimeoutError("deadline exceeded")),
    fake_client(error=RuntimeError("quota exhausted")),
])
def test_bad_replies_fall_back(client):
    result = Classifier(client=client).analyze("Burst pipe flooding the basement")
    assert result.confidence == 0.6
    assert result.domain == "Plumbing"
    assert result.urgency == "URGENT"


def test_parse_data_url():
    assert parse_data_url("data:image/jpeg;base64,aGVsbG8=") == ("image/jpeg", b"hello")
    assert parse_data_url("https://example.org/photo.jpg") is None
    assert parse_data_url("") is None
    assert parse_data_url(None) is None
