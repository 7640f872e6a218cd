"""Tests for text-to-pose synthesis."""

import json
from types import SimpleNamespace

import pytest

from poseforge.ai.pose_service import (
    PoseSynthesizer, fallback_pose, parse_pose_response, result_to_partial,
)
from poseforge.core.config import AppConfig


class _FakeModels:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


def _client(**kwargs):
    return SimpleNamespace(models=_FakeModels(**kwargs))


def test_fallback_is_neutral_body_pose():
    assert fallback_pose() == {"body_pose": [0.0] * 66}


def test_parse_valid_response():
    text = json.dumps({"body_pose": [0.1] * 66, "expression": [1, 2]})
    result = parse_pose_response(text)
    assert result["body_pose"] == [0.1] * 66
    assert result["expression"] == [1.0, 2.0]


def test_parse_drops_malformed_expression():
    result = parse_pose_response(json.dumps({"body_pose": [0.0], "expression": "smile"}))
    assert "expression" not in result


@pytest.mark.parametrize("text", [
    "", None, "not json", "[1, 2, 3]", '{"expression": [1]}',
    '{"body_pose": ["a"]}', '{"body_pose": [true, false]}',
])
def test_parse_rejects_bad_responses(text):
    with pytest.raises(ValueError):
        parse_pose_response(text)


def test_synthesize_success_uses_configured_model():
    client = _client(text=json.dumps({"body_pose": [0.2] * 66}))
    synth = PoseSynthesizer(AppConfig(api_key="k", model="gemini-test"), client=client)
    result = synth.synthesize("wave hello")
    assert result == {"body_pose": [0.2] * 66}
    call = client.models.calls[0]
    assert call["model"] == "gemini-test"
    assert "wave hello" in call["contents"]
    assert call["config"].response_mime_type == "application/json"


def test_synthesize_client_error_returns_fallback():
    synth = PoseSynthesizer(AppConfig(api_key="k"), client=_client(error=RuntimeError("boom")))
    assert synth.synthesize("jump") == fallback_pose()


def test_synthesize_invalid_json_returns_fallback():
    synth = PoseSynthesizer(AppConfig(api_key="k"), client=_client(text="{oops"))
    assert synth.synthesize("jump") == fallback_pose()


def test_synthesize_without_key_returns_fallback():
    synth = PoseSynthesizer(AppConfig(api_key=None))
    assert synth.synthesize("jump") == fallback_pose()


def test_result_to_partial_keeps_expression_only_when_present():
    assert result_to_partial({"body_pose": [1.0]}) == {"body_pose": [1.0]}
    partial = result_to_partial({"body_pose": [1.0], "expression": [0.5]})
    assert partial == {"body_pose": [1.0], "expression": [0.5]}
    assert result_to_partial({}) == fallback_pose()
