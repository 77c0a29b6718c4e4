import json

import pytest

from oaiclient.moderation import (
    MODERATION_TEXT_LATEST,
    MODERATION_TEXT_STABLE,
    ModerationModelError,
    ModerationRequest,
    ModerationResponse,
    moderations,
)


def test_moderations_builds_post_request():
    request = moderations(ModerationRequest(model=MODERATION_TEXT_STABLE, input="I want to kill them."))
    assert request.method == "POST"
    assert request.url == "/moderations"
    assert json.loads(request.body) == {
        "input": "I want to kill them.",
        "model": "text-moderation-stable",
    }


@pytest.mark.parametrize("model", [MODERATION_TEXT_STABLE, MODERATION_TEXT_LATEST, ""])
def test_moderations_accepts_valid_models(model):
    request = moderations(ModerationRequest(model=model, input="I want to kill them."))
    assert json.loads(request.body).get("model", "") == model


def test_moderations_rejects_other_models():
    with pytest.raises(ModerationModelError, match="not supported with moderation"):
        moderations(ModerationRequest(model="gpt-3.5-turbo", input="I want to kill them."))


def test_empty_request_body():
    assert ModerationRequest().to_dict() == {}


def test_response_from_dict():
    data = {
        "id": "123",
        "model": "text-moderation-stable",
        "results": [
            {
                "categories": {"violence": True, "hate/threatening": False},
                "category_scores": {"violence": 1, "self-harm": 0.25},
                "flagged": True,
            }
        ],
    }
    response = ModerationResponse.from_dict(data)
    assert response.id == "123"
    assert response.model == "text-moderation-stable"
    assert len(response.results) == 1
    result = response.results[0]
    assert result.flagged is True
    assert result.categories.violence is True
    assert result.categories.hate is False
    assert result.category_scores.violence == 1.0
    assert result.category_scores.self_harm == 0.25