from oaiclient.models import (
    FineTuneModelDeleteResponse,
    Model,
    ModelsList,
    delete_fine_tune_model,
    get_model,
    list_models,
)


def test_list_models_request():
    req = list_models()
    assert (req.method, req.url, req.body) == ("GET", "/models", None)


def test_get_model_request():
    req = get_model("text-davinci-003")
    assert (req.method, req.url) == ("GET", "/models/text-davinci-003")


def test_delete_fine_tune_model_request():
    req = delete_fine_tune_model("fine-tune-model-id")
    assert (req.method, req.url) == ("DELETE", "/models/fine-tune-model-id")


def test_empty_models_list():
    assert ModelsList.from_dict({"data": None}).models == []


def test_model_from_dict():
    model = Model.from_dict(
        {
            "created": 1669599635,
            "id": "text-davinci-003",
            "object": "model",
            "owned_by": "openai-internal",
            "permission": [
                {
                    "created": 1690864883,
                    "id": "modelperm-1",
                    "object": "model_permission",
                    "allow_sampling": True,
                    "allow_view": True,
                    "organization": "*",
                    "group": None,
                    "is_blocking": False,
                }
            ],
            "root": "text-davinci-003",
            "parent": None,
        }
    )
    assert model.created_at == 1669599635
    assert model.owned_by == "openai-internal"
    assert model.parent == ""
    assert len(model.permission) == 1
    perm = model.permission[0]
    assert perm.allow_sampling is True
    assert perm.allow_fine_tuning is False
    assert perm.organization == "*"


def test_models_list_from_dict():
    listing = ModelsList.from_dict({"data": [{"id": "a"}, {"id": "b"}]})
    assert [m.id for m in listing.models] == ["a", "b"]


def test_delete_response_from_dict():
    resp = FineTuneModelDeleteResponse.from_dict({"id": "fine-tune-model-id", "object": "model", "deleted": True})
    assert resp == FineTuneModelDeleteResponse(id="fine-tune-model-id", object="model", deleted=True)