import json

import pytest

from oaiclient.fine_tuning import (
    FineTuningJob,
    FineTuningJobEventList,
    FineTuningJobRequest,
    Hyperparameters,
    cancel_fine_tuning_job,
    create_fine_tuning_job,
    list_fine_tuning_job_events,
    retrieve_fine_tuning_job,
)

JOB_ID = "fine-tuning-job-id"


def test_create_with_empty_request():
    req = create_fine_tuning_job(FineTuningJobRequest())
    assert req.method == "POST"
    assert req.url == "/fine_tuning/jobs"
    assert json.loads(req.body) == {"training_file": ""}


def test_create_with_all_fields():
    request = FineTuningJobRequest(
        training_file="file-abc123",
        validation_file="file-def456",
        model="davinci-002",
        hyperparameters=Hyperparameters(epochs="auto"),
        suffix="custom_suffix",
    )
    req = create_fine_tuning_job(request)
    assert json.loads(req.body) == {
        "training_file": "file-abc123",
        "validation_file": "file-def456",
        "model": "davinci-002",
        "hyperparameters": {"n_epochs": "auto"},
        "suffix": "custom_suffix",
    }


def test_cancel():
    req = cancel_fine_tuning_job(JOB_ID)
    assert (req.method, req.url, req.body) == ("POST", "/fine_tuning/jobs/fine-tuning-job-id/cancel", None)


def test_retrieve():
    req = retrieve_fine_tuning_job(JOB_ID)
    assert (req.method, req.url) == ("GET", "/fine_tuning/jobs/fine-tuning-job-id")


@pytest.mark.parametrize(
    "kwargs, suffix",
    [
        ({}, ""),
        ({"after": "last-event-id"}, "?after=last-event-id"),
        ({"limit": 10}, "?limit=10"),
        ({"after": "last-event-id", "limit": 10}, "?after=last-event-id&limit=10"),
    ],
)
def test_list_events(kwargs, suffix):
    req = list_fine_tuning_job_events(JOB_ID, **kwargs)
    assert req.method == "GET"
    assert req.url == "/fine_tuning/jobs/fine-tuning-job-id/events" + suffix


def test_job_from_dict():
    job = FineTuningJob.from_dict(
        {
            "object": "fine_tuning.job",
            "id": JOB_ID,
            "model": "davinci-002",
            "created_at": 1692661014,
            "finished_at": 1692661190,
            "fine_tuned_model": "ft:davinci-002:my-org:custom_suffix:7q8mpxmy",
            "organization_id": "org-123",
            "result_files": ["file-abc123"],
            "status": "succeeded",
            "training_file": "file-abc123",
            "hyperparameters": {"n_epochs": "auto"},
            "trained_tokens": 5768,
        }
    )
    assert job.id == JOB_ID
    assert job.finished_at == 1692661190
    assert job.hyperparameters.epochs == "auto"
    assert job.result_files == ["file-abc123"]
    assert job.validation_file == ""
    assert job.trained_tokens == 5768


def test_empty_job_from_dict():
    job = FineTuningJob.from_dict({"result_files": None, "hyperparameters": {}})
    assert job == FineTuningJob()


def test_event_list_from_dict():
    events = FineTuningJobEventList.from_dict(
        {
            "object": "list",
            "data": [{"object": "fine_tuning.job.event", "id": "ev-1", "level": "info", "message": "started"}],
            "has_more": True,
        }
    )
    assert events.has_more is True
    assert [e.id for e in events.data] == ["ev-1"]
    assert events.data[0].message == "started"


def test_empty_event_list_from_dict():
    events = FineTuningJobEventList.from_dict({"object": "", "data": None, "has_more": False})
    assert events.data == []
    assert events.has_more is False