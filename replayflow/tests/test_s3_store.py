"""
Unit tests for S3StateStore using moto (S3 mock).
"""

import pytest

try:
    import boto3
    from moto import mock_aws
except ImportError:
    boto3 = None
    mock_aws = None

from replayflow.core.errors import StateStoreError
from replayflow.core.state import FlowState
from replayflow.storage.s3_store import S3StateStore

# Skip all tests if boto3 or moto not installed
pytestmark = pytest.mark.skipif(
    boto3 is None or mock_aws is None,
    reason="boto3 or moto not installed",
)

BUCKET = "test-bucket"
BLOB = FlowState(id="root", kvs={"updated": "t"}).to_json()


def _bucket():
    s3_client = boto3.client("s3", region_name="us-east-1")
    s3_client.create_bucket(Bucket=BUCKET)
    return s3_client


def _mocked(test):
    return mock_aws(test) if mock_aws is not None else test


@_mocked
def test_save_load_roundtrip():
    _bucket()
    store = S3StateStore(bucket=BUCKET)

    assert store.load("42") is None
    store.save("42", BLOB)

    assert store.load("42") == BLOB
    assert store.subjects() == ["42"]


@_mocked
def test_save_none_deletes():
    _bucket()
    store = S3StateStore(bucket=BUCKET)

    store.save("42", BLOB)
    store.save("42", None)

    assert store.load("42") is None
    assert store.subjects() == []


@_mocked
def test_object_layout_and_quoting():
    s3_client = _bucket()
    store = S3StateStore(bucket=BUCKET, prefix="bots/counter/")

    store.save("team/chat", BLOB)

    keys = [obj["Key"] for obj in s3_client.list_objects_v2(Bucket=BUCKET)["Contents"]]
    assert keys == ["bots/counter/team%2Fchat.json"]
    assert store.subjects() == ["team/chat"]


@_mocked
def test_subjects_paginate():
    _bucket()
    store = S3StateStore(bucket=BUCKET)

    for i in range(1005):
        store.save(f"s{i:04d}", "{}")

    subjects = store.subjects()
    assert len(subjects) == 1005
    assert subjects[0] == "s0000"


@_mocked
def test_missing_bucket_rejected():
    with pytest.raises(StateStoreError):
        S3StateStore(bucket="no-such-bucket")


@_mocked
def test_bucket_check_can_be_skipped():
    store = S3StateStore(bucket="no-such-bucket", check_bucket=False)

    with pytest.raises(StateStoreError):
        store.save("42", BLOB)
