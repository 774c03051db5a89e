"""
Tests for the replayflow CLI state commands.
"""

import json
import tempfile

from typer.testing import CliRunner

from cli.main import app
from replayflow.core.state import FlowState
from replayflow.storage import FileStateStore

runner = CliRunner()


def _seed(directory):
    store = FileStateStore(directory)
    state = FlowState(
        id="root-1",
        kvs={"created": "t0", "updated": "t1"},
        subflows=[FlowState(id="counter", subflows=[FlowState(id="send", executed=True, result={"message_id": 1})])],
    )
    store.save("42", state.to_json())
    return store


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_state_list_json():
    with tempfile.TemporaryDirectory() as tmpdir:
        _seed(tmpdir)

        result = runner.invoke(app, ["state", "list", "--dir", tmpdir, "--json"])

        assert result.exit_code == 0
        out = json.loads(result.output)
        assert out["count"] == 1
        assert out["states"][0] == {
            "subject": "42",
            "root_id": "root-1",
            "status": "pending",
            "flow": "counter",
            "updated": "t1",
        }


def test_state_list_empty():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = runner.invoke(app, ["state", "list", "--dir", tmpdir])

        assert result.exit_code == 0
        assert "No stored flows" in result.output


def test_state_show_tree_and_raw():
    with tempfile.TemporaryDirectory() as tmpdir:
        _seed(tmpdir)

        tree = runner.invoke(app, ["state", "show", "42", "--dir", tmpdir])
        raw = runner.invoke(app, ["state", "show", "42", "--dir", tmpdir, "--raw"])

        assert tree.exit_code == 0
        assert "counter" in tree.output
        assert raw.exit_code == 0
        assert '"root-1"' in raw.output


def test_state_show_missing_subject():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = runner.invoke(app, ["state", "show", "nobody", "--dir", tmpdir])

        assert result.exit_code == 1
        assert "No stored flow" in result.output


def test_state_drop():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = _seed(tmpdir)

        result = runner.invoke(app, ["state", "drop", "42", "--dir", tmpdir])

        assert result.exit_code == 0
        assert store.load("42") is None
