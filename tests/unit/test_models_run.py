# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import random

import pytest

from perfops.errors import DecodeError
from perfops.models import Ping, PingItem, PingOutput, PingResult, is_complete


def _output(requested, *node_ids):
    items = []
    for index, node_id in enumerate(node_ids):
        result = None if node_id is None else PingResult(node_id=node_id, output=f"out-{index}")
        items.append(PingItem(id=str(index), result=result))
    return PingOutput(id="t1", requested=requested, items=tuple(items))


def test_ping_to_dict_omits_empty_optionals():
    assert Ping(target="example.com").to_dict() == {"target": "example.com"}
    assert Ping(target="example.com", nodes="1,2", location="Germany,France", limit=3).to_dict() == {
        "target": "example.com",
        "nodes": "1,2",
        "location": "Germany,France",
        "limit": 3,
    }


def test_ping_does_not_validate_target():
    assert Ping(target="").to_dict() == {"target": ""}


def test_result_complete_only_with_node_id():
    assert PingResult(node_id="n1").is_complete() is True
    assert PingResult(node_id="", output="64 bytes from ...").is_complete() is False


def test_empty_requested_is_never_complete():
    assert _output("").is_complete() is False
    assert _output("", "n1", "n2").is_complete() is False
    assert PingOutput().is_complete() is False


def test_all_items_reported_is_complete():
    assert _output("example.com", "n1", "n2").is_complete() is True


def test_requested_without_items_is_complete():
    assert _output("example.com").is_complete() is True


def test_absent_result_is_incomplete():
    assert _output("example.com", "n1", None).is_complete() is False


def test_incomplete_item_before_complete_ones():
    assert _output("example.com", None, "n2", "n3").is_complete() is False
    assert _output("example.com", "n1", "", "n3").is_complete() is False


def test_module_level_is_complete_matches_method():
    output = _output("example.com", "n1")
    assert is_complete(output) is output.is_complete() is True


@pytest.mark.parametrize("seed", range(25))
def test_is_complete_equals_all_results_reported(seed):
    rng = random.Random(seed)
    for _ in range(40):
        node_ids = [rng.choice([None, "", "n1", "node-7"]) for _ in range(rng.randint(0, 8))]
        output = _output("example.com", *node_ids)
        expected = all(item.result is not None and item.result.node_id != "" for item in output.items)
        assert output.is_complete() == expected


def test_from_mapping_decodes_wire_shape():
    output = PingOutput.from_mapping(
        {
            "id": "abc123",
            "requested": "example.com",
            "items": [
                {"id": "i1", "result": {"nodeId": "n1", "output": "PING example.com"}},
                {"id": "i2"},
                {"id": "i3", "result": None},
                None,
            ],
        }
    )
    assert output.id == "abc123"
    assert output.requested == "example.com"
    assert output.items[0] == PingItem(id="i1", result=PingResult(node_id="n1", output="PING example.com"))
    assert output.items[1].result is None
    assert output.items[2].result is None
    assert output.items[3] == PingItem()
    assert output.results == [PingResult(node_id="n1", output="PING example.com")]
    assert output.is_complete() is False


def test_from_mapping_defaults_missing_fields():
    assert PingOutput.from_mapping({}) == PingOutput()
    assert PingOutput.from_mapping(None) == PingOutput()
    assert PingOutput.from_mapping({"requested": None, "items": None}) == PingOutput()


@pytest.mark.parametrize(
    "payload",
    [
        [],
        "text",
        {"items": {"id": "i1"}},
        {"items": ["not-an-object"]},
        {"requested": 42},
        {"items": [{"result": {"nodeId": 7}}]},
        {"items": [{"result": "n1"}]},
    ],
)
def test_from_mapping_rejects_wrong_types(payload):
    with pytest.raises(DecodeError):
        PingOutput.from_mapping(payload)


def test_to_dict_uses_wire_names():
    output = _output("example.com", "n1", None)
    assert output.to_dict() == {
        "id": "t1",
        "requested": "example.com",
        "items": [
            {"id": "0", "result": {"nodeId": "n1", "output": "out-0"}},
            {"id": "1"},
        ],
    }
    assert PingOutput.from_mapping(output.to_dict()) == output
