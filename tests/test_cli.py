"""Tests for the command line entrypoint."""

import argparse
import json

import pytest

import insight_blueprint.cli as cli_mod
from insight_blueprint.config.loader import InsightConfig
from insight_blueprint.source.filters import Filter, FilterOperator


@pytest.fixture
def cli_config(monkeypatch):
    monkeypatch.setattr(
        cli_mod,
        "load_client_config",
        lambda _path=None: InsightConfig(client_id="cli", host="insight.example.com"),
    )


def test_parse_filter_equality():
    field, predicate = cli_mod.parse_filter_arg("to_address=0xabc")
    assert field == "to_address"
    assert predicate == Filter(value="0xabc")


def test_parse_filter_operator_coerces_numbers():
    field, predicate = cli_mod.parse_filter_arg("block_number:gte=100")
    assert field == "block_number"
    assert predicate.operator is FilterOperator.GTE
    assert predicate.value == 100


def test_parse_filter_in_list():
    _, predicate = cli_mod.parse_filter_arg("status:in=1,0")
    assert predicate.value == [1, 0]


@pytest.mark.parametrize("arg", ["no-equals", "=value", "field:like=1"])
def test_parse_filter_rejects_malformed(arg):
    with pytest.raises(argparse.ArgumentTypeError):
        cli_mod.parse_filter_arg(arg)


def test_events_command_prints_json(cli_config, fake_get, capsys):
    fake_get.respond(
        payload={
            "meta": {"chain_id": 1, "page": 0, "limit": 1, "total_items": 1, "total_pages": 1},
            "data": [{"block_number": 9, "block_timestamp": 100, "topic_0": "0xddf2"}],
        }
    )

    exit_code = cli_mod.main(
        [
            "events",
            "1",
            "--filter",
            "block_timestamp:gte=10",
            "--filter",
            "block_timestamp:lte=20",
            "--order-by",
            "block_number",
            "--order-by",
            "log_index",
            "--direction",
            "desc",
            "--limit",
            "1",
        ]
    )

    assert exit_code == 0
    assert fake_get.calls[0]["params"] == [
        ("filter_block_timestamp_gte", "10"),
        ("filter_block_timestamp_lte", "20"),
        ("limit", "1"),
        ("sort_by", "block_number"),
        ("sort_by", "log_index"),
        ("sort_order", "desc"),
    ]
    output = json.loads(capsys.readouterr().out)
    assert output["data"][0]["topics"] == ["0xddf2", None, None, None]


def test_aggregate_switches_to_aggregation_query(cli_config, fake_get, capsys):
    fake_get.respond(payload={"meta": {"chain_id": 1}, "aggregations": [{"count()": 4}]})

    exit_code = cli_mod.main(["transactions", "1", "--group-by", "from_address", "--aggregate", "count()"])

    assert exit_code == 0
    assert fake_get.calls[0]["params"] == [("group_by", "from_address"), ("aggregate", "count()")]
    assert json.loads(capsys.readouterr().out)["aggregations"] == [{"count()": 4}]


def test_source_error_exits_nonzero(cli_config, fake_get, capsys):
    fake_get.respond(status_code=503, text="unavailable")

    exit_code = cli_mod.main(["transactions", "1"])

    assert exit_code == 1
    assert "unavailable" in capsys.readouterr().err


def test_invalid_field_exits_nonzero(cli_config, fake_get):
    assert cli_mod.main(["events", "1", "--filter", "nope=1"]) == 1
    assert fake_get.calls == []


@pytest.mark.parametrize("raw", ["007", "1.50", "1e18", "True", "nan", "-0", "0xdAC17F958D2ee523a2206206994597C13D831ec7"])
def test_parse_filter_keeps_text_verbatim(raw):
    _, predicate = cli_mod.parse_filter_arg(f"value={raw}")
    assert predicate.value == raw
    assert predicate.render_value() == raw


def test_parse_filter_in_list_keeps_text_verbatim():
    _, predicate = cli_mod.parse_filter_arg("value:in=007,1.50,3")
    assert predicate.value == ["007", "1.50", 3]
    assert predicate.render_value() == "007,1.50,3"


def test_parse_filter_exact_booleans():
    _, predicate = cli_mod.parse_filter_arg("status=true")
    assert predicate.value is True


def test_malformed_config_exits_nonzero(tmp_path, fake_get, capsys):
    config_path = tmp_path / "insight.yaml"
    config_path.write_text("version: 1\ninsight: [unclosed\n")

    exit_code = cli_mod.main(["--config", str(config_path), "events", "1"])

    assert exit_code == 1
    assert "not valid YAML" in capsys.readouterr().err
    assert fake_get.calls == []
