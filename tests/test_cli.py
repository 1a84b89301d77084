"""
Test: command line entry point
"""
import json

import pytest

from gamegraph import cli
from gamegraph.engine import GameGraph


@pytest.fixture
def fake_graph(monkeypatch, neo4j_service):
    """Route every CLI command to the recording driver"""
    monkeypatch.setattr(
        cli.GameGraph, 'from_settings',
        classmethod(lambda cls, settings=None: GameGraph(neo4j_service, settings))
    )
    return neo4j_service


def test_parser_requires_a_command():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([])


def test_parser_rate_arguments():
    args = cli.build_parser().parse_args(["rate", "42", "570", "5"])
    assert (args.command, args.user_id, args.item_id, args.rank) == ("rate", "42", "570", "5")


def test_search_json_catalog(tmp_path, capsys):
    path = tmp_path / "games.json"
    path.write_text(json.dumps([
        {'_id': "570", 'name': "Dota 2", 'popular_tags': "MOBA,Strategy"},
    ]), encoding='utf-8')

    assert cli.main(["search", "dota", "--json", str(path)]) == 0
    assert "570\tDota 2\tMOBA, Strategy" in capsys.readouterr().out


def test_invalid_rank_exits_with_error(fake_graph, fake_driver):
    assert cli.main(["rate", "42", "570", "9"]) == 1
    assert fake_driver.calls == []


def test_rate_reports_missing_item(fake_graph, fake_driver, capsys):
    assert cli.main(["rate", "42", "missing", "4"]) == 2
    assert "not_found" in capsys.readouterr().out


def test_recommend_without_ratings(fake_graph, fake_driver, capsys):
    assert cli.main(["recommend", "42"]) == 0
    assert "Not enough ratings" in capsys.readouterr().out


def test_recommend_prints_items(fake_graph, fake_driver, capsys):
    fake_driver.respond({'item_id': "570", 'item_name': "Dota 2", 'score': 2, 'rank': 5})
    assert cli.main(["recommend", "42"]) == 0
    assert "Dota 2 (2)" in capsys.readouterr().out


def test_like_unknown_tag_suggests(fake_graph, fake_driver, capsys):
    fake_driver.respond()  # find_tag_by_name
    fake_driver.respond({'id': "strategy", 'name': "strategy"})  # suggest_tags
    assert cli.main(["like-tag", "42", "stratgy"]) == 2
    assert "did you mean: strategy" in capsys.readouterr().out
