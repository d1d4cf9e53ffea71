# File: tests/test_cli.py
"""Tests for the click CLI (`dir_scout.cli`) using click.testing.CliRunner.
Cover the `index` and `config` commands, `--version` and error handling.
"""
import asyncio
import json

import pytest
from click.testing import CliRunner

import dir_scout.engine as engine_module
from dir_scout.cli import cli
from dir_scout.crawler.errors import RootFetchError
from dir_scout.crawler.models import Link, LinkTable, LinkType


@pytest.fixture()
def calls():
    return []


@pytest.fixture(autouse=True)
def patch_start_index(monkeypatch, network, calls):
    """Replace start_index with a canned table, no network involved."""

    async def fake_index(cfg, url=None):
        calls.append((cfg, url))
        target = url or str(cfg.base_url)
        table = LinkTable()
        table.add(Link(target, cfg, network.factory))
        table.add(Link("sub/", cfg, network.factory))
        table.add(Link("readme.txt", cfg, network.factory))
        table.add(Link("gone.txt", cfg, network.factory))
        table[0].classify(LinkType.DIRECTORY)
        table[1].classify(LinkType.DIRECTORY)
        table[2].classify(LinkType.FILE, 42)
        await table.close()
        return table

    monkeypatch.setattr(engine_module, "start_index", fake_index)


@pytest.fixture(autouse=True)
def no_default_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def write_config(tmp_path, **values):
    cfg_file = tmp_path / "config.json"
    cfg_file.write_text(json.dumps(values), encoding="utf-8")
    return cfg_file


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "DirScout" in result.output


def test_index_text_output(calls):
    result = CliRunner().invoke(cli, ["index", "http://files.example/pub/"])
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        "0 D 0 http://files.example/pub/",
        "1 D 0 sub/",
        "2 F 42 readme.txt",
        "3 U 0 gone.txt",
    ]
    assert calls[0][1] == "http://files.example/pub/"


def test_index_json_output():
    result = CliRunner().invoke(cli, ["index", "http://files.example/pub/", "--format", "json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["base_url"] == "http://files.example/pub/"
    assert [e["raw_ref"] for e in data["entries"]][1:] == ["sub/", "readme.txt", "gone.txt"]


def test_index_uses_config_base_url(tmp_path, calls):
    cfg_file = write_config(tmp_path, base_url="http://mirror.example/pub/", concurrency=2)
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "index", "--concurrency", "6"])
    assert result.exit_code == 0, result.output
    cfg, url = calls[0]
    assert url is None
    assert cfg.concurrency == 6
    assert "http://mirror.example/pub/" in result.output


def test_index_without_url_fails():
    result = CliRunner().invoke(cli, ["index"])
    assert result.exit_code != 0
    assert "URL" in result.output


def test_index_writes_reports(tmp_path):
    json_out = tmp_path / "out" / "listing.json"
    html_out = tmp_path / "out" / "listing.html"
    result = CliRunner().invoke(
        cli,
        ["index", "http://files.example/pub/", "--json", str(json_out), "--html", str(html_out)],
    )
    assert result.exit_code == 0, result.output
    assert json.loads(json_out.read_text(encoding="utf-8"))["entries"][2]["content_length"] == 42
    assert "readme.txt" in html_out.read_text(encoding="utf-8")


def test_index_build_error(monkeypatch):
    async def failing(cfg, url=None):
        raise RootFetchError(url, "HTTP 404")

    monkeypatch.setattr(engine_module, "start_index", failing)
    result = CliRunner().invoke(cli, ["index", "http://files.example/missing/"])
    assert result.exit_code == 1
    assert "http://files.example/missing/" in result.output


def test_index_timeout(monkeypatch):
    async def slow(cfg, url=None):
        await asyncio.sleep(2)

    monkeypatch.setattr(engine_module, "start_index", slow)
    result = CliRunner().invoke(cli, ["index", "http://files.example/pub/", "--timeout", "0.2"])
    assert result.exit_code != 0
    assert "не завершена" in result.output


def test_show_config(tmp_path):
    cfg_file = write_config(tmp_path, base_url="https://example.com/pub/", retry_times=0)
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["base_url"] == "https://example.com/pub/"
    assert data["retry_times"] == 0


def test_bad_config(tmp_path):
    cfg_file = write_config(tmp_path, concurrency=0)
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1
    assert "конфигурации" in result.output
