from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from flipscroll import cli
from flipscroll.client import controller as controller_mod
from flipscroll.client.transport import JsonTransport
from flipscroll.core.paging import ALL


def _mock_transport(monkeypatch: pytest.MonkeyPatch, handler) -> list[httpx.Request]:
    seen: list[httpx.Request] = []

    def recording(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    def factory(base_url: str, **kwargs) -> JsonTransport:
        client = httpx.AsyncClient(transport=httpx.MockTransport(recording))
        return JsonTransport(base_url, client=client, **{k: v for k, v in kwargs.items() if k == "timeout"})

    monkeypatch.setattr(controller_mod, "JsonTransport", factory)
    return seen


def _ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "paging": {"total_rows": 2, "last_page": 1, "current_page": 1, "limit": 25},
            "metadata": {"id": "ID"},
            "rows": [{"id": 1}, {"id": 2}],
        },
    )


def test_render_prints_markup(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys) -> None:
    seen = _mock_transport(monkeypatch, _ok)

    code = cli.main(
        [
            "render",
            "/ducks",
            "--config",
            str(tmp_path / "config.toml"),
            "--base-url",
            "https://ducks.example",
            "--page",
            "1",
            "--row-template",
            "<tr><td>#{id}</td></tr>",
        ]
    )

    out = capsys.readouterr().out
    assert code == 0
    assert str(seen[0].url) == "https://ducks.example/ducks.json?page=1&limit=25"
    assert "<tr><td>#1</td></tr><tr><td>#2</td></tr>" in out
    assert '<div class="pagination"><ul>' in out


def test_render_reports_failures(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys) -> None:
    _mock_transport(monkeypatch, lambda request: httpx.Response(500, json={"errors": ["boom"]}))

    code = cli.main(["render", "/ducks", "--config", str(tmp_path / "config.toml")])

    assert code == 1
    assert "<p>boom</p>" in capsys.readouterr().err


def test_render_rejects_bad_config(tmp_path: Path, capsys) -> None:
    path = tmp_path / "config.toml"
    path.write_text("[table]\npage = 0\n", encoding="utf-8")

    assert cli.main(["render", "/ducks", "--config", str(path)]) == 2
    assert "table.page" in capsys.readouterr().err


def test_parse_limit_handles_invalid_values() -> None:
    assert cli._parse_limit("all") == ALL
    assert cli._parse_limit("15") == 15
    with pytest.raises(SystemExit):
        cli._parse_limit("lots")


def test_serve_uses_config_and_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        """
[server]
port = 8100

[datasets.ducks]
sql = "SELECT 1 AS id"
""".strip(),
        encoding="utf-8",
    )
    captured: dict[str, object] = {}

    import uvicorn

    def fake_run(app, **kwargs):  # type: ignore[no-untyped-def]
        captured["app"] = app
        captured.update(kwargs)

    monkeypatch.setattr(uvicorn, "run", fake_run)

    assert cli.main(["serve", "--config", str(path), "--host", "0.0.0.0"]) == 0
    assert captured["host"] == "0.0.0.0"
    assert captured["port"] == 8100
    assert "ducks" in captured["app"].state.datasets


def test_serve_without_datasets_fails(tmp_path: Path) -> None:
    assert cli.main(["serve", "--config", str(tmp_path / "config.toml")]) == 1


def test_main_without_command_prints_help(capsys) -> None:
    assert cli.main([]) == 1
    assert "flipscroll" in capsys.readouterr().out
