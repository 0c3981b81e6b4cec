import json
import logging

import pytest

from ipextract import lookup
from ipextract.collector import CommandUnavailable
from ipextract.lookup import main


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger = logging.getLogger("ipextract")
    for h in logger.handlers:
        h.close()
    logger.handlers.clear()


@pytest.fixture
def saved(tmp_path, linux_output):
    path = tmp_path / "ifconfig.txt"
    path.write_text(linux_output)
    return str(path)


def _json_names(capsys):
    return [r["name"] for r in json.loads(capsys.readouterr().out)]


def test_all_interfaces_json(saved, capsys):
    assert main(["--file", saved, "--json"]) == 0
    assert _json_names(capsys) == ["lo", "wlan0", "eth0"]


def test_find(saved, capsys):
    assert main(["--file", saved, "--json", "--find", "wl"]) == 0
    assert _json_names(capsys) == ["wlan0"]


def test_find_no_match_exit_code(saved, capsys):
    assert main(["--file", saved, "--json", "--find", "xyz"]) == 1
    assert _json_names(capsys) == []


def test_wireless_and_wired(saved, capsys):
    main(["--file", saved, "--json", "--wireless"])
    assert _json_names(capsys) == ["wlan0"]
    main(["--file", saved, "--json", "--wired"])
    assert _json_names(capsys) == ["eth0"]
    main(["--file", saved, "--json", "--wired", "lo"])
    assert _json_names(capsys) == ["lo"]


def test_connected_only(saved, capsys):
    main(["--file", saved, "--json", "--connected"])
    assert _json_names(capsys) == ["lo", "wlan0"]


def test_table_output(saved, capsys, monkeypatch):
    monkeypatch.setenv("COLUMNS", "200")
    assert main(["--file", saved]) == 0
    out = capsys.readouterr().out
    assert "wlan0" in out
    assert "192.168.1.5" in out


def test_log_json(saved, tmp_path, capsys):
    path = tmp_path / "diag.json"
    main(["--file", saved, "--json", "--log-json", str(path)])
    data = json.loads(path.read_text())
    assert data["summary"]["total_blocks"] == 3


def test_command_unavailable_exits_2(monkeypatch, capsys):
    def _unavailable(spec):
        raise CommandUnavailable(spec.display, "not found")

    monkeypatch.setattr(lookup, "capture_output", _unavailable)
    with pytest.raises(SystemExit) as info:
        main(["--command", "no-such-ifconfig"])
    assert info.value.code == 2
    assert "Command unavailable: no-such-ifconfig" in capsys.readouterr().err


def test_find_with_connected(tmp_path, capsys):
    path = tmp_path / "ifconfig.txt"
    path.write_text("eth0: flags=1\neth1: flags=1\n        inet 10.0.0.2\n")
    assert main(["--file", str(path), "--json", "--find", "eth", "--connected"]) == 0
    assert _json_names(capsys) == ["eth1"]


def test_missing_file_exits_2(tmp_path, capsys):
    with pytest.raises(SystemExit) as info:
        main(["--file", str(tmp_path / "typo.txt")])
    assert info.value.code == 2
    assert "Command unavailable" in capsys.readouterr().err
