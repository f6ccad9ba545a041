import json

import pytest

from hostfetch.app import cli, execute
from hostfetch.context import MockSystemContext
from hostfetch.probes import Platform


@pytest.fixture
def fake_host(monkeypatch):
    context = MockSystemContext(
        files={"/etc/os-release": 'PRETTY_NAME="Test Linux"\n'},
        hostname="testbox",
    )
    requests = []

    def _execute(request):
        requests.append(request)
        return execute(request, context, platform=Platform.LINUX)

    monkeypatch.setattr(cli, "execute", _execute)
    return requests


def test_list_modules(capsys):
    cli.main(["--list-modules"])
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "Available modules:"
    assert "  - cpu (CPU)" in out
    assert "  - uptime (Uptime)" in out


def test_values_only_output(fake_host, capsys):
    cli.main(["--modules", "host,kernel", "--values-only", "--no-parallel"])
    assert capsys.readouterr().out == "testbox\n"
    assert fake_host[0].parallel is False


def test_labeled_output_without_logo(fake_host, capsys):
    cli.main(["-m", "host,kernel", "--no-logo"])
    assert capsys.readouterr().out.splitlines() == [
        "hostfetch",
        "",
        "Host  : testbox",
        "Kernel: Not available",
    ]


def test_json_output(fake_host, capsys):
    cli.main(["-m", "os,memory", "--json"])
    document = json.loads(capsys.readouterr().out)
    modules = document["modules"]
    assert [module["module"] for module in modules] == ["os", "memory"]
    assert modules[0]["value"]["name"] == "Test Linux"
    assert modules[1]["status"] == "error"
    assert modules[1]["error"]["kind"] == "io_failure"


def test_unknown_modules_warn_and_are_skipped(fake_host, capsys):
    cli.main(["-m", "gpu,host", "--values-only"])
    captured = capsys.readouterr()
    assert captured.out == "testbox\n"
    assert "Warning: Unknown module 'gpu', skipping" in captured.err


def test_no_valid_modules_exits_with_error(fake_host, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["-m", "gpu,disk"])
    assert excinfo.value.code == 1
    assert "No valid modules specified" in capsys.readouterr().err
    assert fake_host == []


def test_invalid_max_workers_rejected(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--max-workers", "0"])
    assert excinfo.value.code == 2
