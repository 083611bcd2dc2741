import pytest

from mirrorlist import cli
from mirrorlist.directory import DecodeError, TransportError
from mirrorlist.mirrors import UNUSABLE, MirrorRate


def fake_select_fastest(result):
    async def select_fastest(http, config, **kwargs):
        if isinstance(result, Exception):
            raise result
        return result

    return select_fastest


def test_config_from_args():
    args = cli.build_parser().parse_args(
        [
            "--protocol", "http",
            "--country", "nl",
            "--country", "DE",
            "--limit", "10",
            "--concurrency", "3",
            "--probe-path", "core/os/x86_64/core.files",
            "--timeout", "12.5",
        ]
    )
    config = cli.config_from_args(args)

    assert config.protocol == "http"
    assert config.countries == frozenset({"NL", "DE"})
    assert config.limit == 10
    assert config.max_concurrency == 3
    assert config.probe_path == "core/os/x86_64/core.files"
    assert config.total_timeout == 12.5


def test_defaults():
    config = cli.config_from_args(cli.build_parser().parse_args([]))
    assert config == cli.Config()


@pytest.mark.parametrize("argv", [["--concurrency", "0"], ["--limit", "-1"], ["--timeout", "0"]])
def test_invalid_arguments(argv):
    with pytest.raises(SystemExit) as exc:
        cli.build_parser().parse_args(argv)
    assert exc.value.code == 2


@pytest.mark.parametrize("error", [TransportError("refused"), DecodeError("not json")])
def test_directory_failure_exits_nonzero(monkeypatch, capsys, error):
    monkeypatch.setattr(cli, "select_fastest", fake_select_fastest(error))

    assert cli.main(["--quiet"]) == 1
    assert capsys.readouterr().out == ""


def test_writes_mirrorlist_to_stdout(monkeypatch, capsys, make_mirror):
    rates = [
        MirrorRate(make_mirror("https://a/"), 3e6),
        MirrorRate(make_mirror("https://b/"), UNUSABLE),
    ]
    monkeypatch.setattr(cli, "select_fastest", fake_select_fastest(rates))

    assert cli.main(["--quiet"]) == 0
    assert capsys.readouterr().out == (
        "Server = https://a/$repo/os/$arch\n"
        "Server = https://b/$repo/os/$arch\n"
    )


def test_writes_mirrorlist_to_file(monkeypatch, tmp_path, make_mirror):
    rates = [
        MirrorRate(make_mirror("https://a/", country_code="NL"), 3e6),
        MirrorRate(make_mirror("https://b/"), UNUSABLE),
    ]
    monkeypatch.setattr(cli, "select_fastest", fake_select_fastest(rates))
    out = tmp_path / "mirrorlist"

    assert cli.main(["--quiet", "--comments", "--exclude-unusable", "-o", str(out)]) == 0
    assert out.read_text(encoding="utf-8") == "#  3.0 MB/s, NL\nServer = https://a/$repo/os/$arch\n"


def test_unwritable_output_exits_nonzero(monkeypatch, tmp_path, make_mirror):
    rates = [MirrorRate(make_mirror("https://a/"), 3e6)]
    monkeypatch.setattr(cli, "select_fastest", fake_select_fastest(rates))
    out = tmp_path / "no-such-dir" / "mirrorlist"

    assert cli.main(["--quiet", "-o", str(out)]) == 1
    assert not out.exists()
