"""tldparse CLI tests."""

import json
import os
import sys
from pathlib import Path

import pytest

from tldparse.cli import main

FAKE_SUFFIX_LIST_URL = Path(
    os.path.dirname(os.path.abspath(__file__)),
    "fixtures",
    "fake_suffix_list_fixture.dat",
).as_uri()


@pytest.fixture(autouse=True)
def offline(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the CLI off the network, reading the bundled snapshot."""
    monkeypatch.setattr("tldparse.cli.PUBLIC_SUFFIX_LIST_URLS", ())


def test_cli_suffix_list_url(
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    """Test CLI with an alternate, local suffix list and cache folder."""
    monkeypatch.setattr(
        sys,
        "argv",
        [
            "tldparse",
            "--suffix_list_url",
            FAKE_SUFFIX_LIST_URL,
            "--cache_dir",
            str(tmp_path),
            "www.site.pages.foo",
            "www.google.com",
        ],
    )

    main()

    stdout, stderr = capsys.readouterr()
    assert not stderr
    assert stdout == "www site pages.foo\nwww google com\n"


def test_cli_no_input(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test CLI without args."""
    monkeypatch.setattr(sys, "argv", ["tldparse"])
    with pytest.raises(SystemExit) as ex:
        main()

    assert ex.value.code == 1


def test_cli_parses_args(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test CLI with nonsense args."""
    monkeypatch.setattr(sys, "argv", ["tldparse", "--some", "nonsense"])
    with pytest.raises(SystemExit) as ex:
        main()

    assert ex.value.code == 2


def test_cli_posargs(
    capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test CLI with basic, positional args."""
    monkeypatch.setattr(
        sys, "argv", ["tldparse", "example.com", "bbc.co.uk", "forums.bbc.co.uk"]
    )

    main()

    stdout, stderr = capsys.readouterr()
    assert not stderr
    assert stdout == " example com\n bbc co.uk\nforums bbc co.uk\n"


def test_cli_icann(
    capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test CLI with ICANN-only output."""
    monkeypatch.setattr(
        sys, "argv", ["tldparse", "www.waiterrant.blogspot.com", "--icann"]
    )

    main()

    stdout, stderr = capsys.readouterr()
    assert not stderr
    assert stdout == "www.waiterrant blogspot com\n"


def test_cli_valid_hosts(
    capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test CLI with reserved and custom valid hosts."""
    monkeypatch.setattr(
        sys,
        "argv",
        ["tldparse", "--rfc6761", "--valid-host", "intranet", "localhost", "intranet"],
    )

    main()

    stdout, stderr = capsys.readouterr()
    assert not stderr
    assert stdout == " localhost \n intranet \n"


def test_cli_json_output(
    capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test CLI with --json option."""
    monkeypatch.setattr(sys, "argv", ["tldparse", "--json", "www.bbc.co.uk"])

    main()

    stdout, stderr = capsys.readouterr()
    assert not stderr
    parts = {
        "tld_exists": True,
        "public_suffix": "co.uk",
        "domain": "bbc.co.uk",
        "site_domain": "bbc",
        "subdomain": "www",
    }
    assert json.loads(stdout) == {
        "hostname": "www.bbc.co.uk",
        "is_valid": True,
        "is_ip": False,
        "is_host": False,
        "all_rules": parts,
        "icann": parts,
    }
