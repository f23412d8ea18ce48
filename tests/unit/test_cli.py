"""Unit tests for the signup-data command line tool."""

import json

from signup_flow.cli import main
from signup_flow.signup_data import is_secure_password


def test_prints_one_profile(capsys):
    assert main(["--seed", "3"]) == 0

    profile = json.loads(capsys.readouterr().out)
    assert profile["email"].endswith("@check.de")
    assert is_secure_password(profile["password"])
    assert profile["country"] == "Germany"
    assert profile["hearAboutUs"] == "Google"


def test_prints_a_list_for_count(capsys):
    assert main(["--count", "3", "--seed", "3"]) == 0

    profiles = json.loads(capsys.readouterr().out)
    assert len(profiles) == 3
    assert len({p["email"] for p in profiles}) == 3


def test_seed_makes_output_reproducible(capsys):
    main(["--seed", "11"])
    first = capsys.readouterr().out
    main(["--seed", "11"])

    assert capsys.readouterr().out == first


def test_rejects_zero_count(capsys):
    assert main(["--count", "0"]) == 2
    assert "--count" in capsys.readouterr().err


def test_check_valid_password(capsys):
    assert main(["--check", "Passw0rdA!"]) == 0
    assert capsys.readouterr().out.strip() == "valid"


def test_check_invalid_password(capsys):
    assert main(["--check", "password"]) == 1
    assert capsys.readouterr().out.startswith("invalid")


def test_broken_fixture_reports_error(tmp_path, capsys):
    path = tmp_path / "data.json"
    path.write_text('{"email": 42}', encoding="utf-8")

    assert main(["--fixture", str(path)]) == 1
    assert capsys.readouterr().err.startswith("error:")
