from pathlib import Path

import pytest

from conftest import FakeResponse, FakeSession
from readmeforge import __version__, cli
from readmeforge.client import ReadmeForgeClient

REPO = "https://github.com/acme/widgets"


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def session(monkeypatch):
    """Route every client the CLI builds through a FakeSession."""
    fake = FakeSession()

    def make_client(api_key, api_base, *, timeout):
        return ReadmeForgeClient(api_key, api_base, timeout=timeout, session=fake)

    monkeypatch.setattr(cli, "ReadmeForgeClient", make_client)
    return fake


@pytest.fixture
def no_detection(monkeypatch):
    calls = []

    def fake_detect(cwd=None):
        calls.append(cwd)
        return None

    monkeypatch.setattr(cli, "detect_repo_url", fake_detect)
    return calls


@pytest.mark.parametrize(
    "argv",
    [[], ["-h"], ["--help"], ["-k", "rf_key", "-r", REPO, "--help"], ["--bogus", "-h"]],
)
def test_help_exits_zero_without_request(argv, capsys, session, workdir):
    assert cli.main(argv) == 0
    out = capsys.readouterr().out
    assert "Usage:" in out
    assert "--no-emoji" in out
    assert "[bold]" not in out
    assert session.calls == []


@pytest.mark.parametrize("flag", ["-v", "--version"])
def test_version(flag, capsys, session, workdir):
    assert cli.main(["-k", "rf_key", flag]) == 0
    assert capsys.readouterr().out.strip() == __version__
    assert session.calls == []


def test_missing_api_key(capsys, session, workdir):
    assert cli.main(["-r", REPO]) == 1
    err = capsys.readouterr().err
    assert "Error: API key required" in err
    assert session.calls == []
    assert not (workdir / "README.md").exists()


def test_success_writes_exact_readme(capsys, session, workdir, no_detection):
    assert cli.main(["-k", "rf_key", "-r", REPO]) == 0

    assert (workdir / "README.md").read_bytes() == b"# Hello"
    out = capsys.readouterr().out
    assert "Credits remaining: 5" in out
    assert str(workdir / "README.md") in out
    assert f"Repository: {REPO}" in out
    assert no_detection == []
    assert session.calls[0]["json"]["repoUrl"] == REPO


def test_api_key_from_environment(monkeypatch, session, workdir):
    monkeypatch.setenv("READMEFORGE_API_KEY", "rf_env")
    assert cli.main(["-r", REPO]) == 0
    assert session.calls[0]["headers"]["Authorization"] == "Bearer rf_env"


def test_repo_auto_detected(monkeypatch, session, workdir):
    monkeypatch.setattr(cli, "detect_repo_url", lambda cwd=None: "https://github.com/acme/widgets")
    assert cli.main(["-k", "rf_key"]) == 0
    assert session.calls[0]["json"]["repoUrl"] == "https://github.com/acme/widgets"


def test_repo_not_detected(capsys, session, workdir, no_detection):
    assert cli.main(["-k", "rf_key"]) == 1
    assert "Could not detect repo" in capsys.readouterr().err
    assert session.calls == []
    assert no_detection == [workdir]


def test_existing_output_without_force(capsys, session, workdir):
    (workdir / "README.md").write_text("keep me", encoding="utf-8")
    assert cli.main(["-k", "rf_key", "-r", REPO]) == 1
    assert "README.md already exists. Use -f to overwrite." in capsys.readouterr().err
    assert session.calls == []
    assert (workdir / "README.md").read_text(encoding="utf-8") == "keep me"


def test_existing_output_with_force(session, workdir):
    (workdir / "README.md").write_text("old", encoding="utf-8")
    assert cli.main(["-k", "rf_key", "-r", REPO, "--force"]) == 0
    assert (workdir / "README.md").read_text(encoding="utf-8") == "# Hello"


def test_custom_output_path_and_options(session, workdir):
    argv = ["-k", "rf_key", "-r", REPO, "-o", "docs/GUIDE.md", "-t", "detailed", "-l", "zh", "--tone", "technical", "--no-emoji"]
    assert cli.main(argv) == 0
    assert (workdir / "docs" / "GUIDE.md").read_text(encoding="utf-8") == "# Hello"
    assert session.calls[0]["json"] == {
        "repoUrl": REPO,
        "template": "detailed",
        "customization": {"language": "zh", "tone": "technical", "includeEmoji": False},
    }


def test_readme_newlines_written_verbatim(session, workdir):
    session.response = FakeResponse(200, {"readme": "# A\r\nline\n", "creditsRemaining": 0})
    assert cli.main(["-k", "rf_key", "-r", REPO]) == 0
    assert (workdir / "README.md").read_bytes() == b"# A\r\nline\n"


def test_service_error(capsys, session, workdir):
    session.response = FakeResponse(404, {"error": "not found"})
    assert cli.main(["-k", "rf_key", "-r", REPO]) == 1
    assert "not found" in capsys.readouterr().err
    assert not (workdir / "README.md").exists()


def test_value_flag_without_value(capsys, session, workdir):
    assert cli.main(["-k", "rf_key", "-r", REPO, "-o"]) == 1
    assert "-o/--output" in capsys.readouterr().err
    assert session.calls == []


def test_project_config_defaults(session, workdir):
    (workdir / ".readmeforge.yml").write_text("template: minimal\nlanguage: es\n", encoding="utf-8")
    assert cli.main(["-k", "rf_key", "-r", REPO, "-l", "fr"]) == 0
    sent = session.calls[0]["json"]
    assert sent["template"] == "minimal"
    assert sent["customization"]["language"] == "fr"


def test_invalid_project_config(capsys, session, workdir):
    (workdir / ".readmeforge.yml").write_text("tone: grumpy\n", encoding="utf-8")
    assert cli.main(["-k", "rf_key", "-r", REPO]) == 1
    assert "invalid tone" in capsys.readouterr().err
    assert session.calls == []


def test_unwritable_output(capsys, session, workdir):
    (workdir / "blocker").write_text("", encoding="utf-8")
    assert cli.main(["-k", "rf_key", "-r", REPO, "-o", str(Path("blocker") / "README.md")]) == 1
    assert "Could not write" in capsys.readouterr().err


def test_fractional_credits_printed_as_is(capsys, session, workdir):
    session.response = FakeResponse(200, {"readme": "# Hello", "creditsRemaining": 2.5})
    assert cli.main(["-k", "rf_key", "-r", REPO]) == 0
    assert "Credits remaining: 2.5" in capsys.readouterr().out


def test_undecodable_project_config(capsys, session, workdir):
    (workdir / ".readmeforge.yml").write_bytes(b"template: \xff\xfe\n")
    assert cli.main(["-k", "rf_key", "-r", REPO]) == 1
    assert "Error: .readmeforge.yml: could not read file" in capsys.readouterr().err
    assert session.calls == []


def test_dash_leading_output_name(session, workdir):
    assert cli.main(["-k", "rf_key", "-r", REPO, "-o", "-draft.md"]) == 0
    assert (workdir / "-draft.md").read_text(encoding="utf-8") == "# Hello"
