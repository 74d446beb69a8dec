"""Tests for main CLI functionality."""

from typer.testing import CliRunner

from linear_issue_cli.main import app

runner = CliRunner()


def test_version():
    """Test version command."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "linear-issue-cli version:" in result.stdout


def test_help():
    """Test help command."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "List and create Linear issues" in result.stdout


def test_info_command(tmp_path, monkeypatch):
    """Test info command."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("LINEAR_API_KEY", "lin_test")
    result = runner.invoke(app, ["info"])
    assert result.exit_code == 0
    assert "Linear Issue CLI Info" in result.stdout
    assert "configured" in result.stdout
    assert "none (defaults)" in result.stdout


def test_unknown_command():
    """Unknown commands are rejected."""
    result = runner.invoke(app, ["hello"])
    assert result.exit_code == 2


def test_issue_subcommand():
    """Test issue subcommand exists."""
    result = runner.invoke(app, ["issue", "--help"])
    assert result.exit_code == 0
    assert "List and create Linear issues" in result.stdout


def test_init_config_writes_file(tmp_path):
    """init-config writes a template and refuses to overwrite it."""
    target = tmp_path / "config.yml"

    result = runner.invoke(app, ["init-config", "--output", str(target)])
    assert result.exit_code == 0
    assert "api_key" in target.read_text(encoding="utf-8")

    result = runner.invoke(app, ["init-config", "--output", str(target)])
    assert result.exit_code == 1
    assert "already exists" in result.stdout

    result = runner.invoke(app, ["init-config", "--output", str(target), "--force"])
    assert result.exit_code == 0


def test_info_reads_user_config_from_home(tmp_path, monkeypatch):
    """The user config is looked up under the current HOME."""
    home = tmp_path / "home"
    user_config = home / ".config" / "linear-issue" / "config.yml"
    user_config.parent.mkdir(parents=True)
    user_config.write_text("editor: nano\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("LINEAR_API_KEY", raising=False)

    result = runner.invoke(app, ["info"])

    assert result.exit_code == 0
    assert "nano" in result.stdout
    assert "missing" in result.stdout
