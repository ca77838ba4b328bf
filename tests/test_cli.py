"""Tests for gitextract.cli module."""

from typer.testing import CliRunner

from gitextract import __version__
from gitextract.cli import app


runner = CliRunner()


class TestHelp:
    """Tests for usage and help output."""

    def test_long_help(self):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "--base" in result.output
        assert "--paths" in result.output
        assert "--message" in result.output
        assert "Examples" in result.output

    def test_short_help(self):
        result = runner.invoke(app, ["-h"])

        assert result.exit_code == 0
        assert "--paths" in result.output

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestArgumentErrors:
    """Tests for invalid or missing arguments."""

    def test_missing_base(self):
        result = runner.invoke(app, ["--paths", "src"])
        assert result.exit_code != 0

    def test_missing_paths(self):
        result = runner.invoke(app, ["-b", "main"])
        assert result.exit_code != 0

    def test_unknown_option(self):
        result = runner.invoke(app, ["-b", "main", "-p", "src", "--force"])
        assert result.exit_code != 0

    def test_empty_path_list_prints_usage(self):
        result = runner.invoke(app, ["-b", "main", "-p", " , "])

        assert result.exit_code == 1
        assert "At least one path is required" in result.output
        assert "--base" in result.output

    def test_blank_base_prints_usage(self):
        result = runner.invoke(app, ["-b", " ", "-p", "src"])

        assert result.exit_code == 1
        assert "Base branch is required" in result.output


class TestExtractWithFakeRepository:
    """Tests for the command wiring with the repository mocked out."""

    def _patch_repo(self, mocker, repo):
        mock_cls = mocker.patch("gitextract.cli.extract.GitRepository")
        mock_cls.discover.return_value = repo
        return mock_cls

    def test_success(self, mocker, make_fake_repo):
        repo = make_fake_repo()
        self._patch_repo(mocker, repo)

        result = runner.invoke(app, ["-b", "main", "-p", "src/a.txt"])

        assert result.exit_code == 0
        assert "Process complete!" in result.output
        assert "You are now on branch: feature" in result.output
        assert "git reset --hard head111" in result.output
        assert repo.commits == ["Extract: Apply changes from src/a.txt (from feature)"]

    def test_message_option(self, mocker, make_fake_repo):
        repo = make_fake_repo()
        self._patch_repo(mocker, repo)

        result = runner.invoke(
            app, ["--base", "main", "--paths", "src/a.txt", "--message", "feat: update"]
        )

        assert result.exit_code == 0
        assert repo.commits == ["feat: update"]

    def test_rebase_conflict_exits_zero(self, mocker, make_fake_repo):
        repo = make_fake_repo(rebase_completes=False)
        self._patch_repo(mocker, repo)

        result = runner.invoke(app, ["-b", "main", "-p", "src/a.txt"])

        assert result.exit_code == 0
        assert "Rebase had conflicts" in result.output
        assert "rebase in progress" in result.output

    def test_apply_failure_exits_one(self, mocker, make_fake_repo):
        repo = make_fake_repo(apply_error="patch does not apply")
        self._patch_repo(mocker, repo)

        result = runner.invoke(app, ["-b", "main", "-p", "src/a.txt"])

        assert result.exit_code == 1
        assert "Failed to apply diff" in result.output
        assert "back to its original state" in result.output
        assert "git reset --hard head111" in result.output

    def test_empty_diff_exits_one(self, mocker, make_fake_repo):
        repo = make_fake_repo(diff="")
        self._patch_repo(mocker, repo)

        result = runner.invoke(app, ["-b", "main", "-p", "README.md"])

        assert result.exit_code == 1
        assert "No changes found in specified paths" in result.output

    def test_debug_flag(self, mocker, make_fake_repo):
        repo = make_fake_repo()
        self._patch_repo(mocker, repo)

        result = runner.invoke(app, ["-b", "main", "-p", "src/a.txt", "--debug"])

        assert result.exit_code == 0
        assert "Staged files: 1" in result.output

    def test_config_error(self, mocker, make_fake_repo):
        repo = make_fake_repo()
        self._patch_repo(mocker, repo)
        config_dir = repo.root / ".gitextract"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("strategy_option: ''\n")

        result = runner.invoke(app, ["-b", "main", "-p", "src/a.txt"])

        assert result.exit_code == 1
        assert "Config error" in result.output
        assert repo.calls == []


class TestExtractInRealRepository:
    """End-to-end CLI runs inside temporary repositories."""

    def test_success(self, feature_repo, run_git, monkeypatch):
        monkeypatch.chdir(feature_repo)
        original = run_git(feature_repo, "rev-parse", "HEAD")

        result = runner.invoke(app, ["-b", "main", "-p", "src/a.txt"])

        assert result.exit_code == 0
        assert "You are now on branch: feature" in result.output
        assert f"git reset --hard {original}" in result.output
        assert run_git(feature_repo, "log", "-n1", "--format=%s", "HEAD~1") == (
            "Extract: Apply changes from src/a.txt (from feature)"
        )
        assert run_git(feature_repo, "branch", "--list", "temp-extract-*") == ""

    def test_dirty_tree(self, feature_repo, run_git, monkeypatch):
        monkeypatch.chdir(feature_repo)
        (feature_repo / "README.md").write_text("dirty\n")
        before = run_git(feature_repo, "show-ref")

        result = runner.invoke(app, ["-b", "main", "-p", "src/a.txt"])

        assert result.exit_code == 1
        assert "uncommitted changes" in result.output
        assert run_git(feature_repo, "show-ref") == before

    def test_empty_diff(self, feature_repo, run_git, monkeypatch):
        monkeypatch.chdir(feature_repo)

        result = runner.invoke(app, ["-b", "main", "-p", "README.md"])

        assert result.exit_code == 1
        assert "No changes found in specified paths" in result.output
        assert run_git(feature_repo, "branch", "--show-current") == "feature"

    def test_unknown_base(self, feature_repo, run_git, monkeypatch):
        monkeypatch.chdir(feature_repo)

        result = runner.invoke(app, ["-b", "no-such-branch", "-p", "src"])

        assert result.exit_code == 1
        assert run_git(feature_repo, "branch", "--show-current") == "feature"

    def test_not_a_repository(self, tmp_path, monkeypatch):
        plain_dir = tmp_path / "plain"
        plain_dir.mkdir()
        monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
        monkeypatch.chdir(plain_dir)

        result = runner.invoke(app, ["-b", "main", "-p", "src"])

        assert result.exit_code == 1
        assert "Git error" in result.output
        assert "Not in a git repository" in result.output
