"""Tests for the command-line interface."""

import csv
from unittest.mock import AsyncMock, patch

from typer.testing import CliRunner

from github_talent_sourcer import __version__
from github_talent_sourcer.cli import app
from github_talent_sourcer.config import Config, set_config
from github_talent_sourcer.models.contributor import ContributorRecord
from github_talent_sourcer.sdk import SourcingResult, TalentSourcer

runner = CliRunner()


def sourcing_result() -> SourcingResult:
    return SourcingResult(
        contributors=[
            ContributorRecord(
                username="alice",
                location="Berlin",
                profile_url="https://github.com/alice",
                commits=3,
                pull_requests=1,
                repositories=["acme/widgets"],
            )
        ],
        processed=["acme/widgets"],
        failed={"bogus": "Invalid repository reference 'bogus'"},
    )


class TestUsage:
    """Tests for invocations that only print usage."""

    def test_no_arguments(self):
        """Test that the bare command prints usage and succeeds."""
        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert "github-talent-sourcer <repo1>" in result.output

    def test_source_without_repositories(self):
        """Test that no repositories means usage, not an error."""
        result = runner.invoke(app, ["source"])

        assert result.exit_code == 0
        assert "Examples:" in result.output

    def test_version(self):
        """Test --version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestSourceCommand:
    """Tests for the source command."""

    def test_missing_token(self):
        """Test that a run without a token exits before any request."""
        set_config(Config(github_token=None))

        with patch.object(TalentSourcer, "source", new=AsyncMock()) as source:
            result = runner.invoke(app, ["source", "acme/widgets"])

        assert result.exit_code == 1
        assert "GITHUB_TOKEN" in result.output
        source.assert_not_called()

    def test_successful_run(self, test_config, tmp_path):
        """Test a full run writes the CSV and reports skipped references."""
        output = tmp_path / "report.csv"

        with patch.object(
            TalentSourcer, "source", new=AsyncMock(return_value=sourcing_result())
        ) as source:
            result = runner.invoke(
                app,
                [
                    "source",
                    "acme/widgets",
                    "bogus",
                    "--location",
                    "berlin, munich",
                    "-m",
                    "2",
                    "--no-issues",
                    "--output",
                    str(output),
                ],
            )

        assert result.exit_code == 0, result.output
        assert "Skipped bogus" in result.output

        references, options = source.call_args.args
        assert references == ["acme/widgets", "bogus"]
        assert options.location_filter == ["berlin", "munich"]
        assert options.min_contributions == 2
        assert options.include_issues is False
        assert options.include_commits is True

        with open(output, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert [row["Username"] for row in rows] == ["alice"]
        assert rows[0]["Total Contributions"] == "4"

    def test_output_dir_option(self, test_config, tmp_path):
        """Test the dated file lands in --output-dir."""
        target_dir = tmp_path / "reports"

        with patch.object(
            TalentSourcer, "source", new=AsyncMock(return_value=sourcing_result())
        ):
            result = runner.invoke(
                app, ["source", "acme/widgets", "--output-dir", str(target_dir), "-q"]
            )

        assert result.exit_code == 0, result.output
        written = list(target_dir.glob("contributors_*.csv"))
        assert len(written) == 1

    def test_defaults_from_config(self, tmp_path):
        """Test that configured filters apply when no options are passed."""
        set_config(
            Config(
                github_token="test_token",
                location_filter=["pune"],
                min_contributions=5,
                output_dir=tmp_path,
                repo_delay_seconds=0,
            )
        )

        with patch.object(
            TalentSourcer, "source", new=AsyncMock(return_value=SourcingResult())
        ) as source:
            result = runner.invoke(app, ["source", "acme/widgets", "-q"])

        assert result.exit_code == 0, result.output
        _, options = source.call_args.args
        assert options.location_filter == ["pune"]
        assert options.min_contributions == 5

    def test_repositories_without_subcommand(self, test_config, tmp_path):
        """Test that bare repository arguments run the source command."""
        output = tmp_path / "report.csv"

        with patch.object(
            TalentSourcer, "source", new=AsyncMock(return_value=sourcing_result())
        ) as source:
            result = runner.invoke(
                app, ["acme/widgets", "https://github.com/acme/gadgets", "-o", str(output)]
            )

        assert result.exit_code == 0, result.output
        references, _ = source.call_args.args
        assert references == ["acme/widgets", "https://github.com/acme/gadgets"]
        assert output.exists()

    def test_negative_threshold_in_environment(self, monkeypatch, tmp_path):
        """Test that a negative MIN_CONTRIBUTIONS is reported, not a traceback."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("GITHUB_TOKEN", "test_token")
        monkeypatch.setenv("MIN_CONTRIBUTIONS", "-1")

        result = runner.invoke(app, ["source", "acme/widgets"])

        assert result.exit_code == 1
        assert "must not be negative" in result.output

    def test_invalid_configured_options(self, tmp_path):
        """Test that out-of-range configured options end the run cleanly."""
        set_config(Config(github_token="test_token", min_contributions=-3, output_dir=tmp_path))

        with patch.object(TalentSourcer, "source", new=AsyncMock()) as source:
            result = runner.invoke(app, ["source", "acme/widgets"])

        assert result.exit_code == 1
        assert "Invalid options" in result.output
        source.assert_not_called()

    def test_unexpected_error(self, test_config):
        """Test that an unexpected failure exits with status 1."""
        with patch.object(
            TalentSourcer, "source", new=AsyncMock(side_effect=RuntimeError("boom"))
        ):
            result = runner.invoke(app, ["source", "acme/widgets"])

        assert result.exit_code == 1
        assert "boom" in result.output


class TestCheckToken:
    """Tests for the check-token command."""

    def test_configured(self, test_config):
        result = runner.invoke(app, ["check-token"])

        assert result.exit_code == 0
        assert "configured" in result.output

    def test_not_configured(self):
        set_config(Config(github_token=None))

        result = runner.invoke(app, ["check-token"])

        assert result.exit_code == 1
        assert "No GitHub token" in result.output
