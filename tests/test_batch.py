"""Tests for URL parsing, batch scoring and the CLI."""

import asyncio
import io
import json

import pytest
from typer.testing import CliRunner

from netscore.cli import app
from netscore.identity import Platform
from netscore.scoring.report import CompositeReport
from netscore.services.batch import load_url_file, parse_package_url, score_url_file, score_urls


async def fake_scorer(identity, url=None):
    return CompositeReport(url=url or identity.url, net_score=0.42)


class TestParsePackageUrl:
    """Tests for parse_package_url."""

    def test_github_repo(self):
        identity = parse_package_url("https://github.com/cloudinary/cloudinary_npm")
        assert identity.platform is Platform.SOURCE_CONTROL
        assert (identity.owner, identity.repo) == ("cloudinary", "cloudinary_npm")

    def test_github_extra_path_ignored(self):
        identity = parse_package_url("https://github.com/lodash/lodash/tree/main")
        assert (identity.owner, identity.repo) == ("lodash", "lodash")

    def test_github_git_suffix_stripped(self):
        assert parse_package_url("https://github.com/nullivex/nodist.git").repo == "nodist"

    def test_npm_package(self):
        identity = parse_package_url("https://www.npmjs.com/package/express")
        assert identity.is_registry
        assert identity.name == "express"

    def test_scoped_npm_package(self):
        assert parse_package_url("https://www.npmjs.com/package/@types/node").name == "@types/node"

    def test_surrounding_whitespace(self):
        assert parse_package_url("  https://www.npmjs.com/package/browserify\n").name == "browserify"

    def test_github_without_repo_rejected(self):
        with pytest.raises(ValueError):
            parse_package_url("https://github.com/lodash")

    def test_npm_non_package_page_rejected(self):
        with pytest.raises(ValueError):
            parse_package_url("https://www.npmjs.com/search?q=express")

    def test_unsupported_host_rejected(self):
        with pytest.raises(ValueError, match="Unsupported"):
            parse_package_url("https://pypi.org/project/requests")


class TestLoadUrlFile:
    """Tests for load_url_file."""

    def test_skips_blank_lines(self, tmp_path):
        path = tmp_path / "urls.txt"
        path.write_text("https://github.com/a/b\n\n   \nhttps://www.npmjs.com/package/c\n")
        assert load_url_file(str(path)) == ["https://github.com/a/b", "https://www.npmjs.com/package/c"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_url_file(str(tmp_path / "nope.txt"))


class TestScoreUrls:
    """Tests for score_urls."""

    def test_one_line_per_package_in_order(self):
        urls = ["https://github.com/a/b", "https://www.npmjs.com/package/c"]
        out = io.StringIO()

        result = asyncio.run(score_urls(urls, out, scorer=fake_scorer))

        lines = out.getvalue().splitlines()
        assert [json.loads(line)["URL"] for line in lines] == urls
        assert all(json.loads(line)["NetScore"] == 0.42 for line in lines)
        assert (result.total, result.scored, result.skipped) == (2, 2, 0)

    def test_unsupported_urls_skipped(self):
        urls = ["https://gitlab.com/a/b", "https://github.com/a/b"]
        out = io.StringIO()

        result = asyncio.run(score_urls(urls, out, scorer=fake_scorer))

        assert len(out.getvalue().splitlines()) == 1
        assert (result.total, result.scored, result.skipped) == (2, 1, 1)
        assert "gitlab.com" in result.error_details[0]

    def test_score_url_file(self, tmp_path):
        path = tmp_path / "urls.txt"
        path.write_text("https://github.com/a/b\nhttps://github.com/c/d\n")
        out = io.StringIO()

        result = asyncio.run(score_url_file(str(path), out, scorer=fake_scorer))

        assert result.scored == 2
        assert out.getvalue().endswith("\n")


class TestCli:
    """Tests for the netscore command line."""

    def setup_method(self):
        self.runner = CliRunner()

    @pytest.fixture(autouse=True)
    def quiet_logging(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "0")
        monkeypatch.delenv("LOG_FILE", raising=False)

    def test_version(self):
        result = self.runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_score_prints_ndjson(self, monkeypatch):
        monkeypatch.setattr("netscore.cli.score_package", fake_scorer)
        result = self.runner.invoke(app, ["score", "https://github.com/a/b"])

        assert result.exit_code == 0
        record = json.loads(result.stdout.strip().splitlines()[-1])
        assert record["URL"] == "https://github.com/a/b"
        assert record["NetScore"] == 0.42

    def test_score_rejects_unsupported_url(self):
        result = self.runner.invoke(app, ["score", "https://example.com/x"])
        assert result.exit_code == 1

    def test_urls_reports_skipped(self, tmp_path):
        path = tmp_path / "urls.txt"
        path.write_text("https://example.com/one\nhttps://example.com/two\n")

        result = self.runner.invoke(app, ["urls", str(path)])

        assert result.exit_code == 0
        assert "Skipped 2 of 2" in result.output

    def test_urls_missing_file(self, tmp_path):
        result = self.runner.invoke(app, ["urls", str(tmp_path / "missing.txt")])
        assert result.exit_code == 1
