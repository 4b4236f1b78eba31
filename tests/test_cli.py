"""Integration tests for the csv-preview command line.

Runs the CLI as a subprocess the way a user would, with an isolated config
directory so local settings cannot affect the results.
"""

import os
import subprocess
import sys

import pytest


@pytest.fixture
def cli_env(tmp_path):
    """Environment with an empty config directory and UTF-8 output."""
    env = {
        key: value for key, value in os.environ.items() if not key.startswith("CSV_PREVIEW_")
    }
    env["XDG_CONFIG_HOME"] = str(tmp_path / "config")
    env["PYTHONIOENCODING"] = "utf-8"
    env["COLUMNS"] = "200"
    return env


@pytest.fixture
def people_csv(tmp_path):
    """CSV file with a quoted cell."""
    path = tmp_path / "people.csv"
    path.write_text('id,name\n1,Alice\n2,"Bob, Jr."\n3,alicia\n', encoding="utf-8")
    return path


def run_cli(args, env):
    return subprocess.run(
        [sys.executable, "-m", "csv_preview.cli", *args],
        capture_output=True,
        text=True,
        encoding="utf-8",
        env=env,
    )


# --- open ---


def test_open_writes_default_output(people_csv, cli_env):
    """Test that open writes <stem>.preview.html next to the input."""
    result = run_cli(["open", str(people_csv)], cli_env)

    assert result.returncode == 0, result.stdout + result.stderr
    output = people_csv.with_name("people.preview.html")
    assert output.exists()
    html = output.read_text(encoding="utf-8")
    assert "<th>name</th>" in html
    assert "Bob, Jr." in html
    assert "Generated preview" in result.stdout


def test_open_custom_output_and_search(people_csv, tmp_path, cli_env):
    """Test --output and --search."""
    output = tmp_path / "out" / "preview.html"

    result = run_cli(
        ["open", str(people_csv), "--output", str(output), "--search", "ali"], cli_env
    )

    assert result.returncode == 0, result.stdout + result.stderr
    assert 'value="ali"' in output.read_text(encoding="utf-8")
    assert "1 of 2 matches" in result.stdout


def test_open_rejects_non_csv(tmp_path, cli_env):
    """Test that content that does not look like CSV is refused without --force."""
    path = tmp_path / "notes.txt"
    path.write_text("Shopping list\nmilk, eggs\nbread\n", encoding="utf-8")

    result = run_cli(["open", str(path)], cli_env)

    assert result.returncode == 1
    assert "Error:" in result.stdout
    assert "does not appear to be a CSV file" in result.stdout
    assert not path.with_name("notes.preview.html").exists()


def test_open_force(tmp_path, cli_env):
    """Test that --force previews any text file."""
    path = tmp_path / "notes.txt"
    path.write_text("Shopping list\nmilk, eggs\nbread\n", encoding="utf-8")

    result = run_cli(["open", str(path), "--force"], cli_env)

    assert result.returncode == 0, result.stdout + result.stderr
    assert path.with_name("notes.preview.html").exists()


def test_open_language_id(tmp_path, cli_env):
    """Test that a declared csv language id skips detection."""
    path = tmp_path / "export.txt"
    path.write_text("single line of text", encoding="utf-8")

    result = run_cli(["open", str(path), "--language-id", "csv"], cli_env)

    assert result.returncode == 0, result.stdout + result.stderr


def test_open_missing_file(tmp_path, cli_env):
    """Test the error for a missing input file."""
    result = run_cli(["open", str(tmp_path / "missing.csv")], cli_env)

    assert result.returncode == 1
    assert "File not found" in result.stdout


def test_open_parse_error(tmp_path, cli_env):
    """Test that malformed quoting is reported as an error."""
    path = tmp_path / "broken.csv"
    path.write_text('id,name\n1,"unterminated\n', encoding="utf-8")

    result = run_cli(["open", str(path)], cli_env)

    assert result.returncode == 1
    assert "Error" in result.stdout


def test_open_escapes_markup_in_paths(tmp_path, cli_env):
    """Test that square brackets in a file name are printed literally."""
    path = tmp_path / "[bold]x.csv"
    path.write_text("a,b\n1,2\n", encoding="utf-8")

    result = run_cli(["open", str(path)], cli_env)

    assert result.returncode == 0, result.stdout + result.stderr
    assert "[bold]x.preview.html" in result.stdout


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("CSV_PREVIEW_DELIMITER", ""),
        ("CSV_PREVIEW_DELIMITER", ";;"),
        ("CSV_PREVIEW_ENCODING", "bogus"),
    ],
)
def test_open_ignores_invalid_env_settings(people_csv, cli_env, key, value):
    """Test that an unusable delimiter or encoding override falls back to the default."""
    cli_env[key] = value

    result = run_cli(["open", str(people_csv)], cli_env)

    assert result.returncode == 0, result.stdout + result.stderr
    assert "Generated preview" in result.stdout


# --- search ---


def test_search_lists_matches(people_csv, cli_env):
    """Test that matches are listed with a count."""
    result = run_cli(["search", str(people_csv), "ALI"], cli_env)

    assert result.returncode == 0, result.stdout + result.stderr
    assert "Alice" in result.stdout
    assert "alicia" in result.stdout
    assert "2 matches" in result.stdout


def test_search_no_matches(people_csv, cli_env):
    """Test output when nothing matches."""
    result = run_cli(["search", str(people_csv), "zzz"], cli_env)

    assert result.returncode == 0
    assert "No matches found" in result.stdout


def test_search_limit(people_csv, cli_env):
    """Test that --limit caps the listed matches but not the count."""
    result = run_cli(["search", str(people_csv), "a", "--limit", "1"], cli_env)

    assert result.returncode == 0, result.stdout + result.stderr
    assert "more not shown" in result.stdout


def test_search_rejects_negative_limit(people_csv, cli_env):
    """Test that a negative --limit is a usage error."""
    result = run_cli(["search", str(people_csv), "a", "--limit", "-1"], cli_env)

    assert result.returncode == 2
    assert "must be zero or greater" in result.stderr


def test_search_zero_limit_prints_count(people_csv, cli_env):
    """Test that --limit 0 lists nothing but still reports the count."""
    result = run_cli(["search", str(people_csv), "ali", "--limit", "0"], cli_env)

    assert result.returncode == 0, result.stdout + result.stderr
    assert "2 more not shown" in result.stdout
    assert "2 matches" in result.stdout


# --- sniff ---


def test_sniff_csv(tmp_path, cli_env):
    """Test exit code 0 for CSV-shaped content, whatever the extension."""
    path = tmp_path / "export.dat"
    path.write_text("id,name\n1,Alice\n2,Bob", encoding="utf-8")

    result = run_cli(["sniff", str(path)], cli_env)

    assert result.returncode == 0
    assert "Looks like CSV" in result.stdout


def test_sniff_not_csv(tmp_path, cli_env):
    """Test exit code 1 for content with inconsistent comma counts."""
    path = tmp_path / "notes.txt"
    path.write_text("a,b\nc\n", encoding="utf-8")

    result = run_cli(["sniff", str(path)], cli_env)

    assert result.returncode == 1
    assert "Does not look like CSV" in result.stdout


# --- general ---


def test_no_command_prints_help(cli_env):
    """Test that running without a command shows help and succeeds."""
    result = run_cli([], cli_env)

    assert result.returncode == 0
    assert "open" in result.stdout


def test_version(cli_env):
    """Test --version output."""
    result = run_cli(["--version"], cli_env)

    assert result.returncode == 0
    assert "csv-preview" in result.stdout
