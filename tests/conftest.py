"""
Shared pytest fixtures for taskol tests.

Fixtures are automatically discovered by pytest when placed in conftest.py.
"""

import pytest
from pathlib import Path
from click.testing import CliRunner

from taskol import config


# =============================================================================
# ISOLATION
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """
    Point HOME at a temporary directory.

    Keeps ~/.taskol/config.yaml, logs and errors.jsonl of the machine running
    the tests out of the picture.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    return home


@pytest.fixture(autouse=True)
def reset_config_cache():
    """Reset config cache before each test to ensure isolation."""
    config._CONFIG_CACHE = None
    yield
    config._CONFIG_CACHE = None


# =============================================================================
# CLI FIXTURES
# =============================================================================

@pytest.fixture
def cli_runner():
    """
    Provide Click CLI test runner.

    Usage:
        def test_my_command(cli_runner):
            from taskol.cli import cli
            result = cli_runner.invoke(cli, ['sync', '--dry-run'])
            assert result.exit_code == 0
    """
    return CliRunner()


# =============================================================================
# WORK TREE FIXTURES
# =============================================================================

def make_dirs(root: Path, *relative: str) -> None:
    """Create directories below root."""
    for rel in relative:
        (root / rel).mkdir(parents=True, exist_ok=True)


@pytest.fixture
def work_tree(tmp_path):
    """
    Create a target tree with a few projects and task folders.

    Layout:
        work/
          Project Foo_ABC/
            t_20230105_Design_Review/
            t_FinalReview/
            notes/                    (not a task: no t_ prefix)
            t_readme.txt              (file, not a directory)
          XYZ(案件)/
            t_230301_Kickoff/
          #archive/
            t_20200101_Old/           (ignored project)
          !skip.txt                   (file)

    Returns:
        Path to the work/ directory
    """
    work = tmp_path / "work"
    make_dirs(
        work,
        "Project Foo_ABC/t_20230105_Design_Review",
        "Project Foo_ABC/t_FinalReview",
        "Project Foo_ABC/notes",
        "XYZ(案件)/t_230301_Kickoff",
        "#archive/t_20200101_Old",
    )
    (work / "Project Foo_ABC" / "t_readme.txt").write_text("not a task")
    (work / "!skip.txt").write_text("ignored")
    return work


@pytest.fixture
def link_dir(tmp_path):
    """Empty directory for links."""
    links = tmp_path / "links"
    links.mkdir()
    return links
