"""Tests for frame_colours.core.config and core.logs."""

import logging
import os
from pathlib import Path

import pytest
from frame_colours.core.config import Settings, find_dotenv, read_dotenv
from frame_colours.core.logs import setup_logging

VARS = ['FRAME_COLOURS_TOP_K', 'FRAME_COLOURS_SLOTS', 'FRAME_COLOURS_FPS', 'FRAME_COLOURS_LOG_LEVEL']


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in VARS:
        monkeypatch.delenv(var, raising=False)


class TestSettings:
    def test_defaults(self):
        assert Settings.from_env() == Settings(top_k=5, slots=5, fps=0.0, log_level='WARNING')

    def test_reads_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv('FRAME_COLOURS_TOP_K', '8')
        monkeypatch.setenv('FRAME_COLOURS_SLOTS', '3')
        monkeypatch.setenv('FRAME_COLOURS_FPS', '29.97')
        monkeypatch.setenv('FRAME_COLOURS_LOG_LEVEL', 'debug')
        assert Settings.from_env() == Settings(top_k=8, slots=3, fps=29.97, log_level='DEBUG')

    def test_blank_uses_default(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv('FRAME_COLOURS_TOP_K', '')
        assert Settings.from_env().top_k == 5

    def test_non_integer_k(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv('FRAME_COLOURS_TOP_K', 'five')
        with pytest.raises(ValueError, match='FRAME_COLOURS_TOP_K'):
            Settings.from_env()

    def test_zero_k(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv('FRAME_COLOURS_TOP_K', '0')
        with pytest.raises(ValueError, match='>= 1'):
            Settings.from_env()

    def test_negative_fps(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv('FRAME_COLOURS_FPS', '-1')
        with pytest.raises(ValueError, match='FRAME_COLOURS_FPS'):
            Settings.from_env()

    def test_from_mapping(self):
        assert Settings.from_env({'FRAME_COLOURS_SLOTS': '9'}).slots == 9


class TestReadDotenv:
    def test_prefixed_keys_only(self, tmp_path: Path):
        f = tmp_path / '.env'
        f.write_text('FRAME_COLOURS_TOP_K=7\nOTHER_KEY=x\n')
        assert read_dotenv(f) == {'FRAME_COLOURS_TOP_K': '7'}

    def test_quotes_export_comments_and_blanks(self, tmp_path: Path):
        f = tmp_path / '.env'
        f.write_text('# comment\n\nexport FRAME_COLOURS_FPS="12.5"\nFRAME_COLOURS_LOG_LEVEL=\'info\'\nFRAME_COLOURS_SLOTS\n')
        assert read_dotenv(f) == {'FRAME_COLOURS_FPS': '12.5', 'FRAME_COLOURS_LOG_LEVEL': 'info'}


class TestFindDotenv:
    def test_finds_in_start_dir(self, tmp_path: Path):
        (tmp_path / '.env').write_text('X=1\n')
        assert find_dotenv(tmp_path) == tmp_path.resolve() / '.env'

    def test_finds_in_parent(self, tmp_path: Path):
        (tmp_path / '.env').write_text('X=1\n')
        sub = tmp_path / 'sub'
        sub.mkdir()
        assert find_dotenv(sub) == tmp_path.resolve() / '.env'

    def test_stops_at_git_dir(self, tmp_path: Path):
        (tmp_path / '.env').write_text('X=1\n')
        repo = tmp_path / 'repo'
        (repo / '.git').mkdir(parents=True)
        assert find_dotenv(repo) is None

    def test_stops_at_git_file(self, tmp_path: Path):
        (tmp_path / '.env').write_text('X=1\n')
        repo = tmp_path / 'repo'
        repo.mkdir()
        (repo / '.git').write_text('gitdir: ../elsewhere\n')
        assert find_dotenv(repo) is None


class TestLoad:
    def test_dotenv_values_used(self, tmp_path: Path):
        (tmp_path / '.git').mkdir()
        (tmp_path / '.env').write_text('FRAME_COLOURS_TOP_K=3\n')
        settings = Settings.load(cwd=tmp_path)
        assert settings.top_k == 3
        assert settings.env_path == tmp_path.resolve() / '.env'

    def test_environ_wins_over_dotenv(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        (tmp_path / '.git').mkdir()
        (tmp_path / '.env').write_text('FRAME_COLOURS_TOP_K=3\n')
        monkeypatch.setenv('FRAME_COLOURS_TOP_K', '8')
        assert Settings.load(cwd=tmp_path).top_k == 8

    def test_environ_not_modified(self, tmp_path: Path):
        (tmp_path / '.git').mkdir()
        (tmp_path / '.env').write_text('FRAME_COLOURS_SLOTS=2\n')
        Settings.load(cwd=tmp_path)
        assert 'FRAME_COLOURS_SLOTS' not in os.environ

    def test_no_dotenv(self, tmp_path: Path):
        (tmp_path / '.git').mkdir()
        settings = Settings.load(cwd=tmp_path)
        assert settings == Settings()
        assert settings.env_path is None

    def test_explicit_file(self, tmp_path: Path):
        custom = tmp_path / 'custom.env'
        custom.write_text('FRAME_COLOURS_FPS=24\n')
        assert Settings.load(env_file=str(custom)).fps == 24.0

    def test_explicit_file_missing(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            Settings.load(env_file=str(tmp_path / 'missing.env'))


class TestSetupLogging:
    def test_known_level(self):
        assert setup_logging('info') == logging.INFO
        assert logging.getLogger().level == logging.INFO

    def test_unknown_level_falls_back(self):
        assert setup_logging('chatty') == logging.WARNING
