from pathlib import Path

from postmatter.settings import Settings, choose_env_file


def test_defaults():
    s = Settings()

    assert s.CONTENT_DIR == Path("content/posts")
    assert s.CONTENT_ENCODING == "utf-8"
    assert s.INCLUDE_DRAFTS is False
    assert s.LOAD_WORKERS == 4


def test_values_read_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("CONTENT_DIR", str(tmp_path))
    monkeypatch.setenv("INCLUDE_DRAFTS", "true")
    monkeypatch.setenv("LOAD_WORKERS", "1")

    s = Settings()

    assert s.CONTENT_DIR == tmp_path
    assert s.INCLUDE_DRAFTS is True
    assert s.LOAD_WORKERS == 1


def test_choose_env_file_prefers_env_local(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: str(self) == ".env.local")
    assert choose_env_file() == ".env.local"


def test_choose_env_file_falls_back(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: False)
    assert choose_env_file() == ".env"
