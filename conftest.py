import pytest


@pytest.fixture(autouse=True)
def isolated_cache_home(monkeypatch, tmp_path_factory):
    """Keep default store paths out of the real user cache directory."""
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path_factory.mktemp("cache")))
