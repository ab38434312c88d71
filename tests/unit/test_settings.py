from oneaccount.settings import get_settings


def test_get_settings_is_cached():
    get_settings.cache_clear()
    s1 = get_settings()
    s2 = get_settings()
    assert s1 is s2  # lru_cache returns the same instance


def test_env_overrides_and_cache_clear(monkeypatch):
    monkeypatch.setenv("STAGED_TTL_SECONDS", "123")
    monkeypatch.setenv("CALLBACK_PATH", "auth/oa")
    get_settings.cache_clear()
    s = get_settings()
    assert s.staged_ttl_seconds == 123
    assert s.callback_path == "auth/oa"

    # cleanup: remove env and reset cache
    monkeypatch.delenv("STAGED_TTL_SECONDS", raising=False)
    monkeypatch.delenv("CALLBACK_PATH", raising=False)
    get_settings.cache_clear()
    s2 = get_settings()
    assert s2.staged_ttl_seconds != 123  # back to default or another env value
