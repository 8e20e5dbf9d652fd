from config import CACHE_TTL_MS, UPSTREAM_BASE_URL, Settings, load_env_file


class TestSettings:
    def test_defaults(self, monkeypatch):
        for var in ("PORT", "ODDSENGINE_API_KEY", "CORS_ORIGINS", "CACHE_CLEAR_REQUIRES_KEY"):
            monkeypatch.delenv(var, raising=False)

        settings = Settings()

        assert settings.port == 3001
        assert settings.api_key is None
        assert settings.upstream_base_url == UPSTREAM_BASE_URL
        assert settings.cache_ttl_ms == CACHE_TTL_MS
        assert settings.cache_ttl_seconds == 60
        assert settings.cache_clear_requires_key is False
        assert settings.validate() == ["ODDSENGINE_API_KEY"]

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("ODDSENGINE_API_KEY", "env-key")
        monkeypatch.setenv("CACHE_CLEAR_REQUIRES_KEY", "true")

        settings = Settings()

        assert settings.port == 8080
        assert settings.api_key_configured
        assert settings.cache_clear_requires_key is True
        assert settings.validate() == []

    def test_cors_headers_echo_listed_origin(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "http://localhost:8080,https://tools.example")
        settings = Settings()

        assert settings.cors_headers("https://tools.example")["Access-Control-Allow-Origin"] == "https://tools.example"
        assert "Access-Control-Allow-Origin" not in settings.cors_headers("https://evil.example")


class TestEnvFile:
    def test_env_file_supplies_api_key(self, monkeypatch, tmp_path):
        # setenv first so monkeypatch restores the variable's absence afterwards
        monkeypatch.setenv("ODDSENGINE_API_KEY", "placeholder")
        monkeypatch.delenv("ODDSENGINE_API_KEY")
        env_file = tmp_path / ".env"
        env_file.write_text("ODDSENGINE_API_KEY=from-dotenv\n")

        assert load_env_file(env_file) is True
        assert Settings().api_key == "from-dotenv"

    def test_env_file_does_not_override_real_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ODDSENGINE_API_KEY", "from-shell")
        env_file = tmp_path / ".env"
        env_file.write_text("ODDSENGINE_API_KEY=from-dotenv\n")

        load_env_file(env_file)

        assert Settings().api_key == "from-shell"

    def test_env_file_found_from_working_directory(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ODDSENGINE_API_KEY", "placeholder")
        monkeypatch.delenv("ODDSENGINE_API_KEY")
        (tmp_path / ".env").write_text("ODDSENGINE_API_KEY=cwd-key\n")
        monkeypatch.chdir(tmp_path)

        load_env_file()

        assert Settings().api_key == "cwd-key"
