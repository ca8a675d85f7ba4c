"""Tests for create_app wiring from injected settings."""

from core.config import Settings
from main import create_app


def _settings(**overrides: object) -> Settings:
    return Settings(
        app_env="test",
        app_name="Injected API",
        database_url="sqlite+aiosqlite:///:memory:",
        **overrides,
    )


class TestCreateApp:
    def test_uses_the_given_settings(self) -> None:
        settings = _settings()

        app = create_app(settings)

        assert app.title == "Injected API"
        assert app.state.settings is settings

    def test_engine_is_built_from_the_given_database_url(self) -> None:
        app = create_app(_settings())

        assert app.state.engine.url.drivername == "sqlite+aiosqlite"
        assert app.state.session_factory.kw["bind"] is app.state.engine

    def test_each_app_gets_its_own_engine(self) -> None:
        first = create_app(_settings())
        second = create_app(_settings())

        assert first.state.engine is not second.state.engine
