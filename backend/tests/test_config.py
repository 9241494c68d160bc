import pytest

from cad_converter.core.config import Settings


@pytest.fixture
def env(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service-role")
    monkeypatch.setenv("CAD_SERVICE_URL", "https://cad.example.com/")
    monkeypatch.delenv("CAD_SERVICE_TIMEOUT", raising=False)
    monkeypatch.delenv("CAD_BUCKET", raising=False)
    return monkeypatch


def test_from_env_defaults(env):
    settings = Settings.from_env().validate()

    assert settings.cad_service_url == "https://cad.example.com"
    assert settings.cad_service_timeout == 300
    assert settings.cad_bucket == "cad-files"


def test_missing_variables_are_named(env):
    env.delenv("SUPABASE_SERVICE_ROLE_KEY")
    env.setenv("CAD_SERVICE_URL", "   ")

    with pytest.raises(ValueError) as exc:
        Settings.from_env().validate()

    assert "SUPABASE_SERVICE_ROLE_KEY" in str(exc.value)
    assert "CAD_SERVICE_URL" in str(exc.value)
    assert "SUPABASE_URL," not in str(exc.value)


@pytest.mark.parametrize("timeout", ["0", "-5"])
def test_timeout_must_be_positive(env, timeout):
    env.setenv("CAD_SERVICE_TIMEOUT", timeout)

    with pytest.raises(ValueError, match="CAD_SERVICE_TIMEOUT"):
        Settings.from_env().validate()


def test_timeout_must_be_numeric(env):
    env.setenv("CAD_SERVICE_TIMEOUT", "five minutes")

    with pytest.raises(ValueError, match="CAD_SERVICE_TIMEOUT"):
        Settings.from_env()
