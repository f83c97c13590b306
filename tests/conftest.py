import pytest

from docwf.domain.providers.provider_factory import ProviderFactory


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Prevent tests from accidentally using developer machine env vars.

    If a test needs an env var, it should set it explicitly via monkeypatch.
    """
    for name in (
        "OPENAI_API_KEY",
        "AZURE_OPENAI_API_KEY",
        "AZURE_OPENAI_ENDPOINT",
        "AZURE_OPENAI_DEPLOYMENT",
        "AZURE_OPENAI_API_VERSION",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_provider_registry():
    """Restore the provider registry after tests that register fakes."""
    import docwf.domain.providers  # noqa: F401  # built-ins registered

    original_registry = dict(ProviderFactory._registry)
    yield
    ProviderFactory._registry.clear()
    ProviderFactory._registry.update(original_registry)
