import pytest


@pytest.fixture(autouse=True)
def _clear_portfolio_env(monkeypatch):
    monkeypatch.delenv("PORTFOLIO_ENV", raising=False)
