import pytest

from tests.fakes import (
    FakeErroredVerificationCache,
    FakeNotifier,
    FakeUoW,
    FakeVerificationCache,
    seeded_repo,
)


@pytest.fixture()
def seed():
    return seeded_repo()


@pytest.fixture()
def uow(seed):
    repo, _ = seed
    return FakeUoW(repo)


@pytest.fixture()
def cache():
    return FakeVerificationCache()


@pytest.fixture()
def errored_cache():
    return FakeErroredVerificationCache()


@pytest.fixture()
def notifier():
    return FakeNotifier()


@pytest.fixture()
def failing_notifier():
    return FakeNotifier(fail=True)


@pytest.fixture()
def hash_password_stub():
    return lambda p: "hashed-" + p


@pytest.fixture(autouse=True)
def patch_code(monkeypatch):
    """
    Make the 4-digit code deterministic in all tests.
    You can override in a specific test by re-monkeypatching.
    """
    from spectrum_accounts.domain import services as domain_services

    monkeypatch.setattr(domain_services, "generate_code", lambda: "0734")
    yield
