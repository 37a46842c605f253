import threading

import pytest

from responsive.services.service_locator import (
    ServiceAlreadyRegisteredError,
    ServiceLocator,
    ServiceNotFoundError,
    services,
)


def test_register_and_get():
    services.register("config", {"env": "test"})
    assert services.get("config")["env"] == "test"


def test_double_register_raises():
    services.register("x", 1)
    with pytest.raises(ServiceAlreadyRegisteredError):
        services.register("x", 2)
    services.register("x", 3, allow_override=True)
    assert services.get("x") == 3


def test_missing_service():
    assert services.try_get("missing", 123) == 123
    with pytest.raises(ServiceNotFoundError):
        services.get("missing")


def test_override_context_restores():
    services.register("viewport", "real")
    with services.override_context(viewport="fake", extra=1):
        assert services.get("viewport") == "fake"
        assert services.get("extra") == 1
    assert services.get("viewport") == "real"
    assert services.try_get("extra") is None


def test_get_or_create_builds_once():
    calls = []

    def factory():
        calls.append(1)
        return object()

    first = services.get_or_create("viewport", factory)
    assert services.get_or_create("viewport", factory) is first
    assert calls == [1]


def test_get_or_create_concurrent_callers_share_instance():
    local = ServiceLocator()
    start = threading.Barrier(8)
    results = []
    errors = []

    def worker():
        start.wait()
        try:
            results.append(local.get_or_create("viewport", object))
        except Exception as exc:  # noqa: BLE001 - collected for assertion
            errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []
    assert len(results) == 8
    assert all(r is results[0] for r in results)


def test_local_instance_isolated():
    local = ServiceLocator()
    local.register("foo", 1)
    assert services.try_get("foo") is None
    assert local.get("foo") == 1
