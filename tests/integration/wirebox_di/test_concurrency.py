"""Integration tests for concurrent container access."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

from wirebox_di import Container


class Connection:
    instance_count = 0
    count_lock = threading.Lock()

    def __init__(self):
        with Connection.count_lock:
            Connection.instance_count += 1
        time.sleep(0.01)


class Repository:
    def __init__(self, connection: Connection):
        self.connection = connection


class TestConcurrentResolution:
    """Test the container under concurrent callers."""

    def setup_method(self):
        Connection.instance_count = 0

    def test_shared_implicit_service_constructed_once(self):
        """Test that racing get_or_create calls construct a shared class once."""
        container = Container()
        container.share(Connection)

        with ThreadPoolExecutor(max_workers=8) as executor:
            repositories = list(executor.map(lambda _: container.get_or_create(Repository), range(32)))

        assert Connection.instance_count == 1
        assert len({id(repository.connection) for repository in repositories}) == 1
        assert len({id(repository) for repository in repositories}) == 32

    def test_transient_service_constructed_per_call(self):
        """Test that transient services are still constructed per request."""
        container = Container()

        with ThreadPoolExecutor(max_workers=4) as executor:
            list(executor.map(lambda _: container.get_or_create(Connection), range(8)))

        assert Connection.instance_count == 8

    def test_concurrent_registration(self):
        """Test that concurrent set calls all land in the registry."""
        container = Container()

        def register(index):
            container.set(f"service.{index}", index)
            container.alias(f"alias.{index}", f"service.{index}")

        with ThreadPoolExecutor(max_workers=8) as executor:
            list(executor.map(register, range(50)))

        assert all(container.get(f"alias.{index}") == index for index in range(50))

    def test_extend_while_resolving(self):
        """Test that decorators added concurrently are applied exactly once each."""
        container = Container()
        container.set("counter", [])
        container.share("counter")

        def extend(index):
            container.extend("counter", lambda counter: counter + [index])
            return container.get("counter")

        with ThreadPoolExecutor(max_workers=4) as executor:
            list(executor.map(extend, range(10)))

        assert sorted(container.get("counter")) == list(range(10))
