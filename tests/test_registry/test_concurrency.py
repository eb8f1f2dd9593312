"""
Tests for concurrent shipping.
"""

from concurrent.futures import ThreadPoolExecutor

from boxer.config import BoxerConfig
from boxer.registry import BoxRegistry


def define_counter_box(b):
    b.view("base", lambda h, n: {"n": n})
    b.view("double", lambda h, n: {"double": n * 2}, extends="base")


class TestConcurrentShip:
    def test_frozen_registry_from_many_threads(self):
        registry = BoxRegistry(config=BoxerConfig(log_shipments=False))
        registry.define("counter", define_counter_box)
        registry.freeze()

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda n: registry.ship("counter", n, view="double"), range(500)))

        assert results == [{"n": n, "double": n * 2} for n in range(500)]

    def test_define_while_shipping(self):
        registry = BoxRegistry(config=BoxerConfig(log_shipments=False))
        registry.define("counter", define_counter_box)

        def define_many():
            for i in range(50):
                registry.define(f"box_{i}", define_counter_box)

        def ship_many():
            return [registry.ship("counter", n, view="double") for n in range(200)]

        with ThreadPoolExecutor(max_workers=4) as pool:
            definer = pool.submit(define_many)
            shippers = [pool.submit(ship_many) for _ in range(3)]
            definer.result()
            outputs = [future.result() for future in shippers]

        assert len(registry) == 51
        for output in outputs:
            assert output == [{"n": n, "double": n * 2} for n in range(200)]
