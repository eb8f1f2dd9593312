"""
Tests for the testing utilities.
"""

from boxer.testing import CallRecorder, isolated_registry


class TestIsolatedRegistry:
    def test_fresh_registry_cleared_on_exit(self):
        with isolated_registry() as registry:
            registry.define("thing", lambda b: b.view("base", lambda h, obj: {"v": obj}))
            assert registry.ship("thing", 1) == {"v": 1}
        assert len(registry) == 0

    def test_registries_are_independent(self):
        with isolated_registry() as first, isolated_registry() as second:
            first.define("thing", lambda b: None)
            assert "thing" not in second


class TestCallRecorder:
    def test_records_calls(self):
        recorder = CallRecorder()
        add = recorder.wrap("add", lambda a, b=0: a + b)

        assert add(1, b=2) == 3
        add(5)

        assert recorder.count("add") == 2
        assert recorder.calls[0] == ("add", (1,), {"b": 2})
        assert recorder.labels() == ["add", "add"]

    def test_keeps_function_name(self):
        def is_owner(obj):
            return True

        assert CallRecorder().wrap("owner", is_owner).__name__ == "is_owner"

    def test_reset(self):
        recorder = CallRecorder()
        recorder.wrap("f", lambda: None)()
        recorder.reset()
        assert recorder.count("f") == 0
