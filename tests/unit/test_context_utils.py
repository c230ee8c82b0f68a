"""
Unit Tests for the shared application context dependency
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import utils.context_utils as context_utils
from utils.context_utils import get_app_context


class TestGetAppContext:

    def test_concurrent_first_calls_share_one_context(self, monkeypatch):
        monkeypatch.setattr(context_utils, "_app_context", None)
        builds = []

        def slow_build():
            time.sleep(0.2)
            context = object()
            builds.append(context)
            return context

        monkeypatch.setattr(context_utils, "build_app_context", slow_build)
        barrier = threading.Barrier(4)

        def call():
            barrier.wait()
            return get_app_context()

        with ThreadPoolExecutor(max_workers=4) as pool:
            contexts = list(pool.map(lambda _: call(), range(4)))

        assert len(builds) == 1
        assert len({id(c) for c in contexts}) == 1
        assert contexts[0] is builds[0]

    def test_returns_existing_context_without_rebuilding(self, monkeypatch):
        existing = object()
        monkeypatch.setattr(context_utils, "_app_context", existing)

        def fail_build():
            raise AssertionError("context rebuilt")

        monkeypatch.setattr(context_utils, "build_app_context", fail_build)

        assert get_app_context() is existing
