import threading

import pytest

from vgrender.sync import CriticalSection


def _try_from_other_thread(section):
    outcome = []
    t = threading.Thread(target=lambda: outcome.append(section.try_lock()))
    t.start()
    t.join()
    return outcome[0]


def test_try_lock_fails_while_held():
    section = CriticalSection()
    section.lock()
    assert _try_from_other_thread(section) is False
    section.unlock()


def test_try_lock_succeeds_when_free():
    section = CriticalSection()
    assert section.try_lock() is True
    assert section.try_lock() is False
    section.unlock()
    assert section.try_lock() is True
    section.unlock()


def test_context_manager_holds_and_releases():
    section = CriticalSection()
    with section as held:
        assert held is section
        assert _try_from_other_thread(section) is False
    assert section.try_lock() is True
    section.unlock()


def test_unlock_without_lock_raises():
    section = CriticalSection()
    with pytest.raises(RuntimeError):
        section.unlock()


def test_protects_shared_counter():
    section = CriticalSection()
    counter = [0]

    def worker():
        for _ in range(1000):
            with section:
                value = counter[0]
                counter[0] = value + 1

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert counter[0] == 4000
    assert section.try_lock() is True
    section.unlock()