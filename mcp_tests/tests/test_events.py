import pytest

from core.cache import TTLLRUCache
from core.events import EvictionEvent, EvictionNotifier, EvictionStats


def test_notifier_publishes_in_registration_order():
    n = EvictionNotifier()
    calls = []

    n.subscribe(lambda e: calls.append(("first", e.key)))
    n.subscribe(lambda e: calls.append(("second", e.key)))

    n.publish(EvictionEvent(key="k", value=1, reason="capacity"))

    assert calls == [("first", "k"), ("second", "k")]
    assert len(n) == 2


def test_notifier_rejects_non_callable():
    n = EvictionNotifier()
    with pytest.raises(TypeError):
        n.subscribe("not callable")


def test_notifier_allows_unsubscribe_during_publish():
    n = EvictionNotifier()
    calls = []

    def once(e):
        calls.append("once")
        n.unsubscribe(once)

    n.subscribe(once)
    n.subscribe(lambda e: calls.append("always"))

    ev = EvictionEvent(key="k", value=1, reason="expired")
    n.publish(ev)
    n.publish(ev)

    assert calls == ["once", "always", "always"]


def test_subscriber_error_propagates_after_insert():
    c = TTLLRUCache(capacity=1)

    def boom(e):
        raise RuntimeError("handler failed")

    c.subscribe(boom)
    c.set("a", 1)

    with pytest.raises(RuntimeError):
        c.set("b", 2)

    assert "a" not in c
    assert "b" in c
    assert c.size == 1


def test_shared_notifier_across_caches():
    n = EvictionNotifier()
    seen = []
    n.subscribe(seen.append)

    c1 = TTLLRUCache(capacity=1, notifier=n)
    c2 = TTLLRUCache(capacity=1, notifier=n)

    c1.set("a", 1)
    c1.set("b", 2)
    c2.set("x", 1)
    c2.set("y", 2)

    assert [e.key for e in seen] == ["a", "x"]
    assert c1.notifier is c2.notifier


def test_eviction_stats_counts_by_reason():
    stats = EvictionStats()
    stats(EvictionEvent(key="a", value=1, reason="capacity"))
    stats(EvictionEvent(key="b", value=2, reason="expired"))
    stats(EvictionEvent(key="c", value=3, reason="expired"))

    assert stats.as_dict() == {"capacity": 1, "expired": 2, "total": 3}
