import io
import threading
from dataclasses import dataclass

import pytest

from be20kit.atomic import AtomicMap, AtomicSet, MapItem


@dataclass
class AB:
    a: int = 0
    b: int = 0


def test_atomic_set_basic():
    s = AtomicSet()
    assert len(s) == 0
    s.add("one")
    s.add("two")
    s.add("three")
    assert "one" in s
    assert "four" not in s
    assert len(s) == 3
    assert s.keys() == ["one", "three", "two"]


def test_atomic_set_presence_and_insert():
    s = AtomicSet()
    assert s.check_for_presence_and_insert("x") is False
    assert s.check_for_presence_and_insert("x") is True
    assert "x" in s


def test_atomic_set_presence_and_erase():
    s = AtomicSet()
    s.add("x")
    assert s.check_for_presence_and_erase("x") is True
    assert s.check_for_presence_and_erase("x") is False
    assert len(s) == 0


def test_atomic_set_discard_and_clear():
    s = AtomicSet()
    s.add(1)
    s.add(2)
    s.discard(1)
    s.discard(99)
    assert s.keys() == [2]
    s.clear()
    assert len(s) == 0


def test_atomic_map_default_creation():
    m = AtomicMap(AB)
    m["one"].a = 10
    m["one"].b = 10
    m["two"].a = 5
    m["three"].b = 10
    m["three"].b += 10
    m["three"].b += 10
    assert m["one"].a == 10
    assert m["one"].b == 10
    assert m["two"].a == 5
    assert m["two"].b == 0
    assert m["three"].b == 30
    assert len(m) == 3


def test_atomic_map_get_missing_raises():
    m = AtomicMap(int)
    with pytest.raises(KeyError):
        m.get("missing")
    assert "missing" not in m


def test_atomic_map_insert_duplicate_raises():
    m = AtomicMap(AB)
    m.insert("k", AB(1, 2))
    assert m.get("k") == AB(1, 2)
    with pytest.raises(KeyError):
        m.insert("k", AB())


def test_atomic_map_ordered_views():
    m = AtomicMap(AB)
    m.insert("b", AB(2))
    m.insert("a", AB(1))
    m.insert("c", AB(3))
    assert m.keys() == ["a", "b", "c"]
    assert [v.a for v in m.values()] == [1, 2, 3]
    assert [i.key for i in m.items()] == ["a", "b", "c"]
    m.clear()
    assert len(m) == 0


def test_atomic_map_write():
    m = AtomicMap(int)
    m.insert("y", 2)
    m.insert("x", 1)
    out = io.StringIO()
    m.write(out)
    assert out.getvalue() == " x: 1\n y: 2\n"


def test_map_item_compares_by_key():
    e1 = MapItem("hello", AB())
    e2 = MapItem("world", AB())
    assert e1 == e1
    assert e1 != e2
    assert e1 < e2
    assert MapItem("hello", AB(5)) == e1


def test_atomic_map_concurrent_creation():
    m = AtomicMap(list)

    def worker(n):
        for i in range(200):
            m[i % 10].append(n)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(m) == 10
    assert sum(len(v) for v in m.values()) == 800