import threading
from pathlib import Path

from scoped_config.store import ScopedStore
from scoped_config.sync import SynchronizedStore


def _make_store(tmp_path: Path) -> tuple[SynchronizedStore, list[Path]]:
    paths = []
    for index in range(4):
        path = tmp_path / f"part{index}.config"
        lines = [f"[scope {index}]"] + [f"key {n} = {index * 1000 + n}" for n in range(200)]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        paths.append(path)
    return SynchronizedStore(ScopedStore()), paths


def test_synchronized_store_thread_safety_smoke(tmp_path: Path) -> None:
    store, paths = _make_store(tmp_path)
    errors: list[Exception] = []

    def reader(path: Path) -> None:
        try:
            for _ in range(20):
                store.read(path)
        except Exception as exc:  # noqa: BLE001
            errors.append(exc)

    def querier() -> None:
        try:
            for _ in range(500):
                for name in store.scopes():
                    # A scope that is visible is always complete.
                    index = int(name.split()[-1])
                    assert store.get_int(name, "key 199") == index * 1000 + 199
        except Exception as exc:  # noqa: BLE001
            errors.append(exc)

    threads = [threading.Thread(target=reader, args=(path,)) for path in paths]
    threads += [threading.Thread(target=querier) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert not errors
    assert sorted(store.scopes()) == [f"scope {index}" for index in range(4)]
    assert len(store.provenance) == 80


def test_synchronized_store_delegates(tmp_path: Path) -> None:
    store, paths = _make_store(tmp_path)
    assert store.toggle_strict_mode() is False
    store.read(paths[0])
    assert store.strict
    assert store.get_str("scope 0", "key 5") == "5"
    assert store.get_float("scope 0", "missing", 1.5) == 1.5
    assert store.get_bool("scope 0", "key 0") is False
    assert store.snapshot().scope("scope 0") is not None
    out = tmp_path / "out.config"
    store.dump(out)
    store.clear()
    assert store.scopes() == []
    store.read(out)
    assert store.raw("scope 0", "key 7") == "7"
