from pathlib import Path

import pytest

from scoped_config.errors import ConfigIOError, PreconditionError
from scoped_config.store import ScopedStore

CONFIG = """\
# comments are not kept
[server]
host = example.org
port = 8080
; neither are these
[client]
retries = 3
greeting = it\\'s \\"quoted\\"
"""


def _contents(store: ScopedStore) -> dict[str, dict[str, str]]:
    return {scope: dict(store.snapshot().scope(scope).values) for scope in store.scopes()}


def test_dump_requires_a_read(tmp_path: Path) -> None:
    with pytest.raises(PreconditionError):
        ScopedStore().dump(tmp_path / "out.config")


def test_dump_format(tmp_path: Path) -> None:
    source = tmp_path / "in.config"
    source.write_text("[s]\nk = v\n", encoding="utf-8")
    store = ScopedStore()
    store.read(source)
    out = tmp_path / "out.config"
    store.dump(out)
    assert out.read_text(encoding="utf-8") == f"# Generated dump of:\n# {source}\n\n[s]\n  k = v\n"


def test_dump_then_read_reproduces_pairs(tmp_path: Path) -> None:
    source = tmp_path / "in.config"
    source.write_text(CONFIG, encoding="utf-8")
    original = ScopedStore()
    original.read(source)

    out = tmp_path / "out.config"
    original.dump(out)

    reread = ScopedStore()
    reread.read(out)
    assert _contents(reread) == _contents(original)
    assert reread.get_str("client", "greeting") == "it's \"quoted\""


def test_dump_lists_every_source(tmp_path: Path) -> None:
    first = tmp_path / "first.config"
    second = tmp_path / "second.config"
    first.write_text("[a]\nk = 1\n", encoding="utf-8")
    second.write_text("[a]\nk = 2\n[b]\nx = y\n", encoding="utf-8")
    store = ScopedStore()
    store.read(first)
    store.read(second)

    text = store.render()
    assert text.startswith(f"# Generated dump of:\n# {first}\n# {second}\n")
    assert "  k = 2\n" in text
    assert "[b]\n  x = y\n" in text


def test_dump_to_unwritable_path(tmp_path: Path) -> None:
    source = tmp_path / "in.config"
    source.write_text("[s]\nk = v\n", encoding="utf-8")
    store = ScopedStore()
    store.read(source)
    with pytest.raises(ConfigIOError):
        store.dump(tmp_path / "no such dir" / "out.config")
