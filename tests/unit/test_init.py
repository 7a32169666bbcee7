from __future__ import annotations

import aretryhttp


def test_version() -> None:
    assert isinstance(aretryhttp.__version__, str)


def test_all_exports_exist() -> None:
    for name in aretryhttp.__all__:
        assert hasattr(aretryhttp, name), name
