from __future__ import annotations

import pytest

from recordmap import Ref


def test_ref_get_and_set() -> None:
    ref: Ref[int] = Ref()
    assert ref.get() is None

    ref.set(3)

    assert ref.get() == 3
    assert ref == Ref(3)
    assert repr(ref) == "Ref(3)"


def test_ref_is_unhashable() -> None:
    with pytest.raises(TypeError):
        hash(Ref(1))
