from __future__ import annotations

import pytest

from smartcart.core.navigation import redirect_for


@pytest.mark.parametrize(
    ("role", "path", "expected"),
    [
        ("owner", "/shop", "/dashboard"),
        ("owner", "/cart", "/dashboard"),
        ("owner", "/recipes/3", "/dashboard"),
        ("owner", "/dashboard", None),
        ("shopper", "/dashboard", "/shop"),
        ("shopper", "/shop", None),
        ("shopper", "/recipes", None),
        (None, "/dashboard", "/auth"),
        (None, "/shop", None),
        (None, "/cart?x=1", None),
        ("owner", "/auth", None),
    ],
)
def test_redirect_for(role, path, expected) -> None:
    assert redirect_for(role, path) == expected
