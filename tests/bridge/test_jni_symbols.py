"""Tests for JNI symbol mangling."""

from __future__ import annotations

import pytest

from panpack.bridge.jni import mangle, native_symbol


@pytest.mark.parametrize(
    "component, expected",
    [
        ("com.lucidum.panpan.MainActivity", "com_lucidum_panpan_MainActivity"),
        ("org/example/Game", "org_example_Game"),
        ("my_game", "my_1game"),
        ("a;b[c", "a_2b_3c"),
        ("café", "caf_000e9"),
        ("g\U0001d11e", "g_0d834_0dd1e"),
    ],
)
def test_mangle_escapes_like_the_jvm(component: str, expected: str) -> None:
    assert mangle(component) == expected


def test_native_symbol_joins_class_and_method() -> None:
    assert (
        native_symbol("com.lucidum.panpan.MainActivity", "nativeInit")
        == "Java_com_lucidum_panpan_MainActivity_nativeInit"
    )
