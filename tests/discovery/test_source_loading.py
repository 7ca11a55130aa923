"""Tests for locating and reading the game crate."""

from __future__ import annotations

import pytest

from panpack.discovery.source import load_source_module
from panpack.errors import DiscoveryError
from tests._fixtures.module_builder import ModuleBuilder


def test_load_source_module_prefers_lib_rs(module_builder: ModuleBuilder) -> None:
    root = module_builder.crate("pub fn render() {}\n", name="space-game")
    module_builder.write({"src/main.rs": "fn main() {}\n"})

    module = load_source_module(root)

    assert module.name == "space-game"
    assert module.ident == "space_game"
    assert module.entry_file == root.resolve() / "src" / "lib.rs"
    assert "pub fn render" in module.source


def test_load_source_module_falls_back_to_main_rs(module_builder: ModuleBuilder) -> None:
    root = module_builder.crate("pub fn init() {}\nfn main() {}\n", entry="src/main.rs")

    module = load_source_module(root)

    assert module.entry_file.name == "main.rs"


def test_load_source_module_requires_an_entry_file(module_builder: ModuleBuilder) -> None:
    module_builder.write({"Cargo.toml": '[package]\nname = "my_game"\n'})

    with pytest.raises(DiscoveryError, match="src/lib.rs or src/main.rs") as excinfo:
        load_source_module(module_builder.path())
    assert excinfo.value.stage == "discovery"


def test_load_source_module_requires_manifest(module_builder: ModuleBuilder) -> None:
    module_builder.write({"src/lib.rs": "pub fn render() {}\n"})

    with pytest.raises(DiscoveryError, match="No Cargo.toml"):
        load_source_module(module_builder.path())


def test_load_source_module_requires_package_name(module_builder: ModuleBuilder) -> None:
    module_builder.write({"Cargo.toml": "[workspace]\nmembers = []\n", "src/lib.rs": ""})

    with pytest.raises(DiscoveryError, match="crate name"):
        load_source_module(module_builder.path())
