"""Tests for import specifier resolution."""

from __future__ import annotations

from pathlib import Path, PureWindowsPath

import pytest

from svelte_hmr.config import HotOptions
from svelte_hmr.imports import (
    RUNTIME_DIR,
    posixify,
    resolve_adapter_import,
    resolve_hot_api_import,
    resolve_imports,
)

RELATIVE = HotOptions(absolute_imports=False)


class TestPosixify:
    def test_backslashes(self):
        assert posixify("C:\\runtime\\hot-api-esm.js") == "C:/runtime/hot-api-esm.js"

    def test_forward_slashes_unchanged(self):
        assert posixify("/opt/runtime/x.js") == "/opt/runtime/x.js"


class TestRelativeImports:
    def test_dom_adapter(self):
        assert resolve_adapter_import(RELATIVE) == "svelte-hmr/runtime/proxy-adapter-dom.js"

    def test_native_adapter(self):
        options = HotOptions(absolute_imports=False, native=True)
        assert (
            resolve_adapter_import(options)
            == "svelte-hmr/runtime/svelte-native/proxy-adapter-native.js"
        )

    def test_hot_api(self):
        assert resolve_hot_api_import(RELATIVE) == "svelte-hmr/runtime/hot-api-esm.js"


class TestAbsoluteImports:
    def test_rooted_at_runtime_dir(self):
        specifiers = resolve_imports(HotOptions())
        base = RUNTIME_DIR.as_posix() + "/"
        assert specifiers.hot_api_import == base + "hot-api-esm.js"
        assert specifiers.adapter_import == base + "proxy-adapter-dom.js"

    def test_absolute_and_forward_slashes(self):
        specifiers = resolve_imports(HotOptions(native=True))
        for specifier in (specifiers.hot_api_import, specifiers.adapter_import):
            assert Path(specifier).is_absolute()
            assert "\\" not in specifier

    def test_windows_runtime_dir_normalized(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(
            "svelte_hmr.imports.RUNTIME_DIR", PureWindowsPath("C:\\libs\\svelte_hmr\\runtime")
        )
        assert resolve_hot_api_import(HotOptions()) == "C:/libs/svelte_hmr/runtime/hot-api-esm.js"


class TestOverrides:
    def test_hot_api_override_wins(self):
        assert resolve_hot_api_import(HotOptions(), "my-hot-api.js") == "my-hot-api.js"

    def test_hot_api_override_normalized(self):
        assert resolve_hot_api_import(RELATIVE, "C:\\hmr\\api.js") == "C:/hmr/api.js"

    def test_adapter_override_beats_native(self):
        specifiers = resolve_imports(HotOptions(native=True), adapter="custom-adapter.js")
        assert specifiers.adapter_import == "custom-adapter.js"

    def test_empty_override_falls_back(self):
        specifiers = resolve_imports(RELATIVE, hot_api="", adapter="")
        assert specifiers.hot_api_import == "svelte-hmr/runtime/hot-api-esm.js"
        assert specifiers.adapter_import == "svelte-hmr/runtime/proxy-adapter-dom.js"
