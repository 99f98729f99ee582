"""Shared test fixtures."""

from __future__ import annotations

import io

import pytest

from pmbuild import platform_linux, platform_macos, platform_wasm
from pmbuild.platforms import get_target_profile
from pmbuild.reporter import Reporter


@pytest.fixture(autouse=True)
def _no_forced_color(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FORCE_COLOR", raising=False)


@pytest.fixture
def stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def reporter(stream: io.StringIO) -> Reporter:
    return Reporter(stream=stream, color=False)


@pytest.fixture
def fixed_host(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin CPU counts and architecture so profiles do not query the real host."""
    for module in (platform_linux, platform_macos, platform_wasm):
        monkeypatch.setattr(module, "get_cpu_count", lambda: 2)
    monkeypatch.setattr("pmbuild.platform_macos.get_arch", lambda: "arm64")


@pytest.fixture
def profile_for(tmp_path, fixed_host):
    def make(target):
        return get_target_profile(target, tmp_path)

    return make
