import pytest

from pmbuild.common import RequirementKind, Target, ToolRequirement, extract_version, version_key
from pmbuild.errors import MissingDependencyError
from pmbuild.verify import check_cmake, probe_requirements, remediate, verify_dependencies


def _which_all_but(*absent):
    return lambda name: None if name in absent else f"/usr/bin/{name}"


@pytest.fixture
def cmake_ok(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("pmbuild.verify.run_capture", lambda cmd: "cmake version 3.28.3")


def test_extract_version_from_cmake_banner() -> None:
    assert extract_version("cmake version 3.28.3") == "3.28.3"
    assert extract_version("no version here") == ""
    assert version_key("3.10.2") < (3, 16) <= version_key("3.16")


def test_web_reports_every_missing_tool(profile_for, reporter, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("pmbuild.verify.shutil.which", lambda name: None)

    with pytest.raises(MissingDependencyError) as excinfo:
        verify_dependencies(profile_for(Target.WEB), reporter)

    message = str(excinfo.value)
    for tool in ("emcmake", "emmake", "emcc"):
        assert tool in message
    assert excinfo.value.missing == ("emcmake", "emmake", "emcc")
    assert any("emsdk_env.sh" in hint for hint in excinfo.value.hints)


def test_web_single_missing_tool_is_fatal(profile_for, reporter, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("pmbuild.verify.shutil.which", _which_all_but("emcc"))

    with pytest.raises(MissingDependencyError) as excinfo:
        verify_dependencies(profile_for(Target.WEB), reporter)

    assert excinfo.value.missing == ("emcc",)


def test_web_toolchain_found(profile_for, reporter, stream, cmake_ok, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("pmbuild.verify.shutil.which", _which_all_but())

    deps = verify_dependencies(profile_for(Target.WEB), reporter)

    assert deps.library_prefixes == {}
    assert "[SUCCESS] Emscripten toolchain found" in stream.getvalue()


def test_linux_missing_library_gives_distro_hints(profile_for, reporter, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("pmbuild.platform_linux.check_library", lambda name: name == "sdl2")

    with pytest.raises(MissingDependencyError) as excinfo:
        verify_dependencies(profile_for(Target.LINUX), reporter)

    assert "SDL2_ttf" in str(excinfo.value)
    assert excinfo.value.missing == ("SDL2_ttf",)
    hints = " ".join(excinfo.value.hints)
    assert "apt-get" in hints
    assert "dnf" in hints
    assert "pacman" in hints


def test_linux_libraries_and_cmake_present(profile_for, reporter, stream, cmake_ok, monkeypatch) -> None:
    monkeypatch.setattr("pmbuild.platform_linux.check_library", lambda name: True)
    monkeypatch.setattr("pmbuild.verify.shutil.which", _which_all_but())

    deps = verify_dependencies(profile_for(Target.LINUX), reporter)

    assert deps.cmake_version == "3.28.3"
    assert deps.library_prefixes == {}
    assert "Found CMake 3.28.3" in stream.getvalue()


def test_missing_cmake_is_fatal(reporter, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("pmbuild.verify.shutil.which", _which_all_but("cmake"))

    with pytest.raises(MissingDependencyError) as excinfo:
        check_cmake(reporter)

    assert "3.16" in str(excinfo.value)
    assert excinfo.value.missing == ("cmake",)


def test_old_cmake_is_fatal(reporter, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("pmbuild.verify.shutil.which", _which_all_but())
    monkeypatch.setattr("pmbuild.verify.run_capture", lambda cmd: "cmake version 3.10.2")

    with pytest.raises(MissingDependencyError) as excinfo:
        check_cmake(reporter)

    assert "too old" in str(excinfo.value)


def test_unreadable_cmake_version_is_a_warning(reporter, stream, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("pmbuild.verify.shutil.which", _which_all_but())
    monkeypatch.setattr("pmbuild.verify.run_capture", lambda cmd: "")

    assert check_cmake(reporter) == ""
    assert "[WARNING]" in stream.getvalue()


def test_macos_without_homebrew_only_warns(profile_for, reporter, stream, cmake_ok, monkeypatch) -> None:
    monkeypatch.setattr("pmbuild.verify.shutil.which", _which_all_but())
    monkeypatch.setattr("pmbuild.platform_macos.has_package_manager", lambda: False)

    def unexpected(name):
        raise AssertionError("libraries must not be probed without Homebrew")

    monkeypatch.setattr("pmbuild.platform_macos.check_library", unexpected)

    deps = verify_dependencies(profile_for(Target.MACOS), reporter)

    assert deps.library_prefixes == {}
    assert "[WARNING] Homebrew not found" in stream.getvalue()


def test_macos_installs_missing_formula_and_records_prefixes(profile_for, reporter, cmake_ok, monkeypatch) -> None:
    installed = []
    prefixes = {"SDL2_DIR": "/opt/homebrew/opt/sdl2", "SDL2_TTF_DIR": "/opt/homebrew/opt/sdl2_ttf"}
    monkeypatch.setattr("pmbuild.verify.shutil.which", _which_all_but())
    monkeypatch.setattr("pmbuild.platform_macos.has_package_manager", lambda: True)
    monkeypatch.setattr("pmbuild.platform_macos.check_library", lambda name: name == "sdl2")
    monkeypatch.setattr("pmbuild.platform_macos.install_library", lambda name: installed.append(name) or 0)
    monkeypatch.setattr("pmbuild.platform_macos.get_library_prefixes", lambda: dict(prefixes))

    deps = verify_dependencies(profile_for(Target.MACOS), reporter)

    assert installed == ["sdl2_ttf"]
    assert deps.library_prefixes == prefixes


def test_probe_has_no_side_effects(monkeypatch: pytest.MonkeyPatch) -> None:
    requirements = [
        ToolRequirement(RequirementKind.EXECUTABLE_ON_PATH, "cmake"),
        ToolRequirement(RequirementKind.LIBRARY_VIA_PROBE, "sdl2", auto_installable=True),
    ]
    monkeypatch.setattr("pmbuild.verify.shutil.which", lambda name: None)

    missing = probe_requirements(requirements, check_library=lambda name: False)

    assert missing == requirements


def test_remediate_reports_failed_install(reporter, stream) -> None:
    auto = ToolRequirement(RequirementKind.LIBRARY_VIA_PROBE, "sdl2", "brew install sdl2", auto_installable=True)
    manual = ToolRequirement(RequirementKind.EXECUTABLE_ON_PATH, "emcc")

    unresolved = remediate([auto, manual], lambda name: 1, reporter)

    assert unresolved == [auto, manual]
    assert "brew install sdl2" in stream.getvalue()
