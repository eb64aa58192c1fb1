from pathlib import Path

from bashrun.core import executable, host
from bashrun.core.executable import Executable


def _make_executable(path: Path) -> str:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\n", encoding="utf-8")
    path.chmod(0o755)
    return str(path)


def _register(monkeypatch, item: Executable) -> None:
    monkeypatch.setitem(executable._registry, item.name, item)


def test_expand_placeholders_supports_parentheses_in_names(monkeypatch) -> None:
    monkeypatch.setenv("ProgramFiles(x86)", "C:\\Program Files (x86)")

    assert (
        executable.expand_placeholders("${ProgramFiles(x86)}\\Git\\bin\\bash.exe")
        == "C:\\Program Files (x86)\\Git\\bin\\bash.exe"
    )


def test_expand_placeholders_returns_none_for_unset_variable(monkeypatch) -> None:
    monkeypatch.delenv("BASHRUN_MISSING", raising=False)

    assert executable.expand_placeholders("${BASHRUN_MISSING}/bash") is None


def test_expand_placeholders_keeps_plain_paths() -> None:
    assert executable.expand_placeholders("/usr/bin/bash") == "/usr/bin/bash"


def test_candidates_uses_windows_list_on_windows(monkeypatch) -> None:
    monkeypatch.setattr(host, "is_windows", lambda: True)
    monkeypatch.setenv("TOOLS_A", "D:\\tools")
    monkeypatch.delenv("TOOLS_B", raising=False)
    item = Executable(
        name="fake-tool",
        windows=("${TOOLS_A}\\fake.exe", "${TOOLS_B}\\fake.exe", "C:\\fake.exe"),
        linux=("/opt/fake",),
    )

    assert executable.candidates(item) == ["D:\\tools\\fake.exe", "C:\\fake.exe"]


def test_candidates_uses_linux_list_elsewhere(monkeypatch) -> None:
    monkeypatch.setattr(host, "is_windows", lambda: False)
    item = Executable(name="fake-tool", windows=("C:\\fake.exe",), linux=("/opt/fake",))

    assert executable.candidates(item) == ["/opt/fake"]


def test_find_prefers_override_variable(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(host, "is_windows", lambda: False)
    override = _make_executable(tmp_path / "override" / "fake")
    candidate = _make_executable(tmp_path / "candidate" / "fake")
    monkeypatch.setenv("FAKE_TOOL_PATH", override)
    _register(
        monkeypatch,
        Executable(name="fake-tool", variable="FAKE_TOOL_PATH", linux=(candidate,)),
    )

    assert executable.find("fake-tool") == override


def test_find_ignores_override_that_does_not_exist(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(host, "is_windows", lambda: False)
    candidate = _make_executable(tmp_path / "candidate" / "fake")
    monkeypatch.setenv("FAKE_TOOL_PATH", str(tmp_path / "missing"))
    _register(
        monkeypatch,
        Executable(name="fake-tool", variable="FAKE_TOOL_PATH", linux=(candidate,)),
    )

    assert executable.find("fake-tool") == candidate


def test_find_returns_first_existing_candidate(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(host, "is_windows", lambda: False)
    second = _make_executable(tmp_path / "second" / "fake")
    third = _make_executable(tmp_path / "third" / "fake")
    _register(
        monkeypatch,
        Executable(
            name="fake-tool",
            linux=(str(tmp_path / "first" / "fake"), second, third),
        ),
    )

    assert executable.find("fake-tool") == second


def test_find_skips_non_executable_files(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(host, "is_windows", lambda: False)
    plain = tmp_path / "plain"
    plain.write_text("data", encoding="utf-8")
    plain.chmod(0o644)
    _register(monkeypatch, Executable(name="fake-tool", linux=(str(plain),)))

    assert executable.find("fake-tool") == ""


def test_find_returns_empty_string_when_nothing_matches(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(host, "is_windows", lambda: False)
    _register(
        monkeypatch, Executable(name="fake-tool", linux=(str(tmp_path / "nope"),))
    )

    assert executable.find("fake-tool") == ""


def test_find_is_idempotent(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(host, "is_windows", lambda: False)
    candidate = _make_executable(tmp_path / "fake")
    _register(monkeypatch, Executable(name="fake-tool", linux=(candidate,)))

    assert executable.find("fake-tool") == executable.find("fake-tool") == candidate


def test_find_falls_back_to_path_for_unregistered_names(monkeypatch) -> None:
    monkeypatch.setattr(
        executable.shutil, "which", lambda name: f"/usr/local/bin/{name}"
    )

    assert executable.find("never-registered") == "/usr/local/bin/never-registered"


def test_register_replaces_existing_entry(monkeypatch) -> None:
    monkeypatch.setitem(executable._registry, "fake-tool", Executable(name="fake-tool"))
    replacement = Executable(name="fake-tool", linux=("/opt/fake",))

    executable.register(replacement)

    assert executable.lookup("fake-tool") is replacement
