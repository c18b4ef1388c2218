import os
from pathlib import Path

import pytest

from buildenv.environment import EnvironmentProvider, fold_environment_variables
from buildenv.exceptions import EnvironmentInitializationError, InvalidArgumentError, UnsupportedError
from buildenv.os_accessor import SystemOsAccessor
from buildenv.platform import PlatformFamily
from buildenv.special_paths import SpecialPath
from buildenv.testing import FakeOsAccessor, FakePlatform, fake_runtime


def _provider(accessor=None, paths=None, family=PlatformFamily.LINUX) -> EnvironmentProvider:
    return EnvironmentProvider(FakePlatform(paths, family=family), fake_runtime(), accessor or FakeOsAccessor())


class TestConstruction:
    """Constructing the provider"""

    def test_requires_platform(self):
        with pytest.raises(InvalidArgumentError):
            EnvironmentProvider(None, fake_runtime(), FakeOsAccessor())

    def test_requires_runtime(self):
        with pytest.raises(InvalidArgumentError):
            EnvironmentProvider(FakePlatform(), None, FakeOsAccessor())

    def test_exposes_injected_identities(self):
        platform = FakePlatform(family=PlatformFamily.WINDOWS, is_64bit=False)
        runtime = fake_runtime(version="3.11.4")
        env = EnvironmentProvider(platform, runtime, FakeOsAccessor())
        assert env.platform is platform
        assert env.runtime is runtime
        assert env.is_unix() is False
        assert env.is_64bit_os() is False

    def test_os_failure_is_fatal(self):
        accessor = FakeOsAccessor(fail_on_init=True)
        with pytest.raises(EnvironmentInitializationError) as excinfo:
            _provider(accessor)
        assert isinstance(excinfo.value.__cause__, OSError)

    def test_default_accessor_is_system(self):
        env = EnvironmentProvider(FakePlatform(), fake_runtime())
        assert env.application_root.is_absolute()
        assert env.working_directory == Path(os.getcwd())


class TestApplicationRoot:
    """The application root is the executable's directory and never changes"""

    def test_is_parent_of_executable(self):
        env = _provider(FakeOsAccessor(executable="/opt/tool/bin/tool"))
        assert env.application_root == Path("/opt/tool/bin")

    def test_is_stable(self):
        accessor = FakeOsAccessor(executable="/opt/tool/bin/tool")
        env = _provider(accessor)
        first = env.application_root
        accessor.executable = Path("/somewhere/else/tool")
        env.working_directory = "/elsewhere"
        assert env.application_root == first
        assert env.application_root == env.application_root


class TestWorkingDirectory:
    """Working directory reads and writes"""

    def test_reads_live_value(self):
        accessor = FakeOsAccessor(cwd="/work")
        env = _provider(accessor)
        assert env.working_directory == Path("/work")
        # changed behind the provider's back
        accessor.cwd = Path("/changed")
        assert env.working_directory == Path("/changed")

    def test_set_absolute(self):
        accessor = FakeOsAccessor()
        env = _provider(accessor)
        env.set_working_directory("/build/output")
        assert env.working_directory == Path("/build/output")
        assert accessor.history == [Path("/build/output")]

    def test_property_setter(self):
        accessor = FakeOsAccessor()
        env = _provider(accessor)
        env.working_directory = Path("/src")
        assert accessor.cwd == Path("/src")

    @pytest.mark.parametrize("relative", ["relative", "./here", "../up", "a/b/c"])
    def test_relative_rejected_before_os_call(self, relative):
        accessor = FakeOsAccessor(cwd="/work")
        env = _provider(accessor)
        with pytest.raises(InvalidArgumentError, match="relative path"):
            env.working_directory = relative
        assert accessor.history == []
        assert env.working_directory == Path("/work")

    def test_none_rejected(self):
        env = _provider()
        with pytest.raises(InvalidArgumentError):
            env.set_working_directory(None)

    def test_invalid_argument_is_value_error(self):
        env = _provider()
        with pytest.raises(ValueError):
            env.set_working_directory("nope")


class TestWorkingDirectoryOnRealProcess:
    """Working directory against the real OS"""

    def test_set_existing_absolute(self, tmp_path, monkeypatch):
        monkeypatch.chdir(os.getcwd())  # restore cwd on teardown
        env = EnvironmentProvider(FakePlatform(), fake_runtime(), SystemOsAccessor())
        env.working_directory = tmp_path
        assert env.working_directory.resolve() == tmp_path.resolve()
        assert Path(os.getcwd()).resolve() == tmp_path.resolve()

    def test_relative_leaves_cwd_unchanged(self, tmp_path, monkeypatch):
        (tmp_path / "child").mkdir()
        monkeypatch.chdir(tmp_path)
        env = EnvironmentProvider(FakePlatform(), fake_runtime(), SystemOsAccessor())
        with pytest.raises(InvalidArgumentError):
            env.set_working_directory("child")
        assert Path(os.getcwd()).resolve() == tmp_path.resolve()

    def test_missing_absolute_propagates_os_error(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        env = EnvironmentProvider(FakePlatform(), fake_runtime(), SystemOsAccessor())
        with pytest.raises(FileNotFoundError):
            env.set_working_directory(tmp_path / "does-not-exist")


class TestSpecialPaths:
    """Special path resolution is delegated to the platform"""

    MAPPING = {
        SpecialPath.TEMP: "/var/tmp",
        SpecialPath.HOME: "/home/builder",
        SpecialPath.PROGRAM_FILES: "/opt",
    }

    def test_mapped_tags(self):
        env = _provider(paths=self.MAPPING)
        for tag, path in self.MAPPING.items():
            assert env.get_special_path(tag) == Path(path)

    def test_unmapped_tags_unsupported(self):
        env = _provider(paths=self.MAPPING)
        for tag in SpecialPath:
            if tag in self.MAPPING:
                continue
            with pytest.raises(UnsupportedError) as excinfo:
                env.get_special_path(tag)
            assert excinfo.value.tag is tag
            assert excinfo.value.family is PlatformFamily.LINUX

    def test_non_tag_rejected(self):
        env = _provider(paths=self.MAPPING)
        with pytest.raises(InvalidArgumentError):
            env.get_special_path("temp")


class TestEnvironmentVariables:
    """Environment variable lookups and snapshots"""

    def test_get_variable(self):
        env = _provider(FakeOsAccessor(variables=[("BUILD_NUMBER", "42")]))
        assert env.get_environment_variable("BUILD_NUMBER") == "42"

    def test_get_unset_variable(self):
        env = _provider(FakeOsAccessor(variables=[("BUILD_NUMBER", "42")]))
        assert env.get_environment_variable("UNSET_VAR_XYZ") is None

    def test_get_unset_variable_on_real_process(self, monkeypatch):
        monkeypatch.delenv("UNSET_VAR_XYZ", raising=False)
        env = EnvironmentProvider(FakePlatform(), fake_runtime(), SystemOsAccessor())
        assert env.get_environment_variable("UNSET_VAR_XYZ") is None

    def test_first_duplicate_wins(self):
        env = _provider(FakeOsAccessor(variables=[("PATH", "a"), ("path", "b")]))
        snapshot = env.get_environment_variables()
        assert len(snapshot) == 1
        assert snapshot["PATH"] == "a"
        assert snapshot["path"] == "a"
        assert list(snapshot.keys()) == ["PATH"]

    def test_first_duplicate_wins_regardless_of_case_order(self):
        snapshot = fold_environment_variables([("Path", "x"), ("PATH", "y"), ("HOME", "/h"), ("path", "z")])
        assert dict(snapshot.items()) == {"Path": "x", "HOME": "/h"}

    def test_keys_case_insensitive(self):
        env = _provider(FakeOsAccessor(variables=[("Configuration", "Release")]))
        snapshot = env.get_environment_variables()
        assert snapshot["CONFIGURATION"] == "Release"
        assert "configuration" in snapshot

    def test_snapshots_are_fresh(self):
        accessor = FakeOsAccessor(variables=[("A", "1"), ("B", "2")])
        env = _provider(accessor)
        first = env.get_environment_variables()
        second = env.get_environment_variables()
        assert first == second
        assert first is not second

    def test_snapshot_is_not_live(self):
        accessor = FakeOsAccessor(variables=[("A", "1")])
        env = _provider(accessor)
        snapshot = env.get_environment_variables()
        accessor.variables.append(("B", "2"))
        assert "B" not in snapshot
        assert "B" in env.get_environment_variables()

    def test_snapshot_of_real_process(self, monkeypatch):
        monkeypatch.setenv("BUILDENV_TEST_VALUE", "hello")
        env = EnvironmentProvider(FakePlatform(), fake_runtime(), SystemOsAccessor())
        snapshot = env.get_environment_variables()
        assert snapshot["buildenv_test_value"] == "hello"


class TestExpandEnvironmentVariables:
    """Expansion of variable references in strings"""

    def _env(self):
        return _provider(FakeOsAccessor(variables=[("HOME", "/home/me"), ("Path", "/bin")]))

    def test_percent_syntax(self):
        assert self._env().expand_environment_variables("%home%/tools") == "/home/me/tools"

    def test_brace_syntax(self):
        assert self._env().expand_environment_variables("${PATH}:/usr/bin") == "/bin:/usr/bin"

    def test_dollar_syntax(self):
        assert self._env().expand_environment_variables("$HOME/.cache") == "/home/me/.cache"

    def test_unknown_left_alone(self):
        text = "%MISSING% ${MISSING} $MISSING"
        assert self._env().expand_environment_variables(text) == text

    def test_plain_percent_signs(self):
        assert self._env().expand_environment_variables("100% done, 50% left") == "100% done, 50% left"
