"""
Tests for the command runner — argv construction, privilege session,
and outcome classification.
"""

import logging

import pytest

from spinup.adapters.mock import MockProcessAdapter
from spinup.core.engine.runner import CommandRunner, PrivilegeSession, handle_process_output
from spinup.core.errors import (
    AuthenticationFailedError,
    CommandFailedError,
    EmptyCommandError,
    NoPackageManagerError,
    SpawnFailedError,
)
from spinup.core.models import CustomCommand, PackageList, SnapPackage
from spinup.core.models.process import ProcessResult
from spinup.core.observability.logging_config import TRACE


class _Tracked:
    """Operation that records which methods were consulted."""

    def __init__(self, name: str = "ls", root: bool = False):
        self.name = name
        self.root = root
        self.args_called = False

    def command_name(self, system_details):
        if not self.name:
            raise EmptyCommandError("empty")
        return self.name

    def args(self, system_details):
        self.args_called = True
        return ["-a"]

    def needs_root(self):
        return self.root


# ── Argv construction ────────────────────────────────────────────────


class TestBuildArgv:
    def test_user_command(self, runner, arch):
        assert runner.build_argv(CustomCommand(command="ls", args=["-a"]), arch) == ("ls", "ls", ["-a"])

    def test_root_command_goes_through_sudo(self, runner, arch):
        op = SnapPackage(name="vlc")
        assert runner.build_argv(op, arch) == ("snap", "sudo", ["snap", "install", "vlc", "--stable"])

    def test_no_args(self, runner, arch):
        assert runner.build_argv(CustomCommand(command="true"), arch) == ("true", "true", [])

    def test_package_install(self, runner, arch):
        pl = PackageList(base_packages=["git"])
        _, binary, args = runner.build_argv(pl, arch)
        assert binary == "sudo"
        assert args == ["pacman", "-S", "--noconfirm", "git"]


# ── Running ──────────────────────────────────────────────────────────


class TestCommandRunner:
    def test_user_command_runs_once(self, runner, mock_adapter, arch):
        result = runner.run(CustomCommand(command="ls", args=["-a", "-l"]), arch)
        assert result.ok
        assert mock_adapter.calls == [["ls", "-a", "-l"]]
        assert mock_adapter.elevations == 0
        assert runner.results == [result]

    def test_root_command(self, runner, mock_adapter, arch):
        runner.run(CustomCommand(command="fc-cache", args=["-f"], needs_root=True), arch)
        assert mock_adapter.calls == [["sudo", "fc-cache", "-f"]]
        assert mock_adapter.elevations == 1

    def test_session_acquired_once(self, runner, mock_adapter, arch):
        for name in ("a", "b", "c"):
            runner.run(CustomCommand(command=name, needs_root=True), arch)
        assert mock_adapter.elevations == 1
        assert runner.session.acquired

    def test_authentication_failure(self, arch):
        adapter = MockProcessAdapter(elevation_ok=False)
        runner = CommandRunner(adapter=adapter)
        with pytest.raises(AuthenticationFailedError):
            runner.run(SnapPackage(name="vlc"), arch)
        assert adapter.calls == []

    def test_empty_name_short_circuits(self, runner, mock_adapter, arch):
        op = _Tracked(name="")
        with pytest.raises(EmptyCommandError):
            runner.run(op, arch)
        assert not op.args_called
        assert mock_adapter.calls == []

    def test_no_package_manager_before_spawn(self, runner, mock_adapter, unknown_host):
        with pytest.raises(NoPackageManagerError):
            runner.run(PackageList(base_packages=["git"]), unknown_host)
        assert mock_adapter.calls == []
        assert mock_adapter.elevations == 0

    def test_nonzero_exit(self, runner, mock_adapter, arch):
        mock_adapter.set_failure("make", exit_code=2)
        with pytest.raises(CommandFailedError) as exc:
            runner.run(CustomCommand(command="make"), arch)
        assert exc.value.exit_code == 2
        assert "Command 'make' returned status of '2'" in str(exc.value)

    def test_root_failure_names_real_command(self, runner, mock_adapter, arch):
        mock_adapter.set_failure("snap", exit_code=1)
        with pytest.raises(CommandFailedError) as exc:
            runner.run(SnapPackage(name="vlc"), arch)
        assert exc.value.command == "snap"

    def test_terminated_counts_as_success(self, runner, mock_adapter, arch, caplog):
        mock_adapter.set_terminated("sleep")
        with caplog.at_level(logging.WARNING):
            result = runner.run(CustomCommand(command="sleep", args=["5"]), arch)
        assert result.terminated
        assert "without an exit code" in caplog.text

    def test_spawn_failure(self, runner, mock_adapter, arch):
        mock_adapter.set_spawn_error("nope", "No such file or directory")
        with pytest.raises(SpawnFailedError, match="No such file"):
            runner.run(CustomCommand(command="nope"), arch)

    def test_default_adapter_is_subprocess(self):
        assert CommandRunner().adapter.name == "subprocess"


# ── Privilege session ────────────────────────────────────────────────


class TestPrivilegeSession:
    def test_acquire_is_memoized(self):
        adapter = MockProcessAdapter()
        session = PrivilegeSession(adapter)
        session.acquire()
        session.acquire()
        assert adapter.elevations == 1

    def test_refused_is_retried_next_time(self):
        adapter = MockProcessAdapter(elevation_ok=False)
        session = PrivilegeSession(adapter)
        for _ in range(2):
            with pytest.raises(AuthenticationFailedError):
                session.acquire()
        assert adapter.elevations == 2
        assert not session.acquired

    def test_custom_tool(self, arch):
        adapter = MockProcessAdapter()
        runner = CommandRunner(adapter=adapter, session=PrivilegeSession(adapter, tool="doas"))
        runner.run(SnapPackage(name="vlc"), arch)
        assert adapter.calls[0][0] == "doas"


# ── Outcome classification ───────────────────────────────────────────


class TestHandleProcessOutput:
    def test_success_logs_info(self, caplog):
        with caplog.at_level(logging.INFO):
            handle_process_output("ls", ProcessResult.success("ls", []))
        assert "completed successfully" in caplog.text

    def test_output_only_at_trace(self, caplog):
        failed = ProcessResult.failure("make", [], 2, stdout="out-text", stderr="err-text")
        with caplog.at_level(logging.DEBUG), pytest.raises(CommandFailedError):
            handle_process_output("make", failed)
        assert "err-text" not in caplog.text

        caplog.clear()
        with caplog.at_level(TRACE), pytest.raises(CommandFailedError):
            handle_process_output("make", failed)
        assert "out-text" in caplog.text
        assert "err-text" in caplog.text
