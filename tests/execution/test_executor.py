"""
Tests for command preparation and shell execution.

Tests that spawn a real shell use /bin/sh and are skipped on Windows hosts.
"""

import io
import subprocess
import sys
from pathlib import Path

import attrs
import pytest

from actionrunner.exceptions import ShellSpawnError
from actionrunner.execution.args_files import ArgsFiles
from actionrunner.execution.executor import execute_script, prepare_command, run_shell
from actionrunner.settings import ExecutionSettings

posix_shell = pytest.mark.skipif(sys.platform.startswith("win"), reason="needs /bin/sh")


@pytest.fixture
def settings(tmp_path):
    return ExecutionSettings(args_file_dir=tmp_path)


class TestPrepareCommand:
    """Tests for measure, plan and final substitution."""

    def test_below_threshold_inlines_classpath(self, posix_platform, settings):
        """Test that short commands keep the classpath inline and create no file."""
        with ArgsFiles(settings) as args_files:
            command = prepare_command(
                "java -cp {{deps}} Main", ["/x/a.jar", "/x/b.jar"], posix_platform, args_files
            )
            assert command == "java -cp /x/a.jar:/x/b.jar Main"
            assert args_files.files == []

    def test_overflow_moves_classpath_to_args_file(
        self, posix_platform, settings, long_classpath, tmp_path
    ):
        """Test that an over-long classpath is replaced by an @file reference."""
        with ArgsFiles(settings) as args_files:
            command = prepare_command(
                "java -cp {{deps}} Main", long_classpath, posix_platform, args_files
            )

            program, option, reference, main_class = command.split(" ")
            assert (program, option, main_class) == ("java", "-cp", "Main")
            assert reference.startswith("@")

            args_file = Path(reference[1:])
            assert args_files.files == [args_file]
            assert args_file.read_text(encoding="utf-8") == ":".join(long_classpath)

        assert not args_file.exists()

    def test_threshold_comes_from_platform(self, posix_platform, settings):
        """Test that a lower platform threshold enables args files sooner."""
        platform = attrs.evolve(posix_platform, args_threshold=10)
        with ArgsFiles(settings) as args_files:
            command = prepare_command("javac -cp {{deps}} A.java", ["/x/a.jar"], platform, args_files)
            assert command.startswith("javac -cp @")
            assert len(args_files.files) == 1

    def test_overflow_without_candidates_stays_inline(self, posix_platform, settings):
        """Test that tools without args-file support keep their long arguments."""
        platform = attrs.evolve(posix_platform, args_threshold=10)
        with ArgsFiles(settings) as args_files:
            command = prepare_command("echo {{deps}}", ["/x/a.jar"], platform, args_files)
            assert command == "echo /x/a.jar"
            assert args_files.files == []

    def test_deps_first_classpath_posix(self, posix_platform, settings):
        """Test that a classpath starting with {{deps}} renders without braces."""
        with ArgsFiles(settings) as args_files:
            command = prepare_command(
                "java -cp {{deps}}:out/classes Main",
                ["/x/a.jar", "/x/b.jar"],
                posix_platform,
                args_files,
            )
            assert command == "java -cp /x/a.jar:/x/b.jar:./out/classes Main"

    def test_deps_first_classpath_windows(self, windows_platform, settings):
        """Test the same classpath shape rendered for cmd.exe."""
        with ArgsFiles(settings) as args_files:
            command = prepare_command(
                "java -cp {{deps}}:out/classes Main",
                ["C:\\r\\a.jar", "C:\\r\\b.jar"],
                windows_platform,
                args_files,
            )
            assert command == "java -cp C:\\r\\a.jar;C:\\r\\b.jar;out\\classes Main"

    def test_deps_first_classpath_in_args_file(self, posix_platform, settings):
        """Test that the args file receives the rendered classpath."""
        platform = attrs.evolve(posix_platform, args_threshold=10)
        with ArgsFiles(settings) as args_files:
            command = prepare_command(
                "java -cp {{deps}}:out/classes Main", ["/x/a.jar"], platform, args_files
            )

            assert "{" not in command
            assert args_files.files[0].read_text(encoding="utf-8") == "/x/a.jar:./out/classes"

    def test_marker_templates_not_replanned(self, windows_platform, settings):
        """Test that a template with markers is only substituted, not planned."""
        with ArgsFiles(settings) as args_files:
            command = prepare_command(
                "javac -d out{/}classes src/Main.java {;} echo ok", [], windows_platform, args_files
            )
            assert command == "javac -d out\\classes src/Main.java & echo ok"

    def test_plain_template_planned_for_windows(self, windows_platform, settings):
        """Test that plain relative paths and ';' become native on Windows."""
        with ArgsFiles(settings) as args_files:
            command = prepare_command(
                "javac -d out/classes src/Main.java ; echo ok", [], windows_platform, args_files
            )
            assert command == "javac -d out\\classes src\\Main.java & echo ok"


@posix_shell
class TestRunShell:
    """Tests for spawning the shell and streaming output."""

    def test_output_streamed(self, posix_platform):
        """Test that child output reaches the output stream."""
        output = io.StringIO()
        assert run_shell("echo hello", posix_platform, output) == 0
        assert output.getvalue() == "hello\n"

    def test_exit_code_returned(self, posix_platform):
        """Test that the exit code is passed through unmodified."""
        assert run_shell("exit 3", posix_platform, io.StringIO()) == 3

    def test_stderr_merged_in_order(self, posix_platform):
        """Test that stderr is interleaved with stdout."""
        output = io.StringIO()
        run_shell("echo one; echo two 1>&2; echo three", posix_platform, output)
        assert output.getvalue() == "one\ntwo\nthree\n"

    def test_large_output_does_not_block(self, posix_platform):
        """Test that output larger than a pipe buffer is drained."""
        output = io.StringIO()
        code = run_shell(
            "i=0; while [ $i -lt 5000 ]; do echo line-$i-padding-padding-padding; i=$((i+1)); done",
            posix_platform,
            output,
        )
        assert code == 0
        assert len(output.getvalue().splitlines()) == 5000

    def test_final_line_without_newline(self, posix_platform):
        """Test that a trailing partial line is still printed."""
        output = io.StringIO()
        run_shell("printf abc", posix_platform, output)
        assert output.getvalue() == "abc\n"


class TestSpawnFailure:
    """Tests for shells that cannot be started."""

    def test_spawn_error_reported(self, posix_platform, monkeypatch):
        """Test that an OSError from the launcher becomes ShellSpawnError."""

        def failing_popen(*args, **kwargs):
            raise FileNotFoundError("no such file: /bin/sh")

        monkeypatch.setattr(subprocess, "Popen", failing_popen)

        with pytest.raises(ShellSpawnError, match="Cannot start shell '/bin/sh'") as exc_info:
            run_shell("echo hi", posix_platform, io.StringIO())

        assert exc_info.value.command == ["/bin/sh", "-c", "echo hi"]

    def test_args_files_released_on_spawn_error(self, posix_platform, settings, tmp_path, monkeypatch):
        """Test that args files are deleted when the shell fails to start."""

        def failing_popen(*args, **kwargs):
            raise PermissionError("denied")

        monkeypatch.setattr(subprocess, "Popen", failing_popen)
        platform = attrs.evolve(posix_platform, args_threshold=10)

        with pytest.raises(ShellSpawnError):
            execute_script(
                "java -cp {{deps}} Main", ["/x/a.jar"], platform, output=io.StringIO(), settings=settings
            )

        assert list(tmp_path.iterdir()) == []


@posix_shell
class TestExecuteScript:
    """Tests for running templates end to end."""

    def test_verbose_echoes_processed_command(self, posix_platform):
        """Test that verbose mode prints the final command before running it."""
        output = io.StringIO()

        code = execute_script(
            "echo {{deps}}",
            ["/x/a.jar", "/x/b.jar"],
            posix_platform,
            output=output,
            settings=ExecutionSettings(verbose=True),
        )

        assert code == 0
        assert output.getvalue() == "> echo /x/a.jar:/x/b.jar\n/x/a.jar:/x/b.jar\n"

    def test_quiet_by_default(self, posix_platform):
        """Test that the command line is not echoed unless verbose is set."""
        output = io.StringIO()

        execute_script("echo hi", [], posix_platform, output=output)

        assert output.getvalue() == "hi\n"

    def test_sequence_rendered_for_shell(self, posix_platform):
        """Test that a planned ';' runs both commands."""
        output = io.StringIO()
        assert execute_script("echo a ; echo b", [], posix_platform, output=output) == 0
        assert output.getvalue() == "a\nb\n"

    def test_failure_exit_code(self, posix_platform):
        """Test that a failing command's exit code is returned."""
        assert execute_script("false || exit 7", [], posix_platform, output=io.StringIO()) == 7

    def test_args_file_used_then_deleted(self, posix_platform, settings, tmp_path):
        """Test that the command sees the args file and it is gone afterwards."""
        platform = attrs.evolve(posix_platform, args_threshold=10)
        output = io.StringIO()

        code = execute_script(
            "@cat {{deps}}", ["/x/a.jar", "/x/b.jar"], platform, output=output, settings=settings
        )

        # cat cannot open "@<path>", but the reference shows the file was used
        assert code != 0
        assert f"@{tmp_path.resolve()}" in output.getvalue()
        assert list(tmp_path.iterdir()) == []

    def test_args_file_content_visible_to_command(self, posix_platform, settings, tmp_path):
        """Test that the shell can read the args file while the command runs."""
        platform = attrs.evolve(posix_platform, args_threshold=10)
        output = io.StringIO()

        code = execute_script(
            "@sh -c 'cat \"${0#@}\"' {{deps}}",
            ["/x/a.jar", "/x/b.jar"],
            platform,
            output=output,
            settings=settings,
        )

        assert code == 0
        assert output.getvalue() == "/x/a.jar:/x/b.jar\n"
        assert list(tmp_path.iterdir()) == []
