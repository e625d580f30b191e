"""Main loop and runtime bootstrap tests.

Drives ``run_main_loop`` with scripted keys and checks ``run_editor`` exit
statuses and terminal cleanup on quit and on fatal errors.
"""

from __future__ import annotations

import io
import unittest
from contextlib import contextmanager
from unittest import mock

from kilo.geometry import GeometryError
from kilo.input import BufferByteSource, KeyDecoder
from kilo.runtime import app, run_main_loop
from kilo.runtime.config import EditorSettings
from kilo.state import EditorState, TextRow, ViewportState
from kilo.terminal import TerminalError


class _ScriptedDecoder:
    def __init__(self, keys: list) -> None:
        self.keys = list(keys)
        self.calls = 0

    def read_key(self):
        self.calls += 1
        if not self.keys:
            raise AssertionError("loop read past the scripted keys")
        return self.keys.pop(0)


def _state() -> EditorState:
    return EditorState(viewport=ViewportState(screen_rows=4, screen_cols=10))


class RunMainLoopTests(unittest.TestCase):
    def test_quit_clears_screen_and_returns(self) -> None:
        decoder = KeyDecoder(BufferByteSource(b"\x11"))
        with mock.patch("kilo.terminal.os.write") as write_mock:
            run_main_loop(_state(), decoder, 1)

        self.assertEqual(write_mock.call_count, 2)
        self.assertTrue(write_mock.call_args_list[0].args[1].startswith(b"\x1b[?25l\x1b[H"))
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"\x1b[2J\x1b[H"))

    def test_redraws_only_after_cursor_moves(self) -> None:
        decoder = KeyDecoder(BufferByteSource(b"x\x1b[Bq\x1b[A\x1b[A\x11"))
        state = _state()
        with mock.patch("kilo.terminal.os.write") as write_mock:
            run_main_loop(state, decoder, 1)

        frames = [c.args[1] for c in write_mock.call_args_list[:-1]]
        # Initial frame, then one per effective move; the clamped UP is skipped.
        self.assertEqual(len(frames), 3)
        self.assertTrue(frames[1].endswith(b"\x1b[2;1H\x1b[?25h"))
        self.assertTrue(frames[2].endswith(b"\x1b[1;1H\x1b[?25h"))

    def test_idle_reads_keep_looping_without_redrawing(self) -> None:
        decoder = _ScriptedDecoder([None, None, None, KeyDecoder(BufferByteSource(b"\x11")).read_key()])
        with mock.patch("kilo.terminal.os.write") as write_mock:
            run_main_loop(_state(), decoder, 1)

        self.assertEqual(decoder.calls, 4)
        self.assertEqual(write_mock.call_count, 2)


class _FakeController:
    def __init__(self, fd: int, enter_error: TerminalError | None = None) -> None:
        self.fd = fd
        self.enter_error = enter_error
        self.restore_calls = 0

    def restore(self) -> None:
        self.restore_calls += 1

    @contextmanager
    def raw_mode(self):
        if self.enter_error is not None:
            raise self.enter_error
        try:
            yield self
        finally:
            self.restore()


class RunEditorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.controllers: list[_FakeController] = []

    def _controller_factory(self, enter_error: TerminalError | None = None):
        def factory(fd: int) -> _FakeController:
            controller = _FakeController(fd, enter_error)
            self.controllers.append(controller)
            return controller

        return factory

    def test_quit_exits_with_success(self) -> None:
        def fake_loop(state, decoder, stdout_fd) -> None:
            self.assertEqual(state.rows, [TextRow(b"hi")])
            self.assertEqual((state.viewport.screen_rows, state.viewport.screen_cols), (24, 80))

        with mock.patch("kilo.runtime.app.RawModeController", self._controller_factory()), mock.patch(
            "kilo.runtime.app.query_window_size", return_value=(24, 80)
        ), mock.patch("kilo.runtime.app.run_main_loop", side_effect=fake_loop) as loop_mock:
            status = app.run_editor([TextRow(b"hi")], EditorSettings(), 0, 1)

        self.assertEqual(status, app.EXIT_SUCCESS)
        loop_mock.assert_called_once()
        self.assertEqual(self.controllers[0].restore_calls, 1)

    def test_geometry_failure_clears_screen_restores_and_fails(self) -> None:
        stderr = io.StringIO()
        with mock.patch("kilo.runtime.app.RawModeController", self._controller_factory()), mock.patch(
            "kilo.runtime.app.query_window_size", side_effect=GeometryError("getWindowSize", "no reply")
        ), mock.patch("kilo.runtime.app.run_main_loop") as loop_mock, mock.patch(
            "kilo.terminal.os.write"
        ) as write_mock, mock.patch("sys.stderr", stderr):
            status = app.run_editor([], EditorSettings(), 0, 1)

        self.assertEqual(status, app.EXIT_FAILURE)
        loop_mock.assert_not_called()
        write_mock.assert_called_once_with(1, b"\x1b[2J\x1b[H")
        self.assertGreaterEqual(self.controllers[0].restore_calls, 1)
        self.assertIn("getWindowSize: no reply", stderr.getvalue())

    def test_enter_failure_is_fatal(self) -> None:
        stderr = io.StringIO()
        factory = self._controller_factory(enter_error=TerminalError("tcgetattr", "not a tty"))
        with mock.patch("kilo.runtime.app.RawModeController", factory), mock.patch(
            "kilo.runtime.app.query_window_size"
        ) as size_mock, mock.patch("kilo.terminal.os.write"), mock.patch("sys.stderr", stderr):
            status = app.run_editor([], EditorSettings(), 0, 1)

        self.assertEqual(status, app.EXIT_FAILURE)
        size_mock.assert_not_called()
        self.assertIn("kilo: tcgetattr: not a tty", stderr.getvalue())

    def test_clear_screen_failure_does_not_mask_fatal_error(self) -> None:
        stderr = io.StringIO()
        with mock.patch("kilo.runtime.app.RawModeController", self._controller_factory()), mock.patch(
            "kilo.runtime.app.query_window_size", side_effect=GeometryError("getWindowSize")
        ), mock.patch("kilo.terminal.os.write", side_effect=OSError(5, "I/O error")), mock.patch(
            "sys.stderr", stderr
        ):
            status = app.run_editor([], EditorSettings(), 0, 1)

        self.assertEqual(status, app.EXIT_FAILURE)
        self.assertIn("getWindowSize", stderr.getvalue())

    def test_frame_write_failure_is_fatal_and_restores_terminal(self) -> None:
        stderr = io.StringIO()
        with mock.patch("kilo.runtime.app.RawModeController", self._controller_factory()), mock.patch(
            "kilo.runtime.app.query_window_size", return_value=(24, 80)
        ), mock.patch("kilo.terminal.os.write", side_effect=OSError(5, "I/O error")) as write_mock, mock.patch(
            "sys.stderr", stderr
        ):
            status = app.run_editor([], EditorSettings(), 0, 1)

        self.assertEqual(status, app.EXIT_FAILURE)
        # The frame write, then the best-effort clear-screen.
        self.assertEqual(write_mock.call_count, 2)
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"\x1b[2J\x1b[H"))
        self.assertGreaterEqual(self.controllers[0].restore_calls, 1)
        self.assertIn("kilo: write: [Errno 5] I/O error", stderr.getvalue())


if __name__ == "__main__":
    unittest.main()
