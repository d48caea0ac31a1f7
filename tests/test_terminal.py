"""Tests for terminal mode control and the tty-backed driver.

Verifies raw-mode lifecycle safety and the escape sequences written on
entry and exit.
"""

from __future__ import annotations

import os
import termios
import unittest
from unittest import mock

from coco.errors import InputReadError
from coco.terminal import Terminal, TerminalController


class TerminalControllerTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode_use_alternate_screen_sequences(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("coco.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "coco.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("coco.terminal.os.write") as write_mock, mock.patch(
            "coco.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(fd=7)
            controller.enable_tui_mode()
            self.assertTrue(controller.active)
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(7, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (7, b"\x1b[?1049h\x1b[?25l"))
        self.assertEqual(write_mock.call_args_list[1].args, (7, b"\x1b[?25h\x1b[?1049l"))
        setattr_mock.assert_called_once_with(7, termios.TCSAFLUSH, saved_state)
        self.assertFalse(controller.active)

    def test_disable_restores_tty_state_when_exit_write_fails(self) -> None:
        saved_state = [4, 5, 6]
        with mock.patch("coco.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "coco.terminal.tty.setraw"
        ), mock.patch(
            "coco.terminal.os.write", side_effect=[3, OSError(5, "Input/output error")]
        ), mock.patch("coco.terminal.termios.tcsetattr") as setattr_mock:
            controller = TerminalController(fd=7)
            controller.enable_tui_mode()
            with self.assertRaises(OSError):
                controller.disable_tui_mode()

        setattr_mock.assert_called_once_with(7, termios.TCSAFLUSH, saved_state)
        self.assertFalse(controller.active)

    def test_disable_without_enable_leaves_tty_untouched(self) -> None:
        with mock.patch("coco.terminal.termios.tcgetattr", return_value=[0]), mock.patch(
            "coco.terminal.os.write"
        ) as write_mock, mock.patch("coco.terminal.termios.tcsetattr") as setattr_mock:
            controller = TerminalController(fd=7)
            controller.disable_tui_mode()

        write_mock.assert_not_called()
        setattr_mock.assert_not_called()

    def test_raw_mode_restores_tty_when_enter_write_fails(self) -> None:
        with mock.patch("coco.terminal.termios.tcgetattr", return_value=[0]), mock.patch(
            "coco.terminal.tty.setraw"
        ), mock.patch("coco.terminal.os.write", side_effect=OSError(5, "Input/output error")), mock.patch(
            "coco.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(fd=7)
            with self.assertRaises(OSError):
                with controller.raw_mode():
                    pass

        setattr_mock.assert_called_once()

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        with mock.patch("coco.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(fd=0)

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()


class TerminalDriverTests(unittest.TestCase):
    def make_terminal(self, fd: int = 5) -> Terminal:
        with mock.patch("coco.terminal.termios.tcgetattr", return_value=[0]):
            return Terminal(fd)

    def test_visible_size_reads_tty_each_call(self) -> None:
        terminal = self.make_terminal()
        sizes = [os.terminal_size((80, 24)), os.terminal_size((100, 30))]
        with mock.patch("coco.terminal.os.get_terminal_size", side_effect=sizes) as size_mock:
            self.assertEqual(terminal.get_visible_size(), (80, 24))
            self.assertEqual(terminal.get_visible_size(), (100, 30))
        size_mock.assert_called_with(5)

    def test_visible_size_falls_back_when_tty_size_unavailable(self) -> None:
        terminal = self.make_terminal()
        with mock.patch("coco.terminal.os.get_terminal_size", side_effect=OSError), mock.patch(
            "coco.terminal.shutil.get_terminal_size", return_value=os.terminal_size((72, 20))
        ):
            self.assertEqual(terminal.get_visible_size(), (72, 20))

    def test_render_writes_utf8_frame_to_tty(self) -> None:
        terminal = self.make_terminal()
        with mock.patch("coco.terminal.os.write") as write_mock:
            terminal.render("QUERY> ñ")
        write_mock.assert_called_once_with(5, "QUERY> ñ".encode("utf-8"))

    def test_close_only_closes_owned_descriptor(self) -> None:
        with mock.patch("coco.terminal.termios.tcgetattr", return_value=[0]):
            borrowed = Terminal(5)
            owned = Terminal(6, owns_fd=True)
        with mock.patch("coco.terminal.os.close") as close_mock:
            borrowed.close()
            owned.close()
            owned.close()
        close_mock.assert_called_once_with(6)

    def test_open_reports_missing_tty(self) -> None:
        with mock.patch("coco.terminal.os.open", side_effect=OSError(6, "No such device")):
            with self.assertRaises(InputReadError):
                Terminal.open("/dev/tty")

    def test_open_closes_descriptor_that_is_not_a_tty(self) -> None:
        with mock.patch("coco.terminal.os.open", return_value=9), mock.patch(
            "coco.terminal.termios.tcgetattr", side_effect=termios.error(25, "Inappropriate ioctl")
        ), mock.patch("coco.terminal.os.close") as close_mock:
            with self.assertRaises(InputReadError):
                Terminal.open("/dev/null")
        close_mock.assert_called_once_with(9)


if __name__ == "__main__":
    unittest.main()
