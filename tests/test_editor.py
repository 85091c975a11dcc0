"""Test the editor controller with a mocked terminal."""

import contextlib
import os
from unittest.mock import MagicMock, patch

import pytest
from markpad.editor import Editor
from markpad.discovery import DocumentChoice
from markpad.errors import DocumentWriteError
from markpad.keyboard import KeyEvent, KeyType
from markpad.modes import EditorMode
from markpad.session import ExitAction
from markpad.settings import EditorSettings

CTRL_S = KeyEvent(key_type=KeyType.CTRL, value='s', raw='\x13', is_ctrl=True)
CTRL_Q = KeyEvent(key_type=KeyType.CTRL, value='q', raw='\x11', is_ctrl=True)
ESCAPE = KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')
ENTER = KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw='\r')


def typed(ch):
    return KeyEvent(key_type=KeyType.REGULAR, value=ch, raw=ch)


def make_terminal(width=120, height=40):
    terminal = MagicMock()
    terminal.width = width
    terminal.height = height
    return terminal


@pytest.fixture
def editor():
    return Editor(terminal=make_terminal())


@pytest.fixture
def doc(tmp_path):
    path = tmp_path / "doc.md"
    path.write_text("# Title\nbody", encoding="utf-8")
    return path


def test_view_rows_follow_box_size():
    editor = Editor(terminal=make_terminal(), settings=EditorSettings(box_width=60, box_height=12))
    # Border and padding take two rows on each side
    assert editor.view.num_rows == 8
    # Four more columns go to the line number gutter
    assert editor.view.num_columns == 52
    assert editor.min_width == 60
    assert editor.min_height == 14


def test_load_file(editor, doc):
    editor.load_file(str(doc))
    assert editor.session.model.lines == ["# Title", "body"]
    assert editor.session.path == str(doc)
    assert not editor.session.modified
    assert editor.errors == []


def test_load_missing_file_starts_empty(editor, tmp_path):
    editor.load_file(str(tmp_path / "new.md"))
    assert editor.session.model.lines == [""]
    assert editor.errors == []


def test_load_unreadable_file_starts_empty_and_records_error(editor, tmp_path):
    editor.load_file(str(tmp_path))  # a directory cannot be read as a document
    assert editor.session.model.lines == [""]
    assert len(editor.errors) == 1
    assert "Error reading" in editor.errors[0]


def test_ctrl_s_saves_and_stops(editor, doc):
    editor.load_file(str(doc))
    editor.running = True
    editor._handle_key_event(typed('!'))
    editor._handle_key_event(CTRL_S)

    assert doc.read_text(encoding="utf-8") == "!# Title\nbody"
    assert editor.running is False
    assert editor.session.exit_action == ExitAction.SAVE
    assert not editor.session.modified


def test_ctrl_s_creates_new_file(editor, tmp_path):
    path = tmp_path / "fresh.md"
    editor.load_file(str(path))
    editor.running = True
    for ch in "hi":
        editor._handle_key_event(typed(ch))
    editor._handle_key_event(ENTER)
    editor._handle_key_event(typed('x'))
    editor._handle_key_event(CTRL_S)
    assert path.read_text(encoding="utf-8") == "hi\nx"


def test_save_failure_still_exits(editor, doc):
    editor.load_file(str(doc))
    editor.running = True
    editor._handle_key_event(typed('x'))
    with patch('markpad.editor.save_document',
               side_effect=DocumentWriteError(str(doc), f"Error: Permission denied saving {doc}")):
        editor._handle_key_event(CTRL_S)

    assert editor.running is False
    assert editor.errors == [f"Error: Permission denied saving {doc}"]
    assert editor.session.modified
    assert doc.read_text(encoding="utf-8") == "# Title\nbody"


def test_ctrl_q_discards(editor, doc):
    editor.load_file(str(doc))
    editor.running = True
    editor._handle_key_event(typed('x'))
    with patch('markpad.editor.save_document') as mock_save:
        editor._handle_key_event(CTRL_Q)
    mock_save.assert_not_called()
    assert editor.running is False
    assert doc.read_text(encoding="utf-8") == "# Title\nbody"


def test_exit_keys_ignored_outside_edit_mode(editor, doc):
    editor.load_file(str(doc))
    editor.running = True
    editor._handle_key_event(ESCAPE)
    assert editor.session.mode == EditorMode.VIEW
    editor._handle_key_event(CTRL_S)
    editor._handle_key_event(CTRL_Q)
    assert editor.running is True
    assert editor.session.exit_action is None


def test_save_without_path_records_error(editor):
    assert editor.save_file() is False
    assert editor.errors == ["Error: No file name to save to"]


def test_keys_ignored_while_terminal_too_small(editor, doc):
    editor.load_file(str(doc))
    editor.error_mode = True
    editor._handle_key_event(typed('x'))
    assert editor.session.model.lines == ["# Title", "body"]


def test_refresh_draws_editor_box(editor, doc):
    editor.load_file(str(doc))
    editor._refresh()

    assert editor.error_mode is False
    editor.terminal.draw_editor.assert_called_once()
    lines, status, help_text, box_width, box_height = editor.terminal.draw_editor.call_args.args
    assert [line.text for line in lines] == ["█ Title", "body"]
    assert status == ("Mode: ", "EDIT", " | Line: 1, Column: 1")
    assert help_text.startswith("Press ESC")
    assert (box_width, box_height) == (80, 20)


def test_refresh_reports_small_terminal():
    editor = Editor(terminal=make_terminal(width=60, height=40))
    editor._refresh()
    assert editor.error_mode is True
    editor.terminal.draw_editor.assert_not_called()
    message1, message2 = editor.terminal.draw_error_message.call_args.args
    assert message1 == "Terminal too small! Need at least 80x22."
    assert message2 == "Current size: 60x40."


def test_run_redraws_on_resize_and_exits_on_ctrl_q(editor, doc):
    editor.load_file(str(doc))

    calls = []

    def fake_select(rlist, wlist, xlist):
        calls.append(rlist)
        if len(calls) == 1:
            # Simulate SIGWINCH having written to the pipe
            os.write(editor._resize_pipe_w, b'R')
            return ([editor._resize_pipe_r], [], [])
        return ([0], [], [])

    with patch('markpad.editor.select.select', side_effect=fake_select), \
            patch('markpad.editor.control_keys_enabled', contextlib.nullcontext), \
            patch.object(editor.keyboard, 'get_key_event', return_value=CTRL_Q), \
            patch.object(editor, '_draw') as mock_draw:
        editor.run()

    assert mock_draw.call_count == 2
    assert editor.running is False
    assert editor._resize_pipe_r is None
    editor.terminal.setup.assert_called_once()
    editor.terminal.cleanup.assert_called_once()


def test_choose_document(editor):
    choices = [DocumentChoice("a.md", "/x/a.md"), DocumentChoice("b.md", "/x/b.md")]
    down = KeyEvent(key_type=KeyType.SPECIAL, value='down', raw='<DOWN>')

    with patch('markpad.editor.control_keys_enabled', contextlib.nullcontext), \
            patch.object(editor.keyboard, 'get_key_event', side_effect=[down, ENTER]):
        assert editor.choose_document(choices) == "/x/b.md"

    editor.terminal.draw_selector.assert_called_with("Select a markdown file:", ["a.md", "b.md"], 1)
    editor.terminal.cleanup.assert_called_once()


def test_choose_document_without_documents(editor):
    with patch('markpad.editor.control_keys_enabled', contextlib.nullcontext), \
            patch.object(editor.keyboard, 'get_key_event', return_value=ENTER):
        assert editor.choose_document([]) is None
    editor.terminal.draw_message.assert_called_with("No markdown files found.")


def test_choose_document_cancel(editor):
    choices = [DocumentChoice("a.md", "/x/a.md")]
    with patch('markpad.editor.control_keys_enabled', contextlib.nullcontext), \
            patch.object(editor.keyboard, 'get_key_event', return_value=ESCAPE):
        assert editor.choose_document(choices) is None
