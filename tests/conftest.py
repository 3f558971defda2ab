"""Shared test fixtures for wordbatch."""

from pathlib import Path

import pytest

from wordbatch.core.errors import SessionError


class FakeDocument:
    def __init__(self, path: Path):
        self.path = path
        self.template_reset = False
        self.closed = False


class FakeSession:
    """In-memory stand-in for WordSession; records calls on its FakeWord."""

    def __init__(self, word: "FakeWord", visible: bool = False):
        self.word = word
        self.visible = visible
        self.connected = False
        self.disconnected = False

    def connect(self) -> None:
        if self.word.fail_connect:
            raise SessionError("無法啟動 Word: 類別未登錄")
        self.connected = True

    def disconnect(self) -> None:
        self.connected = False
        self.disconnected = True

    def open_document(self, path: Path, disable_auto_macros: bool = True) -> FakeDocument:
        assert self.connected
        self.word.opened.append(path.name)
        self.word.macro_flags.append(disable_auto_macros)
        if path.name in self.word.fail_open:
            raise RuntimeError("檔案已損毀")
        document = FakeDocument(path)
        self.word.documents.append(document)
        return document

    def reset_template(self, document: FakeDocument) -> None:
        document.template_reset = True

    def save_as(self, document: FakeDocument, path: Path, format_code: int) -> None:
        self.word.existed_before_save[path.name] = path.exists()
        if document.path.name in self.word.fail_save:
            raise RuntimeError("磁碟已滿")
        path.write_text(f"converted:{format_code}:{document.path.name}", encoding="utf-8")
        self.word.saved.append((path, format_code))

    def close_document(self, document: FakeDocument) -> None:
        document.closed = True


class FakeWord:
    """Session factory that replaces WordSession in tests."""

    def __init__(self):
        self.sessions: list[FakeSession] = []
        self.fail_connect = False
        self.fail_open: set[str] = set()
        self.fail_save: set[str] = set()
        self.opened: list[str] = []
        self.macro_flags: list[bool] = []
        self.documents: list[FakeDocument] = []
        self.saved: list[tuple[Path, int]] = []
        self.existed_before_save: dict[str, bool] = {}

    def __call__(self, visible: bool = False) -> FakeSession:
        session = FakeSession(self, visible=visible)
        self.sessions.append(session)
        return session


@pytest.fixture
def fake_word():
    return FakeWord()


@pytest.fixture
def docs_dir(tmp_path):
    """Folder with two .doc files, a text file and a nested folder."""
    root = tmp_path / "docs"
    (root / "sub").mkdir(parents=True)
    (root / "a.doc").write_text("a", encoding="utf-8")
    (root / "b.doc").write_text("b", encoding="utf-8")
    (root / "notes.txt").write_text("notes", encoding="utf-8")
    (root / "sub" / "c.doc").write_text("c", encoding="utf-8")
    (root / "sub" / "~$c.doc").write_text("lock", encoding="utf-8")
    return root
