from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ViewportState:
    screen_rows: int
    screen_cols: int
    cursor_row: int = 0
    cursor_col: int = 0


@dataclass(frozen=True)
class TextRow:
    content: bytes

    @property
    def length(self) -> int:
        return len(self.content)


@dataclass
class EditorState:
    viewport: ViewportState
    rows: list[TextRow] = field(default_factory=list)
    dirty: bool = True
