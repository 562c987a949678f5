from typing import List

from .errors import ChildNotAllowedError, IndentError
from .lines import indent_depth, is_blank
from .nodes import KIND_BLOCK, KIND_CONTENT, Block, Container, Element


class TreeBuilder:
    """
    Recursive descent over the lines of one source file.

    ``pos`` is the cursor: the 0-based index of the next unread line. Every
    call moves it forward and leaves it on the first line the caller has to
    look at.
    """

    def __init__(self, lines: List[str], path: str):
        self.lines = lines
        self.path = path
        self.pos = 0

    @property
    def exhausted(self) -> bool:
        return self.pos >= len(self.lines)

    def append_children(self, parent: Container, parent_indent: int,
                        parent_raw: bool = False, parent_kind: str = '') -> None:
        """Fetches the lines below `parent` and appends them as its children."""
        while not self.exhausted:
            line = self.lines[self.pos]
            if is_blank(line):
                self.pos += 1
                continue
            indent = indent_depth(line)
            if indent < parent_indent + 1:
                return
            if parent_raw or parent_kind == KIND_CONTENT:
                # raw content absorbs any deeper line, no step check
                self.append_child(parent, line, indent)
            elif parent_kind == KIND_BLOCK:
                raise ChildNotAllowedError(
                    f"The indent of the line {self.pos + 1} is invalid. "
                    f"Block element can not have child elements.",
                    self.pos + 1, self.path)
            elif indent == parent_indent + 1:
                self.append_child(parent, line, indent)
            else:
                raise IndentError(f"The indent of the line {self.pos + 1} is invalid.",
                                  self.pos + 1, self.path)

    def append_child(self, parent: Container, line: str, indent: int) -> None:
        lineno = self.pos + 1
        if isinstance(parent, Block):
            child = Element(line, lineno, indent, block=parent)
        else:
            child = Element(line, lineno, indent, parent=parent)
        parent.append_child(child)
        self.pos += 1
        self.append_children(child, child.indent, child.raw_content, child.kind)
