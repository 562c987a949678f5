"""
Stateless helpers that classify single source lines.

Indentation counts one level per tab and one level per *pair* of spaces.
The odd-space flag is kept across tabs, so the depth of any leading run is
``tabs + spaces // 2``.
"""
from typing import List

TAB = '\t'
SPACE = ' '
INDENT_TOP = 0

EXTENDS = 'extends'
BLOCK = 'block'


def format_lf(source: str) -> str:
    """Returns the source with every line ending replaced by LF."""
    return source.replace('\r\n', '\n').replace('\r', '\n')


def is_blank(line: str) -> bool:
    return line.strip() == ''


def indent_depth(line: str) -> int:
    depth = 0
    space = False
    for char in line:
        if char == TAB:
            depth += 1
        elif char == SPACE:
            if space:
                depth += 1
                space = False
            else:
                space = True
        else:
            break
    return depth


def is_top_level(line: str) -> bool:
    return indent_depth(line) == INDENT_TOP


def _is_directive(line: str, keyword: str) -> bool:
    # Works on the untrimmed line: " extends base" is not a directive.
    return line == keyword or line.startswith(keyword + ' ')


def is_extends(line: str) -> bool:
    return _is_directive(line, EXTENDS)


def is_block(line: str) -> bool:
    return _is_directive(line, BLOCK)


def tokens(line: str) -> List[str]:
    """Splits a directive on single spaces, so doubled spaces yield empty tokens."""
    return line.strip().split(SPACE)
