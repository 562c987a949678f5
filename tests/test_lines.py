import pytest

from strata import lines


@pytest.mark.parametrize('line, expected', [
    ('', True),
    ('   ', True),
    ('\t \t', True),
    (' a', False),
    ('a', False),
])
def test_is_blank(line, expected):
    assert lines.is_blank(line) is expected


@pytest.mark.parametrize('line, depth', [
    ('p', 0),
    ('\tp', 1),
    ('\t\tp', 2),
    ('  p', 1),
    ('    p', 2),
    # an odd trailing space adds nothing
    (' p', 0),
    ('   p', 1),
    ('     p', 2),
    # tabs and spaces mix: tabs + spaces // 2
    ('\t  p', 2),
    (' \t p', 2),
    (' \tp', 1),
    # scanning stops at the first other character
    ('p  q', 0),
    ('  p\t\tq', 1),
])
def test_indent_depth(line, depth):
    assert lines.indent_depth(line) == depth


def test_is_top_level():
    assert lines.is_top_level('div')
    assert lines.is_top_level(' div')
    assert not lines.is_top_level('  div')
    assert not lines.is_top_level('\tdiv')


@pytest.mark.parametrize('line, expected', [
    ('extends base', True),
    ('extends', True),
    ('extends a b', True),
    ('extendsbase', False),
    (' extends base', False),
    ('Extends base', False),
    ('extends\tbase', False),
])
def test_is_extends(line, expected):
    assert lines.is_extends(line) is expected


@pytest.mark.parametrize('line, expected', [
    ('block title', True),
    ('block', True),
    ('blocks title', False),
    ('  block title', False),
])
def test_is_block(line, expected):
    assert lines.is_block(line) is expected


def test_format_lf():
    assert lines.format_lf('a\r\nb\rc\nd') == 'a\nb\nc\nd'


def test_tokens_split_on_single_spaces():
    assert lines.tokens('extends base ') == ['extends', 'base']
    assert lines.tokens('extends  base') == ['extends', '', 'base']
