import os
import re
import weakref
from typing import Dict, Iterator, List, Optional, Protocol, Tuple

from .errors import InvalidElementError, TokenCountError
from .lines import BLOCK, tokens

KIND_TAG = 'tag'
KIND_TEXT = 'text'
KIND_CONTENT = 'content'
KIND_BLOCK = 'block'
KIND_EXPRESSION = 'expression'
KIND_COMMENT = 'comment'
KIND_DOCTYPE = 'doctype'

DIRECTIVE_TOKENS = 2
DEFAULT_TAG = 'div'
DEFAULT_DOCTYPE = 'html'

# tag name, #id / .class selectors, then an optional '.' that marks raw content
_TAG_RE = re.compile(
    r"^(?P<tag>[A-Za-z][A-Za-z0-9:_-]*)?(?P<selectors>(?:[#.][A-Za-z0-9_-]+)*)(?P<raw>\.)?(?=\s|$)")
_SELECTOR_RE = re.compile(r"([#.])([A-Za-z0-9_-]+)")
# Split by space, respecting quotes
_TOKEN_RE = re.compile(r'''(?:[^\s"']+|"[^"]*"|'[^']*')+''')
_ATTR_RE = re.compile(r"^([A-Za-z_:@][A-Za-z0-9_:.@-]*)=(.*)$", re.S)
_EXPRESSION_PREFIXES = ('{{', '{%', '{#')


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in '"\'':
        return value[1:-1]
    return value


class Container(Protocol):
    """Anything that owns an ordered run of child elements."""

    children: List['Element']

    def append_child(self, child: 'Element') -> None:
        ...


class Element:
    """
    One markup node, built from one source line.

    An element is owned by exactly one of: a parent element, a block, or
    (for top-level lines) its template.
    """

    def __init__(self, line: str, lineno: int, indent: int,
                 parent: Optional['Element'] = None,
                 template: Optional['Template'] = None,
                 block: Optional['Block'] = None):
        self.line = line
        self.lineno = lineno
        self.indent = indent
        self.parent = parent
        self.block = block
        self._template = template
        self.children: List[Element] = []
        self.kind = KIND_TAG
        self.raw_content = False
        self.name = ''
        self.tag = ''
        self.id = ''
        self.classes: List[str] = []
        self.attributes: List[Tuple[str, str]] = []
        self.text = ''
        self._classify(line.strip())

    @property
    def template(self) -> Optional['Template']:
        if self.parent is not None:
            return self.parent.template
        if self.block is not None:
            return self.block.template
        return self._template

    def append_child(self, child: 'Element') -> None:
        self.children.append(child)

    def _error(self, cls, message):
        template = self.template
        return cls(message, self.lineno, template.path if template else None)

    def _classify(self, content: str) -> None:
        parent = self.parent
        if parent is not None and (parent.raw_content or parent.kind == KIND_CONTENT):
            # verbatim text, never re-parsed as markup
            self.kind = KIND_TEXT
            self.raw_content = True
            self.text = content
        elif content.startswith('//'):
            self.kind = KIND_COMMENT
            self.raw_content = True
            self.text = content[2:].strip()
        elif content.startswith('|'):
            self.kind = KIND_CONTENT
            self.text = content[2:] if content.startswith('| ') else content[1:]
        elif content.startswith(_EXPRESSION_PREFIXES):
            self.kind = KIND_EXPRESSION
            self.text = content
        elif content == KIND_DOCTYPE or content.startswith(KIND_DOCTYPE + ' '):
            self.kind = KIND_DOCTYPE
            self.text = content[len(KIND_DOCTYPE):].strip() or DEFAULT_DOCTYPE
        elif content == BLOCK or content.startswith(BLOCK + ' '):
            parts = tokens(content)
            if len(parts) != DIRECTIVE_TOKENS:
                template = self.template
                raise TokenCountError(DIRECTIVE_TOKENS, len(parts), self.lineno,
                                      template.path if template else None)
            self.kind = KIND_BLOCK
            self.name = parts[1]
        else:
            self._parse_tag(content)

    def _parse_tag(self, content: str) -> None:
        match = _TAG_RE.match(content)
        if match is None or not (match.group('tag') or match.group('selectors')):
            raise self._error(InvalidElementError, f"The line {self.lineno} is not a valid element.")
        self.tag = match.group('tag') or DEFAULT_TAG
        for prefix, value in _SELECTOR_RE.findall(match.group('selectors')):
            if prefix == '#':
                self.id = value
            else:
                self.classes.append(value)
        self.raw_content = match.group('raw') is not None

        # Leading name=value tokens are attributes, everything after is text
        rest = content[match.end():]
        for token in _TOKEN_RE.finditer(rest):
            attr = _ATTR_RE.match(token.group(0))
            if attr is None:
                self.text = rest[token.start():]
                break
            name, value = attr.groups()
            self.attributes.append((name, _unquote(value)))

    def _key(self):
        # the raw line is left out: tab and space indented sources compare equal
        return (self.lineno, self.indent, self.kind, self.raw_content, self.name,
                self.tag, self.id, self.classes, self.attributes, self.text, self.children)

    def __eq__(self, other):
        if isinstance(other, self.__class__):
            return self._key() == other._key()
        return False

    __hash__ = object.__hash__

    def __repr__(self):
        return '%s(%r, lineno=%d, indent=%d, kind=%r, children=%r)' % (
            self.__class__.__name__, self.line.strip(), self.lineno, self.indent,
            self.kind, self.children)


class Block:
    """A named subtree that overrides the same-named placeholder of an ancestor template."""

    def __init__(self, name: str, template: 'Template'):
        self.name = name
        self.template = template
        self.children: List[Element] = []

    def append_child(self, child: Element) -> None:
        self.children.append(child)

    def __eq__(self, other):
        if isinstance(other, self.__class__):
            return self.name == other.name and self.children == other.children
        return False

    __hash__ = object.__hash__

    def __repr__(self):
        return '%s(%r, children=%r)' % (self.__class__.__name__, self.name, self.children)


class Template:
    """
    One parsed source file.

    ``super`` is a strong reference to the extended template. ``sub`` points
    back through a weak reference, so the pair never holds two owning links.
    """

    def __init__(self, path: str):
        self.path = path
        self.super: Optional[Template] = None
        self._sub = None
        self.blocks: Dict[str, Block] = {}
        self.elements: List[Element] = []

    @property
    def sub(self) -> Optional['Template']:
        return self._sub() if self._sub is not None else None

    @sub.setter
    def sub(self, template: Optional['Template']) -> None:
        self._sub = weakref.ref(template) if template is not None else None

    @property
    def dir(self) -> str:
        return os.path.dirname(self.path)

    @property
    def root(self) -> 'Template':
        template = self
        while template.super is not None:
            template = template.super
        return template

    def chain(self) -> Iterator['Template']:
        """Yields this template, then each ancestor up to the root."""
        template = self
        while template is not None:
            yield template
            template = template.super

    def append_element(self, element: Element) -> None:
        self.elements.append(element)

    def add_block(self, name: str, block: Block) -> None:
        self.blocks[name] = block

    def html(self) -> str:
        from .html import render_template
        return render_template(self)

    def __eq__(self, other):
        if isinstance(other, self.__class__):
            return self.path == other.path and self.elements == other.elements \
                   and self.blocks == other.blocks and self.super == other.super
        return False

    __hash__ = object.__hash__

    def __repr__(self):
        return '%s(%r, super=%r, blocks=%r)' % (
            self.__class__.__name__, self.path,
            self.super.path if self.super else None, sorted(self.blocks))
