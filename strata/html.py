"""
Serializes an inheritance-resolved template tree into HTML markup text.

The root template of the chain supplies the document; every ``block``
placeholder in it is replaced by the children of the most-derived template
block with the same name.
"""
from typing import List, Set

from .errors import RenderError
from .nodes import (
    KIND_BLOCK, KIND_COMMENT, KIND_CONTENT, KIND_DOCTYPE, KIND_EXPRESSION,
    Element, Template,
)

VOID_TAGS = frozenset([
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'source', 'track', 'wbr',
])
TEXT_INDENT = '  '


def _attribute(name: str, value: str) -> str:
    # Always quote attribute values
    escaped = value.replace('"', '&quot;')
    return f' {name}="{escaped}"'


def _text_lines(element: Element, base_indent: int) -> List[str]:
    """Flattens the text subtree of a raw or content element, keeping relative depth."""
    lines = []
    for child in element.children:
        lines.append(TEXT_INDENT * (child.indent - base_indent - 1) + child.text)
        lines.extend(_text_lines(child, base_indent))
    return lines


class HtmlRenderer:

    def __init__(self, template: Template):
        self.template = template
        self._active_blocks: Set[str] = set()

    def render(self) -> str:
        out: List[str] = []
        for element in self.template.root.elements:
            self._render_element(element, out)
        return ''.join(out)

    def _render_element(self, element: Element, out: List[str]) -> None:
        kind = element.kind
        if kind == KIND_COMMENT:
            return
        if kind == KIND_BLOCK:
            self._render_block(element, out)
        elif kind == KIND_DOCTYPE:
            if element.children:
                self._fatal_error(element, 'doctype can not have child elements.')
            out.append(f'<!DOCTYPE {element.text}>')
        elif kind == KIND_CONTENT:
            out.append('\n'.join([element.text] + _text_lines(element, element.indent)))
        elif kind == KIND_EXPRESSION:
            out.append(element.text)
            for child in element.children:
                self._render_element(child, out)
        else:
            self._render_tag(element, out, element.raw_content)

    def _render_tag(self, element: Element, out: List[str], raw: bool) -> None:
        attributes = ''
        if element.id:
            attributes += _attribute('id', element.id)
        if element.classes:
            attributes += _attribute('class', ' '.join(element.classes))
        for name, value in element.attributes:
            attributes += _attribute(name, value)

        tag = element.tag
        if tag.lower() in VOID_TAGS:
            if element.text or element.children:
                self._fatal_error(element, f'<{tag}> can not have content.')
            out.append(f'<{tag}{attributes} />')
            return

        out.append(f'<{tag}{attributes}>')
        if raw:
            lines = _text_lines(element, element.indent)
            if element.text:
                lines.insert(0, element.text)
            out.append('\n'.join(lines))
        else:
            out.append(element.text)
            for child in element.children:
                self._render_element(child, out)
        out.append(f'</{tag}>')

    def _render_block(self, element: Element, out: List[str]) -> None:
        name = element.name
        if name in self._active_blocks:
            self._fatal_error(element, f'block "{name}" includes itself.')
        for template in self.template.chain():
            block = template.blocks.get(name)
            if block is not None:
                break
        else:
            return
        self._active_blocks.add(name)
        try:
            for child in block.children:
                self._render_element(child, out)
        finally:
            self._active_blocks.discard(name)

    def _fatal_error(self, element: Element, message: str):
        template = element.template
        path = template.path if template else self.template.path
        raise RenderError(f"Strata Render Error ({path}, line {element.lineno}): {message}")


def render_template(template: Template) -> str:
    return HtmlRenderer(template).render()
