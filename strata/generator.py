import logging
import os
from typing import Any, Callable, Dict, List, Optional

from .builder import TreeBuilder
from .compiler import JinjaCompiler
from .errors import ExtendsCycleError, TokenCountError
from .lines import INDENT_TOP, format_lf, is_blank, is_block, is_extends, is_top_level, tokens
from .nodes import DIRECTIVE_TOKENS, Block, Element, Template

logger = logging.getLogger(__name__)

EXTENSION = '.strata'


class Generator:
    """
    Parses strata files into templates and compiles them to Jinja2 templates.

    With caching enabled both the parsed template and the compiled artifact
    are kept per path. The caches are plain dicts with no locking: share a
    generator between threads only behind your own lock.
    """

    def __init__(self, cache: bool = False,
                 compiler: Optional[Callable[[str, str], Any]] = None):
        self.cache = cache
        self.compiler = compiler if compiler is not None else JinjaCompiler()
        self._templates: Dict[str, Any] = {}
        self._parsed: Dict[str, Template] = {}
        self._resolving: List[str] = []

    def parse_file(self, path) -> Any:
        """Parses a strata file and returns the compiled downstream template."""
        path = os.fspath(path)
        if self.cache and path in self._templates:
            logger.debug("Compiled template cache hit: %s", path)
            return self._templates[path]
        template = self.parse(path)
        compiled = self.compiler(path, template.html())
        if self.cache:
            self._templates[path] = compiled
        return compiled

    def parse(self, path) -> Template:
        """Parses a strata file and returns its template."""
        path = os.fspath(path)
        if self.cache and path in self._parsed:
            logger.debug("Template cache hit: %s", path)
            return self._parsed[path]
        with open(path, 'r', encoding='utf-8', newline='') as f:
            source = f.read()
        template = self.parse_source(source, path)
        if self.cache:
            self._parsed[path] = template
        return template

    def parse_source(self, source: str, path: str) -> Template:
        """
        Builds a template from in-memory source. `path` names the template
        and anchors relative `extends` targets. The result is never cached.
        """
        key = os.path.normpath(os.path.abspath(path))
        if key in self._resolving:
            cycle = self._resolving[self._resolving.index(key):] + [key]
            raise ExtendsCycleError(cycle)
        self._resolving.append(key)
        try:
            logger.debug("Parsing template %s", path)
            template = Template(path)
            self._build(template, format_lf(source).split('\n'))
        finally:
            self._resolving.pop()
        return template

    def clear(self) -> None:
        self._templates.clear()
        self._parsed.clear()

    def _build(self, template: Template, lines: List[str]) -> None:
        builder = TreeBuilder(lines, template.path)
        while not builder.exhausted:
            line = lines[builder.pos]
            lineno = builder.pos + 1
            builder.pos += 1
            if is_blank(line):
                continue
            if not is_top_level(line):
                # only top-level lines start a node here
                continue

            if is_extends(line):
                parts = tokens(line)
                if len(parts) != DIRECTIVE_TOKENS:
                    raise TokenCountError(DIRECTIVE_TOKENS, len(parts), lineno, template.path)
                super_template = self.parse(os.path.join(template.dir, parts[1] + EXTENSION))
                super_template.sub = template
                template.super = super_template
            elif template.super is not None and is_block(line):
                parts = tokens(line)
                if len(parts) != DIRECTIVE_TOKENS:
                    raise TokenCountError(DIRECTIVE_TOKENS, len(parts), lineno, template.path)
                block = Block(parts[1], template)
                template.add_block(block.name, block)
                builder.append_children(block, INDENT_TOP)
            else:
                element = Element(line, lineno, INDENT_TOP, template=template)
                template.append_element(element)
                builder.append_children(element, INDENT_TOP, element.raw_content, element.kind)
