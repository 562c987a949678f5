"""
Indentation based HTML templates with single-chain inheritance.
"""
from .errors import (
    ChildNotAllowedError, ConfigError, ExtendsCycleError, IndentError,
    InvalidElementError, RenderError, StrataError, TemplateSyntaxError,
    TokenCountError,
)
from .generator import EXTENSION, Generator
from .nodes import Block, Element, Template

__all__ = [
    'Block', 'ChildNotAllowedError', 'ConfigError', 'Element', 'EXTENSION',
    'ExtendsCycleError', 'Generator', 'IndentError', 'InvalidElementError',
    'RenderError', 'StrataError', 'Template', 'TemplateSyntaxError',
    'TokenCountError',
]
