import textwrap

import pytest

from strata import Generator


@pytest.fixture
def write(tmp_path):
    """Writes a dedented template (or any text file) under tmp_path and returns its path."""
    def _write(name, text):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text).lstrip('\n'), encoding='utf-8')
        return path
    return _write


@pytest.fixture
def gen():
    return Generator(cache=False)
