import pytest

from strata import Generator, RenderError


def html(gen, source, path='page.strata'):
    return gen.parse_source(source, path).html()


def test_document(gen):
    source = (
        'doctype html\n'
        'html\n'
        '  head\n'
        '    title Hi\n'
        '  body\n'
        '    div#main.a.b data-x="1"\n'
        '      br\n'
    )
    assert html(gen, source) == (
        '<!DOCTYPE html><html><head><title>Hi</title></head>'
        '<body><div id="main" class="a b" data-x="1"><br /></div></body></html>'
    )


def test_attribute_quotes_are_escaped(gen):
    assert html(gen, 'a title=\'say "hi"\' go\n') == '<a title="say &quot;hi&quot;">go</a>'


def test_raw_content_keeps_relative_indentation(gen):
    source = 'script.\n  if (a) {\n    b();\n  }\n'
    assert html(gen, source) == '<script>if (a) {\n  b();\n}</script>'


def test_raw_tag_with_inline_text(gen):
    assert html(gen, 'p. first\n  second\n') == '<p>first\nsecond</p>'


def test_content_lines(gen):
    assert html(gen, 'p\n  | Hello\n    world\n  | !\n') == '<p>Hello\nworld!</p>'


def test_comments_are_dropped(gen):
    assert html(gen, '// note\n  more notes\np x\n') == '<p>x</p>'


def test_expressions_pass_through(gen):
    source = 'ul\n  {% for i in items %}\n    li {{ i }}\n  {% endfor %}\n'
    markup = html(gen, source)
    assert markup == '<ul>{% for i in items %}<li>{{ i }}</li>{% endfor %}</ul>'
    template = gen.compiler('page.strata', markup)
    assert template.render(items=[1, 2]) == '<ul><li>1</li><li>2</li></ul>'


def test_void_tag_with_content(gen):
    with pytest.raises(RenderError) as exc:
        html(gen, 'div\n  img\n    span\n')
    assert 'line 2' in str(exc.value)


def test_doctype_with_children(gen):
    with pytest.raises(RenderError):
        html(gen, 'doctype\n  html\n')


def test_unresolved_block_renders_nothing(gen):
    assert html(gen, 'main\n  block content\n') == '<main></main>'


@pytest.fixture
def layouts(write):
    write('base.strata', '''
        html
          head
            block head
          body
            block content
    ''')
    write('middle.strata', '''
        extends base
        block head
          title Middle
        block content
          main
            block inner
    ''')


def test_multi_level_inheritance(tmp_path, gen, layouts):
    leaf = gen.parse_source('extends middle\nblock inner\n  p leaf\n', str(tmp_path / 'leaf.strata'))
    assert leaf.html() == (
        '<html><head><title>Middle</title></head><body><main><p>leaf</p></main></body></html>'
    )
    assert leaf.super.html() == (
        '<html><head><title>Middle</title></head><body><main></main></body></html>'
    )


def test_most_derived_block_wins(tmp_path, gen, layouts):
    leaf = gen.parse_source('extends middle\nblock content\n  p mine\n', str(tmp_path / 'leaf.strata'))
    assert leaf.html() == '<html><head><title>Middle</title></head><body><p>mine</p></body></html>'


def test_top_level_elements_of_extending_template_are_not_rendered(tmp_path, gen, layouts):
    leaf = gen.parse_source('extends middle\np stray\n', str(tmp_path / 'leaf.strata'))
    assert [e.text for e in leaf.elements] == ['stray']
    assert 'stray' not in leaf.html()


def test_shared_cached_base_renders_each_child(write):
    gen = Generator(cache=True)
    write('base.strata', 'body\n  block content\n')
    one = gen.parse(write('one.strata', 'extends base\nblock content\n  p one\n'))
    two = gen.parse(write('two.strata', 'extends base\nblock content\n  p two\n'))
    assert one.html() == '<body><p>one</p></body>'
    assert two.html() == '<body><p>two</p></body>'


def test_block_including_itself(write, gen):
    write('base.strata', 'block a\n')
    child = write('child.strata', 'extends base\nblock a\n  div\n    block a\n')
    with pytest.raises(RenderError) as exc:
        gen.parse(child).html()
    assert 'includes itself' in str(exc.value)
