from typing import Optional

from jinja2 import Environment, Template


def default_environment(autoescape: bool = True) -> Environment:
    return Environment(autoescape=autoescape, keep_trailing_newline=True)


class JinjaCompiler:
    """
    Compiles rendered markup text into an executable Jinja2 template.

    Expressions written in strata sources (``{{ title }}``, ``{% for %}``)
    pass through the renderer untouched and are evaluated here, with
    auto-escaping on by default.
    """

    def __init__(self, environment: Optional[Environment] = None):
        self.environment = environment if environment is not None else default_environment()

    def __call__(self, name: str, markup: str) -> Template:
        env = self.environment
        code = env.compile(markup, name=name, filename=name)
        return env.template_class.from_code(env, code, env.make_globals(None))
