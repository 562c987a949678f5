from setuptools import setup

setup(
    name="strata",
    version="0.1.0",
    description="Indentation based markup language with template inheritance that compiles to html",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=['strata'],
    python_requires=">=3.8",
    install_requires=[
        "jinja2>=3.0",
        "watchdog",
        "pyyaml",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
