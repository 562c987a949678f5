import logging
import os
from pathlib import Path
from typing import Any, Dict

from jinja2 import TemplateError
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .compiler import JinjaCompiler, default_environment
from .config import BuildConfig, WritePair
from .errors import StrataError
from .generator import Generator

logger = logging.getLogger(__name__)


def make_generator(config: BuildConfig) -> Generator:
    compiler = JinjaCompiler(default_environment(autoescape=config.autoescape))
    return Generator(cache=config.cache, compiler=compiler)


def render_pair(generator: Generator, pair: WritePair, context: Dict[str, Any]) -> None:
    template = generator.parse_file(pair.src)
    pair.dst.parent.mkdir(parents=True, exist_ok=True)
    with open(pair.dst, 'w', encoding='utf-8') as f:
        f.write(template.render(**context))
    logger.info("Wrote %s", pair.dst)


def build_all(config: BuildConfig, generator: Generator) -> None:
    for pair in config.write:
        render_pair(generator, pair, config.context)


def trigger_recompile(config: BuildConfig, generator: Generator) -> bool:
    """Drops every cached template and rebuilds all outputs. Returns False when the build failed."""
    generator.clear()
    try:
        build_all(config, generator)
    except (StrataError, TemplateError, OSError, UnicodeDecodeError) as e:
        logger.error("Build failed: %s", e)
        return False
    return True


class ChangeHandler(FileSystemEventHandler):

    def __init__(self, config: BuildConfig, generator: Generator):
        self.config = config
        self.generator = generator
        self.files_to_watch = {p.resolve() for p in config.watch_files}
        logger.debug("Handler initialized for %d files", len(self.files_to_watch))

    def _handle(self, event) -> None:
        if event.is_directory:
            return
        # Resolve path and check if it's one we care about
        src_path_abs = Path(os.fsdecode(event.src_path)).resolve()
        if src_path_abs in self.files_to_watch:
            logger.info("Detected modification in: %s", src_path_abs)
            trigger_recompile(self.config, self.generator)

    def on_modified(self, event):
        self._handle(event)

    def on_created(self, event):
        self._handle(event)


def run_watcher(config: BuildConfig) -> None:
    """Builds once, then rebuilds on every change until interrupted."""
    generator = make_generator(config)
    trigger_recompile(config, generator)

    dirs_to_watch = {p.resolve().parent for p in config.watch_files}
    event_handler = ChangeHandler(config, generator)
    observer = Observer()

    scheduled_count = 0
    for dir_path in dirs_to_watch:
        if not dir_path.is_dir():
            logger.warning("Directory '%s' does not exist. Cannot watch.", dir_path)
            continue
        observer.schedule(event_handler, str(dir_path), recursive=False)
        scheduled_count += 1
        logger.debug("Scheduled watcher for directory: %s", dir_path)

    if scheduled_count == 0:
        logger.error("No watchers were successfully scheduled.")
        return

    observer.start()
    logger.info("Watching for file changes in %d director%s. Press Ctrl+C to stop.",
                scheduled_count, 'y' if scheduled_count == 1 else 'ies')
    try:
        while observer.is_alive():
            observer.join(timeout=1)
    except KeyboardInterrupt:
        logger.info("Stopping watcher...")
    finally:
        if observer.is_alive():
            observer.stop()
        observer.join()
        logger.info("Watcher stopped.")
