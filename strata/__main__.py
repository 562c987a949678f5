import argparse
import logging
import sys
import time

import yaml
from jinja2 import TemplateError

from .config import load_config
from .errors import StrataError
from .watcher import build_all, make_generator, run_watcher

logger = logging.getLogger('strata')

RELOAD_DELAY = 3


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog='strata',
        description='Compiles indentation based strata templates to HTML.')
    parser.add_argument('config', help='YAML build configuration')
    parser.add_argument('-w', '--watch', action='store_true',
                        help='Keep running and rebuild whenever a watched file changes.')
    parser.add_argument('-v', '--verbose', action='store_true')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s - %(message)s',
                        datefmt='%Y-%m-%d %H:%M:%S')

    if not args.watch:
        try:
            cfg = load_config(args.config)
            build_all(cfg, make_generator(cfg))
        except (StrataError, TemplateError, OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            logger.error("Error: %s", e)
            return 1
        return 0

    while True:
        try:
            cfg = load_config(args.config)
        except (StrataError, OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            logger.error("Error: %s", e)
            logger.error("Please check your configuration, attempting to reload in %d seconds...",
                         RELOAD_DELAY)
            time.sleep(RELOAD_DELAY)
            continue
        run_watcher(cfg)
        return 0


if __name__ == '__main__':
    sys.exit(main())
