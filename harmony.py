#!/usr/bin/env python3
"""
Builds "A Harmony of the Gospel": a markdown synopsis of the Gospel
parallels (after Kurt Aland's Synopsis Quattuor Evangeliorum) with the
ESV text of every reference embedded under its pericope.

    ESV_API_KEY=... ./harmony.py > harmony.md
"""
import argparse
import logging
import sys

from bible import get_passage
from config import PRESETS, STYLES, TITLE_VARIANTS, HarmonyConfig
from pericope import Pericope
from report import ReportRenderer
from sheet import load_feed

logger = logging.getLogger(__name__)


class GospelHarmony:
    def __init__(self, config, debug_log=None):
        self.config = config
        self.debug_log = debug_log
        self.rows = []
        self.entries = []

    def load(self):
        self.rows = load_feed(self.config, self.debug_log)
        return self.rows

    def process(self, limit=None):
        if limit is None:
            limit = self.config.limit
        for count, row in enumerate(self.rows):
            if count == limit:
                break
            self.entries.append(Pericope(row, self.config.title_variant))
        logger.info("Built %d entries", len(self.entries))
        return self.entries

    def fetch_passage(self, reference):
        return get_passage(reference, self.config, self.debug_log)

    def to_markdown(self):
        renderer = ReportRenderer(self.fetch_passage, self.config.search_url)
        return renderer.render(self.entries)

    def run(self):
        self.load()
        self.process()
        return self.to_markdown()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate a markdown harmony of the Gospels with embedded ESV text.")
    parser.add_argument("--preset", choices=sorted(PRESETS),
                        help="Named combination of style and title variant (default: $HARMONY_STYLE or indented-embed)")
    parser.add_argument("--style", choices=STYLES, help="How passage markup is embedded")
    parser.add_argument("--titles", dest="title_variant", choices=TITLE_VARIANTS, help="Title capitalization")
    parser.add_argument("--limit", type=int, help="Only render the first N pericopes")
    parser.add_argument("--api-key", help="ESV API key (default: $ESV_API_KEY)")
    parser.add_argument("--feed-url", help="Spreadsheet JSON feed URL")
    parser.add_argument("--debug-dump", metavar="FILE", help="Append every fetched passage to FILE")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s: %(message)s',
        stream=sys.stderr,
    )

    config = HarmonyConfig.from_env(args.preset).with_overrides(
        style=args.style,
        title_variant=args.title_variant,
        limit=args.limit,
        api_key=args.api_key,
        feed_url=args.feed_url,
        debug_dump=args.debug_dump,
    )
    if not config.api_key:
        logger.warning("No ESV API key configured; passages will be empty")

    print(GospelHarmony(config).run())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
