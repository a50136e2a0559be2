"""
Offline county split of the raw woodland habitat dataset.

Reads the raw FeatureCollection, writes one shard per county and the index
the map loads at startup. All flags are optional.
"""

import argparse
import logging
import sys

from habitatmap.config import INDEX_PATH, RAW_HABITATS_PATH, SHARD_DIR, SHARD_URL_PREFIX
from habitatmap.exceptions import DataSchemaError
from habitatmap.io.partition import split_habitats_by_county

logger = logging.getLogger("habitatmap.cli")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="habitatmap-split",
        description="Split the raw habitat dataset into per-county shard files plus an index.",
    )
    parser.add_argument("--input", default=RAW_HABITATS_PATH, help=f"Raw FeatureCollection (default: {RAW_HABITATS_PATH})")
    parser.add_argument("--out-dir", default=SHARD_DIR, help=f"Shard output directory (default: {SHARD_DIR})")
    parser.add_argument("--index", default=INDEX_PATH, help=f"Index output path (default: {INDEX_PATH})")
    parser.add_argument("--url-prefix", default=SHARD_URL_PREFIX, help="URL path recorded for each shard")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        index = split_habitats_by_county(
            input_path=args.input,
            out_dir=args.out_dir,
            index_path=args.index,
            url_prefix=args.url_prefix,
        )
    except (DataSchemaError, OSError) as e:
        logger.error("Split failed: %s", e)
        return 1

    logger.info("%d counties, %d genera", len(index.counties), len(index.genera))
    return 0


if __name__ == "__main__":
    sys.exit(main())
