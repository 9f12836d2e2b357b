"""CLI entry point for the user import job.

Usage:
    python -m scripts.import_users --db-url sqlite:///users.db --file data/users.csv [--chunk-size 10]
"""

import argparse
import logging
import sys

from importdb import create_service
from userimport import BatchStatus, ImportConfig, build_import_job, ensure_schema
from userimport.schema import USER_TABLE
from userimport.step import DEFAULT_CHUNK_SIZE

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Import users from a delimited file into the database"
    )
    parser.add_argument(
        "--db-url", required=True, help="Database URL (sqlite:/// or postgresql://)"
    )
    parser.add_argument("--file", required=True, help="Path to the delimited users file")
    parser.add_argument(
        "--chunk-size", type=int, default=DEFAULT_CHUNK_SIZE, help="Records per transaction chunk"
    )
    parser.add_argument("--delimiter", default=",", help="Single-character field delimiter")
    parser.add_argument("--skip-lines", type=int, default=1, help="Header lines to skip")
    parser.add_argument("--table", default=USER_TABLE, help="Target table")
    parser.add_argument(
        "--launches", type=int, default=1, help="Number of times to launch the job"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    config = ImportConfig(
        file=args.file,
        table=args.table,
        chunk_size=args.chunk_size,
        delimiter=args.delimiter,
        lines_to_skip=args.skip_lines,
    )

    service = create_service(args.db_url)
    service.connect()
    try:
        ensure_schema(service, config.table)
        job = build_import_job(service, config)
        executions = [job.launch() for _ in range(args.launches)]
    finally:
        service.close()

    for execution in executions:
        logger.info(
            "Run %d: %s (read: %d, written: %d)",
            execution.run_id,
            execution.status.value,
            execution.read_count,
            execution.write_count,
        )
    return 0 if all(e.status is BatchStatus.COMPLETED for e in executions) else 1


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    sys.exit(main())
