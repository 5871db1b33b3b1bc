"""
CLI entry point for the business loader.

Load Usage:
    python -m yelp_loader load --input yelp_academic_dataset_business.json
    python -m yelp_loader load --input businesses.json --db data/yelp.db --partitions 16
    python -m yelp_loader load --config loader.json --fail-on-schema-error

Plan Usage:
    python -m yelp_loader plan --input businesses.json
    python -m yelp_loader plan --input businesses.json --ddl
"""

import argparse
import asyncio
import sys
from pathlib import Path

from sqlalchemy.dialects import sqlite

from yelp_loader.config import LoaderConfig, load_config_with_fallback
from yelp_loader.db.engine import create_engine
from yelp_loader.loader import LoadPipeline, build_load_plan
from yelp_loader.schema.ddl import render_ddl
from yelp_loader.services import partition_summary, read_businesses
from yelp_loader.shared.exceptions import YelpLoaderError
from yelp_loader.shared.logging_config import configure_logging


def progress_callback(batch_name: str, executed: int, total: int) -> None:
    """
    Progress callback for load reporting.

    Args:
        batch_name: Name of the batch being executed
        executed: Number of statements executed so far
        total: Total statements in the batch
    """
    if total > 0:
        pct = (executed / total) * 100
        print(f"  [{batch_name}] {executed:,} / {total:,} statements ({pct:.1f}%)")
    else:
        print(f"  [{batch_name}] no statements")


def positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def resolve_config(args: argparse.Namespace) -> LoaderConfig:
    """
    Build the run configuration: config file / environment / defaults, then
    command-line overrides.
    """
    config = load_config_with_fallback(args.config)

    if args.input:
        config.input_path = args.input
    if args.partitions is not None:
        config.partitioning = config.partitioning.model_copy(
            update={"partition_count": args.partitions}
        )
    if getattr(args, "db", None):
        config.database = config.database.model_copy(update={"path": args.db})
    if getattr(args, "fail_on_schema_error", False):
        config.pipeline = config.pipeline.model_copy(
            update={"continue_on_schema_error": False}
        )
    if getattr(args, "skip_attributes", False):
        config.pipeline = config.pipeline.model_copy(update={"load_attributes": False})

    return config


def _input_path(config: LoaderConfig) -> Path:
    if not config.input_path:
        raise FileNotFoundError("No input file given (use --input or set input_path)")
    return Path(config.input_path)


async def cmd_load(args: argparse.Namespace) -> int:
    """
    Run a complete load.

    Args:
        args: Command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        config = resolve_config(args)
        input_path = _input_path(config)

        print(f"\n=== Loading businesses from {input_path} ===\n")
        records = list(read_businesses(input_path))
        print(f"Read {len(records):,} businesses")

        engine = create_engine(config.database.path, echo=config.database.echo_sql)
        try:
            pipeline = LoadPipeline(engine, config=config, progress_callback=progress_callback)
            result = await pipeline.run(records)
        finally:
            await engine.dispose()

        print("\n=== Load Summary ===")
        print(f"  Run id:       {result.run_id}")
        print(f"  Database:     {config.database.path}")
        print(f"  Businesses:   {result.record_count:,}")
        print(f"  Category tables:  {len(result.plan.category_tables)}")
        print(f"  Attribute tables: {len(result.plan.attribute_tables)}")
        for batch_name, count in result.statements_executed.items():
            print(f"  {batch_name}: {count:,} statements")
        if result.schema_error is not None:
            print(f"  ✗ Schema phase failed and was skipped: {result.schema_error}")
        print(f"\nCompleted in {result.duration_seconds:.2f}s\n")
        return 0

    except KeyboardInterrupt:
        print("\n\nLoad interrupted by user")
        return 1
    except (YelpLoaderError, OSError, ValueError) as e:
        print(f"\nERROR: Load failed: {e}")
        return 1


async def cmd_plan(args: argparse.Namespace) -> int:
    """
    Show how the key spaces would be partitioned, without touching a database.

    Args:
        args: Command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        config = resolve_config(args)
        input_path = _input_path(config)
        records = list(read_businesses(input_path))

        plan = build_load_plan(
            records,
            partition_count=config.partitioning.partition_count,
            category_table_prefix=config.partitioning.category_table_prefix,
            attribute_table_prefix=config.partitioning.attribute_table_prefix,
            include_attributes=config.pipeline.load_attributes,
        )

        print(f"\n=== Partition plan for {input_path} (N={plan.partition_count}) ===\n")
        summary = partition_summary(plan)
        if summary.empty:
            print("No categories or attributes found")
        else:
            print(summary.to_string(index=False))

        if plan.attribute_keys.dropped:
            print(f"\nUnsupported attribute keys: {', '.join(plan.attribute_keys.dropped)}")

        if args.ddl:
            print("\n=== DDL ===\n")
            for statement in render_ddl(plan.tables, sqlite.dialect()):
                print(statement)
        print()
        return 0

    except (YelpLoaderError, OSError, ValueError) as e:
        print(f"\nERROR: Plan failed: {e}")
        return 1


async def run(args: argparse.Namespace) -> int:
    """
    Route to the selected subcommand.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    if args.command == "load":
        return await cmd_load(args)
    elif args.command == "plan":
        return await cmd_plan(args)
    else:
        print("ERROR: No command specified. Use --help for usage information.")
        return 1


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Arguments to parse (default sys.argv[1:])

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Load business records into hash-partitioned wide tables",
        prog="python -m yelp_loader",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    def add_common(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--input",
            type=str,
            help="JSON-lines business file (default: input_path from config)",
        )
        sub.add_argument(
            "--config",
            type=str,
            help="Path to a loader.json config file",
        )
        sub.add_argument(
            "--partitions",
            type=positive_int,
            help="Number of partition tables per key space (default: 10)",
        )
        sub.add_argument(
            "--skip-attributes",
            action="store_true",
            help="Do not create or populate the attribute tables",
        )
        sub.add_argument(
            "--log-level",
            type=str,
            default="WARNING",
            choices=["DEBUG", "INFO", "WARNING", "ERROR"],
            help="Log level (default: WARNING)",
        )

    # ===== LOAD SUBCOMMAND =====
    load_parser = subparsers.add_parser(
        "load",
        help="Create the tables and load a business file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Load with defaults (data/yelp.db, 10 partitions)
  python -m yelp_loader load --input yelp_academic_dataset_business.json

  # Abort when the schema phase fails
  python -m yelp_loader load --input businesses.json --fail-on-schema-error
        """,
    )
    add_common(load_parser)
    load_parser.add_argument(
        "--db",
        type=str,
        help="Target SQLite database file (default: data/yelp.db)",
    )
    load_parser.add_argument(
        "--fail-on-schema-error",
        action="store_true",
        help="Abort the run if table creation fails",
    )

    # ===== PLAN SUBCOMMAND =====
    plan_parser = subparsers.add_parser(
        "plan",
        help="Show the partition plan for a business file",
    )
    add_common(plan_parser)
    plan_parser.add_argument(
        "--ddl",
        action="store_true",
        help="Also print the generated DDL",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    return args


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(level=args.log_level)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
