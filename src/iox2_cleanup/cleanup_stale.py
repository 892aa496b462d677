"""CLI entrypoint for cleaning up stale iceoryx2 artifacts."""

import argparse
import sys
from pathlib import Path

from iox2_cleanup.config import PROCESS_NAME, SweepConfig
from iox2_cleanup.sweeper import run


def parse_args(argv: list[str] | None = None) -> SweepConfig:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description=(
            "Remove stale iceoryx2 shared-memory state and service files and "
            "kill a lingering middleware process. Do not run this while an "
            "iceoryx2 application is alive: its files will be deleted."
        ),
    )
    parser.add_argument(
        "--base-dir",
        type=Path,
        help="Directory scanned for iox2_*.shm_state files (default: C:\\Temp on Windows, /tmp elsewhere)",
    )
    parser.add_argument(
        "--services-dir",
        type=Path,
        help="Directory scanned for iox2_*.service files (default: <base-dir>/iceoryx2/services)",
    )
    parser.add_argument(
        "--process-name",
        default=PROCESS_NAME,
        help=f"Process to terminate before deleting files (default: {PROCESS_NAME})",
    )
    parser.add_argument(
        "--no-kill",
        action="store_true",
        help="Do not terminate any process",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be removed without changing anything",
    )
    args = parser.parse_args(argv)

    options = {
        "services_dir": args.services_dir,
        "process_name": args.process_name,
        "kill_process": not args.no_kill,
        "dry_run": args.dry_run,
    }
    # Leave base_dir unset so the platform default applies
    if args.base_dir is not None:
        options["base_dir"] = args.base_dir
    return SweepConfig(**options)


def main(argv: list[str] | None = None) -> int:
    config = parse_args(argv)
    try:
        report = run(config)
    except OSError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(report.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
