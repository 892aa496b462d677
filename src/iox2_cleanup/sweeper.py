"""One-shot sweep of stale iceoryx2 state and service files.

The sweep kills any lingering middleware process first, so that it releases
its files, then lists ``iox2_*.shm_state`` files in the base directory and
``iox2_*.service`` files in the services directory and deletes them.

Running this while a live iceoryx2 application is active deletes that
application's files out from under it. Only run it once the middleware is
known to be down.
"""

import os
import stat
import sys
from dataclasses import dataclass, field
from pathlib import Path

from iox2_cleanup.config import SweepConfig
from iox2_cleanup.process_manager import terminate_processes


@dataclass
class SweepReport:
    """What a sweep did (or would do, in dry-run mode)."""
    killed_pids: list[int] = field(default_factory=list)
    removed: list[Path] = field(default_factory=list)
    failed: list[tuple[Path, str]] = field(default_factory=list)
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return not self.failed

    def summary(self) -> str:
        verb = "Would remove" if self.dry_run else "Removed"
        parts = [f"{verb} {len(self.removed)} stale file(s)"]
        if self.killed_pids:
            killed = "would be killed" if self.dry_run else "killed"
            parts.append(f"{len(self.killed_pids)} process(es) {killed}")
        if self.failed:
            parts.append(f"{len(self.failed)} failure(s)")
        return ", ".join(parts)


def list_matching(directory: Path, pattern: str) -> list[Path]:
    """Single-level listing of files in ``directory`` matching ``pattern``.

    A directory that does not exist has no matches.
    """
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.glob(pattern) if not p.is_dir())


def check_base_dir(base_dir: Path) -> None:
    """Raise OSError unless ``base_dir`` is a directory we can list.

    Path.glob hides a PermissionError from scandir, so open the directory
    explicitly.
    """
    if not base_dir.exists():
        raise FileNotFoundError(f"Base directory does not exist: {base_dir}")
    if not base_dir.is_dir():
        raise NotADirectoryError(f"Base directory is not a directory: {base_dir}")
    with os.scandir(base_dir) as entries:
        next(entries, None)


def find_stale_files(config: SweepConfig) -> list[Path]:
    """Return stale state files followed by stale service files.

    Raises OSError if the base directory itself is unusable; the services
    directory is allowed to be missing.
    """
    check_base_dir(config.base_dir)
    state_files = list_matching(config.base_dir, config.state_pattern)
    service_files = list_matching(config.services_dir, config.service_pattern)
    return state_files + service_files


def force_remove(path: Path) -> None:
    """Delete a file, clearing a read-only flag if that is what blocks it."""
    try:
        path.unlink()
    except PermissionError:
        mode = stat.S_IMODE(path.stat().st_mode)
        if mode & stat.S_IWRITE:
            raise
        os.chmod(path, mode | stat.S_IWRITE)
        try:
            path.unlink()
        except OSError:
            os.chmod(path, mode)
            raise


def remove_files(paths, report: SweepReport) -> SweepReport:
    """Delete each path, recording successes and failures in ``report``.

    A failure on one file does not stop the rest of the sweep.
    """
    for path in paths:
        if path is None:
            continue
        path = Path(path)
        if report.dry_run:
            print(f"[dry-run] Would remove {path}")
            report.removed.append(path)
            continue
        try:
            force_remove(path)
        except FileNotFoundError:
            # Already gone
            continue
        except OSError as e:
            print(f"WARNING: Failed to remove {path}: {e}", file=sys.stderr)
            report.failed.append((path, str(e)))
            continue
        print(f"Removed {path}")
        report.removed.append(path)
    return report


def run(config: SweepConfig | Path | str | None = None) -> SweepReport:
    """Run the full sweep: kill the process, then delete stale files."""
    if config is None:
        config = SweepConfig()
    elif not isinstance(config, SweepConfig):
        config = SweepConfig(base_dir=Path(config))

    report = SweepReport(dry_run=config.dry_run)

    # Validate the base directory before touching any process
    check_base_dir(config.base_dir)

    if config.kill_process:
        report.killed_pids = terminate_processes(
            config.process_name,
            timeout=config.kill_timeout,
            dry_run=config.dry_run,
        )

    # List only after the kill: the process may have flushed files on exit
    remove_files(find_stale_files(config), report)
    return report
