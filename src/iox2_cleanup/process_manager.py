"""Lookup and termination of lingering middleware processes."""

import os
import sys

import psutil


def process_matches(name: str | None, target: str) -> bool:
    """Check a process image name against the target, ignoring a Windows .exe suffix."""
    if not name:
        return False
    if name == target:
        return True
    return name.lower().endswith(".exe") and name[:-4] == target


def find_processes(name: str) -> list[psutil.Process]:
    """Return running processes whose image name matches ``name``."""
    my_pid = os.getpid()
    found = []
    for proc in psutil.process_iter(["name"]):
        try:
            if proc.pid != my_pid and process_matches(proc.info["name"], name):
                found.append(proc)
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            pass
    return found


def kill_tree(proc: psutil.Process, timeout: float = 3.0):
    """Kill a process and all its children.

    Children that vanish or refuse the signal are skipped so that the parent
    is always signalled. AccessDenied on the parent itself propagates.
    """
    try:
        children = proc.children(recursive=True)
    except psutil.NoSuchProcess:
        return

    for child in children:
        try:
            child.terminate()
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            pass

    try:
        proc.terminate()
    except psutil.NoSuchProcess:
        return

    gone, alive = psutil.wait_procs(children + [proc], timeout=timeout)
    for p in alive:
        try:
            p.kill()
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            pass


def terminate_processes(name: str, timeout: float = 3.0, dry_run: bool = False) -> list[int]:
    """Stop every process named ``name``.

    Not finding one is the normal case after a clean shutdown and is not an
    error. Returns the PIDs that were (or, in dry-run mode, would be) killed.
    """
    pids = []
    for proc in find_processes(name):
        if dry_run:
            print(f"[dry-run] Would kill process {proc.pid} ({name})")
            pids.append(proc.pid)
            continue
        try:
            print(f"Killing lingering process {proc.pid} ({name})")
            kill_tree(proc, timeout=timeout)
            pids.append(proc.pid)
        except psutil.AccessDenied as e:
            print(f"WARNING: Cannot kill process {proc.pid}: {e}", file=sys.stderr)
    return pids
