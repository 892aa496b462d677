"""Configuration for the stale-artifact sweep."""

import sys
from dataclasses import dataclass, field
from pathlib import Path

PROCESS_NAME = "iceoryx2-request-response"
STATE_PATTERN = "iox2_*.shm_state"
SERVICE_PATTERN = "iox2_*.service"


def default_base_dir() -> Path:
    """Temp root that iceoryx2 writes its state files into on this platform."""
    if sys.platform == "win32":
        return Path("C:/Temp")
    return Path("/tmp")


@dataclass
class SweepConfig:
    """Sweep configuration with the middleware's default locations."""

    base_dir: Path = field(default_factory=default_base_dir)
    services_dir: Path | None = None  # Defaults to <base_dir>/iceoryx2/services
    process_name: str = PROCESS_NAME
    state_pattern: str = STATE_PATTERN
    service_pattern: str = SERVICE_PATTERN

    # CLI options
    kill_process: bool = True
    dry_run: bool = False
    kill_timeout: float = 3.0

    def __post_init__(self):
        self.base_dir = Path(self.base_dir)
        if self.services_dir is None:
            self.services_dir = self.base_dir / "iceoryx2" / "services"
        else:
            self.services_dir = Path(self.services_dir)
