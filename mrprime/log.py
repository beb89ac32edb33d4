import sys
from datetime import datetime, timezone

from . import config

def now():
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")

def log(line: str):
    """Timestamped line to stderr, appended to MRPRIME_LOG when set."""
    line = f"{now()} {line.rstrip()}"
    if config.LOG_PATH:
        try:
            with open(config.LOG_PATH, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as e:
            print(f"{now()} WARN log_file_unwritable path={config.LOG_PATH} err={e!r}",
                  file=sys.stderr, flush=True)
    print(line, file=sys.stderr, flush=True)
