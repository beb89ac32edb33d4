import os

# Entropy bytes read when a generator initializes itself on first use
DEFAULT_SEED_BYTES = int(os.getenv("MRPRIME_SEED_BYTES", "32"))
ENTROPY_SOURCE     = os.getenv("MRPRIME_ENTROPY_SOURCE", "/dev/urandom")

DEFAULT_ROUNDS     = int(os.getenv("MRPRIME_ROUNDS", "20"))
PRESCREEN_ROUNDS   = int(os.getenv("MRPRIME_PRESCREEN_ROUNDS", "2"))

# Accuracy of the 64-bit entry point
U64_ROUNDS         = 5

LOG_PATH           = os.getenv("MRPRIME_LOG", "")

# HTTP / queue
MAX_SYNC_BITS      = int(os.getenv("MRPRIME_MAX_SYNC_BITS", "1024"))
MAX_JOB_BITS       = int(os.getenv("MRPRIME_MAX_JOB_BITS", "8192"))
REDIS_URL          = os.getenv("REDIS_URL", "redis://localhost:6379/0")
JOB_TIMEOUT        = int(os.getenv("MRPRIME_JOB_TIMEOUT", str(60*60)))
BASE_URL           = os.getenv("MRPRIME_URL", "http://127.0.0.1:8080")
