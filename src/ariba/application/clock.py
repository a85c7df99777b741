import time


def system_clock() -> int:
    """Current wall-clock time in whole epoch seconds."""
    return int(time.time())
