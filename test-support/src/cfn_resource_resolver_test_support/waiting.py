from time import monotonic, sleep
from typing import Callable


def wait_until(condition: Callable[[], bool], description: str, timeout_seconds: float = 5,
               interval_seconds: float = 0.01) -> None:
    expiry_time = monotonic() + timeout_seconds

    while not condition():
        assert monotonic() < expiry_time, f'Timed out waiting for {description}'
        sleep(interval_seconds)
