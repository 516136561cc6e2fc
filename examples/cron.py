"""
Report from a cron job that runs hourly and takes a couple of minutes.

The 65 minute interval leaves room for the runtime; the message records
a fact alongside each heartbeat.
"""

import logging
import time

from success import expect

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")


def run_job() -> None:
    time.sleep(1)


if __name__ == "__main__":
    started = time.monotonic()
    with expect("Regular job").every("65m").sms("07000000000") as heartbeat:
        run_job()
        heartbeat.message(f"Took {time.monotonic() - started:.0f} seconds")
