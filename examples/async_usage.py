"""
Async usage example for recruit-desk.

Runs the interview monitor for a few minutes with an in-memory ledger and
prints the toasts it raises.
"""

import asyncio

from recruitdesk.config import _load_env, _init_source
from recruitdesk.logging import logger, setup_logging
from recruitdesk.notifications.alerts import LogNotificationBackend, SystemNotifier, ToastBoard
from recruitdesk.notifications.monitor import InterviewMonitor


async def main_async(run_seconds: int = 300):
    """Example: monitor upcoming interviews for `run_seconds`."""
    cfg = _load_env()
    setup_logging(log_level=cfg["LOG_LEVEL"], log_file=cfg["LOG_FILE"])

    async with _init_source(cfg) as source:
        toasts = ToastBoard(duration_seconds=cfg["TOAST_DURATION_SECONDS"])
        monitor = InterviewMonitor(
            source=source,
            toasts=toasts,
            notifier=SystemNotifier(LogNotificationBackend()),
            interval_seconds=cfg["MONITOR_INTERVAL"],
        )
        monitor.start()
        try:
            for _ in range(run_seconds // 10):
                await asyncio.sleep(10)
                for toast in toasts.active():
                    logger.info(f"[toast] {toast.title}: {toast.description.splitlines()[0]}")
        finally:
            monitor.stop()
            await monitor.wait()

        logger.info(f"Monitor stats: {monitor.stats}")


if __name__ == "__main__":
    asyncio.run(main_async())
