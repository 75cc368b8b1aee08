"""
Long-running interview monitor service with health check support.
"""

from __future__ import annotations
import asyncio
import os
import signal

from dotenv import load_dotenv

from recruitdesk.config import Config, _init_ledger, _init_source, _load_env
from recruitdesk.health import HealthCheckServer
from recruitdesk.logging import logger, setup_logging
from recruitdesk.notifications.alerts import LogNotificationBackend, SystemNotifier, ToastBoard
from recruitdesk.notifications.monitor import InterviewMonitor


def build_monitor(cfg: Config, source) -> InterviewMonitor:
    """Wire the monitor with the ledger and alert surfaces described by `cfg`."""
    return InterviewMonitor(
        source=source,
        ledger=_init_ledger(cfg),
        toasts=ToastBoard(duration_seconds=cfg["TOAST_DURATION_SECONDS"]),
        notifier=SystemNotifier(LogNotificationBackend(enabled=cfg["SYSTEM_NOTIFICATIONS"])),
        interval_seconds=cfg["MONITOR_INTERVAL"],
        window_minutes=cfg["ALERT_WINDOW_MINUTES"],
    )


async def run_monitor(cfg: Config) -> None:
    """Run the monitor until SIGINT/SIGTERM, then shut everything down."""
    health_server = None
    source = _init_source(cfg)
    monitor = build_monitor(cfg, source)

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, monitor.stop)
        except NotImplementedError:
            # Windows event loops have no signal handlers; KeyboardInterrupt still works
            pass

    try:
        if cfg["HEALTH_CHECK_ENABLED"]:
            try:
                health_server = HealthCheckServer(
                    port=cfg["HEALTH_CHECK_PORT"],
                    health_func=monitor.get_health,
                    alerts_func=lambda: [t.to_dict() for t in monitor.toasts.active()],
                )
                health_server.start()
            except Exception as e:
                logger.warning(f"Failed to start health check server: {e}")
                health_server = None

        monitor.start()
        logger.info(
            f"Monitoring interviews every {cfg['MONITOR_INTERVAL']}s "
            f"(alert window {cfg['ALERT_WINDOW_MINUTES']} min)"
        )
        await monitor.wait()
    finally:
        monitor.stop()
        if health_server:
            health_server.stop()
        await source.aclose()


def main() -> None:
    """Service entry point."""
    try:
        # Logging first so configuration errors are reported through it
        load_dotenv()
        setup_logging(
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
            log_file=os.getenv("LOG_FILE", "").strip() or None,
        )

        cfg = _load_env()
        logger.info("Starting interview monitor service")
        asyncio.run(run_monitor(cfg))
    except KeyboardInterrupt:
        logger.info("Service interrupted by user")
    except Exception as e:
        logger.exception(f"Service failed: {e}")
        raise
    finally:
        logger.info("Service stopped")


if __name__ == "__main__":
    main()
