"""Command-line interface for the Aave health monitor."""
from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
import signal
import sys

from .account import resolve_address
from .chains.evm import EvmClient
from .config import AppConfig, load_config
from .logging_setup import configure_logging
from .notifications import TelegramNotifier
from .protocols.aave import AaveV3Adapter
from .services import Monitor, Scheduler

logger = logging.getLogger(__name__)


def _address_parent(default: object) -> argparse.ArgumentParser:
    """Parent parser carrying --address so it works before or after the command."""
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--address",
        default=default,
        help="Account to monitor (overrides ACCOUNT_ADDRESS)",
    )
    return parent


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="aave-health-monitor",
        description="Aave V3 health factor monitor with Telegram alerts",
        parents=[_address_parent(None)],
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root, "
        "else environment variables only)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")
    # SUPPRESS keeps a subcommand from resetting an address given before it
    command_parent = _address_parent(argparse.SUPPRESS)

    sub.add_parser(
        "check", help="Single position check with alerts", parents=[command_parent]
    )

    monitor_parser = sub.add_parser(
        "monitor", help="Continuous monitoring loop", parents=[command_parent]
    )
    monitor_parser.add_argument(
        "interval",
        nargs="?",
        type=int,
        default=None,
        help="Polling interval in seconds (overrides POLLING_INTERVAL)",
    )

    return parser


def _install_signal_handlers(stop_event: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except (NotImplementedError, RuntimeError):
            logger.debug("Signal handler for %s not supported", sig)


async def _run(args: argparse.Namespace, config: AppConfig, address: str) -> None:
    """Execute the selected command."""
    client = EvmClient(config.chain)
    adapter = AaveV3Adapter(client, config.chain)

    async with contextlib.AsyncExitStack() as stack:
        notifier: TelegramNotifier | None = None
        if config.telegram.enabled:
            notifier = await stack.enter_async_context(TelegramNotifier(config.telegram))
        else:
            logger.info("Telegram not configured; alerts go to the console only")

        monitor = Monitor(config, address, adapter, notifier)

        if args.command == "check":
            await monitor.check()
            return

        interval = args.interval or config.monitor.polling_interval_seconds
        stop_event = asyncio.Event()
        _install_signal_handlers(stop_event)

        scheduler = Scheduler(monitor.run_cycle, interval, stop_event=stop_event)
        listener = None
        if notifier is not None:
            listener = asyncio.create_task(notifier.listen(monitor.send_status, stop_event))
        try:
            await scheduler.run()
        finally:
            # getUpdates long-polls; don't wait out the poll on shutdown
            if listener is not None:
                listener.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await listener


def main(argv: list[str] | None = None) -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        args.command = "monitor"
    args.interval = getattr(args, "interval", None)

    configure_logging(args.log_level)

    try:
        config = load_config(args.config)
        address = resolve_address(args.address, config.account_address)
        if args.interval is not None and args.interval <= 0:
            raise ValueError("Polling interval must be a positive number of seconds")
    except (ValueError, FileNotFoundError) as e:
        logger.error("%s", e)
        sys.exit(1)

    logger.info("Monitoring address: %s", address)

    try:
        asyncio.run(_run(args, config, address))
    except Exception as e:
        logger.error("Fatal error: %s", e)
        sys.exit(1)
