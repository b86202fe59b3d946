from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, SIGTERM, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from netpresence.app import discover_devices, register_device
from netpresence.common import configure_logging
from netpresence.config import ConfigurationError, get_server_config
from netpresence.web import create_app
from netpresence.web.schema import DevicesResponse

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from netpresence.config import ServerConfig

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Register devices and discover peers")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP service")
    serve.add_argument("--host", type=str, help="Bind address (defaults to config)")
    serve.add_argument("--port", type=int, help="Bind port (defaults to config)")

    register = subparsers.add_parser("register", help="Register a device on a network")
    register.add_argument("--network", type=str, required=True, help="Network address key")
    register.add_argument("--name", type=str, required=True, help="Device name")
    register.add_argument("--address", type=str, required=True, help="Device address")

    discover = subparsers.add_parser("discover", help="List live devices on a network")
    discover.add_argument("--network", type=str, required=True, help="Network address key")

    return parser.parse_args(list(argv))


def _resolve_bind(args: argparse.Namespace, config: ServerConfig) -> tuple[str, int]:
    host = args.host or config.host
    port = args.port if args.port is not None else config.port
    if not 0 < port < 65536:
        raise ValueError(f"Invalid port: {port}")
    return host, port


def _serve(host: str, port: int, config: ServerConfig) -> None:
    app = create_app(trust_proxy=config.trust_proxy, proxy_hops=config.proxy_hops)
    log.info("Server starting on %s:%d", host, port)
    app.run(host=host, port=port)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.debug else logging.INFO)

    if parsed_args.command == "serve":
        try:
            config = get_server_config()
            host, port = _resolve_bind(parsed_args, config)
        except (ConfigurationError, ValueError):
            log.exception("Invalid configuration or arguments")
            sys.exit(2)

    try:
        if parsed_args.command == "serve":
            _serve(host, port, config)
        elif parsed_args.command == "register":
            register_device(parsed_args.network, parsed_args.name, parsed_args.address)
        elif parsed_args.command == "discover":
            devices = discover_devices(parsed_args.network)
            sys.stdout.write(DevicesResponse.from_devices(devices).model_dump_json(indent=2))
            sys.stdout.write("\n")
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def terminate_handler(signal_received: int, _frame: FrameType | None) -> None:
    """Stop on SIGINT/SIGTERM with a log line."""
    log.info("Received signal %d, terminating", signal_received)
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, terminate_handler)
    signal(SIGTERM, terminate_handler)
    main()


if __name__ == "__main__":
    run()
