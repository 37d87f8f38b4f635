# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Command line entry point: ``python -m venue_backend {serve,seed}``."""

from __future__ import annotations

import argparse
import sys

from venue_backend.shared.config import load_config
from venue_backend.shared.logging import logger, setup_logging


def _serve(args: argparse.Namespace) -> int:
    from venue_backend.app import create_app

    config = load_config()
    app = create_app(config)
    host = args.host or config.host
    port = args.port or config.port
    logger.info(f"Server running on http://{host}:{port}")
    app.run(host=host, port=port, debug=args.debug)
    return 0


def _seed(args: argparse.Namespace) -> int:
    from venue_backend.infrastructure.container import Container
    from venue_backend.infrastructure.seed import SeedError, seed_venues

    config = load_config()
    setup_logging(debug_mode=config.debug_logging)
    container = Container(config)
    try:
        inserted = seed_venues(container.venue_repository, args.file or config.seed.file)
    except SeedError as exc:
        logger.error(f"seed: {exc}")
        return 1
    finally:
        container.dispose()
    print(f"Inserted {inserted} venues")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="venue_backend", description="Venue records service")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP server")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.add_argument("--debug", action="store_true")
    serve.set_defaults(func=_serve)

    seed = sub.add_parser("seed", help="Fill an empty venue collection from a JSON file")
    seed.add_argument("--file", default=None, help="Seed file (defaults to SEED_FILE)")
    seed.set_defaults(func=_seed)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
