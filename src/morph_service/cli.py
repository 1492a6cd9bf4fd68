"""Command line entry point: ``morph-service``."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import grpc
import uvicorn

from .analyser import PymorphyAnalyser
from .api import reply_to_json
from .errors import MorphServiceError
from .logging_config import setup_logging
from .orchestrator import MorphOrchestrator
from .settings import TRANSPORTS, Settings
from .tokenizer import SpacyTokenizer
from .web import create_app
from . import rpc


LOGGER = logging.getLogger(__name__)


def build_orchestrator(settings: Settings) -> MorphOrchestrator:
    """Create the process-wide adapters and the orchestrator sharing them."""

    return MorphOrchestrator(
        tokenizer=SpacyTokenizer(lang=settings.lang),
        analyser=PymorphyAnalyser(lang=settings.lang, known_only=settings.known_only),
        max_workers=settings.workers,
    )


def _serve(args: argparse.Namespace, settings: Settings) -> int:
    transports = tuple(args.transport) if args.transport else settings.enabled_transports
    http_port = args.http_port if args.http_port is not None else settings.http_port
    rpc_port = args.rpc_port if args.rpc_port is not None else settings.rpc_port

    orchestrator = build_orchestrator(settings)
    LOGGER.info(
        "event=serve status=starting transports=%s lang=%s workers=%d",
        ",".join(transports),
        settings.lang,
        settings.workers,
    )

    rpc_server: Optional[grpc.Server] = None
    try:
        if "http" not in transports:
            rpc.serve(orchestrator, rpc_port, settings.rpc_max_workers, block=True)
            return 0
        if "rpc" in transports:
            rpc_server = rpc.serve(
                orchestrator, rpc_port, settings.rpc_max_workers, block=False
            )
        uvicorn.run(
            create_app(orchestrator),
            host=settings.http_host,
            port=http_port,
            log_config=None,
        )
    finally:
        if rpc_server is not None:
            rpc_server.stop(grace=5).wait()
        orchestrator.close()
        LOGGER.info("event=serve status=finished")
    return 0


def _analyse(args: argparse.Namespace, settings: Settings) -> int:
    orchestrator = build_orchestrator(settings)
    try:
        print(reply_to_json(orchestrator.process(args.text)))
    except MorphServiceError as exc:
        LOGGER.error("event=analyse status=error kind=%s error=%s", exc.kind, exc)
        return 1
    finally:
        orchestrator.close()
    return 0


def _rpc_call(args: argparse.Namespace, settings: Settings) -> int:
    target = args.target or f"localhost:{settings.rpc_port}"
    try:
        reply = rpc.analyse(target, args.text, timeout=args.timeout)
    except grpc.RpcError as exc:
        LOGGER.error(
            "event=rpc_call status=error target=%s code=%s details=%s",
            target,
            exc.code(),
            exc.details(),
        )
        return 1
    for item in reply.items:
        print("form:", item.form)
        if item.error is not None:
            print("! error:", item.error)
        for entry in item.entries:
            print("-", entry.lemma, entry.tag_set.pos, " ".join(entry.tag_set.tags))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="morph-service",
        description="Per-token morphological analysis over HTTP and gRPC",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: MORPH_LOG_LEVEL or INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the HTTP and/or gRPC server")
    serve.add_argument(
        "--transport",
        action="append",
        choices=TRANSPORTS,
        help="Transport to enable; repeat for several (default: MORPH_TRANSPORTS)",
    )
    serve.add_argument("--http-port", type=int, default=None, help="HTTP port")
    serve.add_argument("--rpc-port", type=int, default=None, help="gRPC port")
    serve.set_defaults(handler=_serve)

    analyse = commands.add_parser("analyse", help="Analyse TEXT and print JSON")
    analyse.add_argument("text", help="Input text")
    analyse.set_defaults(handler=_analyse)

    rpc_call = commands.add_parser("rpc-call", help="Call a running gRPC server")
    rpc_call.add_argument("text", help="Input text")
    rpc_call.add_argument(
        "--target", default=None, help="host:port (default: localhost:MORPH_RPC_PORT)"
    )
    rpc_call.add_argument("--timeout", type=float, default=10.0, help="Seconds")
    rpc_call.set_defaults(handler=_rpc_call)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    setup_logging(args.log_level or settings.log_level)
    return args.handler(args, settings)


if __name__ == "__main__":
    sys.exit(main())
