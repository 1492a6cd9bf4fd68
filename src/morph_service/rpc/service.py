"""gRPC binding of the morphology service."""

from __future__ import annotations

import logging
from concurrent import futures
from typing import Optional

import grpc

from ..errors import TokenizerError
from ..orchestrator import MorphOrchestrator
from . import schema
from .codec import reply_to_message


LOGGER = logging.getLogger(__name__)


class MorphServicer:
    """Implements ``morphrpc.Service`` on top of a shared orchestrator."""

    def __init__(self, orchestrator: MorphOrchestrator) -> None:
        self._orchestrator = orchestrator

    def Analyse(self, request, context: grpc.ServicerContext):  # noqa: N802
        try:
            reply = self._orchestrator.process(request.input)
        except TokenizerError as exc:
            LOGGER.error("event=rpc_analyse status=error kind=%s error=%s", exc.kind, exc)
            context.abort(grpc.StatusCode.INTERNAL, str(exc))
        return reply_to_message(reply)


def add_servicer_to_server(servicer: MorphServicer, server: grpc.Server) -> None:
    handler = grpc.method_handlers_generic_handler(
        schema.SERVICE_NAME,
        {
            "Analyse": grpc.unary_unary_rpc_method_handler(
                servicer.Analyse,
                request_deserializer=schema.AnalyseRequest.FromString,
                response_serializer=schema.AnalyseReply.SerializeToString,
            )
        },
    )
    server.add_generic_rpc_handlers((handler,))


def create_server(
    orchestrator: MorphOrchestrator,
    address: str,
    max_workers: int = 10,
) -> tuple[grpc.Server, int]:
    """Create an unstarted gRPC server bound to ``address``.

    Returns
    -------
    tuple[grpc.Server, int]
        The server and the bound port, which differs from the requested one
        when ``address`` ends in ``:0``.
    """

    server = grpc.server(
        futures.ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="morph-rpc"
        )
    )
    add_servicer_to_server(MorphServicer(orchestrator), server)
    port = server.add_insecure_port(address)
    if port == 0:
        raise RuntimeError(f"cannot bind gRPC server to {address}")
    LOGGER.info("event=rpc_server status=bound address=%s port=%d", address, port)
    return server, port


def serve(
    orchestrator: MorphOrchestrator,
    port: int,
    max_workers: int = 10,
    block: bool = True,
) -> Optional[grpc.Server]:
    """Start the gRPC server on all interfaces.

    With ``block`` the call waits for termination and returns ``None``;
    otherwise the running server is returned.
    """

    server, bound = create_server(orchestrator, f"[::]:{port}", max_workers)
    server.start()
    LOGGER.info("event=rpc_server status=started port=%d", bound)
    if not block:
        return server
    server.wait_for_termination()
    return None
