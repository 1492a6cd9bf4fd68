"""Minimal client for a running ``morphrpc`` server."""

from __future__ import annotations

from typing import Optional

import grpc

from ..models import AnalysisReply
from . import schema
from .codec import reply_from_message


def analyse(
    target: str, text: str, timeout: Optional[float] = 10.0
) -> AnalysisReply:
    """Call ``Analyse`` on ``target`` and return the decoded reply.

    Raises
    ------
    grpc.RpcError
        On transport failures and non-OK statuses.
    """

    with grpc.insecure_channel(target) as channel:
        call = channel.unary_unary(
            schema.ANALYSE_METHOD,
            request_serializer=schema.AnalyseRequest.SerializeToString,
            response_deserializer=schema.AnalyseReply.FromString,
        )
        message = call(schema.AnalyseRequest(input=text), timeout=timeout)
    return reply_from_message(message)
