"""JSON codec and public helpers for the morphology service."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import DecodeError, EncodeError
from .models import AnalysisReply, AnalysisRequest, Entry, Item, TagSet
from .orchestrator import MorphOrchestrator


LOGGER = logging.getLogger(__name__)


class MorphRequestBody(BaseModel):
    """Wire shape of an analysis request: ``{"input": "<text>"}``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    input: Optional[str] = None


def _describe_validation_error(exc: ValidationError) -> str:
    parts: List[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts) or str(exc)


def decode_request(raw: Union[bytes, str]) -> AnalysisRequest:
    """Decode a JSON request body.

    Raises
    ------
    DecodeError
        If the body is not a JSON object whose ``input`` is a string,
        null or absent.
    """

    try:
        body = MorphRequestBody.model_validate_json(raw)
    except ValidationError as exc:
        raise DecodeError(_describe_validation_error(exc)) from exc
    return AnalysisRequest(input=body.input or "")


def entry_to_dict(entry: Entry) -> Dict[str, Any]:
    return {
        "lemma": entry.lemma,
        "tagSet": {"pos": entry.tag_set.pos, "tags": list(entry.tag_set.tags)},
    }


def item_to_dict(item: Item) -> Dict[str, Any]:
    """Serialize one item, omitting ``entries``/``error`` when not applicable."""

    payload: Dict[str, Any] = {"form": item.form}
    if item.entries:
        payload["entries"] = [entry_to_dict(e) for e in item.entries]
    if item.error is not None:
        payload["error"] = item.error
    return payload


def reply_to_dict(reply: AnalysisReply) -> Dict[str, Any]:
    return {"items": [item_to_dict(item) for item in reply.items]}


def reply_to_json(reply: AnalysisReply) -> str:
    """Encode a reply as a JSON string.

    Raises
    ------
    EncodeError
        If the reply holds values JSON cannot represent.
    """

    try:
        return json.dumps(reply_to_dict(reply), ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise EncodeError(f"cannot encode reply: {exc}") from exc


def reply_from_dict(payload: Mapping[str, Any]) -> AnalysisReply:
    """Rebuild an ``AnalysisReply`` from its JSON-like shape."""

    items: List[Item] = []
    for raw_item in payload.get("items") or []:
        entries = tuple(
            Entry(
                lemma=raw_entry["lemma"],
                tag_set=TagSet(
                    pos=raw_entry["tagSet"]["pos"],
                    tags=tuple(raw_entry["tagSet"].get("tags") or ()),
                ),
            )
            for raw_entry in raw_item.get("entries") or []
        )
        items.append(
            Item(form=raw_item["form"], entries=entries, error=raw_item.get("error"))
        )
    return AnalysisReply(items=tuple(items))


def process_payload_to_json(
    orchestrator: MorphOrchestrator, raw: Union[bytes, str]
) -> str:
    """Decode ``raw``, analyse its input and return the JSON reply."""

    request = decode_request(raw)
    LOGGER.info("event=process_payload status=decoded input_len=%d", len(request.input))
    reply = orchestrator.process(request.input)
    return reply_to_json(reply)
