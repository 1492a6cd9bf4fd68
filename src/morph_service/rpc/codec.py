"""Conversions between the internal model and ``morphrpc`` messages."""

from __future__ import annotations

from ..models import AnalysisReply, Entry, Item, TagSet
from . import schema


def entry_to_message(entry: Entry):
    return schema.Entry(
        lemma=entry.lemma,
        tag_set=schema.TagSet(pos=entry.tag_set.pos, tags=list(entry.tag_set.tags)),
    )


def item_to_message(item: Item):
    message = schema.Item(form=item.form)
    message.entries.extend(entry_to_message(e) for e in item.entries)
    if item.error is not None:
        message.error = item.error
    return message


def reply_to_message(reply: AnalysisReply):
    message = schema.AnalyseReply()
    message.items.extend(item_to_message(item) for item in reply.items)
    return message


def reply_from_message(message) -> AnalysisReply:
    """Rebuild an ``AnalysisReply``; an empty ``error`` string means unset."""

    items = []
    for item in message.items:
        entries = tuple(
            Entry(
                lemma=e.lemma,
                tag_set=TagSet(pos=e.tag_set.pos, tags=tuple(e.tag_set.tags)),
            )
            for e in item.entries
        )
        items.append(Item(form=item.form, entries=entries, error=item.error or None))
    return AnalysisReply(items=tuple(items))
