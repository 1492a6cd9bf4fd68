"""Protobuf messages of the ``morphrpc`` service.

The descriptors are built at import time and mirror ``morph.proto`` shipped
next to this module, which clients may compile with ``protoc``.
"""

from __future__ import annotations

from typing import Iterable, Tuple

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory


PACKAGE = "morphrpc"
SERVICE_NAME = f"{PACKAGE}.Service"
ANALYSE_METHOD = f"/{SERVICE_NAME}/Analyse"

_FIELD = descriptor_pb2.FieldDescriptorProto

# (name, number, type, label, type_name)
_MESSAGES: Tuple[Tuple[str, Tuple[Tuple[str, int, int, int, str], ...]], ...] = (
    (
        "AnalyseRequest",
        (("input", 1, _FIELD.TYPE_STRING, _FIELD.LABEL_OPTIONAL, ""),),
    ),
    (
        "TagSet",
        (
            ("pos", 1, _FIELD.TYPE_STRING, _FIELD.LABEL_OPTIONAL, ""),
            ("tags", 2, _FIELD.TYPE_STRING, _FIELD.LABEL_REPEATED, ""),
        ),
    ),
    (
        "Entry",
        (
            ("lemma", 1, _FIELD.TYPE_STRING, _FIELD.LABEL_OPTIONAL, ""),
            ("tag_set", 2, _FIELD.TYPE_MESSAGE, _FIELD.LABEL_OPTIONAL, "TagSet"),
        ),
    ),
    (
        "Item",
        (
            ("form", 1, _FIELD.TYPE_STRING, _FIELD.LABEL_OPTIONAL, ""),
            ("entries", 2, _FIELD.TYPE_MESSAGE, _FIELD.LABEL_REPEATED, "Entry"),
            ("error", 3, _FIELD.TYPE_STRING, _FIELD.LABEL_OPTIONAL, ""),
        ),
    ),
    (
        "AnalyseReply",
        (("items", 1, _FIELD.TYPE_MESSAGE, _FIELD.LABEL_REPEATED, "Item"),),
    ),
)


def _add_message(
    file_proto: descriptor_pb2.FileDescriptorProto,
    name: str,
    fields: Iterable[Tuple[str, int, int, int, str]],
) -> None:
    message = file_proto.message_type.add(name=name)
    for field_name, number, field_type, label, type_name in fields:
        field = message.field.add(
            name=field_name, number=number, type=field_type, label=label
        )
        if type_name:
            field.type_name = f".{PACKAGE}.{type_name}"


def build_file_descriptor_proto() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="morph_service/rpc/morph.proto",
        package=PACKAGE,
        syntax="proto3",
    )
    for name, fields in _MESSAGES:
        _add_message(file_proto, name, fields)

    service = file_proto.service.add(name="Service")
    service.method.add(
        name="Analyse",
        input_type=f".{PACKAGE}.AnalyseRequest",
        output_type=f".{PACKAGE}.AnalyseReply",
    )
    return file_proto


POOL = descriptor_pool.DescriptorPool()
POOL.AddSerializedFile(build_file_descriptor_proto().SerializeToString())


def _message_class(name: str):
    return message_factory.GetMessageClass(
        POOL.FindMessageTypeByName(f"{PACKAGE}.{name}")
    )


AnalyseRequest = _message_class("AnalyseRequest")
TagSet = _message_class("TagSet")
Entry = _message_class("Entry")
Item = _message_class("Item")
AnalyseReply = _message_class("AnalyseReply")
