# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module converts description models to and from the Service Bus XML schema carried inside
Atom content, using the msrest Serializer and Deserializer.
"""

import copy
import logging
import xml.etree.ElementTree as ET
from msrest import Serializer, Deserializer
from msrest.exceptions import DeserializationError, ValidationError
from msrest.serialization import Model, xml_key_extractor
from . import constant
from .atom import XmlSource, local_name, parse_xml
from .exceptions import ConfigurationError, SchemaViolation
from .models.descriptions import client_models

logger = logging.getLogger(__name__)

XSI_TYPE = "{{{}}}type".format(constant.XML_SCHEMA_INSTANCE_NAMESPACE)

_serializer = Serializer(client_models)


def _create_deserializer() -> Deserializer:
    deserializer = Deserializer(client_models)
    # Elements are found by name only, and unknown elements are ignored
    deserializer.key_extractors = [xml_key_extractor]
    deserializer.additional_properties_detection = False
    return deserializer


# Serialization #


def serialize(description: Model) -> str:
    """Write a description as an XML fragment in the Service Bus namespace.

    Populated attributes become same-named elements, in schema order. Attributes that are None
    are omitted. Durations are written as ISO 8601 durations.

    :raises: ConfigurationError if an attribute holds a value of the wrong type, or a required
        attribute of a filter or action is missing
    """
    model_name = type(description).__name__
    _check_model_types(description)
    try:
        element = _serializer.body(description, model_name, is_xml=True)
    except (ValueError, TypeError, ValidationError) as e:
        # msrest SerializationError is a ValueError
        raise ConfigurationError("Invalid {}: {}".format(model_name, e)) from e
    element.set("xmlns", constant.SERVICE_BUS_NAMESPACE)
    return ET.tostring(element, encoding="unicode")


def _check_model_types(model: Model) -> None:
    for attr, attr_desc in model._attribute_map.items():
        value = getattr(model, attr, None)
        model_cls = client_models.get(attr_desc["type"])
        if value is None or model_cls is None:
            continue
        if not isinstance(value, model_cls):
            raise ConfigurationError(
                "'{}' must be a {}, not {}".format(
                    attr_desc["key"], model_cls.__name__, type(value).__name__
                )
            )
        _check_model_types(value)


# Deserialization #


def parse(source: XmlSource, model_cls):
    """Read a description of the given model class from an XML fragment.

    Unknown elements are ignored. Namespaces are ignored, so a fragment parses the same whether
    or not it carries the Service Bus namespace.

    :raises: MalformedResponse if the source is not well-formed XML
    :raises: SchemaViolation if a required element is absent, or holds an invalid value
    """
    element = _strip_namespaces(parse_xml(source))
    deserializer = _create_deserializer()
    try:
        description = deserializer(model_cls.__name__, element)
    except DeserializationError as e:
        field = _find_invalid_field(deserializer, element, model_cls)
        raise SchemaViolation(
            field, "Invalid '{}' in {}: {}".format(field, model_cls.__name__, e)
        ) from e
    _check_required(description)
    return description


def _strip_namespaces(element: ET.Element) -> ET.Element:
    element = copy.deepcopy(element)
    for node in element.iter():
        node.tag = local_name(node.tag)
        type_name = node.get(XSI_TYPE)
        if type_name is not None:
            # The i:type value may itself carry a namespace prefix
            node.set(XSI_TYPE, type_name.rsplit(":", 1)[-1])
    return element


def _find_invalid_field(deserializer: Deserializer, element: ET.Element, model_cls) -> str:
    for attr, attr_desc in model_cls._attribute_map.items():
        attr_desc = dict(attr_desc)
        if attr_desc["type"] in client_models:
            attr_desc["internalType"] = client_models[attr_desc["type"]]
        try:
            deserializer.deserialize_data(
                xml_key_extractor(attr, attr_desc, element), attr_desc["type"]
            )
        except DeserializationError:
            return attr_desc["key"]
    return getattr(model_cls, "_xml_map", {}).get("name", model_cls.__name__)


def _check_required(model: Model) -> None:
    for attr, attr_desc in model._attribute_map.items():
        value = getattr(model, attr, None)
        if value is None:
            if model._validation.get(attr, {}).get("required", False):
                raise SchemaViolation(attr_desc["key"])
            continue
        if isinstance(value, Model):
            if "_subtype_map" in type(value).__dict__:
                # No known i:type, msrest fell back to the abstract base
                raise SchemaViolation(
                    attr_desc["key"],
                    "Unknown {} type for '{}'".format(type(value).__name__, attr_desc["key"]),
                )
            _check_required(value)
