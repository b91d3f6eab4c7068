"""
XML <-> canonical record conversion built on ElementTree.

Parsing is rootless: the document element is dropped and its children
become the keys of the returned dict. Rendering is the mirror image,
wrapping a record (or a sequence of records) in a caller-chosen root.
"""
import re
import xml.etree.ElementTree as ET
from datetime import date, datetime
from typing import Any, Dict, Union

XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
NIL_ATTR = f"{{{XSI_NS}}}nil"
LIST_ITEM_TAG = "item"

# Characters XML 1.0 does not allow anywhere in a document
ILLEGAL_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")
XML_NAME = re.compile(r"^[A-Za-z_][\w.\-]*\Z")

ET.register_namespace("xsi", XSI_NS)

ParseError = ET.ParseError


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _element_value(element: ET.Element) -> Any:
    if element.get(NIL_ATTR) in ("true", "1"):
        return None

    children = list(element)
    if not children:
        return element.text or ""

    record: Dict[str, Any] = {}
    repeated = set()
    for child in children:
        key = _local_name(child.tag)
        value = _element_value(child)
        if key not in record:
            record[key] = value
        elif key in repeated:
            record[key].append(value)
        else:
            record[key] = [record[key], value]
            repeated.add(key)
    return record


def parse_document(document: Union[str, bytes]) -> Dict[str, Any]:
    """
    Parse an XML document into a canonical record.

    An empty or whitespace-only document gives an empty record. A root
    without child elements also gives an empty record. Raises
    ``ParseError`` on malformed input.
    """
    if not document.strip():
        return {}
    root = ET.fromstring(document)
    value = _element_value(root)
    return value if isinstance(value, dict) else {}


def _set_scalar(element: ET.Element, value: Any) -> None:
    if value is None:
        element.set(NIL_ATTR, "true")
    elif isinstance(value, bool):
        element.text = "true" if value else "false"
    elif isinstance(value, (datetime, date)):
        element.text = value.isoformat()
    else:
        element.text = ILLEGAL_XML_CHARS.sub("", str(value))


def _append(parent: ET.Element, tag: str, value: Any) -> None:
    child = ET.SubElement(parent, tag)
    _fill(child, value)


def _fill(element: ET.Element, value: Any) -> None:
    if isinstance(value, dict):
        for key, item in value.items():
            key = str(key)
            # Keys that cannot be element names are left out
            if not XML_NAME.match(key):
                continue
            # Lists become repeated elements named after their key
            if isinstance(item, (list, tuple)):
                for entry in item:
                    _append(element, key, entry)
            else:
                _append(element, key, item)
    elif isinstance(value, (list, tuple)):
        for entry in value:
            _append(element, LIST_ITEM_TAG, entry)
    else:
        _set_scalar(element, value)


def render_document(root_name: str, payload: Any, item_name: str) -> bytes:
    """
    Serialize ``payload`` under a ``root_name`` element.

    A sequence payload is written as repeated ``item_name`` children of the
    root; a mapping as one child per key; a scalar as the root's text.
    """
    root = ET.Element(root_name)
    if isinstance(payload, (list, tuple)):
        for entry in payload:
            _append(root, item_name, entry)
    else:
        _fill(root, payload)
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)
