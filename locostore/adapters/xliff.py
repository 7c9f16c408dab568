"""XLIFF 1.2 / 2.0 conversion for message catalogues.

Dependencies:
    - ``xml.etree.ElementTree`` for parsing and writing.

Call context:
    - ``LocoStorage.export`` parses Loco exports with ``content_to_catalogue``.
    - ``LocoStorage.import_`` serializes domains with ``catalogue_to_content``.
    - The CLI reads and writes ``.xlf`` files with both functions.
"""

from __future__ import annotations

import base64
import hashlib
from typing import Any, Dict, List, Mapping, Optional
from xml.etree import ElementTree as ET

from locostore.domain.catalogue import MessageCatalogue
from locostore.domain.errors import StorageError

XLIFF_12_NS = "urn:oasis:names:tc:xliff:document:1.2"
XLIFF_20_NS = "urn:oasis:names:tc:xliff:document:2.0"
_XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'


def content_to_catalogue(content: str, locale: str, domain: str) -> MessageCatalogue:
    """Parse XLIFF text into a catalogue holding ``domain`` for ``locale``.

    Raises:
        StorageError: If ``content`` is not well-formed XLIFF.
    """
    try:
        root = ET.fromstring(content.encode("utf-8"))
    except ET.ParseError as exc:
        raise StorageError(f"Invalid XLIFF content for domain \"{domain}\": {exc}") from exc

    catalogue = MessageCatalogue(locale)
    if _local_name(root.tag) != "xliff":
        raise StorageError(f"Invalid XLIFF content for domain \"{domain}\": root is <{root.tag}>")

    if root.get("version", "").startswith("2") or _namespace(root.tag) == XLIFF_20_NS:
        _load_v2(root, catalogue, domain)
    else:
        _load_v1(root, catalogue, domain)
    return catalogue


def catalogue_to_content(
    catalogue: MessageCatalogue,
    domain: str,
    options: Optional[Mapping[str, Any]] = None,
) -> str:
    """Serialize one domain of ``catalogue`` as XLIFF text.

    Options:
        default_locale: Source language written to the document header.
        xliff_version: ``"2.0"`` (default) or ``"1.2"``.
    """
    options = dict(options or {})
    source_locale = str(options.get("default_locale") or catalogue.locale)
    if str(options.get("xliff_version", "2.0")) == "1.2":
        root = _dump_v1(catalogue, domain, source_locale)
    else:
        root = _dump_v2(catalogue, domain, source_locale)
    ET.indent(root, space="  ")
    return _XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"


def unit_id(key: str) -> str:
    """Short stable id derived from the message key."""
    digest = base64.b64encode(hashlib.sha256(key.encode("utf-8")).digest()).decode("ascii")
    return digest[:7].translate(str.maketrans("/+", "._"))


# ---- Reading ----
def _load_v1(root: ET.Element, catalogue: MessageCatalogue, domain: str) -> None:
    for unit in _iter_local(root, "trans-unit"):
        source = _child_text(unit, "source")
        key = unit.get("resname") or source
        if key is None:
            continue
        target = _child_text(unit, "target")
        catalogue.set(key, target if target is not None else source or "", domain)

        notes = []
        for note in _iter_local(unit, "note"):
            entry: Dict[str, Any] = {"content": note.text or ""}
            for attr in ("priority", "from"):
                if note.get(attr) is not None:
                    entry[attr] = note.get(attr)
            notes.append(entry)
        if notes:
            catalogue.set_metadata(key, {"notes": notes}, domain)


def _load_v2(root: ET.Element, catalogue: MessageCatalogue, domain: str) -> None:
    for unit in _iter_local(root, "unit"):
        segment = _first_local(unit, "segment")
        if segment is None:
            continue
        source = _child_text(segment, "source")
        key = unit.get("name") or source
        if key is None:
            continue
        target = _child_text(segment, "target")
        catalogue.set(key, target if target is not None else source or "", domain)

        notes = []
        for note in _iter_local(unit, "note"):
            entry: Dict[str, Any] = {"content": note.text or ""}
            if note.get("category") is not None:
                entry["category"] = note.get("category")
            notes.append(entry)
        if notes:
            catalogue.set_metadata(key, {"notes": notes}, domain)


# ---- Writing ----
def _dump_v2(catalogue: MessageCatalogue, domain: str, source_locale: str) -> ET.Element:
    root = ET.Element(
        "xliff",
        {"xmlns": XLIFF_20_NS, "version": "2.0", "srcLang": source_locale, "trgLang": catalogue.locale},
    )
    file_el = ET.SubElement(root, "file", {"id": f"{domain}.{catalogue.locale}"})
    for message in catalogue.messages(domain):
        # Attribute order matters: importers rewrite `<unit id=".." name="..">`.
        unit = ET.SubElement(file_el, "unit", {"id": unit_id(message.key), "name": message.key})
        notes = _notes(message.meta)
        if notes:
            notes_el = ET.SubElement(unit, "notes")
            for note in notes:
                attrs = {"category": str(note["category"])} if note.get("category") else {}
                ET.SubElement(notes_el, "note", attrs).text = str(note.get("content", ""))
        segment = ET.SubElement(unit, "segment")
        ET.SubElement(segment, "source").text = message.key
        ET.SubElement(segment, "target").text = message.translation
    return root


def _dump_v1(catalogue: MessageCatalogue, domain: str, source_locale: str) -> ET.Element:
    root = ET.Element("xliff", {"xmlns": XLIFF_12_NS, "version": "1.2"})
    file_el = ET.SubElement(
        root,
        "file",
        {
            "source-language": source_locale,
            "target-language": catalogue.locale,
            "datatype": "plaintext",
            "original": "file.ext",
        },
    )
    body = ET.SubElement(file_el, "body")
    for message in catalogue.messages(domain):
        unit = ET.SubElement(body, "trans-unit", {"id": unit_id(message.key), "resname": message.key})
        ET.SubElement(unit, "source").text = message.key
        ET.SubElement(unit, "target").text = message.translation
        for note in _notes(message.meta):
            attrs = {attr: str(note[attr]) for attr in ("priority", "from") if note.get(attr)}
            ET.SubElement(unit, "note", attrs).text = str(note.get("content", ""))
    return root


# ---- Helpers ----
def _notes(meta: Mapping[str, Any]) -> List[Mapping[str, Any]]:
    notes = meta.get("notes") if meta else None
    if not isinstance(notes, list):
        return []
    return [note for note in notes if isinstance(note, Mapping)]


def _namespace(tag: str) -> str:
    return tag[1:].split("}", 1)[0] if tag.startswith("{") else ""


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _iter_local(element: ET.Element, name: str):
    return (child for child in element.iter() if _local_name(child.tag) == name)


def _first_local(element: ET.Element, name: str) -> Optional[ET.Element]:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


def _child_text(element: ET.Element, name: str) -> Optional[str]:
    child = _first_local(element, name)
    if child is None:
        return None
    return "".join(child.itertext())


__all__ = ["XLIFF_12_NS", "XLIFF_20_NS", "catalogue_to_content", "content_to_catalogue", "unit_id"]
