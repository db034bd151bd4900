"""Embedded FGDC metadata documents."""

from __future__ import annotations

from pathlib import Path

from lxml import etree

from ogp2gbl.common.errors import AuxiliaryDocumentError
from ogp2gbl.common.fs import write_bytes


def render_fgdc(fgdc_text: str, record_id: str = "") -> bytes:
    """Parse FGDC XML and re-serialise it indented, as UTF-8.

    Parsing doubles as a well-formedness check. The text has already been
    decoded from the JSON input, so any encoding named in its XML
    declaration is ignored.
    """
    parser = etree.XMLParser(
        remove_blank_text=True,
        resolve_entities=False,
        no_network=True,
        encoding="utf-8",
    )
    try:
        root = etree.fromstring(fgdc_text.encode("utf-8"), parser=parser)
    except UnicodeError as exc:
        raise AuxiliaryDocumentError(record_id, f"has unencodable FGDC text: {exc}") from exc
    except etree.XMLSyntaxError as exc:
        raise AuxiliaryDocumentError(record_id, f"has malformed FGDC XML: {exc}") from exc
    return etree.tostring(
        root.getroottree(),
        pretty_print=True,
        xml_declaration=True,
        encoding="UTF-8",
    )


def fgdc_path(fgdc_dir: Path, slug: str) -> Path:
    return fgdc_dir / f"{slug}.xml"


def write_fgdc(fgdc_dir: Path, slug: str, document: bytes, record_id: str = "") -> Path:
    path = fgdc_path(fgdc_dir, slug)
    try:
        write_bytes(path, document)
    except OSError as exc:
        raise AuxiliaryDocumentError(record_id, f"could not write FGDC to {path}: {exc}") from exc
    return path
