"""Transform OGP layer records into GeoBlacklight records.

See http://dublincore.org/documents/dcmi-terms/ for the ``dc_*`` and
``dct_*`` fields and http://www.georss.org/georss for ``georss_*``.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from ogp2gbl.common.constants import (
    AUTHORITATIVE_INSTITUTION,
    DEFAULT_ISSUED_DATE,
    FORMAT_RASTER,
    FORMAT_VECTOR,
    INSTITUTION_PREFIXES,
    LANGUAGE,
    REF_DOWNLOAD,
    REF_ISO19139,
    REF_MODS,
    REF_THUMBNAIL,
    REF_URL,
    RESOURCE_TYPE,
    SERVICE_PROTOCOLS,
    SERVICE_REFERENCE_KEYS,
    STACKS_DOWNLOAD_TEMPLATE,
    STACKS_THUMBNAIL_TEMPLATE,
)
from ogp2gbl.common.errors import (
    AuxiliaryDocumentError,
    MalformedDateError,
    MalformedUriError,
    UnencodableTextError,
)
from ogp2gbl.common.keywords import respace_keywords, split_keywords
from ogp2gbl.common.models import TransformResult
from ogp2gbl.common.time_utils import format_solr_datetime, parse_rfc3339, utc_now
from ogp2gbl.common.uri import clean_uri, encode_identifier
from ogp2gbl.pipeline.fgdc import render_fgdc
from ogp2gbl.pipeline.location import parse_location, validate_bounds, validate_location
from ogp2gbl.pipeline.slugs import SlugRegistry

KEYWORD_FIELDS = ("PlaceKeywords", "ThemeKeywords")


def _blank(value: Any) -> bool:
    return value is None or (hasattr(value, "__len__") and len(value) == 0)


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def _safe_float(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def institution_prefix(institution: str | None) -> str:
    return INSTITUTION_PREFIXES.get(institution or "", "")


def build_uuid(institution: str | None, layer_id: str) -> str:
    return institution_prefix(institution) + encode_identifier(layer_id)


def geometry_type(data_type: Any) -> str:
    geom = str(data_type or "").lower()
    if geom == "paper map":
        return "raster"
    return geom


def bounding_box(layer: dict[str, Any]) -> dict[str, float]:
    return {
        "south": _safe_float(layer.get("MinY")),
        "west": _safe_float(layer.get("MinX")),
        "north": _safe_float(layer.get("MaxY")),
        "east": _safe_float(layer.get("MaxX")),
    }


def georss_fields(bounds: dict[str, float]) -> dict[str, str]:
    s, w, n, e = bounds["south"], bounds["west"], bounds["north"], bounds["east"]
    return {
        # lower corner then upper corner, lat/lon pairs
        "georss_box_s": f"{s} {w} {n} {e}",
        "georss_polygon_s": f"{n} {w} {n} {e} {s} {e} {s} {w} {n} {w}",
    }


def solr_spatial_fields(bounds: dict[str, float]) -> dict[str, str]:
    s, w, n, e = bounds["south"], bounds["west"], bounds["north"], bounds["east"]
    return {
        # minX minY maxX maxY
        "solr_bbox": f"{w} {s} {e} {n}",
        "solr_ne_pt": f"{n},{e}",
        "solr_sw_pt": f"{s},{w}",
        "solr_geom": f"ENVELOPE({w}, {e}, {n}, {s})",
    }


def _parse_date(value: Any, record_id: str, field: str) -> datetime:
    try:
        return parse_rfc3339(value)
    except ValueError as exc:
        raise MalformedDateError(record_id, f"has malformed {field}: {value!r}") from exc


def _resolve_purl(location: dict[str, Any], uuid: str) -> str | None:
    purl = location.get("purl")
    if isinstance(purl, list):
        purl = purl[0] if purl else None
    if _blank(purl) and uuid.startswith("http"):
        purl = uuid
    return None if _blank(purl) else str(purl)


def build_references(location: dict[str, Any], layer_id: str, purl: str | None) -> dict[str, str]:
    refs: dict[str, str] = {}
    for protocol in SERVICE_PROTOCOLS:
        url = location.get(protocol)
        if not _blank(url):
            refs[SERVICE_REFERENCE_KEYS[protocol]] = str(url)
    if purl:
        refs[REF_THUMBNAIL] = STACKS_THUMBNAIL_TEMPLATE.format(layer_id=layer_id)
        refs[REF_URL] = clean_uri(purl)
        refs[REF_DOWNLOAD] = STACKS_DOWNLOAD_TEMPLATE.format(layer_id=layer_id)
        refs[REF_ISO19139] = f"{purl}.iso19139"
        refs[REF_MODS] = f"{purl}.mods"
    return refs


def _layer_id(workspace: Any, name: Any) -> str | None:
    name = _text(name)
    if name is None:
        return None
    workspace = _text(workspace)
    return f"{workspace}:{name}" if workspace else name


def _assert_encodable(record: dict[str, Any], record_id: str) -> None:
    try:
        json.dumps(record, ensure_ascii=False).encode("utf-8")
    except UnicodeError as exc:
        raise UnencodableTextError(record_id, f"has text that cannot be written as UTF-8: {exc}") from exc


def _drop_empty(record: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in record.items() if not _blank(value)}


def transform_record(
    layer: dict[str, Any],
    registry: SlugRegistry,
    *,
    emit_auxiliary: bool = True,
    issued_date: str = DEFAULT_ISSUED_DATE,
    validate: bool = False,
    now: datetime | None = None,
) -> TransformResult:
    """Transform one OGP record.

    Raises a RecordRejected subclass when the record cannot be converted.
    A malformed FGDC document is reported on the result instead and does
    not reject the record.
    """
    record_id = str(layer.get("LayerId") or "").strip()
    institution = _text(layer.get("Institution"))
    try:
        uuid = build_uuid(institution, record_id)
    except UnicodeError as exc:
        escaped_id = record_id.encode("utf-8", "backslashreplace").decode("utf-8")
        raise UnencodableTextError(escaped_id, "has a LayerId that cannot be encoded") from exc

    location = parse_location(layer.get("Location"), record_id)
    bounds = bounding_box(layer)
    if validate:
        validate_location(layer.get("Location"), record_id)
        validate_bounds(bounds, record_id)

    content_dt = _parse_date(layer.get("ContentDate"), record_id, "ContentDate")
    issued_dt = _parse_date(issued_date, record_id, "issued date")

    purl = None
    keyword_values = {field: layer.get(field) for field in KEYWORD_FIELDS}
    if institution == AUTHORITATIVE_INSTITUTION:
        purl = _resolve_purl(location, uuid)
    else:
        # Because OGP does not delimit keywords, other institutions get the
        # whitespace heuristic.
        keyword_values = {field: respace_keywords(value) for field, value in keyword_values.items()}

    try:
        refs = build_references(location, record_id, purl)
    except ValueError as exc:
        raise MalformedUriError(record_id, f"has malformed purl: {exc}") from exc

    geom = geometry_type(layer.get("DataType"))

    new_layer: dict[str, Any] = {
        "uuid": uuid,
        # Dublin Core elements
        "dc_creator_sm": split_keywords(layer.get("Originator")),
        "dc_description_s": _text(layer.get("Abstract")),
        "dc_format_s": FORMAT_RASTER if geom == "raster" else FORMAT_VECTOR,
        "dc_identifier_s": uuid,
        "dc_language_s": LANGUAGE,
        "dc_publisher_s": _text(layer.get("Publisher")),
        "dc_rights_s": _text(layer.get("Access")),
        "dc_subject_sm": split_keywords(keyword_values["ThemeKeywords"]),
        "dc_title_s": _text(layer.get("LayerDisplayName")),
        "dc_type_s": RESOURCE_TYPE,
        # Dublin Core terms
        "dct_isPartOf_sm": None,
        "dct_references_s": json.dumps(refs, separators=(",", ":")),
        "dct_spatial_sm": split_keywords(keyword_values["PlaceKeywords"]),
        "dct_temporal_sm": [str(content_dt.year)],
        "dct_issued_s": str(issued_dt.year),
        "dct_provenance_s": institution,
        **georss_fields(bounds),
        # Layer-specific schema
        # Assigned once the record is known to be writable.
        "layer_slug_s": None,
        "layer_id_s": _layer_id(layer.get("WorkspaceName"), layer.get("Name")),
        "layer_geom_type_s": geom.capitalize(),
        "layer_modified_dt": format_solr_datetime(now or utc_now()),
        # Derived fields used only by Solr, for which copyField is insufficient
        **solr_spatial_fields(bounds),
        "solr_year_i": content_dt.year,
        "solr_issued_dt": format_solr_datetime(issued_dt),
        "solr_wms_url": location.get("wms"),
        "solr_wfs_url": location.get("wfs"),
        "solr_wcs_url": location.get("wcs"),
    }
    _assert_encodable(new_layer, record_id)
    slug = registry.slug(institution, layer.get("Name"), layer.get("LayerDisplayName"))
    new_layer["layer_slug_s"] = slug

    fgdc_xml = None
    fgdc_error = None
    fgdc_text = _text(layer.get("FgdcText"))
    if emit_auxiliary and fgdc_text is not None:
        try:
            fgdc_xml = render_fgdc(fgdc_text, record_id)
        except AuxiliaryDocumentError as exc:
            fgdc_error = exc

    return TransformResult(
        record_id=record_id,
        slug=slug,
        record=_drop_empty(new_layer),
        fgdc_xml=fgdc_xml,
        fgdc_error=fgdc_error,
    )


class RecordTransformer:
    """Binds a run's slug registry and options to transform_record."""

    def __init__(
        self,
        registry: SlugRegistry | None = None,
        *,
        emit_auxiliary: bool = True,
        issued_date: str = DEFAULT_ISSUED_DATE,
        validate: bool = False,
    ) -> None:
        self.registry = registry if registry is not None else SlugRegistry()
        self.emit_auxiliary = emit_auxiliary
        self.issued_date = issued_date
        self.validate = validate

    def transform(self, layer: dict[str, Any], now: datetime | None = None) -> TransformResult:
        return transform_record(
            layer,
            self.registry,
            emit_auxiliary=self.emit_auxiliary,
            issued_date=self.issued_date,
            validate=self.validate,
            now=now,
        )
