"""Application constants."""

EXIT_SUCCESS = 0
EXIT_PARTIAL = 10
EXIT_HARD_FAIL = 20

DEFAULT_CONFIG_PATH = "config/ogp2gbl.yml"

# Upstream OGP records carry no publication date; every record gets this one.
DEFAULT_ISSUED_DATE = "2000-01-01T00:00:00Z"

# Institution whose keyword fields are reliably delimited and whose layers
# resolve to a PURL.
AUTHORITATIVE_INSTITUTION = "Stanford"

# For URN style see RFC 2141, for ARK see https://wiki.ucop.edu/display/Curation/ARK
INSTITUTION_PREFIXES = {
    "Stanford": "http://purl.stanford.edu/",
    "Tufts": "urn:geodata.tufts.edu:",
    "MassGIS": "urn:massgis.state.ma.us:",
    "Berkeley": "http://ark.cdlib.org/ark:/",
    "MIT": "urn:arrowsmith.mit.edu:",
    "Harvard": "urn:hul.harvard.edu:",
}

SERVICE_PROTOCOLS = ("wcs", "wfs", "wms")

# See https://github.com/OSGeo/Cat-Interop
REF_WCS = "http://www.opengis.net/def/serviceType/ogc/wcs"
REF_WFS = "http://www.opengis.net/def/serviceType/ogc/wfs"
REF_WMS = "http://www.opengis.net/def/serviceType/ogc/wms"
REF_THUMBNAIL = "http://schema.org/thumbnailUrl"
REF_URL = "http://schema.org/url"
REF_DOWNLOAD = "http://schema.org/DownloadAction"
REF_ISO19139 = "http://www.isotc211.org/schemas/2005/gmd/"
REF_MODS = "http://www.loc.gov/mods/v3"

SERVICE_REFERENCE_KEYS = {
    "wcs": REF_WCS,
    "wfs": REF_WFS,
    "wms": REF_WMS,
}

REFERENCE_KEYS = (
    REF_WCS,
    REF_WFS,
    REF_WMS,
    REF_THUMBNAIL,
    REF_URL,
    REF_DOWNLOAD,
    REF_ISO19139,
    REF_MODS,
)

STACKS_THUMBNAIL_TEMPLATE = "http://stacks.stanford.edu/file/druid:{layer_id}/preview.jpg"
STACKS_DOWNLOAD_TEMPLATE = "http://stacks.stanford.edu/file/druid:{layer_id}/data.zip"

# Schema and owner prefixes stripped from layer names before slugging.
SLUG_NAME_PREFIXES = (
    "SDE_DATA.",
    "SDE.",
    "SDE2.",
    "GISPORTAL.GISOWNER01.",
    "GISDATA.",
    "MORIS.",
)

FORMAT_RASTER = "GeoTIFF"
FORMAT_VECTOR = "Shapefile"
LANGUAGE = "English"
RESOURCE_TYPE = "Dataset"

JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "stage",
    "source",
    "record_id",
    "slug",
    "event",
    "status",
    "error_code",
    "accepted",
    "rejected",
    "message",
)
