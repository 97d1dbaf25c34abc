import json
from datetime import datetime

from pydantic import BaseModel

from .errors import ExportError
from .json_exporter import JsonExporter
from .models.main import Resource
from .xml_exporter import XmlExporter

MEDIA_TYPES = {"xml": "application/xml", "json": "application/json"}


class ExportedDocument(BaseModel):
    content: str
    media_type: str
    filename: str


def export_filename(resource: Resource, fmt: str, now: datetime | None = None) -> str:
    """``resource-{id}-{YmdHis}-datacite.{ext}``"""
    now = now or datetime.now()
    resource_id = "new" if resource.id is None else resource.id
    return f"resource-{resource_id}-{now:%Y%m%d%H%M%S}-datacite.{fmt}"


def export_document(
    resource: Resource, fmt: str, now: datetime | None = None
) -> ExportedDocument:
    """Render a resource for download as DataCite XML or JSON"""
    fmt = (fmt or "").strip().lower()
    match fmt:
        case "xml":
            content = XmlExporter().export(resource)
        case "json":
            content = json.dumps(
                JsonExporter().export(resource), indent=2, ensure_ascii=False
            )
        case _:
            raise ExportError(f"Unsupported export format: {fmt!r}")

    return ExportedDocument(
        content=content,
        media_type=MEDIA_TYPES[fmt],
        filename=export_filename(resource, fmt, now),
    )
