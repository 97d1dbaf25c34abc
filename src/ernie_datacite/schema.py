"""
Check exported documents against the schemas bundled in ``schemas/``.

XML is validated with lxml against a kernel-4.6 XSD and the REST document
with jsonschema. Both raise ``SchemaValidationError`` listing every problem.
"""

import json
from functools import lru_cache
from logging import Logger
from pathlib import Path

from jsonschema import Draft7Validator
from lxml import etree

from .errors import SchemaValidationError
from .logger import datacite_log

SCHEMA_DIR = Path(__file__).parent / "schemas"
XSD_PATH = SCHEMA_DIR / "datacite-kernel-4.6.xsd"
JSON_SCHEMA_PATH = SCHEMA_DIR / "datacite-dois.json"


@lru_cache()
def xml_schema() -> etree.XMLSchema:
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    return etree.XMLSchema(etree.parse(str(XSD_PATH), parser))


@lru_cache()
def json_validator() -> Draft7Validator:
    with open(JSON_SCHEMA_PATH, "r", encoding="utf-8") as f:
        return Draft7Validator(json.load(f))


def validate_xml(document: str | bytes | etree._Element, log: Logger = datacite_log) -> None:
    if isinstance(document, str):
        document = document.encode("utf-8")
    if isinstance(document, bytes):
        document = etree.fromstring(document)

    schema = xml_schema()
    if schema.validate(document):
        return
    errors = [f"line {e.line}: {e.message}" for e in schema.error_log]
    log.warning(f"[bold red]DataCite XML failed schema validation ({len(errors)} errors)")
    raise SchemaValidationError("xml", errors)


def validate_json(document: dict, log: Logger = datacite_log) -> None:
    errors = sorted(
        f"{e.message} at /{'/'.join(str(x) for x in e.path)}"
        for e in json_validator().iter_errors(document)
    )
    if not errors:
        return
    log.warning(f"[bold red]DataCite JSON failed schema validation ({len(errors)} errors)")
    raise SchemaValidationError("json", errors)
