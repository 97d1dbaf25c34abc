import argparse
import json
from pathlib import Path

from rich.prompt import Confirm

from .download import export_document
from .errors import DataCiteError, ResourceValidationError
from .importer import XmlImporter, validate_upload
from .logger import script_log_end, script_log_init
from .msl import MslLaboratoryService
from .schema import validate_json, validate_xml
from .validation import validate_resource_payload

SCRIPT_NAME = "ernie-datacite"


def _can_write(path: Path, force: bool) -> bool:
    if force or not path.exists():
        return True
    return Confirm.ask(f"{path} exists. Overwrite?")


def export_command(args, log) -> int:
    log.info(f"[yellow]Loading: {args.resource}")
    with open(args.resource, "r", encoding="utf-8") as f:
        payload = json.load(f)

    resource = validate_resource_payload(payload)
    document = export_document(resource, args.format)
    if args.validate:
        if args.format == "xml":
            validate_xml(document.content, log)
        else:
            validate_json(json.loads(document.content), log)
        log.info("[green]Schema validation passed")

    args.output_dir.mkdir(parents=True, exist_ok=True)
    output = args.output_dir / document.filename
    if not _can_write(output, args.force):
        log.info("[bold red]Not overwriting, exiting")
        return 1
    output.write_text(document.content, encoding="utf-8")
    log.info(f"[yellow]Writing: {output} ({document.media_type})")
    return 0


def import_command(args, log) -> int:
    log.info(f"[yellow]Loading: {args.file}")
    content = args.file.read_bytes()
    validate_upload(args.file.name, content)

    importer = XmlImporter(msl_service=MslLaboratoryService(), log=log)
    imported = importer.import_xml(content)
    body = json.dumps(
        imported.model_dump(by_alias=True, mode="json"), indent=2, ensure_ascii=False
    )

    if args.output is None:
        print(body)
        return 0
    if not _can_write(args.output, args.force):
        log.info("[bold red]Not overwriting, exiting")
        return 1
    args.output.write_text(body, encoding="utf-8")
    log.info(f"[yellow]Writing: {args.output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=SCRIPT_NAME,
        description="Export resources to DataCite 4.6 and import DataCite XML",
    )
    parser.add_argument(
        "--log-dir", default=Path("logs"), type=Path, help="Directory for log files"
    )
    parser.add_argument(
        "-f", "--force", action="store_true", help="Overwrite existing output files"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    export = subparsers.add_parser("export", help="Export a resource JSON file")
    export.add_argument("resource", type=Path, help="Resource JSON (editor payload)")
    export.add_argument(
        "--format", default="xml", choices=["xml", "json"], help="Output format"
    )
    export.add_argument(
        "--output-dir", default=Path("."), type=Path, help="Output directory"
    )
    export.add_argument(
        "--validate",
        action="store_true",
        help="Check the document against the bundled DataCite schema",
    )
    export.set_defaults(func=export_command)

    imp = subparsers.add_parser("import", help="Import a DataCite XML file")
    imp.add_argument("file", type=Path, help="DataCite XML file")
    imp.add_argument("--output", type=Path, help="Write JSON here instead of stdout")
    imp.set_defaults(func=import_command)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    log = script_log_init(SCRIPT_NAME, args.log_dir)
    try:
        status = args.func(args, log)
    except ResourceValidationError as exc:
        for path, msg in exc.errors.items():
            log.error(f"[bold red]{path}: {msg}")
        status = 2
    except DataCiteError as exc:
        log.error(f"[bold red]{exc}")
        status = 2
    finally:
        script_log_end(SCRIPT_NAME, log)
    return status


if __name__ == "__main__":
    raise SystemExit(main())
