import argparse
import json
import sys
from collections.abc import Sequence
from dataclasses import asdict
from pathlib import Path

from prompt_refiner.config.settings import Settings
from prompt_refiner.database.connection import close_pool, init_pool
from prompt_refiner.database.models import SubmissionRecord
from prompt_refiner.database.repositories.submission_repository import SubmissionRepository
from prompt_refiner.logging.logger import Log
from prompt_refiner.refinement.exceptions import GatewayConfigurationError
from prompt_refiner.refinement.models import InputType
from prompt_refiner.submission.exceptions import SubmissionError
from prompt_refiner.submission.exporter import export_filename, export_refined_prompt_json
from prompt_refiner.submission.models import FileUpload, HistoryQuery, SubmissionStatus
from prompt_refiner.submission.processor import build_processor
from prompt_refiner.submission.stats import summarize


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prompt-refiner",
        description="Refine product ideas into structured prompts.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    submit = commands.add_parser("submit", help="Refine text and/or files")
    submit.add_argument("--text", default="", help="Free-text product description")
    submit.add_argument(
        "--file", dest="files", action="append", default=[], type=Path,
        help="Image or document to attach (repeatable)",
    )

    history = commands.add_parser("history", help="List past submissions, newest first")
    history.add_argument("--status", choices=[s.value for s in SubmissionStatus])
    history.add_argument("--input-type", choices=[t.value for t in InputType])
    history.add_argument("--search", help="Substring of title or raw text")
    history.add_argument("--limit", type=int, default=settings.history_default_limit)

    show = commands.add_parser("show", help="Show one submission")
    show.add_argument("id")

    delete = commands.add_parser("delete", help="Delete a submission")
    delete.add_argument("id")

    export = commands.add_parser("export", help="Write a refined prompt to a JSON file")
    export.add_argument("id")
    export.add_argument("--output-dir", type=Path, default=Path("."))

    stats = commands.add_parser("stats", help="Summarize submission history")
    stats.add_argument("--days", type=int, help="Only count the last N days")
    stats.add_argument("--limit", type=int, default=1000)

    return parser


def _record_to_json(record: SubmissionRecord) -> dict[str, object]:
    data = asdict(record)
    for key in ("created_at", "updated_at"):
        value = data[key]
        data[key] = value.isoformat() if value is not None else None
    return data


def _print_json(payload: object) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def run(args: argparse.Namespace, settings: Settings) -> int:
    repo = SubmissionRepository()

    if args.command == "submit":
        processor = build_processor(settings, repo=repo)
        uploads = [FileUpload.from_path(path) for path in args.files]
        record = processor.submit(args.text, uploads)
        _print_json(_record_to_json(record))
        return 0 if record.status == SubmissionStatus.COMPLETED else 1

    if args.command == "history":
        query = HistoryQuery(
            status=SubmissionStatus(args.status) if args.status else None,
            input_type=InputType(args.input_type) if args.input_type else None,
            search=args.search,
            limit=args.limit,
        )
        _print_json([_record_to_json(r) for r in repo.list_history(query)])
        return 0

    if args.command == "delete":
        repo.delete(args.id)
        return 0

    if args.command == "stats":
        records = repo.list_history(HistoryQuery(limit=args.limit))
        _print_json(asdict(summarize(records, days=args.days)))
        return 0

    record = repo.find_by_id(args.id)
    if record is None:
        print(f"Submission {args.id} not found", file=sys.stderr)
        return 1
    if args.command == "show":
        _print_json(_record_to_json(record))
        return 0

    target = args.output_dir / export_filename(record)
    target.write_text(export_refined_prompt_json(record), encoding="utf-8")
    print(target)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: load settings -> open pool -> run one command."""
    settings = Settings()
    Log.configure(settings.log_level)
    args = build_parser(settings).parse_args(argv)
    init_pool(settings)
    try:
        return run(args, settings)
    except (SubmissionError, GatewayConfigurationError, ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    finally:
        close_pool()


if __name__ == "__main__":
    sys.exit(main())
