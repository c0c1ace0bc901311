"""
Command line entry point

Usage:
    certbatch render --template cert.png --records people.csv --layout layout.yaml
    certbatch send --records people.csv
    certbatch config set-email --username me@example.com --password app-password
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from .config import (
    LayoutLoader,
    configure_logging,
    get_config,
    load_app_config,
    reload_config,
    save_app_config,
)
from .models import BatchReport, EmailCredentials
from .pipeline import BatchEngine, BatchHandle, BatchManager
from .records import load_records
from .render import OutputNamer

POLL_INTERVAL_SEC = 0.25


def _wait_with_progress(handle: BatchHandle) -> BatchReport:
    """Poll the handle, printing progress until the batch settles"""
    last = -1
    while not handle.done():
        settled, total = handle.progress()
        if settled != last:
            print(f"  {handle.kind.value}: {settled}/{total}", flush=True)
            last = settled
        time.sleep(POLL_INTERVAL_SEC)
    return handle.report()


def _print_report(report: BatchReport) -> int:
    print(report.summary())
    for outcome in report.failures():
        print(f"  FAILED {outcome.output_name}: {outcome.error_kind}: {outcome.error}")
    return 0 if report.ok else 1


def _build_manager(args: argparse.Namespace) -> BatchManager:
    namer = OutputNamer(args.naming) if getattr(args, "naming", None) else None
    engine = BatchEngine(namer=namer, max_workers=args.workers)
    return BatchManager(engine)


def cmd_render(args: argparse.Namespace) -> int:
    config = get_config()
    layout = LayoutLoader.load(args.layout)
    record_set = load_records(args.records)
    template = Path(args.template).read_bytes()

    scale = args.scale or layout.scale_factor or config.render.scale_factor
    font_size = args.font_size or layout.font_size or config.render.font_size

    manager = _build_manager(args)
    handle = manager.generate(
        record_set,
        layout.regions_for(record_set.columns),
        template,
        font_size=font_size,
        scale_factor=scale,
    )
    return _print_report(_wait_with_progress(handle))


def cmd_send(args: argparse.Namespace) -> int:
    app_config = load_app_config(args.settings)
    if not app_config.email.is_configured:
        print("No email account configured; run 'certbatch config set-email' first.")
        return 2

    record_set = load_records(args.records)
    manager = _build_manager(args)
    handle = manager.send_all(record_set, app_config.email, args.email_column)
    return _print_report(_wait_with_progress(handle))


def cmd_config(args: argparse.Namespace) -> int:
    app_config = load_app_config(args.settings)
    if args.action == "set-email":
        app_config.email = EmailCredentials(username=args.username, password=args.password)
        path = save_app_config(app_config, args.settings)
        print(f"Saved email settings to {path}")
        return 0

    username = app_config.email.username or "<not configured>"
    print(f"email.username: {username}")
    print(f"email.password: {'*' * len(app_config.email.password)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="certbatch",
        description="Render personalised certificates from a template and tabular records.",
    )
    parser.add_argument("--config", help="Path to certbatch.yaml runtime configuration.")
    parser.add_argument("--settings", help="Path to the user settings file (email credentials).")
    parser.add_argument("--output-dir", help="Directory for generated images.")
    parser.add_argument("--workers", type=int, default=None, help="Worker pool size.")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Generate one image per record.")
    render.add_argument("--template", required=True, help="Template image (PNG/JPEG).")
    render.add_argument("--records", required=True, help="CSV or XLSX records file.")
    render.add_argument("--layout", required=True, help="Field layout YAML.")
    render.add_argument("--font-size", type=float, default=None)
    render.add_argument("--scale", type=float, default=None, help="Preview-to-native scale factor.")
    render.add_argument("--naming", choices=["overwrite", "suffix"], default=None)
    render.set_defaults(func=cmd_render)

    send = sub.add_parser("send", help="Email each record its generated image.")
    send.add_argument("--records", required=True, help="CSV or XLSX records file.")
    send.add_argument("--email-column", default=None, help="Column holding the address.")
    send.add_argument("--naming", choices=["overwrite", "suffix"], default=None)
    send.set_defaults(func=cmd_send)

    cfg = sub.add_parser("config", help="Show or edit user settings.")
    cfg.add_argument("action", choices=["show", "set-email"])
    cfg.add_argument("--username", default="")
    cfg.add_argument("--password", default="")
    cfg.set_defaults(func=cmd_config)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = reload_config(args.config) if args.config else get_config()
    if args.output_dir:
        config.output.output_dir = Path(args.output_dir)
    configure_logging(config.logging)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
