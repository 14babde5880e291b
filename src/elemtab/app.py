from __future__ import annotations

import argparse
import sys
from pathlib import Path

from elemtab.chem.properties import PROPERTY_BY_NAME, format_listing
from elemtab.config import TableConfig, load_config
from elemtab.session import TableSession
from elemtab.table.classify import SCHEME_NAMES
from elemtab.table.layout import Convention
from elemtab.table.render import colored_text

SORT_ORDERS = {"asc": "ascending", "desc": "descending"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="elemtab", description="Interactive periodic table of the elements.")
    parser.add_argument("--config", type=Path, default=None, help="YAML file with display options.")
    parser.add_argument("--convention", choices=[c.value for c in Convention], default=None)
    parser.add_argument("--scheme", default=None, help=f"One of: {', '.join(SCHEME_NAMES)}.")
    parser.add_argument("--text", action="store_true", help="Print the table instead of opening a window.")
    parser.add_argument("--color", action="store_true", help="Colour the printed table with ANSI escapes.")
    parser.add_argument("--element", default=None, help="Number, symbol or name of the element to describe.")
    parser.add_argument("--list", dest="listing", choices=sorted(PROPERTY_BY_NAME), default=None)
    parser.add_argument("--sort", choices=sorted(SORT_ORDERS), default=None)
    return parser


def build_config(args: argparse.Namespace) -> TableConfig:
    config = load_config(args.config) if args.config else TableConfig()
    if args.convention:
        config = config.with_option("convention", args.convention)
    if args.scheme:
        config = config.with_option("scheme", args.scheme)
    return config


def run_text(session: TableSession, args: argparse.Namespace) -> int:
    if args.listing:
        rows = session.list_by_property(args.listing, SORT_ORDERS.get(args.sort))
        print(format_listing(rows, args.listing))
        return 0
    print(colored_text(session.table, session.palette) if args.color else session.text)
    if args.element:
        if session.find(args.element) is None:
            return 1
        print()
        print(session.detail.text)
    return 0


def run_gui(session: TableSession) -> int:
    from PySide6 import QtWidgets

    from elemtab.views.main_window import ElemTabMainWindow

    app = QtWidgets.QApplication(sys.argv)
    app.setStyle("Fusion")
    window = ElemTabMainWindow(session)
    window.show()
    return app.exec()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.sort and not args.listing:
        raise SystemExit("--sort needs --list")
    try:
        config = build_config(args)
    except (OSError, ValueError, KeyError) as exc:
        print(f"Failed to load configuration: {exc}", file=sys.stderr)
        return 2
    session = TableSession(config=config)
    if args.text or args.listing:
        return run_text(session, args)
    if args.element:
        session.find(args.element)
    return run_gui(session)


if __name__ == "__main__":
    sys.exit(main())
