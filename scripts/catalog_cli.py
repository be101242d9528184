#!/usr/bin/env python3
"""
Manage the product catalogue from the terminal.

Every command goes through the same remote-first, local-fallback path as the
API and prints JSON plus the backend that answered.

Usage (from repo root):
  python scripts/catalog_cli.py list --sort countDesc
  python scripts/catalog_cli.py add --name Widget --image-url u --count 2 --width 10 --height 5 --weight 1kg
  python scripts/catalog_cli.py update 3 --name Widget --image-url u --count 4 --width 10 --height 5 --weight 1kg
  python scripts/catalog_cli.py delete 3
  python scripts/catalog_cli.py comment 1 "Arrived in one piece"
  python scripts/catalog_cli.py uncomment 7
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

load_dotenv()

from src.catalog.dependencies import build_catalog_store
from src.catalog.sorting import SortOption
from src.catalog.state import CatalogStore
from src.catalog.validation import FormValidationError, validate_comment_description, validate_product_form
from src.error_handler import ErrorHandler
from src.integrations.contracts.outcomes import Failed
from src.utils.config_loader import load_catalog_config


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def _print(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _form_payload(args: argparse.Namespace) -> dict:
    return {
        "name": args.name,
        "imageUrl": args.image_url,
        "count": args.count,
        "width": args.width,
        "height": args.height,
        "weight": args.weight,
    }


def _report(outcome, operation: str, render) -> int:
    if isinstance(outcome, Failed):
        _print(ErrorHandler().handle_failure(outcome, operation))
        return 1
    _print({"source": outcome.source.value, "result": render(outcome.value)})
    return 0


async def run(args: argparse.Namespace, store: CatalogStore) -> int:
    if args.command == "list":
        store.set_sort_by(SortOption(args.sort))
        outcome = await store.fetch_products()
        if isinstance(outcome, Failed):
            _print({"error": store.state.error})
            return 1
        _print({"source": outcome.source.value, "items": [p.to_dict() for p in store.sorted_items()]})
        return 0

    if args.command == "add":
        form = validate_product_form(_form_payload(args))
        return _report(await store.add_product(form), "create_product", lambda p: p.to_dict())

    if args.command == "update":
        form = validate_product_form(_form_payload(args))
        return _report(await store.update_product(args.product_id, form), "update_product", lambda p: p.to_dict())

    if args.command == "delete":
        return _report(await store.delete_product(args.product_id), "delete_product", lambda v: v)

    if args.command == "comment":
        description = validate_comment_description(args.description)
        return _report(await store.add_comment(args.product_id, description), "create_comment", lambda c: c.to_dict())

    if args.command == "uncomment":
        return _report(await store.delete_comment(args.comment_id), "delete_comment", lambda v: v)

    raise ValueError(f"Unknown command: {args.command}")


def _add_form_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--name", required=True)
    parser.add_argument("--image-url", required=True)
    parser.add_argument("--count", type=int, required=True)
    parser.add_argument("--width", type=float, required=True)
    parser.add_argument("--height", type=float, required=True)
    parser.add_argument("--weight", required=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Product catalogue (remote API with local fallback)")
    parser.add_argument("--config", type=Path, default=None, help="Path to catalog_config.yml")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show fallback and storage logs")
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="List products")
    p_list.add_argument("--sort", choices=[o.value for o in SortOption], default=SortOption.NAME.value)

    p_add = sub.add_parser("add", help="Create a product")
    _add_form_arguments(p_add)

    p_update = sub.add_parser("update", help="Edit a product")
    p_update.add_argument("product_id", type=int)
    _add_form_arguments(p_update)

    p_delete = sub.add_parser("delete", help="Delete a product and its comments")
    p_delete.add_argument("product_id", type=int)

    p_comment = sub.add_parser("comment", help="Add a comment to a product")
    p_comment.add_argument("product_id", type=int)
    p_comment.add_argument("description")

    p_uncomment = sub.add_parser("uncomment", help="Delete a comment")
    p_uncomment.add_argument("comment_id", type=int)

    return parser


def main() -> int:
    args = build_parser().parse_args()
    setup_logging(args.verbose)

    cfg = load_catalog_config(args.config)
    store = build_catalog_store(cfg)
    try:
        return asyncio.run(run(args, store))
    except FormValidationError as e:
        _print({"error": "validation_error", "message": e.message, "field_errors": e.field_errors})
        return 2


if __name__ == "__main__":
    sys.exit(main())
