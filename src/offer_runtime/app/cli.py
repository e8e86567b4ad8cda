from __future__ import annotations

import argparse
import json

from offer_runtime.app.factory import create_discount_policy, create_offer_store
from offer_runtime.application.ingestion import IngestionCoordinator
from offer_runtime.application.payload import load_offer_items
from offer_runtime.application.resolver import DiscountResolver, parse_resolution_query
from offer_runtime.domain.discounts import evaluate_discount, parse_summary
from offer_runtime.observability.logging import configure_logging
from offer_runtime.settings import get_settings


def _print_json(payload: dict) -> None:
    print(json.dumps(payload, indent=2))


def _run_ingest(args: argparse.Namespace) -> None:
    store = create_offer_store(get_settings())
    summary = IngestionCoordinator(store).ingest(load_offer_items(args.file))
    _print_json(
        {
            "noOfOffersIdentified": summary.offers_identified,
            "noOfNewOffersCreated": summary.offers_created,
        }
    )


def _run_resolve(args: argparse.Namespace) -> None:
    settings = get_settings()
    query = parse_resolution_query(args.amount, args.bank, args.instrument)
    result = DiscountResolver(create_offer_store(settings), create_discount_policy(settings)).resolve(query)
    _print_json(
        {
            "highestDiscountAmount": result.highest_discount,
            "bestOfferId": result.best_adjustment_id,
            "candidatesEvaluated": result.candidates_evaluated,
        }
    )


def _run_parse(args: argparse.Namespace) -> None:
    terms = parse_summary(args.summary)
    output: dict = {"terms": terms.as_dict()}
    if args.amount is not None:
        evaluation = evaluate_discount(terms, args.amount, create_discount_policy(get_settings()))
        output["evaluation"] = {
            "discount": evaluation.discount,
            "driver": evaluation.driver,
            "capped": evaluation.capped,
        }
    _print_json(output)


def main() -> None:
    configure_logging()
    parser = argparse.ArgumentParser(description="Offer Discount Runtime CLI")
    subparsers = parser.add_subparsers(dest="command")

    ingest_parser = subparsers.add_parser("ingest", help="Ingest an offer feed JSON file into the configured store")
    ingest_parser.add_argument("--file", required=True)

    resolve_parser = subparsers.add_parser("resolve", help="Resolve the highest discount for a bank")
    resolve_parser.add_argument("--amount", required=True)
    resolve_parser.add_argument("--bank", required=True)
    resolve_parser.add_argument("--instrument")

    parse_parser = subparsers.add_parser("parse", help="Show the terms extracted from an offer summary")
    parse_parser.add_argument("--summary", required=True)
    parse_parser.add_argument("--amount", type=float)

    args = parser.parse_args()
    handlers = {"ingest": _run_ingest, "resolve": _run_resolve, "parse": _run_parse}
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return

    try:
        handler(args)
    except ValueError as e:
        parser.error(str(e))


if __name__ == "__main__":
    main()
