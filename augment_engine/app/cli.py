from __future__ import annotations

import argparse
import json
import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from augment_engine.app.settings import AppSettings
from augment_engine.app.wiring import build_bundle, describe_plan
from augment_engine.domain.errors import AugmentationError
from augment_engine.domain.query import Query
from augment_engine.use_cases.repository import REPOSITORY_METHODS


def _parse_where(items: Optional[List[str]]) -> Query:
    q = Query()
    for item in items or []:
        if "=" not in item:
            raise SystemExit(f"--where expects field=value, got {item!r}")
        field, value = item.split("=", 1)
        q = q.and_where(field.strip(), "eq", value.strip())
    return q


def _dump(obj) -> str:
    return json.dumps(obj, ensure_ascii=False, indent=2)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="augment-engine")
    parser.add_argument("--debug", action="store_true")

    parser.add_argument("--store", choices=["memory", "json"], default=None, help="Override store backend")
    parser.add_argument("--store-path", default=None, help="Override JSON store path")
    parser.add_argument("--collection", default=None)
    parser.add_argument("--tenant", default=None, help="Enable tenant isolation for this tenant id")

    parser.add_argument("--plan", action="store_true", help="Print augmentors per context type")
    parser.add_argument("--method", default="find_all", choices=REPOSITORY_METHODS)

    parser.add_argument("--find", action="store_true")
    parser.add_argument("--count", action="store_true")
    parser.add_argument("--where", action="append", default=None, help="field=value, repeatable")
    parser.add_argument("--limit", type=int, default=None)
    parser.add_argument("--get", default=None, metavar="ID")
    parser.add_argument("--save", default=None, metavar="JSON")
    parser.add_argument("--delete", default=None, metavar="ID")
    args = parser.parse_args(argv)

    settings = AppSettings.from_env()

    st = settings.store
    if args.store is not None:
        st = replace(st, backend=args.store)
    if args.store_path is not None:
        st = replace(st, path=args.store_path)
    if args.collection is not None:
        st = replace(st, collection=args.collection)

    aug = settings.augment
    if args.tenant is not None:
        aug = replace(aug, enable_tenant=True, tenant_id=args.tenant)
    settings = replace(settings, store=st, augment=aug)

    logging.basicConfig(level=logging.DEBUG if args.debug else settings.log_level, format="%(message)s")

    bundle = build_bundle(settings)
    repo = bundle.repository

    try:
        if args.plan:
            print(_dump(describe_plan(bundle, args.method)))
        elif args.save is not None:
            saved = repo.save(json.loads(args.save))
            print(_dump({"saved": saved}))
        elif args.delete is not None:
            print(_dump({"deleted": repo.delete(args.delete)}))
        elif args.get is not None:
            print(_dump(repo.find_by_id(args.get, required=True)))
        elif args.count:
            print(repo.count(_parse_where(args.where)))
        elif args.find:
            print(_dump(repo.find_all(_parse_where(args.where).with_limit(args.limit))))
        else:
            parser.print_help()
            return 2
    except (AugmentationError, json.JSONDecodeError) as e:
        print(f"error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
