#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import os
import subprocess
import sys


def run(cmd: list[str]) -> int:
    print("$", " ".join(cmd))
    return subprocess.call(cmd)


def cmd_test(args: argparse.Namespace) -> int:
    os.environ.setdefault("PYTHONUNBUFFERED", "1")
    pytest_args = ["pytest"]
    if args.quiet:
        pytest_args.append("-q")
    if args.k:
        pytest_args += ["-k", args.k]
    return run(pytest_args)


async def _seed(drop: bool) -> None:
    from app.db import sa as db_sa
    from app.db.seed import DEV_DATA, create_schema, seed

    await db_sa.init_sa_engine()
    try:
        await create_schema(db_sa.engine(), drop=drop)
        async for session in db_sa.get_session():
            await seed(session, DEV_DATA)
    finally:
        await db_sa.close_sa_engine()


def cmd_seed(args: argparse.Namespace) -> int:
    try:
        asyncio.run(_seed(args.drop))
    except RuntimeError as exc:
        print(f"seed failed: {exc}", file=sys.stderr)
        return 1
    print("seeded")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="news-cli", description="Project CLI helper")
    sub = parser.add_subparsers(dest="command", required=True)

    p_test = sub.add_parser("test", help="Run pytest")
    p_test.add_argument("-q", "--quiet", action="store_true", help="Quiet mode (-q)")
    p_test.add_argument("-k", help="Only run tests matching expression")
    p_test.set_defaults(func=cmd_test)

    p_seed = sub.add_parser("seed", help="Create tables and load the development dataset")
    p_seed.add_argument("--drop", action="store_true", help="Drop existing tables first")
    p_seed.set_defaults(func=cmd_seed)

    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
