#!/usr/bin/env python3
"""Import a plain-text word list as a shared user dictionary.

Each line is ``<article> <noun> [separator] [translation]``; lines that do
not start with der/die/das are skipped.

Run with: python3 -m scripts.import_dictionary "Kitchen words" words.txt
"""
import argparse
import asyncio
import sys
from pathlib import Path

from core.config import settings
from core.database import get_db_session, engine, Base
from core.logging import configure_logging
from engines.importer import dedupe_words_by_noun, parse_import_text
from persistence.dictionaries import create_dictionary
import models  # noqa: F401


async def run(name: str, path: Path, dry_run: bool = False) -> int:
    words = dedupe_words_by_noun(parse_import_text(path.read_text(encoding="utf-8")))
    print(f"Parsed {len(words)} words from {path}")
    if dry_run:
        for word in words:
            print(f"  {word.article} {word.noun}" + (f" - {word.translation}" if word.translation else ""))
        return 0

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with get_db_session() as session:
        result = await create_dictionary(session, name, words)

    await engine.dispose()

    if result.is_err():
        error = result.unwrap_err()
        print(f"Import failed: [{error.code.name}] {error.message}", file=sys.stderr)
        return 1
    print(f"Created dictionary {result.unwrap().id}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Import a text word list into the dictionary store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 -m scripts.import_dictionary "Kitchen" kitchen.txt
  python3 -m scripts.import_dictionary "Kitchen" kitchen.txt --dry-run
        """,
    )
    parser.add_argument("name", help="Dictionary name")
    parser.add_argument("file", type=Path, help="Text file, one word per line")
    parser.add_argument("--dry-run", action="store_true", help="Parse and print without writing")
    args = parser.parse_args()

    configure_logging(level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON, log_sql=False)

    if not args.file.exists():
        print(f"File not found: {args.file}", file=sys.stderr)
        return 2
    return asyncio.run(run(args.name, args.file, args.dry_run))


if __name__ == "__main__":
    sys.exit(main())
