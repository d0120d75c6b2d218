"""Import common English words into the dictionary store.

Each word is fetched from the Free Dictionary API, its definitions and
examples are translated to Vietnamese through the LLM, and the resulting
payload is either written to MongoDB or dumped as JSON for later import.
Frequency rank is the word's position in the list.

Usage:
    PYTHONPATH=src python scripts/import_dictionary_data.py                  # built-in list → MongoDB
    PYTHONPATH=src python scripts/import_dictionary_data.py --words words.txt
    PYTHONPATH=src python scripts/import_dictionary_data.py --dump data/import
    PYTHONPATH=src python scripts/import_dictionary_data.py --from-dir data/import
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from adapter.external.free_dictionary import FreeDictionaryAdapter
from adapter.external.litellm import LiteLLMAdapter
from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.entry_repository import MongoEntryRepository
from domain.model.entry import ImportedEntry
from domain.model.errors import ImportFailedError
from services.import_service import import_entry
from services.import_source import entry_from_payload, entry_to_payload, fetch_imported_entry
from utils.logging import setup_structured_logging

# Most frequent English words first, then learner vocabulary
COMMON_WORDS = list(dict.fromkeys([
    'the', 'be', 'to', 'of', 'and', 'a', 'in', 'that', 'have', 'I',
    'it', 'for', 'not', 'on', 'with', 'he', 'as', 'you', 'do', 'at',
    'this', 'but', 'his', 'by', 'from', 'they', 'we', 'say', 'her', 'she',
    'or', 'an', 'will', 'my', 'one', 'all', 'would', 'there', 'their', 'what',
    'so', 'up', 'out', 'if', 'about', 'who', 'get', 'which', 'go', 'me',
    'when', 'make', 'can', 'like', 'time', 'no', 'just', 'him', 'know', 'take',
    'people', 'into', 'year', 'your', 'good', 'some', 'could', 'them', 'see', 'other',
    'than', 'then', 'now', 'look', 'only', 'come', 'its', 'over', 'think', 'also',
    'back', 'after', 'use', 'two', 'how', 'our', 'work', 'first', 'well', 'way',
    'even', 'new', 'want', 'because', 'any', 'these', 'give', 'day', 'most', 'us',
    'hello', 'world', 'love', 'happy', 'sad', 'learn', 'study', 'read', 'write', 'speak',
    'listen', 'understand', 'beautiful', 'difficult', 'easy', 'hard', 'simple', 'complex',
    'friend', 'family', 'home', 'house', 'school', 'job', 'money', 'life',
]))

WORD_DELAY_SECONDS = 0.5


def load_word_list(path: str | None) -> list[str]:
    """One word per line; blank lines and '#' comments are skipped."""
    if path is None:
        return COMMON_WORDS
    lines = Path(path).read_text(encoding='utf-8').splitlines()
    words = [line.strip() for line in lines if line.strip() and not line.startswith('#')]
    return list(dict.fromkeys(words))


def get_repo() -> MongoEntryRepository:
    client = get_mongodb_client()
    if client is None:
        print("MongoDB connection failed (check MONGO_URL)")
        sys.exit(1)
    repo = MongoEntryRepository(client[DATABASE_NAME])
    repo.ensure_indexes()
    return repo


def store(repo: MongoEntryRepository, entry: ImportedEntry) -> bool:
    try:
        import_entry(repo, entry)
    except ImportFailedError as e:
        print(f"  ❌ {e}")
        return False
    print(f"  ✅ Imported \"{entry.word}\" with {len(entry.definitions)} definitions")
    return True


def dump(out_dir: Path, entry: ImportedEntry) -> bool:
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"{entry.word}.json"
    path.write_text(json.dumps(entry_to_payload(entry), ensure_ascii=False, indent=2), encoding='utf-8')
    print(f"  ✅ Saved \"{entry.word}\" to {path}")
    return True


async def import_words(words: list[str], dump_dir: Path | None) -> tuple[int, int]:
    dictionary = FreeDictionaryAdapter()
    llm = LiteLLMAdapter()
    repo = None if dump_dir else get_repo()

    success, failed = 0, 0
    for rank, word in enumerate(words, start=1):
        print(f"\n[{rank}] Processing: {word}")
        entry = await fetch_imported_entry(dictionary, llm, word, rank)
        if entry is None:
            print(f"  ⚠️  No data found for \"{word}\"")
            failed += 1
            continue
        if not entry.pronunciations:
            print(f"  ⚠️  No pronunciation data for \"{word}\"")

        ok = dump(dump_dir, entry) if dump_dir else store(repo, entry)
        if ok:
            success += 1
        else:
            failed += 1
        await asyncio.sleep(WORD_DELAY_SECONDS)
    return success, failed


def import_from_dir(src_dir: Path) -> tuple[int, int]:
    repo = get_repo()
    success, failed = 0, 0
    for path in sorted(src_dir.glob('*.json')):
        print(f"\nLoading: {path.name}")
        try:
            entry = entry_from_payload(json.loads(path.read_text(encoding='utf-8')))
        except (ValueError, KeyError) as e:
            print(f"  ❌ Invalid payload: {e}")
            failed += 1
            continue
        if store(repo, entry):
            success += 1
        else:
            failed += 1
    return success, failed


def main():
    parser = argparse.ArgumentParser(description='Import dictionary data')
    parser.add_argument('--words', type=str, default=None, help='Word list file (default: built-in list)')
    parser.add_argument('--limit', type=int, default=None, help='Import only the first N words')
    parser.add_argument('--dump', type=str, default=None, help='Write JSON payloads to this directory instead of MongoDB')
    parser.add_argument('--from-dir', type=str, default=None, help='Import previously dumped JSON payloads')
    args = parser.parse_args()

    setup_structured_logging('WARNING')

    print('🚀 Starting dictionary data import...')
    if args.from_dir:
        success, failed = import_from_dir(Path(args.from_dir))
    else:
        words = load_word_list(args.words)
        if args.limit:
            words = words[:args.limit]
        print(f"Words to import: {len(words)}")
        dump_dir = Path(args.dump) if args.dump else None
        success, failed = asyncio.run(import_words(words, dump_dir))

    print('\n' + '=' * 50)
    print('✨ Import complete!')
    print(f"  ✅ Success: {success}")
    print(f"  ❌ Failed: {failed}")
    print('=' * 50)


if __name__ == "__main__":
    main()
