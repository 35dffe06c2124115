"""
validate_store.py - Consistency report for the narrative store JSON.
Reports dangling references, duplicate names and thin event texts.

Usage:
    python qa-service/scripts/validate_store.py [path/to/store.json]
"""
import json
import sys
from collections import Counter
from pathlib import Path

SCRIPT_DIR = Path(__file__).resolve().parent
sys.path.insert(0, str(SCRIPT_DIR.parent))

from macondo.core.config import STORE_PATH  # noqa: E402
from macondo.store.base_store import COLLECTIONS, LINK_KINDS  # noqa: E402
from macondo.utils.entity import extract_alias  # noqa: E402


def find_issues(data: dict) -> dict:
    """Collect every issue in the store data, grouped by category."""
    ids = {
        kind: {str(doc.get("id")) for doc in data.get(name, [])}
        for kind, name in COLLECTIONS.items()
    }

    issues = {
        "dangling_refs": [],
        "duplicate_names": [],
        "empty_description": [],
        "duplicate_chapters": [],
    }

    for kind, name in COLLECTIONS.items():
        docs = data.get(name, [])

        for doc in docs:
            for link, target_kind in LINK_KINDS.items():
                value = doc.get(link)
                if value is None:
                    continue
                refs = value if isinstance(value, list) else [value]
                for ref in refs:
                    if str(ref) not in ids[target_kind]:
                        issues["dangling_refs"].append((name, doc.get("id"), link, ref))

        # Names compared the way the question matcher sees them
        folded = Counter(extract_alias(doc["name"]).name for doc in docs if doc.get("name"))
        for folded_name, count in folded.items():
            if count > 1:
                issues["duplicate_names"].append((name, folded_name, count))

    for event in data.get("events", []):
        if not (event.get("description") or "").strip():
            issues["empty_description"].append(event.get("id"))

    numbers = Counter(ch.get("number") for ch in data.get("chapters", []))
    issues["duplicate_chapters"] = [n for n, count in numbers.items() if count > 1]

    return issues


def validate(path: str = STORE_PATH) -> int:
    """Run full validation and print report."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    print("Store Validation Report")
    for name in COLLECTIONS.values():
        print(f"   {name}: {len(data.get(name, []))}")
    print()

    issues = find_issues(data)

    print("CRITICAL ISSUES")
    print(f"   Dangling references: {len(issues['dangling_refs'])}")
    for coll, doc_id, link, ref in issues["dangling_refs"][:10]:
        print(f"     X {coll}/{doc_id}.{link} -> '{ref}'")
    print(f"   Duplicate chapter numbers: {issues['duplicate_chapters']}")

    print()
    print("MINOR ISSUES")
    print(f"   Duplicate names: {len(issues['duplicate_names'])}")
    for coll, folded_name, count in issues["duplicate_names"][:10]:
        print(f"     ! {coll}: '{folded_name}' x{count}")
    print(f"   Events without description: {len(issues['empty_description'])}")

    total_issues = sum(len(v) for v in issues.values())
    print()
    print("=" * 50)
    print(f"TOTAL ISSUES: {total_issues}")
    print("PASS - Store is CLEAN!" if total_issues == 0 else "FAIL - Issues found.")
    return total_issues


if __name__ == "__main__":
    target = sys.argv[1] if len(sys.argv) > 1 else STORE_PATH
    sys.exit(1 if validate(target) else 0)
