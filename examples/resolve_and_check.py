#!/usr/bin/env python3
"""
Example: AIDD Python Library

Resolves a domain's AI Domain Data over HTTPS and DNS, then reports advisory
issues for whichever records were retrieved.

Usage:
    python examples/resolve_and_check.py example.com [more.example ...]
"""

import asyncio
import json
import sys

from aidd import ResolveOptions, resolve_many, strict_issues


async def main(domains: list[str]) -> int:
    print("=" * 60)
    print("AIDD Example: Python Library")
    print("=" * 60)
    failures = 0

    # ── Step 1: Resolve every domain ────────────────────────────
    print(f"\n[1/2] Resolving {len(domains)} domain(s)...")
    results = await resolve_many(domains, ResolveOptions(timeout=5.0))

    # ── Step 2: Report ──────────────────────────────────────────
    print("\n[2/2] Results")
    for result in results:
        print(f"\n  {result.domain}: source={result.source} valid={result.valid}")
        print(f"      HTTP found: {result.details.http.found}  DNS found: {result.details.dns.found}")

        if result.valid:
            print(json.dumps(result.payload, indent=2, ensure_ascii=False))
            for issue in strict_issues(result.payload):
                print(f"      advisory: {issue}")
        else:
            failures += 1
            for error in result.errors or []:
                print(f"      error: {error}")

    print("\n" + "=" * 60)
    print(f"{len(results) - failures}/{len(results)} domain(s) valid")
    return 1 if failures else 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(2)
    sys.exit(asyncio.run(main(sys.argv[1:])))
