#!/usr/bin/env python3
"""
Standalone render smoke test for manual verification.

Renders a saved template against the live Pogodoc API with both the
polling and the immediate workflows and prints the output URLs.

Requires POGODOC_API_TOKEN (and optionally POGODOC_BASE_URL) in the
environment or a .env file.

Run with: python scripts/generate_document.py <template-id> [target]
"""

import asyncio
import logging
import sys

from pogodoc import PogodocClient, PogodocError, RenderSpec


async def run(template_id: str, target: str) -> int:
    spec = RenderSpec(
        type="html",
        target=target,
        template_id=template_id,
        data={"name": "John Doe"},
    )

    print("=" * 60)
    print("Pogodoc Render - Manual Test")
    print("=" * 60)

    try:
        async with PogodocClient.from_env() as client:
            print("\n1. Starting render job and polling for completion...")
            result = await client.generate_document(spec)
            print(f"   ✓ Job {result.job_id} done: {result.output.data.url}")

            print("\n2. Rendering immediately...")
            immediate = await client.generate_document_immediate(spec)
            print(f"   ✓ Output: {immediate.url}")
    except PogodocError as e:
        print(f"   ✗ Render failed: {e}")
        return 1

    return 0


def main():
    """Execute manual render test"""
    if len(sys.argv) < 2:
        print(__doc__)
        return 2

    logging.basicConfig(level=logging.INFO)
    target = sys.argv[2] if len(sys.argv) > 2 else "pdf"
    return asyncio.run(run(sys.argv[1], target))


if __name__ == "__main__":
    sys.exit(main())
