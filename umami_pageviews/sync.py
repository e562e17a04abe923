"""Pageviews sync for umami-pageviews.

Authenticates against the Umami share link, queries the view count of the
site root and of every post, and writes the results to pageviews.json for
the static site build to pick up.

CLI: python -m umami_pageviews.sync --posts-dir src/content/posts --output pageviews.json
"""

import argparse
import json
import sys
import time
from dataclasses import replace
from pathlib import Path

from umami_pageviews.config import SyncConfig, UmamiConfig
from umami_pageviews.posts import list_content_files, pathname_for
from umami_pageviews.umami import (
    ROOT_PATH,
    AuthToken,
    extract_pageviews,
    get_auth_token,
    get_page_stats,
)


def fetch_root(config: SyncConfig, auth: AuthToken) -> dict:
    """Fetch the site-wide total. Any failure is recorded as 0 views."""
    print(f"Fetching stats for {ROOT_PATH} (Total)...")
    try:
        stats = get_page_stats(config.umami, auth, ROOT_PATH, timeout=config.timeout)
    except Exception as e:
        print(f"Error fetching {ROOT_PATH}: {e}", file=sys.stderr)
        stats = None

    pageviews = extract_pageviews(stats)
    print(f"[Total] {ROOT_PATH}: {pageviews}")
    return {"pathname": ROOT_PATH, "pageviews": pageviews}


def collect_pageviews(
    config: SyncConfig,
    auth: AuthToken,
    filenames: list[str],
    sleep=time.sleep,
) -> list[dict]:
    """Query the root and then each post, in order.

    Pauses for config.pause_seconds after every config.batch_size posts.
    Failed lookups never abort the run; they are recorded as 0 views.
    """
    results = [fetch_root(config, auth)]
    total = len(filenames)

    for index, filename in enumerate(filenames):
        pathname = pathname_for(filename)

        if index > 0 and index % config.batch_size == 0:
            print(f"\nProcessed {index} posts...")
            sleep(config.pause_seconds)

        try:
            stats = get_page_stats(config.umami, auth, pathname, timeout=config.timeout)
        except Exception as e:
            print(f"\nError fetching {pathname}: {e}", file=sys.stderr)
            results.append({"pathname": pathname, "pageviews": 0})
            continue

        pageviews = extract_pageviews(stats)
        results.append({"pathname": pathname, "pageviews": pageviews})
        marker = "" if stats is not None else " (Failed)"
        sys.stdout.write(f"\r[{index + 1}/{total}] {pathname}: {pageviews}{marker}    ")
        sys.stdout.flush()

    print("\nFetching completed.")
    return results


def write_results(results: list[dict], output_file: str | Path) -> Path:
    """Write the results array, replacing whatever was there before."""
    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(
        json.dumps(results, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
    )
    print(f"Successfully saved pageviews to {output_file}")
    return output_file


def run(config: SyncConfig, sleep=time.sleep) -> dict:
    """Run one full sync and return a summary dict.

    Authentication and missing-directory errors propagate, in which case
    nothing is written.
    """
    print("Starting pageviews fetch...")

    auth = get_auth_token(config.umami, timeout=config.timeout)
    print(f"Website ID: {auth.website_id}")

    filenames = list_content_files(config.posts_dir, config.extensions)
    print(f"Found {len(filenames)} posts.")

    results = collect_pageviews(config, auth, filenames, sleep=sleep)
    output = write_results(results, config.output_file)

    return {
        "output": str(output),
        "post_count": len(filenames),
        "total_views": results[0]["pageviews"],
    }


def main():
    parser = argparse.ArgumentParser(
        description="Fetch per-post pageviews from an Umami share link"
    )
    parser.add_argument("--posts-dir", help="Directory containing markdown posts")
    parser.add_argument("--output", help="Path of the JSON file to write")
    parser.add_argument("--config", help="YAML file with the Umami settings")
    args = parser.parse_args()

    try:
        config = SyncConfig.from_env()
        if args.config:
            config = replace(config, umami=UmamiConfig.from_yaml(args.config))
        if args.posts_dir:
            config = replace(config, posts_dir=args.posts_dir)
        if args.output:
            config = replace(config, output_file=args.output)

        if not config.umami.configured:
            print("Umami not enabled or not configured, skipping pageviews fetch", file=sys.stderr)
            sys.exit(0)

        summary = run(config)
    except Exception as e:
        print(f"Fatal Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Synced {summary['post_count']} posts, {summary['total_views']} total views")
    sys.exit(0)


if __name__ == "__main__":
    main()
