"""Content enumeration: maps post files to the URL paths the site serves."""

from pathlib import Path


class DirectoryNotFoundError(FileNotFoundError):
    pass


def list_content_files(
    posts_dir: str | Path,
    extensions: tuple[str, ...] = (".md",),
) -> list[str]:
    """List post filenames in directory-listing order.

    Raises DirectoryNotFoundError if posts_dir does not exist.
    """
    posts_dir = Path(posts_dir)
    if not posts_dir.is_dir():
        raise DirectoryNotFoundError(f"Posts directory not found: {posts_dir}")
    return [
        entry.name
        for entry in posts_dir.iterdir()
        if entry.is_file() and entry.suffix in extensions
    ]


def pathname_for(filename: str) -> str:
    slug = Path(filename).stem.lower()
    return f"/posts/{slug}/"
