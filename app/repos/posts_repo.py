import logging
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional

from app.errors import DuplicateSlugError, MalformedContentError

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = (".md", ".markdown")


class PostSource(NamedTuple):
    slug: str
    path: Path


class FilesystemPostsRepo:
    def __init__(self, posts_dir):
        self.posts_dir = Path(posts_dir)

    def list_sources(self) -> List[PostSource]:
        """Enumerate markdown files in filename order, one source per slug.

        Raises OSError when the directory is missing or unreadable and
        DuplicateSlugError when two files share a slug.
        """
        paths = sorted(
            (
                p
                for p in self.posts_dir.iterdir()
                if p.is_file()
                and p.suffix in MARKDOWN_EXTENSIONS
                and not p.name.startswith(".")
            ),
            key=lambda p: p.name,
        )

        by_slug: Dict[str, List[Path]] = {}
        for path in paths:
            by_slug.setdefault(slug_from_filename(path.name), []).append(path)

        for slug, matches in by_slug.items():
            if len(matches) > 1:
                raise DuplicateSlugError(slug, matches)

        return [PostSource(slug, matches[0]) for slug, matches in by_slug.items()]

    def get_source(self, slug: str) -> Optional[PostSource]:
        if not self._is_valid_slug(slug):
            return None

        matches = [
            path
            for path in (self.posts_dir / f"{slug}{ext}" for ext in MARKDOWN_EXTENSIONS)
            if _is_existing_file(path)
        ]
        if not matches:
            return None
        if len(matches) > 1:
            raise DuplicateSlugError(slug, matches)
        return PostSource(slug, matches[0])

    @staticmethod
    def read_text(source: PostSource) -> str:
        logger.debug(f"Reading post {source.slug} from {source.path}")
        try:
            # utf-8-sig drops a leading BOM that would hide the front-matter
            return source.path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as e:
            raise MalformedContentError(source.slug, "file is not valid UTF-8") from e

    @staticmethod
    def _is_valid_slug(slug: str | None) -> bool:
        if not slug or slug.startswith("."):
            return False
        return "/" not in slug and "\\" not in slug and "\x00" not in slug


def _is_existing_file(path: Path) -> bool:
    # names past the filesystem limit raise instead of returning False
    try:
        return path.is_file()
    except OSError as e:
        logger.debug(f"Treating {path.name[:40]}... as missing: {e.strerror}")
        return False


def slug_from_filename(filename: str) -> str:
    """`hello-world.md` -> `hello-world`"""
    stem, dot, ext = filename.rpartition(".")
    if dot and f".{ext}" in MARKDOWN_EXTENSIONS:
        return stem
    return filename
