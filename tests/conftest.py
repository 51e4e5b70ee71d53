import textwrap
from pathlib import Path

import pytest

from app.errors import MalformedContentError
from app.repos.posts_repo import PostSource


def make_post(
    title: str | None = "Hello World",
    date: str | None = "2024-01-01",
    body: str = "Some text here.",
    **extra,
) -> str:
    """Build a post source. Extra keyword values are written verbatim as YAML."""
    lines = ["---"]
    if title is not None:
        lines.append(f'title: "{title}"')
    if date is not None:
        lines.append(f'date: "{date}"')
    lines.extend(f"{key}: {value}" for key, value in extra.items())
    lines.append("---")
    lines.append("")
    lines.append(textwrap.dedent(body).strip())
    return "\n".join(lines) + "\n"


def write_post(posts_dir: Path, filename: str, text: str) -> Path:
    path = posts_dir / filename
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def posts_dir(tmp_path):
    directory = tmp_path / "posts"
    directory.mkdir()
    return directory


class FakeRepo:
    """
    In-memory repo stand-in used in service tests.
    Sources are listed in the order of `texts`.
    """

    def __init__(self, texts: dict[str, str]):
        self.texts = texts
        self.calls = []

    def list_sources(self):
        self.calls.append("list_sources")
        return [PostSource(slug, Path(f"{slug}.md")) for slug in self.texts]

    def get_source(self, slug: str):
        self.calls.append(f"get_source:{slug}")
        if slug not in self.texts:
            return None
        return PostSource(slug, Path(f"{slug}.md"))

    def read_text(self, source: PostSource) -> str:
        return self.texts[source.slug]


class FakePostsService:
    """
    Minimal posts service stand-in for router and index tests.
    """

    def __init__(
        self,
        list_post_ids_return=None,
        list_posts_return=None,
        get_post_return=None,
        malformed_ids=(),
    ):
        self._list_post_ids_return = list_post_ids_return or []
        self._list_posts_return = list_posts_return or []
        self._get_post_return = get_post_return
        self.malformed_ids = set(malformed_ids)
        self.calls = []

    def list_post_ids(self):
        self.calls.append("list_post_ids")
        return self._list_post_ids_return

    def list_posts(self):
        self.calls.append("list_posts")
        return self._list_posts_return

    def get_post(self, slug: str):
        self.calls.append(f"get_post:{slug}")
        if slug in self.malformed_ids:
            raise MalformedContentError(slug, "missing date")
        if isinstance(self._get_post_return, dict):
            return self._get_post_return.get(slug)
        return self._get_post_return
