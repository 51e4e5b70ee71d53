import logging
from typing import Dict, List, Optional, Tuple

from app.errors import MalformedContentError
from app.schemas.blog import PostDetail, PostId, PostSummary
from app.services.content_parser import parse_front_matter
from app.services.markdown_renderer import (
    build_table_of_contents,
    html_to_text,
    render_markdown,
)
from app.utils import DEFAULT_WORDS_PER_MINUTE, calculate_reading_time

logger = logging.getLogger(__name__)


class PostsService:
    def __init__(
        self,
        repo,
        words_per_minute: int = DEFAULT_WORDS_PER_MINUTE,
        toc_levels: Tuple[int, int] = (2, 3),
    ):
        self.repo = repo
        self.words_per_minute = words_per_minute
        self.toc_levels = toc_levels

    def list_post_ids(self) -> List[PostId]:
        return [PostId(id=source.slug) for source in self.repo.list_sources()]

    def list_posts(self) -> List[PostSummary]:
        """All well-formed posts, newest first.

        Malformed posts are logged and skipped. Equal dates keep filename order.
        """
        posts = []
        for source in self.repo.list_sources():
            try:
                text = self.repo.read_text(source)
                posts.append(parse_post_data(text, source.slug, include_content=False))
            except MalformedContentError as e:
                logger.warning(f"Skipping post {source.slug}: {e.reason}")

        posts.sort(key=lambda p: p["_dt"], reverse=True)
        return [PostSummary(**_public_fields(p)) for p in posts]

    def get_post(self, slug: str) -> Optional[PostDetail]:
        source = self.repo.get_source(slug)
        if not source:
            return None
        text = self.repo.read_text(source)
        post_data = parse_post_data(
            text,
            slug,
            include_content=True,
            words_per_minute=self.words_per_minute,
            toc_levels=self.toc_levels,
        )
        return PostDetail(**_public_fields(post_data))


def parse_post_data(
    text: str,
    slug: str,
    include_content: bool = False,
    *,
    words_per_minute: int = DEFAULT_WORDS_PER_MINUTE,
    toc_levels: Tuple[int, int] = (2, 3),
) -> Dict:
    """Parse front-matter and, optionally, render the body.

    Raises MalformedContentError when the front-matter is invalid.
    """
    metadata, body = parse_front_matter(text, slug)

    post_data = {
        "id": slug,
        "title": metadata.title,
        "date": metadata.date,
        "description": metadata.description,
        "micro": metadata.micro,
        "hidden": metadata.hidden,
        "_dt": metadata.dt,
    }

    if include_content:
        rendered = render_markdown(body)
        post_data["contentHtml"] = rendered.html
        post_data["readTime"] = calculate_reading_time(
            html_to_text(rendered.html), words_per_minute
        )
        post_data["tableOfContents"] = build_table_of_contents(
            rendered.headings, toc_levels
        )
        logger.debug(
            f"Rendered post {slug}: {len(rendered.headings)} headings, "
            f"{post_data['readTime']} min"
        )

    return post_data


def _public_fields(post_data: Dict) -> Dict:
    return {k: v for k, v in post_data.items() if not k.startswith("_")}
