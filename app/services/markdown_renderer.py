import html
import re
from typing import List, NamedTuple, Set, Tuple

import markdown
from markdown.extensions import Extension
from markdown.extensions.toc import slugify
from markdown.treeprocessors import Treeprocessor, UnescapeTreeprocessor

HEADING_TAGS = {f"h{level}": level for level in range(1, 7)}
TAG_RE = re.compile(r"<[^>]+>")

BASE_MD_EXTENSIONS = ["fenced_code", "codehilite", "tables", "sane_lists"]
MD_EXTENSION_CONFIGS = {
    "codehilite": {
        "css_class": "highlight",
        "guess_lang": False,
        "use_pygments": True,
    },
}


class TocEntry(NamedTuple):
    level: int
    text: str
    id: str


class RenderedMarkdown(NamedTuple):
    html: str
    headings: List[TocEntry]


def slugify_heading(text: str) -> str:
    return slugify(text, "-") or "section"


def unique_id(base: str, used_ids: Set[str]) -> str:
    candidate, n = base, 0
    while candidate in used_ids:
        n += 1
        candidate = f"{base}-{n}"
    used_ids.add(candidate)
    return candidate


def heading_text(el, md) -> str:
    """Plain text of a heading as the reader sees it.

    Backslash escapes and stashed inline HTML/entities are restored through
    the postprocessors before tags are stripped and entities decoded.
    """
    text = UnescapeTreeprocessor(md).unescape("".join(el.itertext()))
    for pp in md.postprocessors:
        text = pp.run(text)
    text = html.unescape(TAG_RE.sub("", text))
    return " ".join(text.split())


class HeadingAnchorProcessor(Treeprocessor):
    """Give every heading a unique `id` and record them in document order."""

    def __init__(self, md, headings: List[TocEntry]):
        super().__init__(md)
        self.headings = headings

    def run(self, root):
        used_ids: Set[str] = set()
        for el in root.iter():
            level = HEADING_TAGS.get(el.tag)
            if level is None:
                continue
            text = heading_text(el, self.md)
            hid = unique_id(slugify_heading(text), used_ids)
            el.set("id", hid)
            self.headings.append(TocEntry(level, text, hid))


class HeadingAnchorExtension(Extension):
    def __init__(self, **kwargs):
        self.headings: List[TocEntry] = []
        super().__init__(**kwargs)

    def extendMarkdown(self, md):
        # after inline patterns (20) so heading text is final
        md.treeprocessors.register(
            HeadingAnchorProcessor(md, self.headings), "heading_anchor", 5
        )


def render_markdown(body: str) -> RenderedMarkdown:
    """Render a markdown body to HTML, collecting anchored headings.

    A fresh `Markdown` instance is used for every call so that renders never
    share state.
    """
    anchors = HeadingAnchorExtension()
    md = markdown.Markdown(
        extensions=[*BASE_MD_EXTENSIONS, anchors],
        extension_configs=MD_EXTENSION_CONFIGS,
        output_format="html",
    )
    return RenderedMarkdown(md.convert(body), list(anchors.headings))


def build_table_of_contents(
    headings: List[TocEntry], levels: Tuple[int, int] = (2, 3)
) -> str:
    """Nested `<ul>` of anchor links for headings within `levels`.

    Deeper headings nest under the nearest preceding shallower one; a heading
    with no such parent stays at the top level.
    """
    min_level, max_level = levels
    entries = [h for h in headings if min_level <= h.level <= max_level]
    if not entries:
        return ""

    # (entry, children) tree built with a stack of open parents
    root: List[Tuple[TocEntry, list]] = []
    stack: List[Tuple[TocEntry, list]] = []
    for entry in entries:
        node = (entry, [])
        while stack and stack[-1][0].level >= entry.level:
            stack.pop()
        (stack[-1][1] if stack else root).append(node)
        stack.append(node)

    return _render_toc_list(root)


def _render_toc_list(nodes) -> str:
    items = []
    for entry, children in nodes:
        link = f'<a href="#{html.escape(entry.id)}">{html.escape(entry.text)}</a>'
        nested = _render_toc_list(children) if children else ""
        items.append(f"<li>{link}{nested}</li>")
    return f"<ul>{''.join(items)}</ul>"


def html_to_text(content_html: str) -> str:
    """Plain text of rendered HTML: tags dropped, entities unescaped."""
    text = TAG_RE.sub(" ", content_html)
    return html.unescape(text)
