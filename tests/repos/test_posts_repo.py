import pytest

from app.errors import DuplicateSlugError, MalformedContentError
from app.repos.posts_repo import FilesystemPostsRepo, PostSource, slug_from_filename
from tests.conftest import make_post, write_post


def test_list_sources_orders_by_filename_and_skips_non_markdown(posts_dir):
    write_post(posts_dir, "zeta.md", make_post())
    write_post(posts_dir, "alpha.markdown", make_post())
    write_post(posts_dir, "notes.txt", "not a post")
    write_post(posts_dir, ".draft.md", make_post())
    (posts_dir / "drafts.md").mkdir()  # directories are never posts

    repo = FilesystemPostsRepo(posts_dir)

    result = repo.list_sources()

    assert [s.slug for s in result] == ["alpha", "zeta"]
    assert result[0] == PostSource("alpha", posts_dir / "alpha.markdown")


def test_list_sources_empty_directory_returns_empty_list(posts_dir):
    assert FilesystemPostsRepo(posts_dir).list_sources() == []


def test_list_sources_missing_directory_raises_oserror(tmp_path):
    repo = FilesystemPostsRepo(tmp_path / "nope")

    with pytest.raises(OSError):
        repo.list_sources()


def test_list_sources_fails_fast_on_duplicate_slugs(posts_dir):
    write_post(posts_dir, "hello.md", make_post())
    write_post(posts_dir, "hello.markdown", make_post())
    write_post(posts_dir, "other.md", make_post())

    with pytest.raises(DuplicateSlugError) as exc:
        FilesystemPostsRepo(posts_dir).list_sources()

    assert exc.value.slug == "hello"
    assert len(exc.value.paths) == 2


def test_get_source_returns_matching_file(posts_dir):
    path = write_post(posts_dir, "hello-world.md", make_post())

    source = FilesystemPostsRepo(posts_dir).get_source("hello-world")

    assert source == PostSource("hello-world", path)


def test_get_source_returns_none_when_missing(posts_dir):
    assert FilesystemPostsRepo(posts_dir).get_source("does-not-exist") is None


@pytest.mark.parametrize("slug", ["", "../secret", "nested/post", ".hidden", None])
def test_get_source_rejects_unsafe_slugs(tmp_path, posts_dir, slug):
    write_post(tmp_path, "secret.md", make_post())
    write_post(posts_dir, ".hidden.md", make_post())

    assert FilesystemPostsRepo(posts_dir).get_source(slug) is None


def test_get_source_raises_on_duplicate(posts_dir):
    write_post(posts_dir, "hello.md", make_post())
    write_post(posts_dir, "hello.markdown", make_post())

    with pytest.raises(DuplicateSlugError):
        FilesystemPostsRepo(posts_dir).get_source("hello")


def test_read_text_returns_file_contents(posts_dir):
    text = make_post(title="Read Me")
    write_post(posts_dir, "read-me.md", text)
    repo = FilesystemPostsRepo(posts_dir)

    assert repo.read_text(repo.get_source("read-me")) == text


def test_read_text_rejects_invalid_utf8(posts_dir):
    (posts_dir / "binary.md").write_bytes(b"---\ntitle: \xff\xfe\n---\n")
    repo = FilesystemPostsRepo(posts_dir)

    with pytest.raises(MalformedContentError) as exc:
        repo.read_text(repo.get_source("binary"))

    assert exc.value.slug == "binary"


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("hello-world.md", "hello-world"),
        ("notes.markdown", "notes"),
        ("v1.2-release.md", "v1.2-release"),
        ("README", "README"),
    ],
)
def test_slug_from_filename(filename, expected):
    assert slug_from_filename(filename) == expected


def test_get_source_treats_overlong_slug_as_missing(posts_dir):
    assert FilesystemPostsRepo(posts_dir).get_source("x" * 300) is None


def test_read_text_strips_utf8_bom(posts_dir):
    text = make_post(title="With BOM")
    (posts_dir / "bom.md").write_bytes(b"\xef\xbb\xbf" + text.encode("utf-8"))
    repo = FilesystemPostsRepo(posts_dir)

    assert repo.read_text(repo.get_source("bom")) == text
