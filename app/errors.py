class MalformedContentError(ValueError):
    """A post source whose front-matter is missing, invalid or incomplete."""

    def __init__(self, slug: str, reason: str):
        self.slug = slug
        self.reason = reason
        super().__init__(f"Malformed post {slug!r}: {reason}")


class DuplicateSlugError(ValueError):
    """Two or more source files map to the same post id."""

    def __init__(self, slug: str, paths):
        self.slug = slug
        self.paths = [str(p) for p in paths]
        super().__init__(f"Duplicate slug {slug!r}: {', '.join(self.paths)}")
