class InvariantViolation(Exception):
    """Raised when a page would be saved in a state the domain forbids."""


class PageNotFound(LookupError):
    def __init__(self, path):
        super().__init__(f"No page found for {path!r}")
        self.path = path


class SlugConflict(InvariantViolation):
    def __init__(self, slug):
        super().__init__(f"A page with slug {slug!r} already exists")
        self.slug = slug
