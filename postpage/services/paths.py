"""Site-relative URL paths for posts and categories."""


def post_path_by_slug(slug: str) -> str:
    return f"/posts/{slug}"


def category_path_by_slug(slug: str) -> str:
    return f"/categories/{slug}"
