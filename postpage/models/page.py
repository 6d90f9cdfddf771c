from typing import List, Optional

from pydantic import BaseModel, Field

from postpage.models.post import Post, RelatedPost


class RelatedTitle(BaseModel):
    name: Optional[str] = None
    link: str


class RelatedSection(BaseModel):
    posts: List[RelatedPost]
    title: RelatedTitle


class PostPageProps(BaseModel):
    post: Optional[Post] = None
    related: Optional[RelatedSection] = None


class PageLoadResult(BaseModel):
    """Outcome of the server-side loader for one request.

    Exactly one of three shapes is produced: a redirect (``redirect_url`` set,
    empty props), a not-found signal (``not_found`` true, empty props) or the
    props needed to render the page.
    """

    props: PostPageProps = Field(default_factory=PostPageProps)
    not_found: bool = False
    redirect_url: Optional[str] = None
