"""Page content model and per-field merge with shared defaults."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class EmbedField:
    """A single name/value field shown on a page."""

    name: str
    value: str
    inline: bool = False


@dataclass(frozen=True)
class PageAuthor:
    """Author line shown at the top of a page."""

    name: str
    url: str | None = None
    icon_url: str | None = None


@dataclass(frozen=True)
class PageFooter:
    """Footer line shown at the bottom of a page."""

    text: str
    icon_url: str | None = None


@dataclass(frozen=True)
class Page:
    """One unit of paginated content.

    Every attribute is optional. When used as shared defaults, each
    attribute is the fallback for pages that leave it unset.
    """

    title: str | None = None
    description: str | None = None
    url: str | None = None
    thumbnail_url: str | None = None
    image_url: str | None = None
    fields: tuple[EmbedField, ...] = field(default_factory=tuple)
    timestamp: datetime | None = None
    color: int | None = None
    author: PageAuthor | None = None
    footer: PageFooter | None = None

    def __init__(
        self,
        title: str | None = None,
        description: str | None = None,
        url: str | None = None,
        thumbnail_url: str | None = None,
        image_url: str | None = None,
        fields: list[EmbedField] | tuple[EmbedField, ...] | None = None,
        timestamp: datetime | None = None,
        color: int | None = None,
        author: PageAuthor | None = None,
        footer: PageFooter | None = None,
    ):
        object.__setattr__(self, "title", title)
        object.__setattr__(self, "description", description)
        object.__setattr__(self, "url", url)
        object.__setattr__(self, "thumbnail_url", thumbnail_url)
        object.__setattr__(self, "image_url", image_url)
        # Convert list to tuple for immutability
        object.__setattr__(self, "fields", tuple(fields) if fields else ())
        object.__setattr__(self, "timestamp", timestamp)
        object.__setattr__(self, "color", color)
        object.__setattr__(self, "author", author)
        object.__setattr__(self, "footer", footer)


@dataclass(frozen=True)
class RenderedPage:
    """Effective content of a message: merged page plus optional plain text."""

    page: Page
    content: str | None = None


_SCALAR_FIELDS = (
    "title",
    "description",
    "url",
    "thumbnail_url",
    "image_url",
    "timestamp",
    "color",
    "author",
)


def format_footer(footer_format: str, page_index: int, page_count: int) -> str:
    """Substitute the page position into a footer template.

    Both positional (``"{0}/{1}"``) and named (``"{page}/{count}"``)
    placeholders are supported.
    """
    return footer_format.format(page_index, page_count, page=page_index, count=page_count)


def merge_page(page: Page, defaults: Page) -> Page:
    """Fill every unset attribute of ``page`` from ``defaults``.

    An empty field list counts as unset and takes the default fields.
    The footer is merged the same way but never synthesized here.
    """
    values = {}
    for name in _SCALAR_FIELDS:
        value = getattr(page, name)
        values[name] = value if value is not None else getattr(defaults, name)

    values["fields"] = page.fields if page.fields else defaults.fields
    values["footer"] = page.footer if page.footer is not None else defaults.footer
    return Page(**values)


def render_page(
    pages: list[Page] | tuple[Page, ...],
    defaults: Page,
    page_index: int,
    footer_format: str,
    content: str | None = None,
) -> RenderedPage:
    """
    Build the effective content for the 1-based ``page_index``.

    Args:
        pages: All pages of the session.
        defaults: Shared fallback values.
        page_index: Current 1-based page position.
        footer_format: Template used when no footer is supplied.
        content: Optional plain text shown alongside the page.

    Returns:
        The merged page. With no pages at all, the defaults alone.
    """
    page_count = len(pages)
    if page_count == 0:
        return RenderedPage(page=defaults, content=content)

    merged = merge_page(pages[page_index - 1], defaults)
    if merged.footer is None:
        text = format_footer(footer_format, page_index, page_count)
        merged = merge_page(merged, Page(footer=PageFooter(text=text)))

    return RenderedPage(page=merged, content=content)
