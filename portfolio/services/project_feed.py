import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, Tuple
from urllib.parse import urlparse

from ..core.config import Config
from ..core.dom import Element
from .animation import AnimationObserver


logger = logging.getLogger(__name__)

ICONS = {
    "robotics": "🤖",
    "web": "📱",
    "iot": "🌾",
    "default": "💻",
}

# Declaration order matters: the first group with a matching tag wins
ICON_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("robotics", ("arduino", "robot")),
    ("web", ("react", "web")),
    ("iot", ("iot", "sensor")),
)

SAFE_LINK_SCHEMES = ("", "http", "https")


class JsonGetter(Protocol):
    async def get_json(self, url: str) -> Any: ...


class MalformedFeedError(ValueError):
    pass


@dataclass(frozen=True)
class ProjectRecord:
    title: str
    description: str
    tags: Tuple[str, ...] = ()
    demo_url: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "ProjectRecord":
        if not isinstance(payload, dict):
            raise MalformedFeedError(f"Project record must be an object, got {type(payload).__name__}")
        title = payload.get("title")
        description = payload.get("description")
        if not isinstance(title, str) or not isinstance(description, str):
            raise MalformedFeedError("Project record requires string 'title' and 'description'")
        tags = payload.get("tags") or []
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise MalformedFeedError(f"Project '{title}' has invalid tags")
        demo_url = payload.get("demo_url") or None
        if demo_url is not None and not isinstance(demo_url, str):
            raise MalformedFeedError(f"Project '{title}' has invalid demo_url")
        return cls(title=title, description=description, tags=tuple(tags), demo_url=demo_url)


@dataclass(frozen=True)
class RenderedCard:
    record: ProjectRecord
    icon: str
    element: Element


def select_icon_kind(tags) -> str:
    lowered = [t.lower() for t in tags]
    for kind, keywords in ICON_KEYWORDS:
        if any(keyword in tag for tag in lowered for keyword in keywords):
            return kind
    return "default"


def select_icon(tags) -> str:
    return ICONS[select_icon_kind(tags)]


def safe_href(url: Optional[str]) -> str:
    if not url or urlparse(url.strip()).scheme.lower() not in SAFE_LINK_SCHEMES:
        return "#"
    return url


def render_card(record: ProjectRecord) -> RenderedCard:
    """Build the ``article.project-card`` markup for one record."""
    icon = select_icon(record.tags)
    element = Element(
        "article",
        classes=["project-card"],
        children=[
            Element(
                "div",
                classes=["project-image"],
                children=[
                    Element("div", classes=["project-placeholder"], text=icon),
                    Element(
                        "div",
                        classes=["project-overlay"],
                        children=[
                            Element(
                                "a",
                                classes=["project-link"],
                                text="View Project",
                                attrs={"href": safe_href(record.demo_url)},
                            ),
                        ],
                    ),
                ],
            ),
            Element(
                "div",
                classes=["project-content"],
                children=[
                    Element("h3", text=record.title),
                    Element("p", text=record.description),
                    Element(
                        "div",
                        classes=["project-tags"],
                        children=[Element("span", text=tag) for tag in record.tags],
                    ),
                ],
            ),
        ],
    )
    return RenderedCard(record=record, icon=icon, element=element)


def parse_feed(body: Any) -> List[ProjectRecord]:
    """Validate the ``{success, count, data}`` envelope and return its records.

    Raises ``MalformedFeedError`` for anything that should leave the static
    projects in place, including ``success: false`` and an empty list.
    """
    if not isinstance(body, dict):
        raise MalformedFeedError("Feed response is not a JSON object")
    if body.get("success") is not True:
        raise MalformedFeedError("Feed reported success=false")
    data = body.get("data")
    if not isinstance(data, list):
        raise MalformedFeedError("Feed 'data' is not a list")
    if not data:
        raise MalformedFeedError("Feed returned no projects")
    return [ProjectRecord.from_payload(item) for item in data]


class ProjectFeed:
    """Replaces the static project grid with featured projects from the backend.

    The feed is an enhancement: on any failure the container keeps whatever
    it already shows and the failure is only logged.
    """

    def __init__(
        self,
        container: Optional[Element],
        http_client: JsonGetter,
        observer: AnimationObserver,
        url: Optional[str] = None,
    ):
        self.container = container
        self.http_client = http_client
        self.observer = observer
        self.url = url or Config.projects_url()

    async def load(self) -> List[RenderedCard]:
        if self.container is None:
            logger.warning("No project container on the page, skipping feed load")
            return []

        try:
            body = await self.http_client.get_json(self.url)
            records = parse_feed(body)
            cards = [render_card(record) for record in records]
        except Exception as e:
            logger.warning(f"Using static projects ({type(e).__name__}: {str(e)})")
            return []

        replaced = list(self.container.children)
        self.container.replace_children(card.element for card in cards)
        for old in replaced:
            self.observer.forget(old)

        # Dynamic cards share the entrance animation of the static content
        for card in cards:
            self.observer.prepare(card.element)
            self.observer.observe(card.element)

        count = body.get("count", len(cards))
        logger.info(f"Loaded {count} projects from API")
        return cards
