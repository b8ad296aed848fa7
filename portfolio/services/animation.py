import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping

from ..core.dom import Element


logger = logging.getLogger(__name__)

THRESHOLD = 0.1
BOTTOM_MARGIN_PX = 50

REVEAL_CLASS = "animate-in"
STATIC_ANIMATED_CLASSES = ("skill-card", "project-card", "about-content", "contact-content")

PENDING = "pending"
REVEALED = "revealed"


@dataclass(frozen=True)
class Rect:
    top: float
    height: float
    left: float = 0.0
    width: float = 1.0

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def area(self) -> float:
        return max(self.width, 0.0) * max(self.height, 0.0)


@dataclass(frozen=True)
class VisibilityEntry:
    target: Element
    intersection_ratio: float
    is_intersecting: bool


def intersection_ratio(rect: Rect, viewport: Rect, bottom_margin: float = BOTTOM_MARGIN_PX) -> float:
    """Fraction of ``rect`` inside ``viewport`` after pulling its bottom edge up by ``bottom_margin``."""
    if rect.area <= 0:
        return 0.0
    zone_bottom = viewport.bottom - bottom_margin
    overlap_h = min(rect.bottom, zone_bottom) - max(rect.top, viewport.top)
    overlap_w = min(rect.right, viewport.right) - max(rect.left, viewport.left)
    if overlap_h <= 0 or overlap_w <= 0:
        return 0.0
    return (overlap_h * overlap_w) / rect.area


class AnimationObserver:
    """One-shot entrance animation for elements scrolled into view.

    Each observed element is ``pending`` until its first qualifying
    intersection, at which point it is ``revealed`` and dropped from the
    observed set. Static page content and freshly rendered cards go through
    the same path.
    """

    def __init__(self, threshold: float = THRESHOLD, bottom_margin: float = BOTTOM_MARGIN_PX):
        self.threshold = threshold
        self.bottom_margin = bottom_margin
        self._observed: List[Element] = []
        self.states: Dict[Element, str] = {}

    @staticmethod
    def prepare(element: Element) -> None:
        element.style["opacity"] = "0"
        element.style["transform"] = "translateY(30px)"
        element.style["transition"] = "opacity 0.6s ease, transform 0.6s ease"

    def observe(self, element: Element) -> None:
        if any(el is element for el in self._observed):
            return
        self._observed.append(element)
        self.states[element] = PENDING

    def unobserve(self, element: Element) -> None:
        self._observed = [el for el in self._observed if el is not element]

    def forget(self, element: Element) -> None:
        """Stop observing and drop any state, for elements taken off the page."""
        self.unobserve(element)
        self.states.pop(element, None)

    def is_observing(self, element: Element) -> bool:
        return any(el is element for el in self._observed)

    def state_of(self, element: Element) -> str | None:
        return self.states.get(element)

    def observe_static(self, root: Element) -> int:
        count = 0
        for el in list(root.iter()):
            if any(el.has_class(name) for name in STATIC_ANIMATED_CLASSES):
                self.prepare(el)
                self.observe(el)
                count += 1
        return count

    def handle_entries(self, entries: Iterable[VisibilityEntry]) -> List[Element]:
        revealed = []
        for entry in entries:
            if not self.is_observing(entry.target):
                continue
            if entry.is_intersecting and entry.intersection_ratio >= self.threshold:
                self._reveal(entry.target)
                revealed.append(entry.target)
        return revealed

    def on_scroll(self, viewport: Rect, layout: Mapping[Element, Rect]) -> List[Element]:
        """Check every observed element against ``viewport``.

        ``layout`` maps each element to its bounding rectangle; elements
        without a known rectangle are left pending.
        """
        entries = []
        for el in list(self._observed):
            rect = layout.get(el)
            if rect is None:
                continue
            ratio = intersection_ratio(rect, viewport, self.bottom_margin)
            entries.append(VisibilityEntry(target=el, intersection_ratio=ratio, is_intersecting=ratio > 0))
        return self.handle_entries(entries)

    def _reveal(self, element: Element) -> None:
        element.add_class(REVEAL_CLASS)
        element.style["opacity"] = "1"
        element.style["transform"] = "translateY(0)"

        # Skill bars start filling when their card appears
        if element.has_class("skill-card"):
            progress_bar = element.find("skill-progress")
            if progress_bar is not None:
                progress_bar.style["animation-play-state"] = "running"

        self.states[element] = REVEALED
        self.unobserve(element)
        logger.debug(f"Revealed {element!r}")
