from portfolio.core.dom import Element
from portfolio.services.animation import (
    PENDING,
    REVEALED,
    AnimationObserver,
    Rect,
    VisibilityEntry,
    intersection_ratio,
)

VIEWPORT = Rect(top=0, height=800, width=1200)


def _card(cls="project-card"):
    return Element("div", classes=[cls])


def test_intersection_ratio_honours_bottom_margin():
    # Only the 10px above the 50px bottom margin count
    rect = Rect(top=740, height=100, width=1200)
    assert intersection_ratio(rect, VIEWPORT) == 0.1
    assert intersection_ratio(Rect(top=760, height=100, width=1200), VIEWPORT) == 0.0
    assert intersection_ratio(Rect(top=100, height=100, width=1200), VIEWPORT) == 1.0


def test_reveal_is_one_shot():
    observer = AnimationObserver()
    card = _card()
    observer.prepare(card)
    observer.observe(card)
    assert observer.state_of(card) == PENDING

    revealed = observer.on_scroll(VIEWPORT, {card: Rect(top=100, height=200, width=1200)})

    assert revealed == [card]
    assert card.has_class("animate-in")
    assert card.style["opacity"] == "1"
    assert observer.state_of(card) == REVEALED
    assert not observer.is_observing(card)

    # Scrolling away and back does not animate again
    card.classes.remove("animate-in")
    assert observer.on_scroll(VIEWPORT, {card: Rect(top=100, height=200, width=1200)}) == []
    assert not card.has_class("animate-in")


def test_below_threshold_stays_pending():
    observer = AnimationObserver()
    card = _card()
    observer.observe(card)

    assert observer.handle_entries([VisibilityEntry(card, 0.05, True)]) == []
    assert observer.on_scroll(VIEWPORT, {card: Rect(top=745, height=100, width=1200)}) == []
    assert observer.state_of(card) == PENDING


def test_unknown_layout_is_skipped():
    observer = AnimationObserver()
    card = _card()
    observer.observe(card)
    assert observer.on_scroll(VIEWPORT, {}) == []
    assert observer.is_observing(card)


def test_observe_static_prepares_known_sections():
    progress = Element("div", classes=["skill-progress"])
    root = Element(
        "body",
        children=[
            Element("div", classes=["skill-card"], children=[progress]),
            Element("div", classes=["about-content"]),
            Element("div", classes=["hero"]),
        ],
    )
    observer = AnimationObserver()

    assert observer.observe_static(root) == 2
    skill, about, hero = root.children
    assert skill.style["opacity"] == "0"
    assert "opacity" not in hero.style

    observer.handle_entries([VisibilityEntry(skill, 1.0, True)])
    assert progress.style["animation-play-state"] == "running"
