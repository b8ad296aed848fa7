"""Minimal element tree the services render into.

The browser's document is an external collaborator; this model keeps just
enough of it (classes, inline style, text, attributes, children) for the
components to own their containers explicitly and for the host to serialize
the result.
"""

from html import escape
from typing import Dict, Iterable, Iterator, List, Optional


VOID_TAGS = {"br", "hr", "img", "input", "meta", "link"}


class Element:
    def __init__(
        self,
        tag: str,
        *,
        classes: Iterable[str] = (),
        text: str = "",
        attrs: Optional[Dict[str, str]] = None,
        style: Optional[Dict[str, str]] = None,
        children: Iterable["Element"] = (),
    ):
        self.tag = tag
        self.classes: List[str] = list(classes)
        self.text = text
        self.attrs: Dict[str, str] = dict(attrs or {})
        self.style: Dict[str, str] = dict(style or {})
        self.children: List[Element] = []
        self.parent: Optional[Element] = None
        for child in children:
            self.append(child)

    def __repr__(self) -> str:
        return f"<Element {self.tag}.{'.'.join(self.classes)}>"

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def add_class(self, name: str) -> None:
        if name not in self.classes:
            self.classes.append(name)

    def append(self, child: "Element") -> "Element":
        if child.parent is not None:
            child.remove()
        child.parent = self
        self.children.append(child)
        return child

    def remove(self) -> None:
        """Detach from the parent. Removing a detached element does nothing."""
        if self.parent is None:
            return
        self.parent.children = [c for c in self.parent.children if c is not self]
        self.parent = None

    def replace_children(self, children: Iterable["Element"]) -> None:
        """Swap the whole child list in one assignment.

        The new list is fully built before the old one is detached, so a
        failure while iterating ``children`` leaves the element untouched.
        """
        new_children = list(children)
        for child in new_children:
            if child.parent is not None:
                child.remove()
        for old in self.children:
            old.parent = None
        for child in new_children:
            child.parent = self
        self.children = new_children

    def iter(self) -> Iterator["Element"]:
        for child in self.children:
            yield child
            yield from child.iter()

    def find_all(self, class_name: str) -> List["Element"]:
        return [el for el in self.iter() if el.has_class(class_name)]

    def find(self, class_name: str) -> Optional["Element"]:
        for el in self.iter():
            if el.has_class(class_name):
                return el
        return None

    def to_html(self) -> str:
        parts = [self.tag]
        if self.classes:
            parts.append(f'class="{escape(" ".join(self.classes))}"')
        for key, value in self.attrs.items():
            parts.append(f'{key}="{escape(value)}"')
        if self.style:
            css = "; ".join(f"{k}: {v}" for k, v in self.style.items())
            parts.append(f'style="{escape(css)}"')
        opening = f"<{' '.join(parts)}>"
        if self.tag in VOID_TAGS:
            return opening
        return f"{opening}{self.inner_html()}</{self.tag}>"

    def inner_html(self) -> str:
        return escape(self.text) + "".join(c.to_html() for c in self.children)
