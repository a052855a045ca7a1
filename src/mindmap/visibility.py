"""Per-category show/hide switches for the mind map."""

from .catalog import CATEGORIES


class VisibilityFilter:
    """Which entity categories are materialized into the graph.

    Every category starts visible. Any change means the graph is rebuilt
    from scratch; edges disappear with their hidden endpoints.
    """

    def __init__(self, **visible):
        self._state = dict.fromkeys(CATEGORIES, True)
        for category, value in visible.items():
            self.set(category, value)

    def _check(self, category):
        if category not in self._state:
            raise KeyError(f"Unknown category {category!r}; expected one of {', '.join(CATEGORIES)}")

    def __getitem__(self, category):
        self._check(category)
        return self._state[category]

    def __eq__(self, other):
        if not isinstance(other, VisibilityFilter):
            return NotImplemented
        return self._state == other._state

    def __repr__(self):
        return f"VisibilityFilter({self._state!r})"

    def set(self, category, visible):
        self._check(category)
        self._state[category] = bool(visible)

    def toggle(self, category):
        """Flip a category and return its new value."""
        self.set(category, not self[category])
        return self._state[category]

    def as_dict(self):
        return dict(self._state)

    def hidden(self):
        return [category for category, visible in self._state.items() if not visible]
