from typing import Dict, List, NamedTuple, Optional

from .classify import Category, classify
from .synth import binding_names, render_program

LAYOUTS = {
    # store name for each persisted category
    "split": {
        Category.TYPE_DECL: "types",
        Category.PACKAGE_VAR: "package_vars",
        Category.FUNCTION_DECL: "functions",
        Category.LOCAL_VAR: "local_vars",
    },
    "merged": {
        Category.TYPE_DECL: "types",
        Category.PACKAGE_VAR: "vars",
        Category.FUNCTION_DECL: "functions",
        Category.LOCAL_VAR: "vars",
    },
}

STORE_ORDER = {
    "split": ["types", "package_vars", "functions", "local_vars"],
    "merged": ["types", "vars", "functions"],
}


class Submission(NamedTuple):
    category: Category
    source: str


class Session:
    """Declarations accepted so far in one REPL session.

    Stores only ever grow: fragments are appended in the order they were
    submitted and kept byte-for-byte as typed. `reset()` is the only way to
    start over; `rollback()` drops the fragment persisted by the latest
    submission.
    """

    def __init__(self, layout="split", static_imports=False):
        if layout not in LAYOUTS:
            raise ValueError(f"unknown store layout: {layout!r}")
        self.layout = layout
        self.static_imports = static_imports
        self.stores: Dict[str, List[str]] = {}
        self.last_source: Optional[str] = None
        self._last_store: Optional[str] = None
        self.reset()

    def reset(self):
        self.stores = {name: [] for name in STORE_ORDER[self.layout]}
        self.last_source = None
        self._last_store = None

    def store_for(self, category: Category) -> Optional[str]:
        return LAYOUTS[self.layout].get(category)

    def submit(self, fragment: str) -> Submission:
        category = classify(fragment)
        if category in (Category.PACKAGE_VAR, Category.LOCAL_VAR):
            # rejects what the name heuristic can't handle before it is kept
            binding_names(fragment)

        store = self.store_for(category)
        if store is not None:
            self.stores[store].append(fragment)
        self._last_store = store

        self.last_source = render_program(
            self.stores, category, fragment,
            layout=self.layout, static_imports=self.static_imports)
        return Submission(category, self.last_source)

    def rollback(self) -> Optional[str]:
        store = self._last_store
        self._last_store = None
        if store is None:
            return None
        return self.stores[store].pop()
