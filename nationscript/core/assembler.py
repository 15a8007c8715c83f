"""Event-driven assembly of API documents into products.

WHY: API responses can be large (data dumps run to gigabytes) and only
some of their content is wanted. Building a generic tree first and
mapping it afterwards doubles the memory and the work. Instead, the
events of a streaming markup reader are turned into the final values
directly, with no lookahead and no buffered document.

HOW: An Assembler owns one product under construction. Shape wiring
registers tag actions on it: when a registered tag opens, its actions
choose the field to fill next, a converter, and optionally a child
assembler for nested content. Every recognized tag ends up owned by a
delegate; while a delegate exists, all events go to it. When the
delegate's root tag closes, its product is committed to the parent's
current field. Unrecognized tags are skipped as a whole subtree.

    Collecting --registered open--> Delegating(child) --child done--> Collecting
    Collecting --unknown open-----> Ignoring(tag) --matching close--> Collecting
    Collecting --root close-------> Finalized

ListAssembler appends every committed value to a collection instead of
overwriting its product. FilteredListAssembler additionally drops every
value rejected by a predicate, so a bulk dump never holds more than the
wanted items.

RULES:
- Exactly one state at a time: Collecting, Delegating, Ignoring, Finalized
- deliver() before finalization raises ProductWithheldError
- Events after finalization raise AssemblerFinalizedError
- The ERROR tag raises APIError with its text, at any depth, in any state
- Ignore mode counts nested same-named tags and ends at the matching close
- Committed text is stripped; composites never commit blank text
- Configuration errors are raised when wiring, never while parsing
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from nationscript.config import ERROR_TAG
from nationscript.core.converters import Converter, identity
from nationscript.core.fields import FieldPath
from nationscript.errors import (
    APIError,
    AssemblerFinalizedError,
    ConfigurationError,
    MarkupError,
    ProductWithheldError,
)

Attributes = dict[str, str]
TagHandler = Callable[["Assembler", Attributes], Any]
AssemblerFactory = Callable[[Attributes], "Assembler"]
Predicate = Callable[[Any], bool]


# ---------------------------------------------------------------------------
# Assembler states
# ---------------------------------------------------------------------------


@dataclass
class Collecting:
    """Accepting text and tags for this assembler's own product."""


@dataclass
class Delegating:
    """A child assembler receives all events until it is finalized."""

    child: Assembler


@dataclass
class Ignoring:
    """Skipping the subtree of an unrecognized tag."""

    tag: str
    depth: int = 1


@dataclass
class Finalized:
    """Root tag closed; the product is complete."""


State = Collecting | Delegating | Ignoring | Finalized


# ---------------------------------------------------------------------------
# Tag actions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BuildField:
    """Fill field from the tag's text, passed through converter."""

    field: str
    converter: Converter | None = None

    def apply(self, assembler: Assembler, attrs: Attributes) -> None:
        assembler.build(self.field, self.converter)


@dataclass(frozen=True)
class DelegateTo:
    """Fill field with the product of a child built from the tag's attributes."""

    field: str
    factory: AssemblerFactory

    def apply(self, assembler: Assembler, attrs: Attributes) -> None:
        assembler.build(self.field).assign_delegate(self.factory(attrs))


@dataclass(frozen=True)
class Callback:
    """Run arbitrary wiring code against the assembler."""

    handler: TagHandler

    def apply(self, assembler: Assembler, attrs: Attributes) -> None:
        self.handler(assembler, attrs)


TagAction = BuildField | DelegateTo | Callback


def _require_callable(value: Any, what: str) -> None:
    if not callable(value):
        raise ConfigurationError(f"Invalid {what}: {value!r}")


def _require_name(value: Any, what: str) -> None:
    if not isinstance(value, str):
        raise ConfigurationError(f"Invalid {what}: {value!r}")


# ---------------------------------------------------------------------------
# Assembler
# ---------------------------------------------------------------------------


class Assembler:
    """Builds one product from the events of a streaming markup reader.

    WHY: Each response shape is a tree of small, repetitive mappings
    (this tag -> that field, converted so). The assembler is the generic
    machine running those mappings; shape modules only configure it.

    HOW: Configuration methods (build, set, on_tag, on_field, on_child,
    assign_delegate) return self for chaining. The reader calls the
    event methods (on_open, on_close, on_text, on_cdata,
    on_parser_error); each returns whether the event was handled here.

    RULES:
    - root_tag is the tag whose close finalizes this assembler; when
      unset, the first tag opened is adopted as root
    - A delegate installed for an opened tag gets that tag as root and
      never adopts a same-named inner tag as its root again
    - Registered tags without an explicit delegate get a blank one
    """

    def __init__(self, root_tag: str | None = None) -> None:
        if root_tag is not None:
            _require_name(root_tag, "root tag")
        self._root_tag = root_tag
        self._product: Any = {}
        self._target = FieldPath()
        self._convert: Converter = identity
        self._chunks: list[str] = []
        self._actions: dict[str, list[TagAction]] = {}
        self._state: State = Collecting()
        self._seen_tag = False
        self._committed = False

    def __repr__(self) -> str:
        return "{}(root_tag={!r}, state={})".format(
            type(self).__name__, self._root_tag, type(self._state).__name__
        )

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def root_tag(self) -> str | None:
        return self._root_tag

    @property
    def finalized(self) -> bool:
        return isinstance(self._state, Finalized)

    @property
    def state(self) -> State:
        return self._state

    @property
    def delegate(self) -> Assembler | None:
        if isinstance(self._state, Delegating):
            return self._state.child
        return None

    def get(self, field: str) -> Any:
        """Read a value already committed to the product (None if absent)."""
        return FieldPath.parse(field).lookup(self._product)

    def deliver(self) -> Any:
        """Return the finished product.

        Raises ProductWithheldError while the root tag has not closed.
        """
        if not self.finalized:
            raise ProductWithheldError(type(self).__name__)
        return self._product

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def build(self, field: str, converter: Converter | None = None) -> Assembler:
        """Target field next; resets collected text and installs converter."""
        _require_name(field, "target product field")
        if converter is not None:
            _require_callable(converter, "field converter")
        self._target = FieldPath.parse(field)
        self._convert = converter or identity
        self._chunks = []
        return self

    def set(self, field: str, value: Any, converter: Converter | None = None) -> Assembler:
        """Commit value to field directly."""
        self.build(field, converter)
        self._commit(value)
        return self

    def on_tag(self, name: str, handler: TagHandler) -> Assembler:
        """Run handler(self, attrs) whenever a name tag opens here."""
        _require_callable(handler, "tag handler")
        return self._register(name, Callback(handler))

    def on_field(self, name: str, field: str, converter: Converter | None = None) -> Assembler:
        """Fill field from the text of every name tag."""
        FieldPath.parse(field)
        if converter is not None:
            _require_callable(converter, "field converter")
        return self._register(name, BuildField(field, converter))

    def on_child(self, name: str, field: str, factory: AssemblerFactory) -> Assembler:
        """Fill field with the product of factory(attrs) for every name tag."""
        FieldPath.parse(field)
        _require_callable(factory, "assembler factory")
        return self._register(name, DelegateTo(field, factory))

    def assign_delegate(self, child: Assembler) -> Assembler:
        """Hand all further events to child until it is finalized."""
        if not isinstance(child, Assembler) or child is self:
            raise ConfigurationError(f"Invalid delegate assignment: {child!r}")
        self._state = Delegating(child)
        return self

    def _register(self, name: str, action: TagAction) -> Assembler:
        _require_name(name, "tag name")
        self._actions.setdefault(name, []).append(action)
        return self

    # ------------------------------------------------------------------
    # Event intake
    # ------------------------------------------------------------------

    def on_open(self, name: str, attrs: Mapping[str, str] | None = None) -> bool:
        self._ensure_open()
        state = self._state
        if isinstance(state, Delegating):
            return state.child.on_open(name, attrs)

        if name == ERROR_TAG:
            self._state = Delegating(_ErrorCollector(name))
            return True

        if isinstance(state, Ignoring):
            if name == state.tag:
                state.depth += 1
            return False

        first = not self._seen_tag
        self._seen_tag = True

        actions = self._actions.get(name)
        if actions:
            attributes = dict(attrs or {})
            for action in actions:
                action.apply(self, attributes)
            if not isinstance(self._state, Delegating):
                self._state = Delegating(Assembler())
            child = self._state.child
            if child._root_tag is None:
                child._root_tag = name
            # The child's root open was consumed here.
            if child._root_tag == name:
                child._seen_tag = True
            return True

        if first and self._root_tag in (None, name):
            self._root_tag = name
            return True

        self._state = Ignoring(name)
        return False

    def on_close(self, name: str) -> bool:
        self._ensure_open()
        state = self._state
        if isinstance(state, Delegating):
            handled = state.child.on_close(name)
            if state.child.finalized:
                self._state = Collecting()
                self._commit(state.child.deliver())
            return handled

        if isinstance(state, Ignoring):
            if name != state.tag:
                return False
            state.depth -= 1
            if state.depth == 0:
                self._state = Collecting()
            return True

        if name == self._root_tag:
            self._finalize()
            return True

        self._commit_text(final=False)
        return True

    def on_text(self, text: str) -> bool:
        self._ensure_open()
        state = self._state
        if isinstance(state, Delegating):
            return state.child.on_text(text)
        if isinstance(state, Ignoring):
            return False
        self._chunks.append(text)
        return True

    def on_cdata(self, text: str) -> bool:
        return self.on_text(text)

    def on_parser_error(self, err: BaseException) -> bool:
        raise MarkupError(f"Markup reader encountered error: {err}") from err

    # ------------------------------------------------------------------
    # Commit
    # ------------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self.finalized:
            raise AssemblerFinalizedError(type(self).__name__)

    def _is_leaf(self) -> bool:
        return not self._actions

    def _commit(self, value: Any) -> None:
        self._product = self._target.assign(self._product, self._convert(value))
        self._committed = True

    def _commit_text(self, final: bool) -> None:
        text = "".join(self._chunks).strip()
        self._chunks = []
        if text or (final and self._is_leaf() and not self._committed):
            self._commit(text)

    def _finalize(self) -> None:
        self._commit_text(final=True)
        self._state = Finalized()


class _ErrorCollector(Assembler):
    """Collects the text of an ERROR tag and raises it as an APIError."""

    def _finalize(self) -> None:
        raise APIError("".join(self._chunks).strip())


# ---------------------------------------------------------------------------
# List variants
# ---------------------------------------------------------------------------


class ListAssembler(Assembler):
    """Collects every committed value in encounter order.

    WHY: Repeating sibling tags (owners of a card, options of a poll,
    nations of a dump) map to one ordered list rather than one field.

    HOW: Overrides the commit step to append to a collection. deliver()
    hands the collection out and resets, so the same instance can
    assemble another batch without re-registering its actions.

    RULES:
    - The field target is ignored; every commit becomes one item
    - deliver() returns the collection, then starts a fresh cycle
    """

    def __init__(self, root_tag: str | None = None) -> None:
        super().__init__(root_tag)
        self._collection: list[Any] = []

    @classmethod
    def simple(cls, tag: str, converter: Converter | None = None, **options: Any) -> ListAssembler:
        """Collect the text of every tag occurrence as one item."""
        return cls(**options).on_field(tag, "", converter)

    @classmethod
    def complex(cls, tag: str, factory: AssemblerFactory, **options: Any) -> ListAssembler:
        """Collect the product of factory(attrs) for every tag occurrence."""
        return cls(**options).on_child(tag, "", factory)

    def deliver(self) -> list[Any]:
        if not self.finalized:
            raise ProductWithheldError(type(self).__name__)
        collection = self._collection
        self._collection = []
        self._chunks = []
        self._seen_tag = False
        self._committed = False
        self._state = Collecting()
        return collection

    def _is_leaf(self) -> bool:
        return False

    def _commit(self, value: Any) -> None:
        self._accept(self._convert(value))
        self._committed = True

    def _accept(self, item: Any) -> None:
        self._collection.append(item)


class FilteredListAssembler(ListAssembler):
    """Collects only the values accepted by a predicate.

    WHY: Data dumps hold every nation or region in the game, but callers
    usually want a handful. Filtering at commit time means rejected items
    are dropped as soon as they are complete.

    RULES:
    - predicate receives the converted candidate; truthy keeps it
    - Order of accepted items follows the document
    """

    def __init__(self, predicate: Predicate, root_tag: str | None = None) -> None:
        _require_callable(predicate, "filter predicate")
        super().__init__(root_tag)
        self._predicate = predicate

    def _accept(self, item: Any) -> None:
        if self._predicate(item):
            self._collection.append(item)
