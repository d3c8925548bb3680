"""Override paths and the locator that applies them.

An override path is a chain of attribute (and sequence index) steps,
relative to the root instance, naming the property to overwrite:

    OverridePath.parse("address.lines[0].postcode")
    prop.address.lines[0].postcode          # same path, built by recording

Paths are resolved lazily when the override is applied. Every intermediate
value on the way must already be set, which a full population pass
guarantees.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable

from ..core.errors import PreconditionViolationError
from ..core.introspection import get_settable_properties

logger = logging.getLogger(__name__)

_TOKEN = re.compile(r"\.?([A-Za-z_][A-Za-z0-9_]*)|\[(-?\d+)\]")


@dataclass(frozen=True)
class PathStep:
    """An attribute access (``name``) or a sequence index (``index``)."""

    name: str | None = None
    index: int | None = None

    def __str__(self) -> str:
        return f"[{self.index}]" if self.name is None else self.name

    def read(self, owner: Any) -> Any:
        if self.name is None:
            try:
                return owner[self.index]
            except (IndexError, KeyError, TypeError) as exc:
                raise PreconditionViolationError(
                    f"Cannot read index {self.index} of {type(owner).__name__}: {exc}"
                ) from exc
        try:
            return getattr(owner, self.name)
        except AttributeError as exc:
            raise PreconditionViolationError(
                f"{type(owner).__name__} has no property {self.name!r}"
            ) from exc

    def write(self, owner: Any, value: Any) -> None:
        if self.name is None:
            try:
                owner[self.index] = value
            except (IndexError, KeyError, TypeError) as exc:
                raise PreconditionViolationError(
                    f"Cannot set index {self.index} of {type(owner).__name__}: {exc}"
                ) from exc
            return
        if not hasattr(owner, self.name) and self.name not in {
            d.name for d in get_settable_properties(type(owner))
        }:
            raise PreconditionViolationError(
                f"{type(owner).__name__} has no property {self.name!r}"
            )
        setattr(owner, self.name, value)


class OverridePath:
    """Immutable chain of ``PathStep`` objects."""

    def __init__(self, steps: Iterable[PathStep]):
        self.steps: tuple[PathStep, ...] = tuple(steps)
        if not self.steps:
            raise ValueError("An override path needs at least one step")

    @classmethod
    def parse(cls, text: str) -> OverridePath:
        """Parse ``"a.b[0].c"`` into steps.

        Raises:
            ValueError: If the text is not a valid path.
        """
        steps = []
        pos = 0
        text = text.strip()
        while pos < len(text):
            match = _TOKEN.match(text, pos)
            if match is None or (pos == 0 and text.startswith(".")):
                raise ValueError(f"Invalid override path {text!r} at position {pos}")
            name, index = match.groups()
            steps.append(PathStep(name=name) if name else PathStep(index=int(index)))
            pos = match.end()
        return cls(steps)

    @classmethod
    def of(cls, path: str | OverridePath | PathRecorder) -> OverridePath:
        if isinstance(path, OverridePath):
            return path
        if isinstance(path, PathRecorder):
            return cls(object.__getattribute__(path, "_steps"))
        if isinstance(path, str):
            return cls.parse(path)
        raise TypeError(f"Cannot build an override path from {path!r}")

    def then(self, name: str) -> OverridePath:
        return OverridePath((*self.steps, PathStep(name=name)))

    def at(self, index: int) -> OverridePath:
        return OverridePath((*self.steps, PathStep(index=index)))

    @property
    def leaf(self) -> PathStep:
        return self.steps[-1]

    def __str__(self) -> str:
        out = ""
        for step in self.steps:
            if step.name is None:
                out += str(step)
            else:
                out += f".{step.name}" if out else step.name
        return out

    def __repr__(self) -> str:
        return f"OverridePath({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, OverridePath) and self.steps == other.steps

    def __hash__(self) -> int:
        return hash(self.steps)

    # ── Resolution ──

    def locate_owner(self, root: Any) -> Any:
        """Walk every step but the leaf and return the instance owning the leaf."""
        owner = root
        for i, step in enumerate(self.steps[:-1]):
            owner = step.read(owner)
            if owner is None:
                walked = OverridePath(self.steps[: i + 1])
                raise PreconditionViolationError(
                    f"Cannot override {self}: {walked} is not set"
                )
        return owner

    def read(self, root: Any) -> Any:
        return self.leaf.read(self.locate_owner(root))

    def apply(self, root: Any, value: Any) -> None:
        """Set the leaf property to ``value``. Touches nothing else."""
        owner = self.locate_owner(root)
        self.leaf.write(owner, value)
        logger.debug("Override applied to %s", self)


class PathRecorder:
    """Records attribute and index access into an ``OverridePath``.

    Use the module-level ``prop`` instance: ``prop.address.postcode``.
    """

    __slots__ = ("_steps",)

    def __init__(self, steps: tuple[PathStep, ...] = ()):
        object.__setattr__(self, "_steps", steps)

    def __getattr__(self, name: str) -> PathRecorder:
        if name.startswith("__"):
            raise AttributeError(name)
        steps = object.__getattribute__(self, "_steps")
        return PathRecorder((*steps, PathStep(name=name)))

    def __getitem__(self, index: int) -> PathRecorder:
        steps = object.__getattribute__(self, "_steps")
        return PathRecorder((*steps, PathStep(index=index)))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("PathRecorder is read-only")

    def __repr__(self) -> str:
        steps = object.__getattribute__(self, "_steps")
        return f"prop.{OverridePath(steps)}" if steps else "prop"


prop = PathRecorder()
