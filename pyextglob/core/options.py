#!/usr/bin/env python3
"""Match options for pyextglob.

Options form a closed set. A :class:`MatchOptions` value is frozen and
hashable, so it doubles as the options fingerprint in the pattern cache key.

Example:
    >>> opts = MatchOptions.from_mapping({"bash": True, "unixify": True})
    >>> opts.bash, opts.normalize_separators
    (True, True)
    >>> resolve_options(None, nocase=True).case_sensitive
    False
"""

from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from pyextglob.core.constants import ConfigKey
from pyextglob.core.validators import OptionsError, validate_max_steps, validate_options


class Dialect(Enum):
    """Matching dialect."""

    DEFAULT = "default"  # Permissive: wildcards stay inside one path segment
    BASH = "bash"  # bash extglob: wildcards cross "/", lookahead negation


@dataclass(frozen=True)
class MatchOptions:
    """Resolved, immutable match options."""

    dialect: Dialect = Dialect.DEFAULT
    case_sensitive: bool = True
    normalize_separators: bool = False
    max_steps: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.dialect, Dialect):
            raise OptionsError(f"dialect must be a Dialect: {self.dialect!r}")
        validate_max_steps(self.max_steps)

    @property
    def bash(self) -> bool:
        """True when the bash dialect is selected."""
        return self.dialect is Dialect.BASH

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "MatchOptions":
        """Build options from a mapping of option names.

        Args:
            options: Mapping using any accepted spelling (``bash``,
                ``dialect``, ``nocase``, ``unixify``, ...)

        Returns:
            Resolved options; unspecified keys keep their defaults

        Raises:
            OptionsError: If the mapping holds unknown or ill-typed options
        """
        return cls()._apply(validate_options(options))

    def merge(self, **overrides: Any) -> "MatchOptions":
        """Return a copy with the given options overridden.

        Raises:
            OptionsError: If an override is unknown or ill-typed
        """
        if not overrides:
            return self
        return self._apply(validate_options(overrides))

    def _apply(self, resolved: Dict[str, Any]) -> "MatchOptions":
        changes: Dict[str, Any] = {}
        if ConfigKey.BASH in resolved:
            changes["dialect"] = Dialect.BASH if resolved[ConfigKey.BASH] else Dialect.DEFAULT
        for key in (ConfigKey.CASE_SENSITIVE, ConfigKey.NORMALIZE_SEPARATORS, ConfigKey.MAX_STEPS):
            if key in resolved:
                changes[key] = resolved[key]
        return replace(self, **changes) if changes else self

    def to_dict(self) -> Dict[str, Any]:
        """Export as a plain mapping accepted by :meth:`from_mapping`."""
        data = asdict(self)
        data.pop("dialect")
        data[ConfigKey.BASH] = self.bash
        return data


OptionsLike = Union[MatchOptions, Mapping[str, Any], None]


def resolve_options(options: OptionsLike = None, **overrides: Any) -> MatchOptions:
    """Resolve caller-supplied options into a :class:`MatchOptions`.

    Args:
        options: ``MatchOptions``, a mapping of option names, or None
        **overrides: Keyword options applied on top

    Returns:
        Resolved options

    Raises:
        OptionsError: If any option is unknown or ill-typed
    """
    if options is None:
        base = MatchOptions()
    elif isinstance(options, MatchOptions):
        base = options
    elif isinstance(options, Mapping):
        base = MatchOptions.from_mapping(options)
    else:
        raise OptionsError(
            f"Options must be MatchOptions, a mapping or None, got {type(options).__name__}"
        )
    return base.merge(**overrides)
