"""The shell's environment: an ordered list of variables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple


@dataclass
class EnvVar:
    """One variable; has_value is False for names exported without a value."""

    key: str
    value: str
    has_value: bool = True


def split_assignment(text: str) -> Tuple[str, str, bool]:
    """Split "KEY=value" into key, value and whether an "=" was present."""
    key, separator, value = text.partition("=")
    return key, value, bool(separator)


class Environment:
    """Ordered environment variables.

    Name matching follows the shell's rules: lookup, set and remove match a
    variable whose name begins the given name; find matches a variable whose
    name begins with the given key.
    """

    def __init__(self, variables: Optional[Iterable[EnvVar]] = None) -> None:
        self._variables: List[EnvVar] = list(variables or [])

    @classmethod
    def from_strings(cls, entries: Iterable[str]) -> "Environment":
        """Build an environment from "KEY=value" strings."""
        environment = cls()
        for entry in entries:
            key, value, _ = split_assignment(entry)
            environment.add(key, value, True)
        return environment

    def __iter__(self) -> Iterator[EnvVar]:
        return iter(self._variables)

    def __len__(self) -> int:
        return len(self._variables)

    def find(self, key: str) -> Optional[EnvVar]:
        """Return the first variable whose name starts with key."""
        return next((var for var in self._variables if var.key.startswith(key)), None)

    def lookup(self, name: str) -> str:
        """Return the value of the first variable whose name begins name, or ""."""
        for var in self._variables:
            if name.startswith(var.key):
                return var.value
        return ""

    def set(self, key: str, value: str, has_value: bool) -> None:
        """Give every variable whose name begins key the new value."""
        for var in self._variables:
            if key.startswith(var.key):
                var.value = value
                var.has_value = has_value

    def add(self, key: str, value: str, has_value: bool) -> EnvVar:
        """Append a new variable and return it."""
        var = EnvVar(key, value, has_value)
        self._variables.append(var)
        return var

    def remove(self, key: str) -> bool:
        """Remove the first variable whose name begins key; report success."""
        for position, var in enumerate(self._variables):
            if key.startswith(var.key):
                del self._variables[position]
                return True
        return False

    def visible(self) -> List[EnvVar]:
        """Variables that carry a value, in order."""
        return [var for var in self._variables if var.has_value]