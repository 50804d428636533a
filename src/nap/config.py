from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class EnvironmentValue:
    """A value read from an environment variable, remembering which variable
    it came from."""

    name: str
    value: str

    def __str__(self):
        return self.value


def lookup(environ: Mapping[str, str], *names: str) -> Optional[EnvironmentValue]:
    """Returns the first of the named variables that is set to a non-empty
    value in environ, or None.

    Args:
        environ: The environment to read from, usually a snapshot of
            os.environ.

        names: Variable names, in order of preference.
    """
    for name in names:
        value = environ.get(name)
        if value:
            return EnvironmentValue(name, value)
    return None
