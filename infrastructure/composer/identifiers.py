"""Deterministic resource identifiers."""

import re
from collections.abc import Mapping
from types import MappingProxyType

import structlog

from .errors import InvalidInputError

logger = structlog.get_logger()

SEPARATOR = "--"
ESCAPE = ":"

# Letters and digits with single inner hyphens pass through unchanged.
_PLAIN = re.compile(r"^[A-Za-z0-9]+(-[A-Za-z0-9]+)*$")


def _check(label: str, value: str) -> None:
  if not isinstance(value, str) or not value:
    raise InvalidInputError(f"{label} must be a non-empty string")


def _escape(value: str) -> str:
  """Encode a component so it never contains SEPARATOR or an edge hyphen.

  Plain components are returned as they are. In any other component every
  character besides ASCII letters and digits becomes ':<hex code point>:', so
  escaped components contain no hyphens and always contain ESCAPE, which plain
  ones never do.
  """
  if _PLAIN.match(value):
    return value
  return "".join(
    ch if ch.isascii() and ch.isalnum() else f"{ESCAPE}{ord(ch):x}{ESCAPE}"
    for ch in value
  )


def identify(prefix: str, role: str) -> str:
  """Derive the identifier for a resource role within a deployment prefix.

  The result only depends on the arguments, so re-running against existing
  infrastructure yields the same logical ids and outputs. Distinct pairs never
  share an identifier: neither escaped component contains SEPARATOR or starts
  or ends with a hyphen, so the first SEPARATOR splits them unambiguously.

  Args:
    prefix: Deployment namespace (e.g., 'cdk-web-static')
    role: What the resource does (e.g., 'bucket-name')

  Returns:
    The identifier '<prefix>--<role>', with unusual characters escaped

  Raises:
    InvalidInputError: If either component is empty
  """
  _check("prefix", prefix)
  _check("role", role)
  return f"{_escape(prefix)}{SEPARATOR}{_escape(role)}"


class IdentifierRegistry:
  """Identifiers issued for one deployment prefix."""

  def __init__(self, prefix: str) -> None:
    _check("prefix", prefix)
    self.prefix = prefix
    self._issued: dict[str, str] = {}

  def identify(self, role: str) -> str:
    """Return the identifier for a role, recording it on first use."""
    identifier = self._issued.get(role)
    if identifier is None:
      identifier = identify(self.prefix, role)
      self._issued[role] = identifier
      logger.debug("identifier_issued", prefix=self.prefix, role=role, identifier=identifier)
    return identifier

  @property
  def issued(self) -> Mapping[str, str]:
    """Read-only view of role -> identifier."""
    return MappingProxyType(self._issued)

  def __contains__(self, identifier: object) -> bool:
    return identifier in self._issued.values()

  def __len__(self) -> int:
    return len(self._issued)
