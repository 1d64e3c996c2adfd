"""Provisioning states reported back by the external apply step."""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

import structlog

from .errors import InvalidInputError, InvalidStateTransitionError
from .graph import DependencyGraph
from .plan import Plan

logger = structlog.get_logger()


class DeclarationState(str, Enum):
  """Lifecycle of a declaration.

  The composer moves declarations to PLANNED; everything after that is
  reported by whatever applies the plan.
  """

  DECLARED = "declared"
  PLANNED = "planned"
  PROVISIONING = "provisioning"
  PROVISIONED = "provisioned"
  FAILED = "failed"


_TRANSITIONS: dict[DeclarationState, frozenset[DeclarationState]] = {
  DeclarationState.DECLARED: frozenset({DeclarationState.PLANNED}),
  DeclarationState.PLANNED: frozenset({DeclarationState.PROVISIONING}),
  DeclarationState.PROVISIONING: frozenset(
    {DeclarationState.PROVISIONED, DeclarationState.FAILED}
  ),
  DeclarationState.PROVISIONED: frozenset(),
  DeclarationState.FAILED: frozenset(),
}


class ProvisioningLedger:
  """Records the state of each declaration in one plan."""

  def __init__(self, states: Mapping[str, DeclarationState]) -> None:
    self._states = dict(states)
    self._failures: dict[str, str] = {}

  @classmethod
  def from_graph(cls, graph: DependencyGraph) -> "ProvisioningLedger":
    """Start a ledger with every declaration of the graph DECLARED."""
    return cls({name: DeclarationState.DECLARED for name in graph.names()})

  @classmethod
  def from_plan(cls, plan: Plan) -> "ProvisioningLedger":
    """Start a ledger with every step of the plan PLANNED."""
    return cls({name: DeclarationState.PLANNED for name in plan.names()})

  def state(self, name: str) -> DeclarationState:
    try:
      return self._states[name]
    except KeyError:
      raise InvalidInputError(f"{name!r} is not part of this plan") from None

  def mark_planned(self, plan: Plan) -> None:
    """Move the declarations of a compiled plan to PLANNED."""
    for name in plan.names():
      self._move(name, DeclarationState.PLANNED)

  @property
  def states(self) -> Mapping[str, DeclarationState]:
    return MappingProxyType(self._states)

  @property
  def failures(self) -> Mapping[str, str]:
    """Failure reason per failed declaration."""
    return MappingProxyType(self._failures)

  def _move(self, name: str, target: DeclarationState) -> None:
    current = self.state(name)
    if target not in _TRANSITIONS[current]:
      raise InvalidStateTransitionError(name, current.value, target.value)
    self._states[name] = target

  def start(self, name: str) -> None:
    self._move(name, DeclarationState.PROVISIONING)
    logger.debug("provisioning_started", declaration=name)

  def succeed(self, name: str) -> None:
    self._move(name, DeclarationState.PROVISIONED)
    logger.debug("provisioning_succeeded", declaration=name)

  def fail(self, name: str, reason: str) -> None:
    self._move(name, DeclarationState.FAILED)
    self._failures[name] = reason
    logger.warning("provisioning_failed", declaration=name, reason=reason)

  def is_complete(self) -> bool:
    """True once every declaration is PROVISIONED."""
    return all(s is DeclarationState.PROVISIONED for s in self._states.values())
