"""Named, write-once output values of a deployment."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

import structlog

from .errors import DuplicateBindingError, UnboundOutputError

logger = structlog.get_logger()


@dataclass(frozen=True)
class OutputSpec:
  """Export of one attribute of a declaration under a stable id."""

  output_id: str
  source: str
  attribute: str
  description: str = ""


@dataclass(frozen=True)
class OutputBinding:
  """Realised value of an output."""

  output_id: str
  value: Any
  deployment: str


class OutputBinder:
  """Output values for a single deployment.

  Outputs are read by other deployments by id, so each id can be bound once
  and is never overwritten.
  """

  def __init__(self, deployment: str) -> None:
    self.deployment = deployment
    self._bindings: dict[str, OutputBinding] = {}

  def bind(self, output_id: str, resolver: Callable[[], Any]) -> OutputBinding:
    """Bind the value produced by `resolver` to `output_id`.

    The resolver is called once. If it raises, nothing is bound.

    Raises:
      DuplicateBindingError: If `output_id` is already bound
    """
    if output_id in self._bindings:
      raise DuplicateBindingError(output_id)
    binding = OutputBinding(output_id, resolver(), self.deployment)
    self._bindings[output_id] = binding
    logger.debug("output_bound", deployment=self.deployment, output_id=output_id)
    return binding

  def resolve(self, output_id: str) -> Any:
    """Return the bound value of `output_id`.

    Raises:
      UnboundOutputError: If nothing was bound to `output_id`
    """
    try:
      return self._bindings[output_id].value
    except KeyError:
      raise UnboundOutputError(output_id) from None

  def is_bound(self, output_id: str) -> bool:
    return output_id in self._bindings

  def bindings(self) -> Mapping[str, Any]:
    """Read-only view of output id -> value."""
    return MappingProxyType({k: b.value for k, b in self._bindings.items()})
