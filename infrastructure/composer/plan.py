"""Deterministic apply plans compiled from a dependency graph."""

import heapq
import json
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import structlog

from .declarations import ResourceDeclaration
from .errors import CycleDetectedError
from .graph import DependencyGraph

logger = structlog.get_logger()


@dataclass(frozen=True)
class PlanStep:
  """One declaration at its position in the apply order."""

  index: int
  declaration: ResourceDeclaration
  depends_on: tuple[str, ...]

  @property
  def name(self) -> str:
    return self.declaration.name

  def to_dict(self) -> dict[str, Any]:
    return {
      "index": self.index,
      "declaration": self.declaration.to_dict(),
      "depends_on": list(self.depends_on),
    }


@dataclass(frozen=True)
class Plan:
  """Ordered declarations; every dependency comes before its dependents."""

  steps: tuple[PlanStep, ...]

  def names(self) -> list[str]:
    return [step.name for step in self.steps]

  def index_of(self, name: str) -> int:
    for step in self.steps:
      if step.name == name:
        return step.index
    raise KeyError(name)

  def to_dict(self) -> dict[str, Any]:
    return {"steps": [step.to_dict() for step in self.steps]}

  def to_json(self) -> str:
    """Serialise with sorted keys so equal plans give identical text."""
    return json.dumps(self.to_dict(), sort_keys=True, indent=2)

  def __iter__(self) -> Iterator[PlanStep]:
    return iter(self.steps)

  def __len__(self) -> int:
    return len(self.steps)


def _find_cycle(graph: DependencyGraph, unplaced: set[str]) -> list[str]:
  # Every unplaced node still waits on at least one unplaced dependency, so
  # following the smallest such dependency must eventually revisit a node.
  current = min(unplaced)
  path: list[str] = []
  position: dict[str, int] = {}
  while current not in position:
    position[current] = len(path)
    path.append(current)
    current = min(d for d in graph.dependencies_of(current) if d in unplaced)
  cycle = path[position[current]:]
  start = cycle.index(min(cycle))
  return cycle[start:] + cycle[:start]


def compile_plan(graph: DependencyGraph) -> Plan:
  """Topologically order a graph, breaking ties by ascending name.

  Args:
    graph: Graph produced by `build`

  Returns:
    A plan listing every declaration exactly once

  Raises:
    CycleDetectedError: If the graph is not acyclic; no plan is produced
  """
  waiting = {name: len(graph.dependencies_of(name)) for name in graph.names()}
  ready = [name for name, count in waiting.items() if count == 0]
  heapq.heapify(ready)

  order: list[str] = []
  while ready:
    name = heapq.heappop(ready)
    order.append(name)
    for dependent in graph.dependents_of(name):
      waiting[dependent] -= 1
      if waiting[dependent] == 0:
        heapq.heappush(ready, dependent)

  if len(order) != len(graph):
    cycle = _find_cycle(graph, set(waiting) - set(order))
    logger.debug("plan_cycle_detected", cycle=cycle)
    raise CycleDetectedError(cycle)

  plan = Plan(
    tuple(
      PlanStep(
        index=index,
        declaration=graph.declaration(name),
        depends_on=tuple(sorted(graph.dependencies_of(name))),
      )
      for index, name in enumerate(order)
    )
  )
  logger.debug("plan_compiled", steps=len(plan))
  return plan
