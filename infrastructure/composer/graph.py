"""Dependency graph over resource declarations."""

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

import structlog

from .declarations import ResourceDeclaration
from .errors import DanglingReferenceError, DuplicateDeclarationError

logger = structlog.get_logger()


class DependencyGraph:
  """Declarations keyed by name, with edges from each one to what it depends on.

  Built by `build`; not meant to be mutated afterwards.
  """

  def __init__(
    self,
    declarations: Mapping[str, ResourceDeclaration],
    dependencies: Mapping[str, frozenset[str]],
  ) -> None:
    self._declarations = MappingProxyType(dict(declarations))
    self._dependencies = MappingProxyType(dict(dependencies))
    dependents: dict[str, set[str]] = {name: set() for name in self._declarations}
    for name, targets in self._dependencies.items():
      for target in targets:
        dependents[target].add(name)
    self._dependents = {name: frozenset(names) for name, names in dependents.items()}

  def names(self) -> list[str]:
    return sorted(self._declarations)

  def declaration(self, name: str) -> ResourceDeclaration:
    return self._declarations[name]

  def dependencies_of(self, name: str) -> frozenset[str]:
    """Names `name` depends on."""
    return self._dependencies[name]

  def dependents_of(self, name: str) -> frozenset[str]:
    """Names that depend on `name`."""
    return self._dependents[name]

  def edges(self) -> list[tuple[str, str]]:
    """All (dependent, dependency) pairs, sorted."""
    return sorted(
      (name, target)
      for name, targets in self._dependencies.items()
      for target in targets
    )

  def __contains__(self, name: object) -> bool:
    return name in self._declarations

  def __iter__(self) -> Iterator[ResourceDeclaration]:
    return (self._declarations[name] for name in self.names())

  def __len__(self) -> int:
    return len(self._declarations)


def build(declarations: Iterable[ResourceDeclaration]) -> DependencyGraph:
  """Link declarations into a dependency graph.

  Edges come from each declaration's explicit `depends_on` names and from the
  `Ref` values nested in its config.

  Raises:
    DuplicateDeclarationError: If two declarations share a name
    DanglingReferenceError: If a dependency or reference names nothing
  """
  by_name: dict[str, ResourceDeclaration] = {}
  for declaration in declarations:
    if declaration.name in by_name:
      raise DuplicateDeclarationError(declaration.name)
    by_name[declaration.name] = declaration

  dependencies: dict[str, frozenset[str]] = {}
  for name in sorted(by_name):
    declaration = by_name[name]
    targets = declaration.depends_on | declaration.references()
    for target in sorted(targets):
      if target not in by_name:
        raise DanglingReferenceError(name, target)
    dependencies[name] = targets

  graph = DependencyGraph(by_name, dependencies)
  logger.debug("graph_built", declarations=len(graph), edges=len(graph.edges()))
  return graph
