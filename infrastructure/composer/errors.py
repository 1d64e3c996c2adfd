"""Errors raised while declaring, building, compiling and binding resources."""


class ComposerError(Exception):
  """Base class for all resource-graph composer errors."""


class InvalidInputError(ComposerError):
  """An argument was empty or malformed."""


class DuplicateDeclarationError(InvalidInputError):
  """Two declarations in one graph share a name."""

  def __init__(self, name: str) -> None:
    super().__init__(f"Duplicate declaration name: {name!r}")
    self.name = name


class InvalidConfigurationError(ComposerError):
  """A declaration or site option is missing or invalid."""

  def __init__(self, option: str, message: str) -> None:
    super().__init__(f"{option}: {message}")
    self.option = option


class DanglingReferenceError(ComposerError):
  """A declaration references a name that is not in the graph."""

  def __init__(self, source: str, target: str) -> None:
    super().__init__(f"{source!r} references unknown declaration {target!r}")
    self.source = source
    self.target = target


class CycleDetectedError(ComposerError):
  """The dependency graph is not acyclic."""

  def __init__(self, cycle: list[str]) -> None:
    path = " -> ".join([*cycle, cycle[0]])
    super().__init__(f"Dependency cycle detected: {path}")
    self.cycle = cycle


class UnboundOutputError(ComposerError):
  """An output was resolved before anything was bound to it."""

  def __init__(self, output_id: str) -> None:
    super().__init__(f"Output {output_id!r} has not been bound")
    self.output_id = output_id


class DuplicateBindingError(ComposerError):
  """An output id was bound a second time."""

  def __init__(self, output_id: str) -> None:
    super().__init__(f"Output {output_id!r} is already bound")
    self.output_id = output_id


class InvalidStateTransitionError(ComposerError):
  """A provisioning report does not follow the declaration lifecycle."""

  def __init__(self, name: str, current: str, requested: str) -> None:
    super().__init__(f"{name!r} cannot move from {current} to {requested}")
    self.name = name
    self.current = current
    self.requested = requested
