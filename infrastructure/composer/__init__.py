"""Declarative resource-graph composer.

Declarations are named, immutable records. `build` links them into a
dependency graph, `compile_plan` orders that graph deterministically and
`OutputBinder` collects the values a realised deployment exports.
"""

from .declarations import Ref, ResourceDeclaration, ResourceKind
from .errors import (
  ComposerError,
  CycleDetectedError,
  DanglingReferenceError,
  DuplicateBindingError,
  DuplicateDeclarationError,
  InvalidConfigurationError,
  InvalidInputError,
  InvalidStateTransitionError,
  UnboundOutputError,
)
from .graph import DependencyGraph, build
from .identifiers import IdentifierRegistry, identify
from .lifecycle import DeclarationState, ProvisioningLedger
from .outputs import OutputBinder, OutputBinding, OutputSpec
from .plan import Plan, PlanStep, compile_plan
from .site import Composition, compose_static_site

__all__ = [
  "ComposerError",
  "Composition",
  "CycleDetectedError",
  "DanglingReferenceError",
  "DeclarationState",
  "DependencyGraph",
  "DuplicateBindingError",
  "DuplicateDeclarationError",
  "IdentifierRegistry",
  "InvalidConfigurationError",
  "InvalidInputError",
  "InvalidStateTransitionError",
  "OutputBinder",
  "OutputBinding",
  "OutputSpec",
  "Plan",
  "PlanStep",
  "ProvisioningLedger",
  "Ref",
  "ResourceDeclaration",
  "ResourceKind",
  "UnboundOutputError",
  "build",
  "compile_plan",
  "compose_static_site",
  "identify",
]
