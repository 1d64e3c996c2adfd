"""Main composite construct for complete static website infrastructure."""

from typing import Any

from aws_cdk import CfnOutput
from constructs import Construct

from infrastructure.composer import Composition, ProvisioningLedger, ResourceKind

from .renderer import PlanRenderer


class StaticSiteConstruct(Construct):
  """Complete static website infrastructure, rendered from a composition.

  Creates every resource in the composition's plan and exports each declared
  output under its output id so other stacks can import it.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    composition: Composition,
  ) -> None:
    super().__init__(scope, id)

    self.composition = composition
    self.plan = composition.plan()

    self.ledger = ProvisioningLedger.from_plan(self.plan)
    self.resources: dict[str, Any] = PlanRenderer(self).render(self.plan, self.ledger)

    # Outputs
    for output in composition.outputs:
      CfnOutput(
        self,
        output.output_id,
        value=getattr(self.resources[output.source], output.attribute),
        description=output.description or None,
        export_name=output.output_id,
      )

  def _first_of(self, kind: ResourceKind) -> Any:
    for step in self.plan:
      if step.declaration.kind is kind:
        return self.resources[step.name]
    raise LookupError(f"composition has no {kind.value} declaration")

  @property
  def bucket(self) -> Any:
    return self._first_of(ResourceKind.STORAGE_BUCKET)

  @property
  def distribution(self) -> Any:
    return self._first_of(ResourceKind.CDN_DISTRIBUTION)
