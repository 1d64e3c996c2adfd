"""Bind the outputs of a deployed stack."""

from typing import Any

import boto3
import structlog

from infrastructure.composer import (
  Composition,
  OutputBinder,
  OutputBinding,
  UnboundOutputError,
)

logger = structlog.get_logger()


def read_stack_exports(stack_name: str, cloudformation: Any) -> dict[str, str]:
  """Map export name -> value for every exported output of a stack."""
  response = cloudformation.describe_stacks(StackName=stack_name)
  stacks = response.get("Stacks", [])
  if not stacks:
    return {}
  return {
    output["ExportName"]: output["OutputValue"]
    for output in stacks[0].get("Outputs", [])
    if "ExportName" in output
  }


def bind_stack_outputs(
  binder: OutputBinder,
  stack_name: str,
  composition: Composition,
  cloudformation: Any = None,
  region: str = "us-east-1",
) -> list[OutputBinding]:
  """Bind every output the composition declares from the deployed stack.

  Args:
    binder: Binder for the deployment
    stack_name: CloudFormation stack name (e.g., 'StaticSite-example-com')
    composition: Composition the stack was synthesised from
    cloudformation: CloudFormation client; created with boto3 when omitted
    region: AWS region of the stack

  Returns:
    The new bindings, in declaration order

  Raises:
    UnboundOutputError: If the stack does not export a declared output;
      nothing is bound in that case
  """
  if cloudformation is None:
    cloudformation = boto3.client("cloudformation", region_name=region)

  exports = read_stack_exports(stack_name, cloudformation)
  # Check everything first so a partial stack binds nothing
  for output in composition.outputs:
    if output.output_id not in exports:
      logger.warning("stack_output_missing", stack=stack_name, output_id=output.output_id)
      raise UnboundOutputError(output.output_id)

  bindings: list[OutputBinding] = []
  for output in composition.outputs:
    value = exports[output.output_id]
    bindings.append(binder.bind(output.output_id, lambda value=value: value))

  logger.info("stack_outputs_bound", stack=stack_name, outputs=len(bindings))
  return bindings
