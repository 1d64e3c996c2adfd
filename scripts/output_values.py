#!/usr/bin/env python3
"""Print the exported outputs (bucket name, distribution id) of a deployed site."""

import argparse
import json
import re
import sys
from pathlib import Path

from botocore.exceptions import BotoCoreError, ClientError

sys.path.insert(0, str(Path(__file__).parent.parent))

from infrastructure.composer import ComposerError, OutputBinder, compose_static_site
from infrastructure.config import Config, SiteConfig
from infrastructure.exports import bind_stack_outputs


def env_name(output_id: str) -> str:
  """Turn an output id into an environment variable name."""
  return re.sub(r"[^A-Za-z0-9]+", "_", output_id).strip("_").upper()


def find_site(config: Config, domain: str | None) -> SiteConfig:
  if not config.sites:
    raise ValueError("No sites configured")
  if domain is None:
    return config.sites[0]
  for site in config.sites:
    if site.domain_name == domain:
      return site
  raise ValueError(f"No site configured for {domain}")


def main() -> None:
  """Main entry point."""
  parser = argparse.ArgumentParser(
    description="Print the exported outputs of a deployed static site"
  )
  parser.add_argument(
    "domain",
    nargs="?",
    help="Site domain (default: first configured site)",
  )
  parser.add_argument(
    "--config",
    default="sites.yaml",
    help="Path to the sites configuration (default: sites.yaml)",
  )
  parser.add_argument(
    "--format",
    choices=["env", "json", "export"],
    default="env",
    help="Output format (default: env)",
  )

  args = parser.parse_args()

  try:
    site = find_site(Config.from_yaml(args.config), args.domain)
    binder = OutputBinder(site.resource_prefix)
    bind_stack_outputs(
      binder,
      site.stack_name,
      compose_static_site(site),
      region=site.region,
    )
  except (ComposerError, ValueError, OSError, BotoCoreError, ClientError) as e:
    print(f"Error reading outputs: {e}", file=sys.stderr)
    sys.exit(1)

  values = dict(binder.bindings())
  if args.format == "json":
    print(json.dumps(values, indent=2))
  elif args.format == "export":
    for key, value in values.items():
      print(f"export {env_name(key)}={value}")
  else:  # env format
    for key, value in values.items():
      print(f"{env_name(key)}={value}")


if __name__ == "__main__":
  main()
