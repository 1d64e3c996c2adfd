#!/usr/bin/env python3
"""Print the compiled apply plan for a configured site as JSON."""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from infrastructure.composer import ComposerError, compose_static_site
from infrastructure.config import Config


def main() -> None:
  """Main entry point."""
  parser = argparse.ArgumentParser(description="Show the apply plan for each site")
  parser.add_argument(
    "--config",
    default="sites.yaml",
    help="Path to the sites configuration (default: sites.yaml)",
  )
  parser.add_argument(
    "--names-only",
    action="store_true",
    help="Only list declaration names in apply order",
  )

  args = parser.parse_args()

  try:
    config = Config.from_yaml(args.config)
    plans = [(site, compose_static_site(site).plan()) for site in config.sites]
  except (ComposerError, OSError) as e:
    print(f"Error compiling plan: {e}", file=sys.stderr)
    sys.exit(1)

  for site, plan in plans:
    if args.names_only:
      print(f"# {site.domain_name}")
      for name in plan.names():
        print(name)
    else:
      print(plan.to_json())


if __name__ == "__main__":
  main()
