"""Generate DocFX metadata and turn it into Docusaurus Markdown."""

import argparse
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path


def run_command(cmd_list: Sequence[str | Path], cwd: Path | str | None = None) -> None:
    """Run a command and exit if it fails."""
    cmd_str = " ".join(str(x) for x in cmd_list)
    print(f"Running: {cmd_str}")
    try:
        subprocess.run(cmd_list, check=True, cwd=cwd)
    except subprocess.CalledProcessError as e:
        print(f"Error executing command: {cmd_str}")
        sys.exit(e.returncode)


def main() -> None:
    """Run the full documentation generation pipeline."""
    parser = argparse.ArgumentParser(
        description="Generate DocFX metadata and Docusaurus API documentation."
    )
    parser.add_argument(
        "--skip-metadata",
        action="store_true",
        help="Reuse existing DocFX YAML instead of running 'dotnet docfx metadata'",
    )
    parser.add_argument(
        "--config",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging in the generator",
    )
    args = parser.parse_args()

    if not args.skip_metadata:
        print("--- Step 1: Generating DocFX metadata ---")
        # Looks for docfx.json in the current directory
        run_command(["dotnet", "docfx", "metadata"])

    print("\n--- Step 2: Converting YAML to Docusaurus Markdown ---")
    cmd = [sys.executable, "-m", "docfx_markdown.generate_markdown"]
    if args.config:
        cmd.extend(["--config", args.config])
    if args.verbose:
        cmd.append("--verbose")

    run_command(cmd)

    print("\nSUCCESS: Documentation generated")


if __name__ == "__main__":
    main()
