#!/usr/bin/env python3
"""
CLI for generating basemap styles.

Usage:
    # Write one preset's style
    basemap-styles build --preset monochrome -o dist/monochrome.json

    # Write every preset
    basemap-styles all --output-dir dist/styles --env production

    # List presets
    basemap-styles list

    # Add highway shields to the sprite sheets
    basemap-styles shields --preset monochrome --sprites-dir sprites

    # Browser map config
    basemap-styles map-config --preset monochrome -o dist/map-config.js

    # Check that tiles, glyphs and sprites are reachable
    basemap-styles check --preset monochrome --env production
"""

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from .sources import StyleUrls


def _urls(args: argparse.Namespace) -> StyleUrls:
    urls = StyleUrls.from_env(args.env)
    if args.data_url:
        urls = replace(urls, data_base_url=args.data_url.rstrip("/"))
    if args.places_url:
        urls = replace(urls, places_url=args.places_url)
    return urls


def _fail(args: argparse.Namespace, e: Exception) -> int:
    print(f"✗ Error: {e}", file=sys.stderr)
    if args.verbose:
        import traceback
        traceback.print_exc()
    return 1


def cmd_build(args: argparse.Namespace) -> int:
    """Write a single preset's style."""
    from .build import write_style
    from .presets import get_theme

    try:
        theme = get_theme(args.preset)
        output = Path(args.output) if args.output else Path(f"{args.preset}.json")
        style = write_style(theme, _urls(args), output, verbose=args.verbose)
    except (KeyError, ValueError, OSError) as e:
        return _fail(args, e)

    print(f"✓ Wrote {theme.name} style ({len(style['layers'])} layers) to: {output}")
    return 0


def cmd_all(args: argparse.Namespace) -> int:
    """Write every preset into a directory."""
    from .build import build_all

    try:
        build_all(Path(args.output_dir), _urls(args), verbose=args.verbose)
    except (ValueError, OSError) as e:
        return _fail(args, e)
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """List available presets."""
    from .presets import THEMES

    print("\nAvailable presets:")
    print("-" * 60)
    for name, theme in THEMES.items():
        print(f"  {name:12} - {theme.description}")
    print()
    return 0


def cmd_shields(args: argparse.Namespace) -> int:
    """Draw the preset's highway shields into the sprite sheets."""
    from .presets import get_theme
    from .shields import build_shields

    print("=" * 60)
    print("BUILDING HIGHWAY SHIELD SPRITES")
    print("=" * 60)

    try:
        theme = get_theme(args.preset)
        written = build_shields(theme, Path(args.sprites_dir), verbose=args.verbose)
    except (KeyError, ValueError, OSError) as e:
        return _fail(args, e)

    for path in written:
        print(f"  ✓ {path}")
    print(f"\n✓ Highway shields added to sprite sheets for {theme.name}")
    return 0


def cmd_map_config(args: argparse.Namespace) -> int:
    """Render the browser map config."""
    from .build import render_map_config, write_map_config
    from .presets import get_theme

    try:
        theme = get_theme(args.preset)
        if not args.output:
            sys.stdout.write(render_map_config(theme))
            return 0
        path = write_map_config(theme, Path(args.output))
    except (KeyError, OSError) as e:
        return _fail(args, e)

    print(f"✓ Wrote map config to: {path}")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Check every URL a preset's style references."""
    from .check import check_style_urls
    from .composition import create_basemap_style
    from .presets import get_theme

    try:
        style = create_basemap_style(get_theme(args.preset), _urls(args))
    except (KeyError, ValueError) as e:
        return _fail(args, e)

    results = check_style_urls(style, progress=not args.no_progress, timeout=args.timeout)
    failed = [r for r in results if not r.ok]

    print("\n" + "=" * 60)
    print("SOURCE CHECK")
    print("=" * 60)
    for result in results:
        if result.ok:
            print(f"  ✓ {result.status} {result.url}")
        else:
            print(f"  ✗ {result.status or result.error} {result.url}")

    print(f"\n{len(results) - len(failed)}/{len(results)} URLs reachable")
    return 1 if failed else 0


def _add_url_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--env", choices=["local", "production"],
                        help="URL set (default: $BASEMAP_ENV or local)")
    parser.add_argument("--data-url", help="Override the tile data base URL")
    parser.add_argument("--places-url", help="Places overlay tile URL (enables the overlay)")


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Generate MapLibre basemap styles from themes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    build_parser = subparsers.add_parser("build", help="Write one preset's style")
    build_parser.add_argument("--preset", "-p", default="monochrome", help="Preset name")
    build_parser.add_argument("--output", "-o", help="Output file (default: <preset>.json)")
    _add_url_args(build_parser)

    all_parser = subparsers.add_parser("all", help="Write every preset's style")
    all_parser.add_argument("--output-dir", "-o", default="dist/styles",
                            help="Output directory")
    _add_url_args(all_parser)

    subparsers.add_parser("list", help="List available presets")

    shields_parser = subparsers.add_parser("shields", help="Add highway shields to sprites")
    shields_parser.add_argument("--preset", "-p", default="monochrome", help="Preset name")
    shields_parser.add_argument("--sprites-dir", default="sprites",
                                help="Directory holding basemap.png / basemap.json")

    config_parser = subparsers.add_parser("map-config", help="Render browser map config")
    config_parser.add_argument("--preset", "-p", default="monochrome", help="Preset name")
    config_parser.add_argument("--output", "-o", help="Output file (default: stdout)")

    check_parser = subparsers.add_parser("check", help="Check style URLs are reachable")
    check_parser.add_argument("--preset", "-p", default="monochrome", help="Preset name")
    check_parser.add_argument("--timeout", type=float, default=10, help="Request timeout (s)")
    check_parser.add_argument("--no-progress", action="store_true", help="Hide progress bar")
    _add_url_args(check_parser)

    args = parser.parse_args()

    if args.command == "build":
        return cmd_build(args)
    elif args.command == "all":
        return cmd_all(args)
    elif args.command == "list":
        return cmd_list(args)
    elif args.command == "shields":
        return cmd_shields(args)
    elif args.command == "map-config":
        return cmd_map_config(args)
    elif args.command == "check":
        return cmd_check(args)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
