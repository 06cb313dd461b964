"""
Rendering Script

Re-renders growth data exported by main_sca.py with the Cairo renderer.

Formats:
    png - raster image
    eps - EPS line art
    all - both
"""

import argparse
from pathlib import Path

from config import RenderConfig
from rendering import GrowthRenderer, load_growth_data


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render exported growth data.")
    parser.add_argument('data', type=str, help='Growth data JSON written by main_sca.py')
    parser.add_argument('--format', type=str, choices=['png', 'eps', 'all'], default='all',
                        help='Output format (default: all)')
    parser.add_argument('--size', type=int, default=800, help='Output size in pixels/points')
    parser.add_argument('--no-attractors', action='store_true', help='Do not draw attractors')
    args = parser.parse_args(argv)

    data_path = Path(args.data)
    data = load_growth_data(str(data_path))
    print(f"Loaded {len(data['nodes'])} nodes and {len(data['attractors'])} attractors "
          f"from {data_path} (iteration {data['iteration']})")

    renderer = GrowthRenderer(RenderConfig(
        output_width=args.size,
        output_height=args.size,
        show_attractors=not args.no_attractors,
    ))

    if args.format in ('png', 'all'):
        png_path = data_path.with_suffix('.png')
        renderer.save_png(data, str(png_path))
        print(f"Saved {png_path}")
    if args.format in ('eps', 'all'):
        eps_path = data_path.with_suffix('.eps')
        renderer.save_eps(data, str(eps_path))
        print(f"Saved {eps_path}")


if __name__ == '__main__':
    main()
