"""
Command-line entry point for GlyphField.

Examples:
    glyphfield --text "Hello World"
    glyphfield --symbol "★" --first-frame
    glyphfield --image logo.png --headless --frames 600 --save out.png
"""

import argparse
import logging
import sys

from . import config
from .animation import ParticleAnimation
from .core.content import DrawableContent, SymbolContent, TextContent
from .errors import SamplingError


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Draw text, a symbol or an image as a field of settling particles."
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--text", default=None, help="Text to draw (default: 'Hello World').")
    source.add_argument("--symbol", default=None, help="Single glyph to draw at symbol size.")
    source.add_argument("--image", default=None, help="Path to an image file with transparency.")
    parser.add_argument("--font", default=None, help="TrueType font file for --text/--symbol.")
    parser.add_argument(
        "--count",
        type=int,
        default=config.DEFAULT_NUM_PARTICLES,
        help=f"Number of particles (default: {config.DEFAULT_NUM_PARTICLES}).",
    )
    parser.add_argument(
        "--size",
        type=int,
        nargs=2,
        metavar=("W", "H"),
        default=list(config.DEFAULT_CANVAS_SIZE),
        help="Canvas size in pixels (default: %(default)s).",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible runs.")
    parser.add_argument(
        "--first-frame",
        action="store_true",
        help="Use the looser first-appearance damping.",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=config.ANIMATION_FRAMES,
        help=f"Frames to animate or simulate (default: {config.ANIMATION_FRAMES}).",
    )
    parser.add_argument(
        "--save",
        default=None,
        help="Save the result: .png saves the final frame, .gif the animation.",
    )
    parser.add_argument("--headless", action="store_true", help="Do not open a window.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    args = parser.parse_args(argv)
    if args.count < 1:
        parser.error(f"--count must be at least 1, got {args.count}")
    return args


def build_content(args):
    if args.symbol is not None:
        return SymbolContent(args.symbol, font_path=args.font)
    if args.image is not None:
        return DrawableContent(args.image)
    return TextContent(args.text if args.text is not None else "Hello World", font_path=args.font)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.headless:
        import matplotlib
        matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    from .ui.ui_controls import DragController
    from .visualization.visualization_core import animate, prepare_figure, update_scatter

    animation = ParticleAnimation(args.size, count=args.count, first_frame=args.first_frame, seed=args.seed)
    content = build_content(args)
    try:
        animation.set_content(content)
    except (SamplingError, OSError) as e:
        print(f"Cannot draw {content!r}: {e}", file=sys.stderr)
        return 1
    print(f"Particles: {animation.field.count}, canvas: {args.size[0]}x{args.size[1]}")

    fig, ax, scatter = prepare_figure(args.size)

    if args.headless:
        if args.save and args.save.lower().endswith(".gif"):
            anim = animate(animation, fig, scatter, frames=args.frames)
            anim.save(args.save, writer="pillow", fps=30)
        else:
            animation.field.run(args.frames)
            update_scatter(scatter, animation.field)
            if args.save:
                fig.savefig(args.save, facecolor=fig.get_facecolor())
        if args.save:
            print(f"Saved to {args.save}")
        plt.close(fig)
        return 0

    controller = DragController(fig, ax, animation)
    controller.connect_events()
    controller.add_snapshot_button()
    anim = animate(animation, fig, scatter, frames=args.frames)
    plt.show()
    if args.save:
        controller.save_snapshot(args.save)
        print(f"Saved to {args.save}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
