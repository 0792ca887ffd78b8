import argparse
import sys
from pathlib import Path

from .config import Config
from .exceptions import ImageWrapperError
from .image import ImageSession
from .logger import Logger
from .progress import ProgressManager
from .resize import ResizeMethod


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Resize, make transparent and round the corners of images')
    parser.add_argument('inputs', nargs='+', type=Path, help='Image files to process')
    parser.add_argument('--output-dir', type=Path, default=None,
                        help='Directory to write results to (default: overwrite the inputs)')
    parser.add_argument('--method', default=None, choices=[m.name.lower().replace('_', '-') for m in ResizeMethod],
                        help='Resize method, no resize when omitted')
    parser.add_argument('--format', default=None, help='Target format, e.g. PNG or JPEG')
    parser.add_argument('--max-width', type=int, default=None, help='Maximum width')
    parser.add_argument('--max-height', type=int, default=None, help='Maximum height')
    parser.add_argument('--offset-x', type=int, default=0, help='Crop offset from the left edge')
    parser.add_argument('--offset-y', type=int, default=0, help='Crop offset from the top edge')
    parser.add_argument('--crop-width', type=int, default=None, help='Crop width')
    parser.add_argument('--crop-height', type=int, default=None, help='Crop height')
    parser.add_argument('--transparent', nargs='?', const='', default=None, metavar='COLOR',
                        help='Make the background colour transparent (default colour from config)')
    parser.add_argument('--threshold', type=int, default=None, help='Transparency colour distance')
    parser.add_argument('--round-corners', default=None, metavar='COLOR',
                        help='Round the corners, filling them with COLOR when the format has no alpha')
    parser.add_argument('--radius', type=float, default=None, help='Corner radius')
    parser.add_argument('--config', type=Path, default=None, help='YAML configuration file')
    parser.add_argument('--logs', action='store_true', help='Show detailed logs')
    return parser


def output_path_for(input_path: Path, output_dir: Path | None, format: str | None) -> Path:
    target = input_path if output_dir is None else output_dir / input_path.name
    if format:
        target = target.with_suffix(f".{format.lower()}")
    return target


def process_file(args: argparse.Namespace, input_path: Path, config: Config, logger: Logger) -> Path:
    session = ImageSession(input_path, config=config, logger=logger)

    if args.method is None and args.format:
        # Format change only: a proportionate resize to the current size is a no-op
        session.resize(
            ResizeMethod.PROPORTIONATE,
            target_format=args.format,
            max_width=session.width,
            max_height=session.height,
        )
    elif args.method is not None:
        session.resize(
            args.method,
            target_format=args.format,
            max_width=args.max_width if args.max_width is not None else config.resize.max_width,
            max_height=args.max_height if args.max_height is not None else config.resize.max_height,
            offset_x=args.offset_x,
            offset_y=args.offset_y,
            crop_width=args.crop_width,
            crop_height=args.crop_height,
        )

    if args.transparent is not None:
        session.make_transparent(args.transparent or None, args.threshold)

    if args.round_corners is not None:
        session.round_corners(args.round_corners, args.radius)

    return session.write(output_path_for(input_path, args.output_dir, args.format))


def main(argv: list[str] | None = None) -> int:
    args: argparse.Namespace = build_parser().parse_args(argv)

    try:
        config = Config(args.config) if args.config else Config.default()
    except ImageWrapperError as e:
        print(f"[Error] {e}", file=sys.stderr)
        return 2

    if args.output_dir is not None:
        args.output_dir.mkdir(parents=True, exist_ok=True)

    logger = Logger(verbose=True, show_logs=args.logs)
    logger.set_total_images(len(args.inputs))

    with ProgressManager(total=len(args.inputs)) as progress:
        for input_path in args.inputs:
            progress.start_file(input_path)
            try:
                written = process_file(args, input_path, config, logger)
            except ImageWrapperError as e:
                logger.error(f"Issue processing: {input_path}: {e}")
                logger.update_stats(success=False)
                progress.failed(input_path, e)
                continue
            logger.debug(f"Saved {written}")
            logger.update_stats(success=True)
            progress.succeeded(written)

    logger.summary()
    return 1 if progress.result.failed else 0


if __name__ == "__main__":
    sys.exit(main())
