r"""
CLI entrypoint for SlicSeg.

Usage examples:
    python -m slicseg --diagnostics
    python -m slicseg --demo --output results
    python -m slicseg --run volume.npy --seeds scribbles.png --start 22 --range 5 38 --lambda 5 --sigma 3.5
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from . import run_diagnostics
from .core.config import SlicSegConfig, setup_logging
from .core.data_io import load_volume, save_volume, load_seed_slice
from .core.exceptions import SlicSegError
from .core.sample_data import create_sample_data
from .pipeline.slicseg_algorithm import SlicSegAlgorithm, SliceResult

logger = logging.getLogger(__name__)

_EXTENSIONS = {'numpy': '.npy', 'tiff': '.tif', 'hdf5': '.h5'}


def _log_progress(result: SliceResult) -> None:
    direction = result.direction.value if result.direction is not None else 'start'
    state = 'empty' if result.skipped else f"{int(result.segmentation.sum())} px"
    logger.info(f"Slice {result.slice_index} ({direction}): {state}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="slicseg", description="Slice-propagation segmentation from scribbles")
    parser.add_argument("--diagnostics", action="store_true", help="Run environment diagnostics")
    parser.add_argument("--demo", action="store_true", help="Segment a generated sample volume")
    parser.add_argument("--run", type=str, metavar="VOLUME", help="Volume file (.npy/.tif/.h5)")
    parser.add_argument("--seeds", type=str, metavar="FILE", help="Start-slice scribbles (RGB .png or .npy labels)")
    parser.add_argument("--start", type=int, help="1-based start slice number")
    parser.add_argument("--range", type=int, nargs=2, metavar=("FIRST", "LAST"), help="Slice range to propagate over")
    parser.add_argument("--orientation", type=int, default=None, help="Axis perpendicular to the slices (0-2)")
    parser.add_argument("--lambda", dest="lambda_val", type=float, default=None, help="Max-flow pairwise weight")
    parser.add_argument("--sigma", type=float, default=None, help="Max-flow intensity sensitivity")
    parser.add_argument("--inner-dis", type=int, default=None, help="Erosion radius for foreground seeds")
    parser.add_argument("--outer-dis", type=int, default=None, help="Dilation radius for background seeds")
    parser.add_argument("--parallel", action="store_true", help="Propagate both directions concurrently")
    parser.add_argument("--config", type=str, default=None, help="Optional config file path (json|yaml)")
    parser.add_argument("--output", type=str, default="slicseg_output", help="Output directory for results")
    parser.add_argument("--format", type=str, default="numpy", choices=sorted(_EXTENSIONS),
                        help="Output file format")

    args = parser.parse_args(argv)

    if args.diagnostics:
        ok = run_diagnostics()
        return 0 if ok else 1

    config = SlicSegConfig(args.config) if args.config else SlicSegConfig()
    setup_logging(config)

    if args.demo:
        args.run, args.seeds = (str(p) for p in create_sample_data(Path(args.output) / "sample"))
        args.start = args.start or 20
        args.range = args.range or [10, 30]

    if not args.run:
        parser.print_help()
        return 0

    if not args.seeds or args.start is None:
        print("Error: --seeds and --start are required with --run")
        return 2

    data_path = Path(args.run)
    if not data_path.exists():
        print(f"Error: file not found: {data_path}")
        return 2

    algorithm = SlicSegAlgorithm(config=config)
    algorithm.add_progress_callback(_log_progress)
    try:
        if args.orientation is not None:
            algorithm.orientation = args.orientation
        algorithm.volume_image = load_volume(data_path)
        for name in ('lambda_val', 'sigma', 'inner_dis', 'outer_dis'):
            value = getattr(args, name)
            if value is not None:
                setattr(algorithm, name, value)
        algorithm.start_index = args.start
        algorithm.slice_range = args.range
        slice_shape = algorithm.get_seed_slice(args.start).shape
        algorithm.set_seed_slice(args.start, load_seed_slice(args.seeds, slice_shape))
        algorithm.run_segmentation(parallel=args.parallel or None)
    except (SlicSegError, ValueError, OSError) as e:
        logger.error(f"Segmentation failed: {e}")
        print(f"Segmentation failed: {e}")
        return 1

    output_dir = Path(args.output)
    extension = _EXTENSIONS[args.format]
    save_volume(algorithm.seg_image, output_dir / f"segmentation{extension}", format=args.format)
    save_volume(algorithm.probability_image, output_dir / f"probability{extension}", format=args.format)

    duration = sum(step.get('duration', 0.0) for step in algorithm.processing_history)
    print(f"Segmentation completed in {duration:.2f}s, results in {output_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
