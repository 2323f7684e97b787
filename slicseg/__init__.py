"""
SlicSeg - minimally interactive slice-propagation segmentation

Segments a structure across a 3D volume from scribbles drawn on one slice by
training a random forest, segmenting the slice with max-flow, and propagating
the result slice by slice in both directions.
"""

__version__ = "1.0.0"

from .core.config import SlicSegConfig
from .core.exceptions import (
    SlicSegError, ConfigurationError, RangeError, MissingSeedError,
    InsufficientTrainingDataError, SliceProcessingError
)
from .pipeline.slicseg_algorithm import (
    SlicSegAlgorithm, Direction, SliceResult, create_default_algorithm
)


def run_diagnostics() -> bool:
    """Run system diagnostics to check installation."""
    import sys
    from .core import check_all_dependencies

    print("SlicSeg Diagnostics")
    print("=" * 40)
    print(f"Python version: {sys.version}")

    status = check_all_dependencies()
    missing = []
    for category, deps in status.items():
        print(f"\n{category.upper()}:")
        for dep, available in deps.items():
            symbol = "✓" if available else "✗"
            print(f"  {symbol} {dep}")
            if not available:
                missing.append(dep)

    if missing:
        print(f"\nMissing packages: {', '.join(missing)}")
        return False
    print("\n✓ All packages available")
    return True
