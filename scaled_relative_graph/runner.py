#!/usr/bin/env python3
"""
Command-line runner for SRG boundary analysis of the benchmark systems.

Handles argument parsing and configuration loading, samples each benchmark
loop transfer function, builds its soft-SRG boundary, reports where the
critical point -1 sits, and saves the results as JSON/CSV.

Usage:
    python -m scaled_relative_graph.runner --systems tank_level dc_motor_pi --tessellation 25
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from scaled_relative_graph.control_design import BENCHMARK_FACTORIES, CASE_SWEEPS, get_benchmark
from scaled_relative_graph.core.frequency_response import (
    CurveContractError,
    FrequencyGridConfig,
    FrequencyResponseSampler,
)
from scaled_relative_graph.core.srg import (
    AnalyzerConfig,
    LoggerConfig,
    SRGAnalyzer,
    SRGDataLogger,
)


DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "srg_benchmarks.json"


def load_benchmark_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load the JSON settings file; a missing file falls back to built-in defaults."""
    config_path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH

    if not config_path.exists():
        print(f"Configuration notice: no config file at {config_path}")
        print("Using default internal parameters.")
        return {}

    with open(config_path, 'r') as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse JSON config at {config_path}: {e}") from e


def map_config_to_kwargs(json_config: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    """
    Map the JSON structure onto constructor kwargs.

    Returns
    -------
    Dict
        {'analyzer': AnalyzerConfig kwargs, 'logger': LoggerConfig kwargs,
         'grids': {system name: FrequencyGridConfig}}
    """
    analysis = json_config.get("analysis", {})
    output = json_config.get("output", {})

    analyzer_kwargs = {}
    for key in ("tessellation_count", "max_points", "parallel", "max_workers"):
        if key in analysis:
            analyzer_kwargs[key] = analysis[key]
    if "critical_point" in analysis:
        re, im = analysis["critical_point"]
        analyzer_kwargs["critical_point"] = complex(re, im)

    logger_kwargs = {}
    for key in ("base_filename", "save_json", "save_csv"):
        if key in output:
            logger_kwargs[key] = output[key]
    if "output_dir" in output:
        logger_kwargs["output_dir"] = Path(output["output_dir"])

    grids = {}
    for name, settings in json_config.get("systems", {}).items():
        grid = settings.get("srg_grid")
        if grid is None:
            continue
        if "decades" in grid:
            lo, hi = grid["decades"]
            grids[name] = FrequencyGridConfig.from_decades(lo, hi, grid["step"])
        else:
            grids[name] = FrequencyGridConfig(**grid)

    return {"analyzer": analyzer_kwargs, "logger": logger_kwargs, "grids": grids}


def build_analyzer(
    systems: List[str],
    analyzer_kwargs: Dict[str, Any],
    grids: Dict[str, FrequencyGridConfig],
    cases: Optional[List[str]] = None
) -> SRGAnalyzer:
    """
    Register the selected benchmarks with their (possibly overridden) grids,
    followed by every variant of the selected case sweeps.

    Benchmarks that carry a sector-derived critical point in their metadata
    are scored against it instead of the configured default.
    """
    analyzer = SRGAnalyzer(
        AnalyzerConfig(**analyzer_kwargs),
        sampler=FrequencyResponseSampler(verbose=analyzer_kwargs.get("verbose", True)),
    )
    for name in systems:
        bench = get_benchmark(name)
        analyzer.register_system(
            name, bench.transfer_function, grids.get(name, bench.srg_grid),
            bench.metadata.get("critical_point")
        )
    for case in cases or []:
        for bench in CASE_SWEEPS[case]():
            analyzer.register_system(
                bench.name, bench.transfer_function, bench.srg_grid,
                bench.metadata.get("critical_point")
            )
    return analyzer


def print_summary(analyzer: SRGAnalyzer) -> None:
    print("\n" + "=" * 96)
    print(" SRG SUMMARY")
    print("=" * 96)
    print(f"{'System':<30}{'Samples':>9}{'Boundary':>10}{'Crit pt':>9}{'Inside':>8}"
          f"{'Distance':>10}{'Re range':>20}")
    for name, row in analyzer.get_comparative_summary().items():
        re_range = f"[{row['x_min']:.2f}, {row['x_max']:.2f}]"
        print(f"{name:<30}{row['n_srg_samples']:>9}{row['n_boundary_points']:>10}"
              f"{row['critical_point'].real:>9.3g}{str(row['contains_critical_point']):>8}"
              f"{row['critical_point_distance']:>10.3f}{re_range:>20}")
    print("=" * 96 + "\n")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Scaled Relative Graph boundaries for benchmark LTI loops",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument(
        "--systems",
        nargs="*",
        default=list(BENCHMARK_FACTORIES),
        choices=list(BENCHMARK_FACTORIES),
        help="Benchmark systems to analyze (pass the flag alone for none)"
    )
    parser.add_argument(
        "--cases",
        nargs="+",
        default=[],
        choices=list(CASE_SWEEPS),
        help="Variant sweeps to add (damping: zeta = 0.2, 1, 2; tank_gain: Kp = 1, 3, 6)"
    )
    parser.add_argument(
        "--tessellation",
        type=int,
        default=None,
        help="Points per boundary arc (overrides config file)"
    )
    parser.add_argument(
        "--max-points",
        type=int,
        default=None,
        help="Subsample each response curve to at most this many points"
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        help="Analyze systems on a thread pool"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=str(DEFAULT_CONFIG_PATH),
        help="JSON settings file"
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory for JSON/CSV output (overrides config file)"
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Skip writing JSON/CSV files"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output"
    )

    args = parser.parse_args(argv)

    try:
        # 1. Load configuration
        kwargs = map_config_to_kwargs(load_benchmark_config(Path(args.config)))

        # CLI overrides
        if args.tessellation is not None:
            kwargs["analyzer"]["tessellation_count"] = args.tessellation
        if args.max_points is not None:
            kwargs["analyzer"]["max_points"] = args.max_points
        if args.parallel:
            kwargs["analyzer"]["parallel"] = True
        kwargs["analyzer"]["verbose"] = not args.quiet
        if args.output_dir is not None:
            kwargs["logger"]["output_dir"] = Path(args.output_dir)

        # 2. Run analysis
        if not args.systems and not args.cases:
            raise ValueError("Nothing to analyze: select --systems and/or --cases")
        analyzer = build_analyzer(args.systems, kwargs["analyzer"], kwargs["grids"], args.cases)
        analyzer.run_comparative_analysis()

        # 3. Output results
        if not args.quiet:
            print_summary(analyzer)

        if not args.no_save:
            data_logger = SRGDataLogger(LoggerConfig(**kwargs["logger"]), verbose=not args.quiet)
            data_logger.add_results_dict(analyzer.results)
            data_logger.set_analyzer_config(analyzer.config)
            data_logger.add_metadata("systems", args.systems)
            data_logger.add_metadata("cases", args.cases)
            data_logger.save()

    except (CurveContractError, ValueError) as e:
        print(f"\nANALYSIS FAILED: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nAnalysis interrupted by user.")
        return 0

    return 0


if __name__ == "__main__":
    sys.exit(main())
