#!/usr/bin/env python3
"""
Performance benchmarking script for the fluxgrid engine.

Runs the engine headless (no rendering) with the emitter on to measure pure
simulation cost. Reports per-phase tick timings, memory use and, optionally,
cProfile hot paths and a vectorized-vs-loop solver comparison.
"""
from __future__ import annotations

import argparse
import cProfile
import io
import pstats
import time
import tracemalloc
from typing import Dict, List

import numpy as np

from engine import FluidEngine
from performance.benchmarks.utils import Timer, header, metric, ms, progress, summarize
from simulation.config import SimulationConfig
from simulation.flow import compute_flow
from simulation.flow_reference import compute_flow_sweep


class PerformanceMetrics:
    """Tracks performance metrics during a benchmark run."""

    def __init__(self):
        self.tick_times: List[float] = []
        self.phase_times: Dict[str, List[float]] = {
            'edits': [],
            'flow': [],
            'vorticity': [],
            'commit': [],
        }
        self.memory_snapshots: List[int] = []
        self.start_time: float = 0
        self.end_time: float = 0

    def record_phase(self, phase: str, duration: float):
        if phase in self.phase_times:
            self.phase_times[phase].append(duration)

    def record_memory(self):
        current, _peak = tracemalloc.get_traced_memory()
        self.memory_snapshots.append(current)

    def get_total_time(self) -> float:
        return self.end_time - self.start_time

    def print_report(self, config: SimulationConfig, final_mass: float):
        header("FLUXGRID PERFORMANCE REPORT")
        metric("Grid Size:", f"{config.grid_width}x{config.grid_height} cells")

        total_time = self.get_total_time()
        total_ticks = len(self.tick_times)
        metric("Total Runtime:", f"{total_time:.2f}s")
        metric("Total Ticks:", str(total_ticks))
        if total_time > 0:
            metric("Average TPS:", f"{total_ticks / total_time:.1f} ticks/sec")
        metric("Final water mass:", f"{final_mass:.2f}")

        if self.tick_times:
            ticks = summarize(self.tick_times)
            header("TICK TIMING")
            metric("Mean:", ms(ticks.mean))
            metric("Median:", ms(ticks.median))
            metric("Std Dev:", ms(ticks.std))
            metric("Min / Max:", f"{ms(ticks.low)} / {ms(ticks.high)}")
            metric("95th percentile:", ms(ticks.p95))

            header("PHASE BREAKDOWN (average times)")
            for phase, times in self.phase_times.items():
                if times:
                    avg = summarize(times).mean
                    pct = avg / ticks.mean * 100 if ticks.mean > 0 else 0
                    metric(f"{phase}:", f"{ms(avg)}  ({pct:5.1f}%)")

        if self.memory_snapshots:
            header("MEMORY USAGE")
            metric("Peak:", f"{max(self.memory_snapshots) / 1024 / 1024:.1f} MB")


def step_profiled(engine: FluidEngine, metrics: PerformanceMetrics) -> None:
    """Run one engine tick and record its per-phase timings."""
    timings: Dict[str, float] = {}
    tick_start = time.perf_counter()
    engine.step(timings)
    metrics.tick_times.append(time.perf_counter() - tick_start)
    for phase, duration in timings.items():
        metrics.record_phase(phase, duration)


def run_benchmark(config: SimulationConfig, num_ticks: int = 1000, profile_hotspots: bool = False) -> PerformanceMetrics:
    """
    Run a headless benchmark with the emitter enabled.

    Args:
        config: Grid configuration to benchmark
        num_ticks: Number of simulation ticks to run
        profile_hotspots: If True, run cProfile to identify hot code paths

    Returns:
        PerformanceMetrics object with collected data
    """
    print(f"\nStarting benchmark: {num_ticks} ticks on {config.grid_width}x{config.grid_height} grid...")
    tracemalloc.start()

    engine = FluidEngine(config)
    engine.set_auto_emit(True)
    metrics = PerformanceMetrics()

    profiler = cProfile.Profile() if profile_hotspots else None
    metrics.start_time = time.perf_counter()
    if profiler:
        profiler.enable()

    for i in range(num_ticks):
        step_profiled(engine, metrics)
        if i % 100 == 0:
            metrics.record_memory()
            progress(i, num_ticks, "Ticks")
    progress(num_ticks, num_ticks, "Ticks")

    if profiler:
        profiler.disable()
    metrics.end_time = time.perf_counter()
    tracemalloc.stop()

    metrics.print_report(config, engine.total_mass())

    if profiler:
        header("HOT CODE PATHS (Top 20 by cumulative time)")
        s = io.StringIO()
        pstats.Stats(profiler, stream=s).sort_stats('cumulative').print_stats(20)
        for line in s.getvalue().split('\n')[:25]:
            if line.strip():
                print(line)

    return metrics


def compare_solvers(width: int = 60, height: int = 45, num_ticks: int = 20) -> float:
    """Time the vectorized solver against the loop sweep on the same state.

    Returns the largest absolute mass difference seen between the two.
    """
    config = SimulationConfig(grid_width=width, grid_height=height)
    engine = FluidEngine(config)
    engine.set_auto_emit(True)
    engine.run(30)

    grid = engine.grid
    out_fast = np.empty_like(grid.current_mass)
    out_loop = np.empty_like(grid.current_mass)
    fast_times: List[float] = []
    loop_times: List[float] = []
    worst = 0.0

    for _ in range(num_ticks):
        with Timer() as t:
            compute_flow(grid.current_mass, grid.wall, grid.vx, grid.vy, config, out_fast)
        fast_times.append(t.elapsed)
        with Timer() as t:
            compute_flow_sweep(grid.current_mass, grid.wall, grid.vx, grid.vy, config, out_loop)
        loop_times.append(t.elapsed)
        worst = max(worst, float(np.max(np.abs(out_fast - out_loop))))
        engine.step()

    header(f"SOLVER COMPARISON ({width}x{height})")
    metric("Vectorized mean:", ms(summarize(fast_times).mean))
    metric("Loop sweep mean:", ms(summarize(loop_times).mean))
    metric("Max mass difference:", f"{worst:.3e}")
    return worst


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Headless fluxgrid engine benchmark")
    parser.add_argument("--num-ticks", type=int, default=1000, help="Ticks to run (default: 1000)")
    parser.add_argument("--width", type=int, default=200, help="Grid width (default: 200)")
    parser.add_argument("--height", type=int, default=150, help="Grid height (default: 150)")
    parser.add_argument("--profile", action="store_true", help="Report cProfile hot paths")
    parser.add_argument("--compare", action="store_true", help="Compare vectorized and loop solvers")
    args = parser.parse_args()

    if args.compare:
        compare_solvers()
    else:
        config = SimulationConfig(grid_width=args.width, grid_height=args.height)
        run_benchmark(config, num_ticks=args.num_ticks, profile_hotspots=args.profile)


if __name__ == "__main__":
    main()
